"""Person record loaders (JSON and GEDCOM) and date normalization."""

import json
from pathlib import Path
import re
from typing import Any

from ged4py import GedcomReader


# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}


def _iso(year: int, month: int = 0, day: int = 0) -> str | None:
    if not 0 <= month <= 12 or not 0 <= day <= 31:
        return None
    return f"{year:04d}-{month:02d}-{day:02d}"


def normalize_date(date_str: str | None) -> str | None:
    """
    Normalize a date string to the sortable YYYY-MM-DD form.

    Unknown month or day parts become "00", so "NOV 1954" is "1954-11-00" and
    "1698" is "1698-00-00". Returns None if the date cannot be parsed.

    Handles formats like:
    - "25 NOV 1954"
    - "ABT 1905", "(about 1833)", "(About:1746-00-00)"
    - "JAN 1905", "(May, 1837)"
    - "(1839-08-29)"
    - "(01-27-1920)", "(05/15/1923)"
    - "(SEPT. 17,1910)", "(April 17, 1850)"
    - "(1789?)"
    """
    if not date_str:
        return None

    # Clean up the string
    s = str(date_str).strip()
    s = s.strip("()")
    s = s.rstrip("?")
    # Remove qualifiers (ABT, ABOUT, BEF, AFT, EST, CAL, AROUND, etc.) - with optional colon
    s = re.sub(
        r"^(ABOUT|ABT\.?|BEFORE|BEF\.?|AFTER|AFT\.?|EST\.?|CAL\.?|FROM|TO|BET\.?|AND|CIRCA|CA\.?|AROUND):?\s*",
        "",
        s,
        flags=re.IGNORECASE,
    )
    s = s.strip()

    if not s:
        return None

    # ISO-like "1839-08-29", "1746-00-00", "1905-03"
    match = re.match(r"^(\d{4})(?:-(\d{2}))?(?:-(\d{2}))?$", s)
    if match:
        return _iso(int(match.group(1)), int(match.group(2) or 0), int(match.group(3) or 0))

    # "25 NOV 1954", "08 March 1893", "11 Aug. 1968", "02 May1838"
    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(2).upper())
        if month:
            return _iso(int(match.group(3)), month, int(match.group(1)))

    # "NOV 1954", "November 1954", "May, 1837"
    match = re.match(r"^([A-Za-z]+)\.?,?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return _iso(int(match.group(2)), month)

    # "01-27-1920", "01/27/1920", "04 05 1911" (month first)
    match = re.match(r"^(\d{1,2})[-/ ](\d{1,2})[-/ ](\d{4})$", s)
    if match:
        return _iso(int(match.group(3)), int(match.group(1)), int(match.group(2)))

    # "April 17, 1850", "SEPT. 17,1910", "Oct.12,1929"
    match = re.match(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return _iso(int(match.group(3)), month, int(match.group(2)))

    return None


# ============================================================================
# JSON
# ============================================================================


def load_json_records(path: Path) -> list[dict[str, Any]]:
    """Read person records from a JSON array or an object with a "persons" array."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("persons")
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of person records")
    return [r for r in data if isinstance(r, dict)]


# ============================================================================
# GEDCOM
# ============================================================================


def extract_name_parts(indi) -> tuple[str, str | None]:
    """Extract the display name and the long name (with suffix) of an individual."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ("Unknown", None)

    name_value = name_rec.value

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_value, tuple):
        given, surname, suffix = name_value
        short = " ".join(p for p in [given, surname] if p) or "Unknown"
        full = " ".join(p for p in [given, surname, suffix] if p)
        return (short, full if suffix else None)

    # Fallback: string format "Given /Surname/"
    return (str(name_value).replace("/", "").strip() or "Unknown", None)


def extract_event_date(indi, tag: str) -> str | None:
    """Extract the normalized date of an event tag (BIRT, DEAT)."""
    event = indi.sub_tag(tag)
    if event is None:
        return None
    date_rec = event.sub_tag("DATE")
    # ged4py may return DateValue objects
    if date_rec is None or not date_rec.value:
        return None
    return normalize_date(str(date_rec.value))


def extract_family_ids(indi, tag: str) -> list[str]:
    """Xref ids of the families referenced by FAMC or FAMS sub-records."""
    ids = []
    for fam in indi.sub_tags(tag):
        if fam is None:
            continue
        # Resolved pointers carry the family xref, dangling ones only the raw value
        ref = fam.xref_id or fam.value
        if ref:
            ids.append(str(ref).strip("@"))
    return ids


def read_gedcom_records(filepath: Path) -> list[dict[str, Any]]:
    """
    Convert the individuals of a GEDCOM file into person records.

    Family membership comes from the FAMC (child of) and FAMS (spouse in)
    pointers; FAM records are not read directly.
    """
    records: list[dict[str, Any]] = []
    with GedcomReader(str(filepath)) as reader:
        for rec in reader.records0("INDI"):
            if rec.xref_id is None:
                continue
            name, fullname = extract_name_parts(rec)
            sex_rec = rec.sub_tag("SEX")
            records.append(
                {
                    "id": rec.xref_id.strip("@"),
                    "name": name,
                    "fullname": fullname,
                    "gender": sex_rec.value if sex_rec else None,
                    "bdate": extract_event_date(rec, "BIRT"),
                    "ddate": extract_event_date(rec, "DEAT"),
                    "childOf": extract_family_ids(rec, "FAMC"),
                    "parentOf": extract_family_ids(rec, "FAMS"),
                }
            )
    return records


def load_records(path: Path) -> list[dict[str, Any]]:
    """Load person records, picking the reader from the file extension."""
    path = Path(path)
    if path.suffix.lower() in (".ged", ".gedcom"):
        return read_gedcom_records(path)
    return load_json_records(path)
