"""Data classes for family tree entities and layout output."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> "Gender":
        """Map a raw record value ("m", "Male", "F", ...) to a Gender."""
        if not value:
            return cls.UNKNOWN
        v = str(value).strip().lower()
        if v in ("m", "male"):
            return cls.MALE
        if v in ("f", "female"):
            return cls.FEMALE
        return cls.UNKNOWN


# Display order for the parents of an ancestor family
GENDER_ORDER = {Gender.MALE: 0, Gender.FEMALE: 1, Gender.UNKNOWN: 2}


def trim_unknown_date_parts(date: str) -> str:
    """Drop trailing "-00" segments: "1905-00-00" -> "1905"."""
    while date.endswith("-00"):
        date = date[:-3]
    return date


@dataclass(frozen=True)
class Person:
    id: str
    name: str
    fullname: str | None
    gender: Gender
    birth_date: str | None  # YYYY-MM-DD, "00" for unknown month/day
    death_date: str | None
    icon: str | None
    child_of: tuple[str, ...]
    parent_of: tuple[str, ...]

    @property
    def long_name(self) -> str:
        if self.fullname:
            return self.fullname
        return self.name

    @property
    def lifespan(self) -> str | None:
        """Birth-death line shown under the name in illustrated boxes."""
        if not self.birth_date and not self.death_date:
            return None
        birth = trim_unknown_date_parts(self.birth_date) if self.birth_date else "…"
        death = trim_unknown_date_parts(self.death_date) if self.death_date else ""
        return f"{birth}—{death}"


@dataclass(frozen=True)
class Family:
    id: str
    parents: tuple[str, ...] = ()
    children: tuple[str, ...] = ()


# ============================================================================
# Geometry
# ============================================================================


class Point(NamedTuple):
    x: float
    y: float

    def shift(self, dx: float = 0.0, dy: float = 0.0) -> "Point":
        return Point(self.x + dx, self.y + dy)


class Size(NamedTuple):
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


ZERO_SIZE = Size(0.0, 0.0)


# ============================================================================
# Draw commands
# ============================================================================


@dataclass(frozen=True)
class Box:
    id: str
    x: float
    y: float
    width: float
    height: float
    label: str
    style: Gender  # semantic hint only, backends pick colors
    is_focal: bool = False
    detail: str | None = None
    icon: str | None = None


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass
class Layout:
    """Result of one render pass: canvas size plus ordered draw commands."""

    focal_id: str
    width: float
    height: float
    commands: list[Box | Line]
    illustrated: bool = False

    @property
    def boxes(self) -> list[Box]:
        return [c for c in self.commands if isinstance(c, Box)]

    @property
    def lines(self) -> list[Line]:
        return [c for c in self.commands if isinstance(c, Line)]
