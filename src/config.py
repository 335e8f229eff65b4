"""Box size presets and runtime configuration."""

from dataclasses import dataclass
from enum import Enum
import logging
import os


class SizeMode(Enum):
    COMPACT = "compact"  # text-only box
    ILLUSTRATED = "illustrated"  # room for an icon/photo and a birth-death line


@dataclass(frozen=True)
class BoxSizes:
    person_width: float
    person_height: float
    child_gap: float = 20
    sibling_gap: float = 5
    pad: float = 3
    partner_shift: float = 10


PRESETS = {
    SizeMode.COMPACT: BoxSizes(person_width=200, person_height=20),
    SizeMode.ILLUSTRATED: BoxSizes(person_width=260, person_height=50),
}

# Icon slot reserved inside an illustrated box (used by drawing backends)
ICON_WIDTH = 30
ICON_HEIGHT = 40

SIZE_MODE_ENV = "FAMILYTREE_SIZE_MODE"


def sizes_for(mode: SizeMode) -> BoxSizes:
    return PRESETS[mode]


def default_size_mode() -> SizeMode:
    """Size mode from $FAMILYTREE_SIZE_MODE, illustrated when unset."""
    raw = os.environ.get(SIZE_MODE_ENV, "").strip().lower()
    if not raw:
        return SizeMode.ILLUSTRATED
    try:
        return SizeMode(raw)
    except ValueError:
        raise ValueError(
            f"{SIZE_MODE_ENV} must be one of {[m.value for m in SizeMode]}, got {raw!r}"
        ) from None


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
