"""Search-volume normalization for chart scaling.

The model reports volume as free text: exact counts ("12,500"), ranges
("1k-10k"), qualitative bands ("High") or an unavailable sentinel.
``normalize_volume`` maps any of these onto a comparable, non-negative
magnitude.  The result is only meaningful relative to other normalized
values; ranges and bands are one-way conversions.
"""

import math
import re
from enum import Enum
from typing import Any

UNAVAILABLE_MARKERS = ("unavailable", "n/a", "unknown")

# Checked in order: "Low-Medium" resolves to medium.
QUALITATIVE_BANDS = (
    ("high", 80),
    ("medium", 50),
    ("low", 20),
)

_RANGE_SPLIT = re.compile(r"[-–—]")
_NUMERAL = re.compile(
    r"^\s*(?P<number>[+-]?(?:\d+(?:\.\d*)?|\.\d+))\s*(?P<suffix>[km](?![a-z]))?"
)
_MULTIPLIERS = {"k": 1_000, "m": 1_000_000}


class VolumeKind(str, Enum):
    """Closed classification of a volume string."""

    EXACT = "exact"
    RANGE = "range"
    QUALITATIVE = "qualitative"
    UNAVAILABLE = "unavailable"
    UNPARSED = "unparsed"


def normalize_volume(value: Any) -> int | float:
    """Convert a volume string into a non-negative magnitude.

    Never raises; anything unparseable yields ``0``.

    Examples:
        >>> normalize_volume("12,500")
        12500
        >>> normalize_volume("1k-10k")
        5500
        >>> normalize_volume("High")
        80
        >>> normalize_volume("Data Unavailable")
        0
    """
    if value is None:
        return 0
    text = str(value).strip().lower()
    if not text:
        return 0
    if any(marker in text for marker in UNAVAILABLE_MARKERS):
        return 0
    for band, magnitude in QUALITATIVE_BANDS:
        if band in text:
            return magnitude

    cleaned = text.replace(",", "")
    parts = _RANGE_SPLIT.split(cleaned)
    if len(parts) == 2:
        low, high = (normalize_volume(part.strip()) for part in parts)
        return int(math.floor((low + high) / 2 + 0.5))

    return _parse_numeral(cleaned)


def _parse_numeral(text: str) -> int | float:
    """Parse a leading numeral with an optional k/m multiplier and ``+``."""
    match = _NUMERAL.match(text)
    if not match:
        return 0
    number = float(match.group("number"))
    suffix = match.group("suffix")
    if suffix:
        number *= _MULTIPLIERS[suffix]
    if number <= 0:
        return 0
    return int(number) if number.is_integer() else number


def classify_volume(value: Any) -> VolumeKind:
    """Classify a volume string using the same rule order as ``normalize_volume``."""
    text = str(value if value is not None else "").strip().lower()
    if not text or any(marker in text for marker in UNAVAILABLE_MARKERS):
        return VolumeKind.UNAVAILABLE
    if any(band in text for band, _ in QUALITATIVE_BANDS):
        return VolumeKind.QUALITATIVE
    cleaned = text.replace(",", "")
    if len(_RANGE_SPLIT.split(cleaned)) == 2:
        return VolumeKind.RANGE
    if _NUMERAL.match(cleaned):
        return VolumeKind.EXACT
    return VolumeKind.UNPARSED
