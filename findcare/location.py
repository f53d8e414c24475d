"""Free-text location parsing: ZIP code or "City, ST"."""

import re
from typing import Optional

from .models import ParsedLocation

_ZIP_RE = re.compile(r"[0-9]{5}(?:-[0-9]{4})?")


def is_zip(value: Optional[str]) -> bool:
    """True for a 5-digit ZIP, optionally with a -4 suffix."""
    return bool(_ZIP_RE.fullmatch((value or "").strip()))


def parse_location(value: Optional[str]) -> ParsedLocation:
    """
    Classify a location string.

    "73301-1234" -> zip5="73301"
    "Dallas, tx" -> city="Dallas", state="TX"
    "Austin"     -> city="Austin", state=None
    """
    raw = (value or "").strip()
    if not raw:
        return ParsedLocation()
    if is_zip(raw):
        return ParsedLocation(zip5=raw[:5])

    city_part, _, state_part = raw.partition(",")
    city = city_part.strip() or None
    state = state_part.split(",", 1)[0].strip().upper()[:2] or None
    return ParsedLocation(city=city, state=state)
