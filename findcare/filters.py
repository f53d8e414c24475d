"""Build a bounded FilterSpec from raw query-string input."""

import re
from typing import Mapping, Optional

from .location import parse_location
from .models import FilterSpec

DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 200

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def parse_limit(value, default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    """Leading-integer parse with fallback, clamped to [1, maximum]. Never raises."""
    if isinstance(value, bool):
        n = default
    elif isinstance(value, int):
        n = value
    else:
        m = _LEADING_INT_RE.match(str(value)) if value is not None else None
        n = int(m.group(1)) if m else default
    return max(MIN_LIMIT, min(n, maximum))


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


def build_filter_spec(
    raw_query: Mapping,
    max_limit: int = MAX_LIMIT,
    default_limit: int = DEFAULT_LIMIT,
) -> FilterSpec:
    """
    Normalize q / category / location / limit into a FilterSpec.

    Nothing here is rejected: bad or missing values fall back to
    "filter not applied" (None) or the default row limit.
    """
    text = _clean(raw_query.get("q"))
    location = parse_location(raw_query.get("location"))

    return FilterSpec(
        limit=parse_limit(raw_query.get("limit"), default=default_limit, maximum=max_limit),
        category=_clean(raw_query.get("category")),
        text_query=f"%{text}%" if text else None,
        zip5=location.zip5,
        city=location.city,
        state=location.state,
    )
