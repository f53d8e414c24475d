"""Map raw provider rows into GoodBarber Custom Map feed items."""

from decimal import Decimal
from typing import Iterable, List, Optional

from .config import FeedSettings
from .models import FeedItem, ProviderRecord

UNNAMED_TITLE = "Unnamed Facility"
DEFAULT_CATEGORY = "Healthcare Facility"

_DEFAULT_SETTINGS = FeedSettings()

# Order matters: "&" first so later entities are not double-escaped
_HTML_ESCAPES = [
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
]


def escape_html(value) -> str:
    text = "" if value is None else str(value)
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def _coord(value) -> str:
    """Plain decimal text, never exponent notation (5e-05 -> '0.00005')."""
    if value is None:
        return ""
    if isinstance(value, float):
        value = Decimal(repr(value))
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value).strip()


def city_state(city: Optional[str], state: Optional[str]) -> str:
    """'Plano, TX', 'Plano', 'TX' or ''."""
    return ", ".join(part for part in (city, state) if part)


def format_feed_item(
    record: ProviderRecord,
    rank: int,
    settings: FeedSettings = _DEFAULT_SETTINGS,
) -> FeedItem:
    """
    Build one feed item. rank is the 1-based position in the result order and
    doubles as the item id and the detail-URL key.

    Sparse records never fail: missing name, category and place fall back to
    fixed text.
    """
    title = record.organization_name or UNNAMED_TITLE
    city_st = city_state(record.city, record.state)
    summary = record.category or DEFAULT_CATEGORY
    if city_st:
        summary = f"{summary} in {city_st}"
    url = settings.detail_url.replace("{id}", str(rank))

    content = (
        f"<div><strong>{escape_html(title)}</strong><br>"
        f"{escape_html(record.category)} - {escape_html(city_st)}<br>"
        f'<a href="{escape_html(url)}" target="_blank">View Details</a></div>'
    )

    return FeedItem(
        id=rank,
        title=title,
        summary=summary,
        address=record.full_address or "",
        latitude=_coord(record.latitude),
        longitude=_coord(record.longitude),
        type="maps",
        subtype="custom",
        pin_icon_url=settings.pin_icon_url,
        pin_icon_color=settings.pin_icon_color,
        pin_icon_width=settings.pin_icon_width,
        pin_icon_height=settings.pin_icon_height,
        url=url,
        thumbnail=settings.thumbnail_url,
        small_thumbnail=settings.thumbnail_url,
        large_thumbnail=settings.thumbnail_url,
        content=content,
    )


def format_feed_items(
    records: Iterable[ProviderRecord],
    settings: FeedSettings = _DEFAULT_SETTINGS,
) -> List[FeedItem]:
    """Format an ordered result sequence; ids run 1..N."""
    return [format_feed_item(r, rank, settings) for rank, r in enumerate(records, 1)]
