"""Data models for the map feed pipeline."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Union


@dataclass(frozen=True)
class ParsedLocation:
    """Either a ZIP5, a city/state pair, or empty."""
    zip5: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.zip5 is None and self.city is None and self.state is None


@dataclass(frozen=True)
class FilterSpec:
    limit: int = 20
    category: Optional[str] = None
    text_query: Optional[str] = None
    zip5: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

    def as_params(self) -> Dict[str, object]:
        """Bound parameters for the provider query. None means 'filter not applied'."""
        return {
            "limit": self.limit,
            "category": self.category,
            "q": self.text_query,
            "zip5": self.zip5,
            "city": self.city,
            "state": self.state,
        }


@dataclass
class ProviderRecord:
    category: Optional[str] = None
    organization_name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    full_address: Optional[str] = None
    latitude: Union[float, Decimal, str, None] = None
    longitude: Union[float, Decimal, str, None] = None
    taxonomy_code: Optional[str] = None


@dataclass
class FeedItem:
    id: int
    title: str
    summary: str
    address: str
    latitude: str
    longitude: str
    type: str
    subtype: str
    pin_icon_url: str
    pin_icon_color: str
    pin_icon_width: int
    pin_icon_height: int
    url: str
    thumbnail: str
    small_thumbnail: str
    large_thumbnail: str
    content: str

    def to_dict(self) -> dict:
        """Serialize using the Custom Map field names."""
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "type": self.type,
            "subtype": self.subtype,
            "pinIconUrl": self.pin_icon_url,
            "pinIconColor": self.pin_icon_color,
            "pinIconWidth": self.pin_icon_width,
            "pinIconHeight": self.pin_icon_height,
            "url": self.url,
            "thumbnail": self.thumbnail,
            "smallThumbnail": self.small_thumbnail,
            "largeThumbnail": self.large_thumbnail,
            "content": self.content,
        }


@dataclass
class FeedResponse:
    stat: str = "ok"
    items: List[FeedItem] = field(default_factory=list)
    generated_in: str = "0.01s"
    message: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize to the feed envelope. Error envelopes carry no items."""
        if self.stat != "ok":
            return {"stat": self.stat, "message": self.message or "Internal server error"}
        return {
            "items": [item.to_dict() for item in self.items],
            "next_page": None,
            "generated_in": self.generated_in,
            "stat": self.stat,
        }
