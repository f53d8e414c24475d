"""FindCare map feed: provider directory lookups shaped for GoodBarber Custom Map."""

from .service import FeedService
from .models import FeedItem, FeedResponse, FilterSpec, ParsedLocation, ProviderRecord

__all__ = [
    "FeedService",
    "FeedItem",
    "FeedResponse",
    "FilterSpec",
    "ParsedLocation",
    "ProviderRecord",
]
