"""Top-level feed envelope."""

from typing import List, Optional

from .models import FeedItem, FeedResponse

DEFAULT_GENERATED_IN = "0.01s"


def format_elapsed(elapsed: Optional[float]) -> str:
    if elapsed is None:
        return DEFAULT_GENERATED_IN
    return f"{max(elapsed, 0.0):.2f}s"


def assemble_feed(items: List[FeedItem], elapsed: Optional[float] = None) -> FeedResponse:
    """Wrap formatted items in a successful envelope (single page, next_page null)."""
    return FeedResponse(stat="ok", items=list(items), generated_in=format_elapsed(elapsed))


def error_response(message: Optional[str]) -> FeedResponse:
    """Envelope for an upstream failure. No items, ever."""
    return FeedResponse(stat="error", items=[], message=message or "Internal server error")
