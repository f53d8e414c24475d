"""FeedService: query normalization -> provider query -> feed formatting."""

import logging
import time
from typing import Mapping, Optional

from .config import Config
from .feed import assemble_feed
from .filters import build_filter_spec
from .formatter import format_feed_items
from .models import FeedResponse
from .provider_query import ProviderQuery

logger = logging.getLogger(__name__)


class FeedService:
    """
    Answers one map-feed request end to end.

    Stateless apart from the injected query collaborator, so a single
    instance serves concurrent requests.
    """

    def __init__(self, query: ProviderQuery, config: Optional[Config] = None):
        self.query = query
        self.config = config or Config()

    def build_feed(self, raw_query: Mapping) -> FeedResponse:
        """
        1. Normalize q / category / location / limit
        2. Fetch matching providers (errors propagate)
        3. Format items ranked 1..N
        4. Wrap in the feed envelope
        """
        t0 = time.time()

        spec = build_filter_spec(
            raw_query,
            max_limit=self.config.max_limit,
            default_limit=self.config.default_limit,
        )
        records = self.query.fetch(spec)
        items = format_feed_items(records, self.config.feed)
        response = assemble_feed(items, elapsed=time.time() - t0)

        logger.info(
            f"Feed q={spec.text_query!r} category={spec.category!r} "
            f"zip5={spec.zip5!r} city={spec.city!r} state={spec.state!r} "
            f"limit={spec.limit} -> {len(items)} items ({response.generated_in})"
        )
        return response
