"""Provider directory query against the geocoded providers table.

Every filter is a bound parameter; a NULL parameter switches its predicate off.
"""

import logging
from typing import List

import psycopg2
import psycopg2.extras

from .db import ProviderPool, ProviderQueryError
from .models import FilterSpec, ProviderRecord

logger = logging.getLogger(__name__)

_QUERY_PROVIDERS = """
    SELECT category,
           provider_organization_name,
           provider_practice_city,
           provider_practice_state,
           provider_practice_zip,
           full_address,
           latitude,
           longitude,
           healthcare_provider_taxonomy_code_1
    FROM providers_geocoded
    WHERE latitude IS NOT NULL AND longitude IS NOT NULL
      AND (%(category)s::text IS NULL OR category = %(category)s)
      AND (%(q)s::text IS NULL OR provider_organization_name ILIKE %(q)s)
      AND (%(zip5)s::text IS NULL OR LEFT(provider_practice_zip, 5) = %(zip5)s)
      AND (%(city)s::text IS NULL OR provider_practice_city = %(city)s)
      AND (%(state)s::text IS NULL OR provider_practice_state = %(state)s)
    ORDER BY provider_organization_name ASC, id ASC
    LIMIT %(limit)s
"""


class ProviderQuery:
    """Runs a FilterSpec against the provider table using a shared pool."""

    def __init__(self, pool: ProviderPool):
        self.pool = pool

    def fetch(self, spec: FilterSpec) -> List[ProviderRecord]:
        """Return at most spec.limit providers, ordered by organization name."""
        params = spec.as_params()
        try:
            with self.pool.connection() as conn:
                with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                    cur.execute(_QUERY_PROVIDERS, params)
                    rows = cur.fetchall()
        except psycopg2.Error as e:
            logger.warning(f"Provider query error: {e}")
            raise ProviderQueryError(f"Provider query failed: {e}") from e

        return [self._row_to_record(dict(row)) for row in rows]

    @staticmethod
    def _row_to_record(row: dict) -> ProviderRecord:
        return ProviderRecord(
            category=row.get("category"),
            organization_name=row.get("provider_organization_name"),
            city=row.get("provider_practice_city"),
            state=row.get("provider_practice_state"),
            zip_code=row.get("provider_practice_zip"),
            full_address=row.get("full_address"),
            latitude=row.get("latitude"),
            longitude=row.get("longitude"),
            taxonomy_code=row.get("healthcare_provider_taxonomy_code_1"),
        )
