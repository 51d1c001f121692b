"""Persistent most-recent-first search history.

Lives outside the analysis pipeline: the application layer records a query
before running it, the pipeline itself never reads or writes history.
"""

import logging
import time
from typing import Optional

from sqlalchemy import delete, select

from geosearch_analyst.database import get_session
from geosearch_analyst.models.history import SearchHistoryItem

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 6


class SearchHistoryStore:
    """Bounded least-recently-used list keyed by ``(keywords, location, website)``.

    Usage::

        store = SearchHistoryStore(max_items=6)
        store.record("seo tools", "London, UK")
        for item in store.list_recent():
            print(item.keywords, item.location)
    """

    def __init__(self, max_items: int = DEFAULT_MAX_ITEMS):
        if max_items < 1:
            raise ValueError("max_items must be at least 1")
        self._max_items = max_items

    @property
    def max_items(self) -> int:
        return self._max_items

    def record(
        self,
        keywords: str,
        location: str,
        website: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> SearchHistoryItem:
        """Insert a query as the newest entry, replacing an exact duplicate."""
        website = website or None
        if timestamp is None:
            timestamp = int(time.time() * 1000)

        with get_session() as session:
            session.execute(
                delete(SearchHistoryItem).where(
                    SearchHistoryItem.keywords == keywords,
                    SearchHistoryItem.location == location,
                    SearchHistoryItem.website.is_(None) if website is None
                    else SearchHistoryItem.website == website,
                )
            )
            item = SearchHistoryItem(
                keywords=keywords,
                location=location,
                website=website,
                timestamp=timestamp,
            )
            session.add(item)
            session.flush()

            stale_ids = session.scalars(
                select(SearchHistoryItem.id)
                .order_by(SearchHistoryItem.timestamp.desc(), SearchHistoryItem.id.desc())
                .offset(self._max_items)
            ).all()
            if stale_ids:
                session.execute(
                    delete(SearchHistoryItem).where(SearchHistoryItem.id.in_(stale_ids))
                )
                logger.debug("Trimmed %d old history entries", len(stale_ids))

        logger.info("Recorded search: %r in %r", keywords, location)
        return item

    def list_recent(self, limit: Optional[int] = None) -> list[SearchHistoryItem]:
        """Return entries newest first."""
        limit = self._max_items if limit is None else min(limit, self._max_items)
        with get_session() as session:
            return list(
                session.scalars(
                    select(SearchHistoryItem)
                    .order_by(SearchHistoryItem.timestamp.desc(), SearchHistoryItem.id.desc())
                    .limit(limit)
                ).all()
            )

    def clear(self) -> int:
        """Delete every entry and return how many were removed."""
        with get_session() as session:
            result = session.execute(delete(SearchHistoryItem))
            count = result.rowcount or 0
        logger.info("Cleared %d history entries", count)
        return count
