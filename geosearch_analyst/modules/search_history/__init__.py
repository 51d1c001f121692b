"""Search History module -- bounded list of recent analysis queries."""

from geosearch_analyst.modules.search_history.store import SearchHistoryStore

__all__ = ["SearchHistoryStore"]
