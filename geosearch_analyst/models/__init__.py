"""SQLAlchemy ORM models -- import every model so Base.metadata is populated."""

from geosearch_analyst.models.history import SearchHistoryItem

__all__ = ["SearchHistoryItem"]
