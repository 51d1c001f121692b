"""Recent-search ORM model."""

from typing import Any, Optional

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from geosearch_analyst.database import Base


class SearchHistoryItem(Base):
    """A submitted analysis query; ``timestamp`` is epoch milliseconds."""

    __tablename__ = "search_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    keywords: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    def to_dict(self) -> dict[str, Any]:
        data = {
            "keywords": self.keywords,
            "location": self.location,
            "timestamp": self.timestamp,
        }
        if self.website:
            data["website"] = self.website
        return data

    def __repr__(self) -> str:
        return f"<SearchHistoryItem id={self.id} keywords={self.keywords!r} location={self.location!r}>"
