"""Immutable value types produced by the keyword analysis pipeline.

Raw records come from model-generated JSON, so every ``from_dict`` is
tolerant: missing or mistyped fields fall back to empty defaults instead of
raising.  ``to_dict`` emits the camelCase shape of the JSON contract.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from geosearch_analyst.modules.keyword_analysis.volume import (
    VolumeKind,
    classify_volume,
    normalize_volume,
)

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "y", "1")
    if isinstance(value, (int, float)):
        return value != 0
    return False


def _records(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


# ---------------------------------------------------------------------------
# Closed enumerations with a raw-text escape
# ---------------------------------------------------------------------------

class CompetitionLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    UNPARSED = "Unparsed"


@dataclass(frozen=True)
class Competition:
    """Competition band plus the text the model actually wrote."""

    level: CompetitionLevel
    raw: str = ""

    @classmethod
    def parse(cls, value: Any) -> "Competition":
        raw = _text(value)
        lowered = raw.lower()
        for level in (CompetitionLevel.HIGH, CompetitionLevel.MEDIUM, CompetitionLevel.LOW):
            if level.value.lower() in lowered:
                return cls(level=level, raw=raw)
        return cls(level=CompetitionLevel.UNPARSED, raw=raw)

    @property
    def label(self) -> str:
        if self.level is CompetitionLevel.UNPARSED:
            return self.raw
        return self.raw or self.level.value

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class SearchVolume:
    """Volume text as reported, with its classification."""

    raw: str
    kind: VolumeKind

    @classmethod
    def parse(cls, value: Any) -> "SearchVolume":
        raw = _text(value)
        return cls(raw=raw, kind=classify_volume(raw))

    @property
    def magnitude(self) -> int | float:
        """Chart magnitude; see ``normalize_volume``."""
        return normalize_volume(self.raw)

    @property
    def is_available(self) -> bool:
        return self.kind is not VolumeKind.UNAVAILABLE

    def __str__(self) -> str:
        return self.raw


class KeywordType(str, Enum):
    SHORT_TAIL = "Short-tail"
    LONG_TAIL = "Long-tail"

    @classmethod
    def parse(cls, value: Any, keyword: str = "") -> "KeywordType":
        """Map the model's label; fall back to word count (3+ words is long-tail)."""
        lowered = _text(value).lower()
        if "long" in lowered:
            return cls.LONG_TAIL
        if "short" in lowered:
            return cls.SHORT_TAIL
        return cls.LONG_TAIL if len(keyword.split()) >= 3 else cls.SHORT_TAIL


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RelatedKeyword:
    keyword: str
    search_volume: SearchVolume
    competition: Competition
    keyword_type: KeywordType
    why_better: Optional[str] = None

    @classmethod
    def from_dict(cls, record: dict) -> "RelatedKeyword":
        keyword = _text(record.get("keyword"))
        return cls(
            keyword=keyword,
            search_volume=SearchVolume.parse(record.get("searchVolume")),
            competition=Competition.parse(record.get("competition")),
            keyword_type=KeywordType.parse(record.get("keywordType"), keyword),
            why_better=_text(record.get("whyBetter")) or None,
        )

    def to_dict(self) -> dict[str, Any]:
        data = {
            "keyword": self.keyword,
            "searchVolume": self.search_volume.raw,
            "competition": self.competition.label,
            "keywordType": self.keyword_type.value,
        }
        if self.why_better:
            data["whyBetter"] = self.why_better
        return data


@dataclass(frozen=True)
class SerpResult:
    position: int
    title: str
    url: str
    snippet: str

    @classmethod
    def from_dict(cls, record: dict, default_position: int = 1) -> "SerpResult":
        try:
            position = int(record.get("position"))
        except (TypeError, ValueError):
            position = default_position
        return cls(
            position=position,
            title=_text(record.get("title")),
            url=_text(record.get("url")),
            snippet=_text(record.get("snippet")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
        }


@dataclass(frozen=True)
class KeywordMetric:
    """One analyzed keyword."""

    keyword: str
    search_volume: SearchVolume
    competition: Competition
    difficulty: str
    keyword_type: KeywordType
    is_quick_win: bool
    recommendation: str
    rationale: str
    site_audit: Optional[str] = None
    related_keywords: tuple[RelatedKeyword, ...] = ()
    serp_results: tuple[SerpResult, ...] = ()

    @classmethod
    def from_dict(cls, record: dict) -> "KeywordMetric":
        keyword = _text(record.get("keyword"))
        related = tuple(
            RelatedKeyword.from_dict(item)
            for item in _records(record.get("relatedKeywords"))
            if _text(item.get("keyword"))
        )
        serp = tuple(
            SerpResult.from_dict(item, default_position=index)
            for index, item in enumerate(_records(record.get("serpResults")), start=1)
        )
        return cls(
            keyword=keyword,
            search_volume=SearchVolume.parse(record.get("searchVolume")),
            competition=Competition.parse(record.get("competition")),
            difficulty=_text(record.get("difficulty")),
            keyword_type=KeywordType.parse(record.get("keywordType"), keyword),
            is_quick_win=_flag(record.get("isQuickWin")),
            recommendation=_text(record.get("recommendation")),
            rationale=_text(record.get("rationale")),
            site_audit=_text(record.get("siteAudit")) or None,
            related_keywords=related,
            serp_results=serp,
        )

    def to_dict(self) -> dict[str, Any]:
        data = {
            "keyword": self.keyword,
            "searchVolume": self.search_volume.raw,
            "competition": self.competition.label,
            "difficulty": self.difficulty,
            "keywordType": self.keyword_type.value,
            "isQuickWin": self.is_quick_win,
            "recommendation": self.recommendation,
            "rationale": self.rationale,
            "relatedKeywords": [r.to_dict() for r in self.related_keywords],
            "serpResults": [s.to_dict() for s in self.serp_results],
        }
        if self.site_audit is not None:
            data["siteAudit"] = self.site_audit
        return data


def metrics_from_records(records: list[Any]) -> tuple[KeywordMetric, ...]:
    """Coerce raw JSON records, dropping anything without a keyword."""
    metrics = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Dropping metric record #%d: not a JSON object", index)
            continue
        if not _text(record.get("keyword")):
            logger.warning("Dropping metric record #%d: missing keyword", index)
            continue
        metrics.append(KeywordMetric.from_dict(record))
    return tuple(metrics)


@dataclass(frozen=True)
class GroundingChunk:
    """Web citation returned alongside the model's answer."""

    uri: str
    title: str = ""

    @classmethod
    def from_dict(cls, record: Any) -> Optional["GroundingChunk"]:
        if not isinstance(record, dict):
            return None
        web = record.get("web")
        if not isinstance(web, dict) or not _text(web.get("uri")):
            return None
        return cls(uri=_text(web.get("uri")), title=_text(web.get("title")))

    def to_dict(self) -> dict[str, Any]:
        return {"web": {"uri": self.uri, "title": self.title}}


@dataclass(frozen=True)
class AnalysisResult:
    """Terminal value of one analysis call."""

    summary: str
    metrics: tuple[KeywordMetric, ...] = ()
    grounding_chunks: tuple[GroundingChunk, ...] = field(default_factory=tuple)

    @property
    def has_metrics(self) -> bool:
        return bool(self.metrics)

    def to_dict(self) -> dict[str, Any]:
        return {
            "metrics": [m.to_dict() for m in self.metrics],
            "summary": self.summary,
            "groundingChunks": [c.to_dict() for c in self.grounding_chunks],
        }
