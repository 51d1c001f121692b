"""Keyword Analysis module -- grounded analysis with tolerant response extraction."""

from geosearch_analyst.modules.keyword_analysis.analyzer import KeywordAnalyzer, analyze
from geosearch_analyst.modules.keyword_analysis.extractor import NOT_FOUND, Found, extract_payload
from geosearch_analyst.modules.keyword_analysis.request_builder import (
    AnalysisRequest,
    build_request,
    tokenize_keywords,
)
from geosearch_analyst.modules.keyword_analysis.schemas import (
    AnalysisResult,
    GroundingChunk,
    KeywordMetric,
    RelatedKeyword,
    SerpResult,
)
from geosearch_analyst.modules.keyword_analysis.splitter import FALLBACK_SUMMARY, split_response
from geosearch_analyst.modules.keyword_analysis.volume import normalize_volume

__all__ = [
    "KeywordAnalyzer",
    "analyze",
    "AnalysisRequest",
    "build_request",
    "tokenize_keywords",
    "split_response",
    "FALLBACK_SUMMARY",
    "extract_payload",
    "Found",
    "NOT_FOUND",
    "normalize_volume",
    "AnalysisResult",
    "KeywordMetric",
    "RelatedKeyword",
    "SerpResult",
    "GroundingChunk",
]
