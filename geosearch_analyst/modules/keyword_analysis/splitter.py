"""Separate the narrative summary from the JSON payload of a model response."""

import logging
import re
from dataclasses import dataclass

from geosearch_analyst.modules.keyword_analysis.request_builder import (
    JSON_SEPARATOR,
    SUMMARY_HEADING,
)

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "Analysis loaded. See details below."

_HEADING = re.compile(re.escape(SUMMARY_HEADING), re.IGNORECASE)


@dataclass(frozen=True)
class SplitResponse:
    summary: str
    json_candidate: str
    separator_found: bool


def split_response(text: str) -> SplitResponse:
    """Split on the first separator; never raises.

    Without a separator the whole text becomes the JSON candidate and the
    summary is ``FALLBACK_SUMMARY``.
    """
    text = text or ""
    head, separator, tail = text.partition(JSON_SEPARATOR)
    if not separator:
        logger.warning("Separator not found, attempting fallback parse.")
        return SplitResponse(
            summary=FALLBACK_SUMMARY,
            json_candidate=text,
            separator_found=False,
        )
    summary = _HEADING.sub("", head, count=1).strip()
    return SplitResponse(summary=summary, json_candidate=tail, separator_found=True)
