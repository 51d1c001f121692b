"""Structured-payload extraction from free-form model output.

Extraction is a chain of independent strategies.  Each returns ``Found``
with the parsed JSON or ``NOT_FOUND``; the first ``Found`` wins.  A strategy
whose candidate text is not valid JSON fails as a whole, there is no
field-level recovery.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Union

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class Found:
    payload: Any


class NotFound:
    """Marker for "no structured data"; use the ``NOT_FOUND`` instance."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = NotFound()

ExtractionResult = Union[Found, NotFound]
ExtractionStrategy = Callable[[str], ExtractionResult]


def _loads(candidate: str, strategy: str) -> ExtractionResult:
    try:
        return Found(json.loads(candidate))
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse JSON response (%s): %s", strategy, exc)
        return NOT_FOUND


def extract_from_fenced_block(text: str) -> ExtractionResult:
    """Parse the interior of the first ```json fenced block."""
    match = _FENCED_JSON.search(text)
    if not match:
        return NOT_FOUND
    return _loads(match.group(1), "fenced block")


def extract_from_bracket_span(text: str) -> ExtractionResult:
    """Parse from the first ``[`` to the last ``]``.

    Unrelated bracketed text between two arrays is included in the span;
    the span is not balanced.
    """
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return NOT_FOUND
    return _loads(text[start:end + 1], "bracket span")


DEFAULT_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    extract_from_fenced_block,
    extract_from_bracket_span,
)


def extract_payload(
    text: str,
    strategies: Iterable[ExtractionStrategy] = DEFAULT_STRATEGIES,
) -> ExtractionResult:
    """Run each strategy in order and return the first ``Found``."""
    if not text:
        return NOT_FOUND
    for strategy in strategies:
        result = strategy(text)
        if isinstance(result, Found):
            return result
    return NOT_FOUND
