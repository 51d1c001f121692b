"""Keyword analysis orchestrator.

Builds the prompt, makes the single grounded model call, and turns the
free-form response into an ``AnalysisResult``.  Extraction problems degrade
to an empty metrics table; only configuration and provider failures raise.
"""

import logging
from typing import Optional

from geosearch_analyst.exceptions import (
    ConfigurationError,
    InvalidInputError,
    PolicyRejectionError,
    ProviderError,
)
from geosearch_analyst.modules.keyword_analysis.extractor import Found, extract_payload
from geosearch_analyst.modules.keyword_analysis.request_builder import build_request
from geosearch_analyst.modules.keyword_analysis.schemas import (
    AnalysisResult,
    GroundingChunk,
    metrics_from_records,
)
from geosearch_analyst.modules.keyword_analysis.splitter import (
    FALLBACK_SUMMARY,
    split_response,
)

logger = logging.getLogger(__name__)

SAFETY_MESSAGE = "Request blocked by safety filters. Try less sensitive keywords."
EMPTY_RESPONSE_MESSAGE = "The AI model returned no content."


class KeywordAnalyzer:
    """Run grounded keyword analyses.

    Each ``analyze`` call is independent: nothing from one call is cached or
    reused by the next.

    Usage::

        analyzer = KeywordAnalyzer()
        result = await analyzer.analyze(
            "vegan restaurants, plant based diet", "New York, NY",
        )
        for metric in result.metrics:
            print(metric.keyword, metric.search_volume)
    """

    def __init__(
        self,
        client=None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self._api_key = api_key
        self._model = model
        self._timeout = timeout

    def _get_client(self):
        """Return the injected client or build a Gemini client.

        Raises ``ConfigurationError`` when no credential is configured.
        """
        if self._client is None:
            from geosearch_analyst.integrations.gemini_client import GeminiSearchClient

            kwargs = {}
            if self._model:
                kwargs["model"] = self._model
            if self._timeout:
                kwargs["timeout"] = self._timeout
            self._client = GeminiSearchClient(api_key=self._api_key, **kwargs)
        return self._client

    async def analyze(
        self,
        keywords: str,
        location: str,
        website: Optional[str] = None,
    ) -> AnalysisResult:
        """Analyze a comma/newline separated keyword batch for a location.

        Raises:
            InvalidInputError: blank keywords or location.
            ConfigurationError: no model credential.
            PolicyRejectionError: the provider blocked the request for safety.
            ProviderError: the model call failed or returned no text.
        """
        if not keywords or not keywords.strip():
            raise InvalidInputError("Keywords must not be blank.")
        if not location or not location.strip():
            raise InvalidInputError("Location must not be blank.")

        request = build_request(keywords, location, website)
        client = self._get_client()

        try:
            response = await client.generate_grounded(
                request.prompt, use_search=request.use_search_grounding,
            )
        except (ConfigurationError, PolicyRejectionError):
            raise
        except Exception as exc:
            logger.error("Gemini API error: %s", exc)
            raise _provider_error(exc) from exc

        text = response.text or ""
        if not text:
            if getattr(response, "is_safety_blocked", False):
                raise PolicyRejectionError(SAFETY_MESSAGE)
            raise ProviderError("Analysis failed: " + EMPTY_RESPONSE_MESSAGE)

        split = split_response(text)
        extraction = extract_payload(split.json_candidate)
        records = extraction.payload if isinstance(extraction, Found) else None
        if not isinstance(records, list):
            logger.warning("No structured keyword data found in model response.")
            records = []
        metrics = metrics_from_records(records)

        if len(metrics) != request.keyword_count:
            logger.info(
                "Model returned %d metrics for %d keywords",
                len(metrics), request.keyword_count,
            )

        chunks = tuple(
            chunk
            for chunk in (GroundingChunk.from_dict(raw) for raw in response.grounding_chunks or [])
            if chunk is not None
        )

        return AnalysisResult(
            summary=split.summary or FALLBACK_SUMMARY,
            metrics=metrics,
            grounding_chunks=chunks,
        )


def _provider_error(exc: Exception) -> ProviderError:
    """Wrap a transport/provider exception, keeping its message."""
    message = str(exc) or "An unknown error occurred."
    if "safety" in message.lower():
        return PolicyRejectionError(SAFETY_MESSAGE, original_error=exc)
    return ProviderError("Analysis failed: " + message, original_error=exc)


async def analyze(
    keywords: str,
    location: str,
    website: Optional[str] = None,
    client=None,
) -> AnalysisResult:
    """One-shot convenience wrapper around ``KeywordAnalyzer.analyze``."""
    return await KeywordAnalyzer(client=client).analyze(keywords, location, website)
