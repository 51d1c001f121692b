"""Google Gemini client with Google Search grounding."""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

from google import genai
from google.genai import types

from geosearch_analyst.exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass
class GroundedResponse:
    """Text and citation metadata from one grounded generation."""

    text: str
    grounding_chunks: list[dict[str, Any]] = field(default_factory=list)
    finish_reason: Optional[str] = None
    block_reason: Optional[str] = None

    @property
    def is_safety_blocked(self) -> bool:
        reasons = (self.finish_reason or "", self.block_reason or "")
        return any("SAFETY" in reason.upper() for reason in reasons)


class GeminiSearchClient:
    """Single-call Gemini client with the ``google_search`` tool enabled.

    Usage::

        client = GeminiSearchClient()
        response = await client.generate_grounded("Analyze 'vegan recipes'")
        print(response.text, response.grounding_chunks)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 120.0,
        temperature: Optional[float] = None,
    ):
        self._api_key = api_key or os.getenv("GEMINI_API_KEY", "")
        if not self._api_key:
            raise ConfigurationError("API Key is missing.")
        self._model = model
        self._timeout = timeout
        self._temperature = temperature
        self._client = genai.Client(api_key=self._api_key)

    @property
    def model(self) -> str:
        return self._model

    async def generate_grounded(
        self, prompt: str, use_search: bool = True,
    ) -> GroundedResponse:
        """Run one generation and collect its grounding citations.

        Raises:
            ProviderError: on timeout.  Other SDK exceptions propagate unchanged.
        """
        config_kwargs: dict[str, Any] = {}
        if use_search:
            config_kwargs["tools"] = [types.Tool(google_search=types.GoogleSearch())]
        if self._temperature is not None:
            config_kwargs["temperature"] = self._temperature

        logger.info("Gemini grounded call: model=%s, prompt len=%d", self._model, len(prompt))
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    self._client.models.generate_content,
                    model=self._model,
                    contents=prompt,
                    config=types.GenerateContentConfig(**config_kwargs),
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderError(
                "Request timed out after " + str(self._timeout) + "s", original_error=exc,
            ) from exc

        parsed = self._parse_response(response)
        logger.info(
            "Gemini call completed (len=%d, citations=%d)",
            len(parsed.text), len(parsed.grounding_chunks),
        )
        return parsed

    @staticmethod
    def _parse_response(response: Any) -> GroundedResponse:
        text = getattr(response, "text", None) or ""

        finish_reason = None
        chunks: list[dict[str, Any]] = []
        candidates = getattr(response, "candidates", None) or []
        if candidates:
            candidate = candidates[0]
            if getattr(candidate, "finish_reason", None) is not None:
                finish_reason = str(candidate.finish_reason)
            metadata = getattr(candidate, "grounding_metadata", None)
            for chunk in (getattr(metadata, "grounding_chunks", None) or []):
                web = getattr(chunk, "web", None)
                if web is None or not getattr(web, "uri", None):
                    continue
                chunks.append({
                    "web": {"uri": web.uri, "title": getattr(web, "title", None) or ""},
                })

        block_reason = None
        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None and getattr(feedback, "block_reason", None):
            block_reason = str(feedback.block_reason)

        return GroundedResponse(
            text=text,
            grounding_chunks=chunks,
            finish_reason=finish_reason,
            block_reason=block_reason,
        )
