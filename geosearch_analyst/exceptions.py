"""Error types surfaced by the keyword analysis pipeline.

Only configuration and provider problems are raised to callers.  A response
that carries no structured data is not an error: it degrades to an empty
metrics table (see ``modules.keyword_analysis.extractor``).
"""


class AnalysisError(Exception):
    """Base class for every error raised by an analysis call."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(AnalysisError):
    """The model credential is missing.  Raised before any network attempt."""


class InvalidInputError(AnalysisError, ValueError):
    """Blank keywords or location were passed to the pipeline."""


class ProviderError(AnalysisError):
    """The model call failed or returned no usable output."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class PolicyRejectionError(ProviderError):
    """The provider refused the request on content-safety grounds."""
