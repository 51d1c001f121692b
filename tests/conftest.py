"""Shared pytest fixtures for GeoSearch Analyst tests."""

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Ensure project root is on sys.path so 'geosearch_analyst' is importable.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)


@pytest.fixture(autouse=True)
def _reset_db_engine():
    """Autouse fixture: reset the global DB engine before and after every test."""
    from geosearch_analyst.database import reset_engine
    reset_engine()
    yield
    reset_engine()


@pytest.fixture()
def test_db():
    """Provide an in-memory SQLite database with all tables created."""
    from geosearch_analyst.database import init_db
    db_url = "sqlite:///:memory:"
    init_db(database_url=db_url, echo=False)
    yield db_url


@pytest.fixture()
def metric_records():
    """Two well-formed metric records as the model would emit them."""
    return [
        {
            "keyword": "vegan restaurants",
            "searchVolume": "12,500",
            "competition": "High",
            "difficulty": "68/100",
            "keywordType": "Short-tail",
            "isQuickWin": False,
            "recommendation": "Target neighbourhood-specific pages.",
            "rationale": "Head term dominated by directories.",
            "serpResults": [
                {
                    "position": 1,
                    "title": "The 20 Best Vegan Restaurants in NYC",
                    "url": "https://example.com/best-vegan-nyc",
                    "snippet": "Our guide to plant-based dining.",
                },
            ],
            "relatedKeywords": [
                {
                    "keyword": "vegan restaurants brooklyn",
                    "searchVolume": "1K-10K",
                    "competition": "Medium",
                    "keywordType": "Long-tail",
                    "whyBetter": "Narrower intent, weaker competitors.",
                },
            ],
        },
        {
            "keyword": "plant based diet",
            "searchVolume": "1k-10k",
            "competition": "Low",
            "difficulty": "Easy",
            "keywordType": "Short-tail",
            "isQuickWin": True,
            "recommendation": "Publish a beginner's guide.",
            "rationale": "Informational intent with thin results.",
            "serpResults": [],
            "relatedKeywords": [],
        },
    ]


@pytest.fixture()
def well_formed_response(metric_records):
    """Response text that honours the separator contract."""
    return (
        "## Market Insights\n"
        "Plant-based dining demand in New York is strong; the diet term is a quick win.\n"
        "---JSON_START---\n"
        + json.dumps(metric_records, indent=2)
    )


@pytest.fixture()
def grounded_response_factory():
    """Build GroundedResponse objects without touching the SDK."""
    from geosearch_analyst.integrations.gemini_client import GroundedResponse

    def _make(text, chunks=None, finish_reason="STOP", block_reason=None):
        return GroundedResponse(
            text=text,
            grounding_chunks=chunks if chunks is not None else [],
            finish_reason=finish_reason,
            block_reason=block_reason,
        )

    return _make


@pytest.fixture()
def mock_gemini_client(grounded_response_factory, well_formed_response):
    """Return a mock GeminiSearchClient that returns a well-formed response."""
    client = MagicMock()
    client.generate_grounded = AsyncMock(return_value=grounded_response_factory(
        well_formed_response,
        chunks=[
            {"web": {"uri": "https://example.com/vegan-stats", "title": "example.com"}},
            {"web": {"uri": "https://example.org/diet-trends", "title": "example.org"}},
        ],
    ))
    return client
