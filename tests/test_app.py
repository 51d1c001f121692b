"""Tests for application configuration and wiring."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from geosearch_analyst.app import DEFAULT_CONFIG, GeoSearchAnalyst
from geosearch_analyst.modules.keyword_analysis.schemas import AnalysisResult


@pytest.fixture()
def config_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "app:\n"
        "  data_dir: " + str(tmp_path / "data") + "\n"
        "database:\n"
        "  url: \"sqlite:///:memory:\"\n"
        "history:\n"
        "  max_items: 2\n",
        encoding="utf-8",
    )
    return path


class TestConfiguration:

    def test_yaml_merged_over_defaults(self, config_file, tmp_path):
        instance = GeoSearchAnalyst(config_path=str(config_file), env_path=str(tmp_path / "none.env"))
        instance.initialize()
        assert instance.config["history"]["max_items"] == 2
        assert instance.config["llm"]["model"] == DEFAULT_CONFIG["llm"]["model"]
        assert (tmp_path / "data").is_dir()

    def test_missing_config_uses_defaults(self, tmp_path):
        instance = GeoSearchAnalyst(config_path=str(tmp_path / "missing.yaml"))
        config = instance._load_config()
        assert config == DEFAULT_CONFIG

    def test_status_masks_api_key(self, config_file, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "abcdefgh12345678wxyz")
        instance = GeoSearchAnalyst(config_path=str(config_file))
        status = instance.get_status()
        assert status["api_key"]["ok"]
        assert status["api_key"]["detail"] == "abcdefgh...wxyz"
        assert status["database"]["ok"]


class TestAnalyze:

    @pytest.mark.asyncio
    async def test_records_history_then_analyzes(self, config_file, tmp_path):
        analyzer = MagicMock()
        analyzer.analyze = AsyncMock(return_value=AnalysisResult(summary="ok"))
        instance = GeoSearchAnalyst(
            config_path=str(config_file), env_path=str(tmp_path / "none.env"), analyzer=analyzer,
        )
        result = await instance.analyze("seo tools", "London", "  ")
        assert result.summary == "ok"
        analyzer.analyze.assert_awaited_once_with("seo tools", "London", None)
        items = instance.history.list_recent()
        assert [(i.keywords, i.location, i.website) for i in items] == [("seo tools", "London", None)]

    @pytest.mark.asyncio
    async def test_history_respects_configured_size(self, config_file, tmp_path):
        analyzer = MagicMock()
        analyzer.analyze = AsyncMock(return_value=AnalysisResult(summary="ok"))
        instance = GeoSearchAnalyst(
            config_path=str(config_file), env_path=str(tmp_path / "none.env"), analyzer=analyzer,
        )
        for keyword in ("a", "b", "c"):
            await instance.analyze(keyword, "London")
        assert len(instance.history.list_recent()) == 2
