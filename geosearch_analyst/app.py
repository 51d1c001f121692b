"""Application wiring for GeoSearch Analyst."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from geosearch_analyst.modules.keyword_analysis.schemas import AnalysisResult

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "app": {"name": "GeoSearch Analyst", "data_dir": "data", "export_dir": "data/exports"},
    "database": {"url": None, "echo": False},
    "llm": {"model": "gemini-2.5-flash", "timeout": 120},
    "history": {"max_items": 6},
}


class GeoSearchAnalyst:
    """Central application class: configuration, history and the analyzer.

    Usage::

        app = GeoSearchAnalyst()
        app.initialize()
        result = asyncio.run(app.analyze("seo tools", "London, UK"))
        recent = app.history.list_recent()
    """

    def __init__(
        self,
        config_path: str = "config/settings.yaml",
        env_path: str = ".env",
        analyzer=None,
    ):
        self._config_path = config_path
        self._env_path = env_path
        self.config: dict[str, Any] = {}
        self._initialized = False
        self._analyzer = analyzer
        self._history = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load environment and configuration, initialise the database."""
        if self._initialized:
            return

        env_file = Path(self._env_path)
        if env_file.exists():
            load_dotenv(env_file)
            logger.info("Loaded environment from %s", self._env_path)

        self.config = self._load_config()

        data_dir = self.config["app"].get("data_dir", "")
        if data_dir:
            Path(data_dir).mkdir(parents=True, exist_ok=True)

        from geosearch_analyst.database import init_db
        init_db(
            database_url=self.config["database"].get("url"),
            echo=self.config["database"].get("echo", False),
        )

        self._initialized = True
        logger.info("GeoSearchAnalyst initialised.")

    def _load_config(self) -> dict[str, Any]:
        """Load the YAML configuration file over the built-in defaults."""
        config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
        config_file = Path(self._config_path)
        if not config_file.exists():
            logger.warning("Config file not found: %s -- using defaults.", self._config_path)
            return config
        with open(config_file, "r", encoding="utf-8") as fh:
            loaded = yaml.safe_load(fh) or {}
        for section, values in loaded.items():
            if isinstance(values, dict):
                config.setdefault(section, {}).update(values)
            else:
                config[section] = values
        logger.info("Configuration loaded from %s", self._config_path)
        return config

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.initialize()

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def get_analyzer(self):
        """Lazy-initialise and return the keyword analyzer."""
        if self._analyzer is None:
            from geosearch_analyst.modules.keyword_analysis import KeywordAnalyzer
            llm_cfg = self.config.get("llm", {})
            self._analyzer = KeywordAnalyzer(
                model=llm_cfg.get("model"),
                timeout=llm_cfg.get("timeout"),
            )
        return self._analyzer

    @property
    def history(self):
        """Search history store sized from ``history.max_items``."""
        self._ensure_initialized()
        if self._history is None:
            from geosearch_analyst.modules.search_history import SearchHistoryStore
            self._history = SearchHistoryStore(
                max_items=int(self.config.get("history", {}).get("max_items", 6)),
            )
        return self._history

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def analyze(
        self,
        keywords: str,
        location: str,
        website: Optional[str] = None,
        record_history: bool = True,
    ) -> AnalysisResult:
        """Record the query in history, then run the analysis pipeline."""
        self._ensure_initialized()
        website = (website or "").strip() or None
        if record_history and keywords.strip() and location.strip():
            self.history.record(keywords, location, website)
        return await self.get_analyzer().analyze(keywords, location, website)

    def get_status(self) -> dict[str, dict[str, Any]]:
        """Return health status of configuration, credentials and database."""
        status: dict[str, dict[str, Any]] = {}

        status["configuration"] = {
            "ok": Path(self._config_path).exists(),
            "detail": self._config_path,
        }

        api_key = os.getenv("GEMINI_API_KEY", "")
        if len(api_key) > 12:
            key_detail = api_key[:8] + "..." + api_key[-4:]
        else:
            key_detail = "configured" if api_key else "GEMINI_API_KEY not set"
        status["api_key"] = {"ok": bool(api_key), "detail": key_detail}

        try:
            from sqlalchemy import text as sa_text
            from geosearch_analyst.database import get_engine
            self._ensure_initialized()
            with get_engine().connect() as conn:
                conn.execute(sa_text("SELECT 1"))
            status["database"] = {"ok": True, "detail": "connected"}
        except Exception as exc:
            status["database"] = {"ok": False, "detail": str(exc)}

        return status
