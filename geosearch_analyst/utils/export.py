"""CSV and JSON export of analysis results."""

import csv
import io
import json
import logging
import os
from datetime import date
from typing import Optional

from geosearch_analyst.modules.keyword_analysis.schemas import AnalysisResult, KeywordMetric

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Keyword",
    "Volume",
    "Competition",
    "Difficulty",
    "Type",
    "Quick Win",
    "Site Audit",
    "Recommendation",
    "Rationale",
    "Better Alternatives (Format: Keyword [Vol | Comp])",
]


def default_csv_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return "seo_analysis_" + today.isoformat() + ".csv"


def _metric_row(metric: KeywordMetric) -> list[str]:
    alternatives = ", ".join(
        f"{r.keyword} [{r.search_volume.raw} | {r.competition.label}]"
        for r in metric.related_keywords
    )
    return [
        metric.keyword,
        metric.search_volume.raw,
        metric.competition.label,
        metric.difficulty,
        metric.keyword_type.value,
        "Yes" if metric.is_quick_win else "No",
        metric.site_audit or "N/A",
        metric.recommendation,
        metric.rationale,
        alternatives,
    ]


def result_to_csv(result: AnalysisResult) -> str:
    """Render metrics as CSV text; empty string when there are no metrics."""
    if not result.metrics:
        return ""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for metric in result.metrics:
        writer.writerow(_metric_row(metric))
    return output.getvalue()


def result_to_csv_bytes(result: AnalysisResult) -> bytes:
    """CSV bytes for Streamlit download buttons."""
    return result_to_csv(result).encode("utf-8")


def export_to_csv(result: AnalysisResult, filepath: Optional[str] = None) -> str:
    """Write metrics to a CSV file and return its absolute path.

    Raises:
        ValueError: when the result has no metrics to export.
    """
    if not result.metrics:
        raise ValueError("No keyword metrics to export.")
    filepath = filepath or default_csv_filename()
    dirpath = os.path.dirname(filepath)
    if dirpath:
        os.makedirs(dirpath, exist_ok=True)
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        f.write(result_to_csv(result))
    abs_path = os.path.abspath(filepath)
    logger.info("CSV exported: %s (%d rows)", abs_path, len(result.metrics))
    return abs_path


def export_to_json(result: AnalysisResult, filepath: str) -> str:
    """Write the full result (metrics, summary, citations) as JSON."""
    dirpath = os.path.dirname(filepath)
    if dirpath:
        os.makedirs(dirpath, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
    abs_path = os.path.abspath(filepath)
    logger.info("JSON exported: %s", abs_path)
    return abs_path
