"""Tests for CSV/JSON export and chart data."""

import csv
import io
import json
import os
from datetime import date

import pytest

from geosearch_analyst.modules.keyword_analysis.charting import (
    COMPETITION_COLORS,
    CHART_COLUMNS,
    build_volume_frame,
    has_chartable_data,
    has_site_audit,
    volume_bar_chart,
)
from geosearch_analyst.modules.keyword_analysis.schemas import (
    AnalysisResult,
    CompetitionLevel,
    GroundingChunk,
    KeywordMetric,
    metrics_from_records,
)
from geosearch_analyst.utils.export import (
    CSV_HEADERS,
    default_csv_filename,
    export_to_csv,
    export_to_json,
    result_to_csv,
)


@pytest.fixture()
def result(metric_records):
    return AnalysisResult(
        summary="Strong demand.",
        metrics=metrics_from_records(metric_records),
        grounding_chunks=(GroundingChunk(uri="https://a.example", title="a"),),
    )


class TestCsvExport:

    def test_headers_and_rows(self, result):
        rows = list(csv.reader(io.StringIO(result_to_csv(result))))
        assert rows[0] == CSV_HEADERS
        assert len(rows) == 3
        first, second = rows[1], rows[2]
        assert first[0] == "vegan restaurants"
        assert first[1] == "12,500"
        assert first[5] == "No"
        assert first[6] == "N/A"
        assert first[9] == "vegan restaurants brooklyn [1K-10K | Medium]"
        assert second[5] == "Yes"
        assert second[9] == ""

    def test_site_audit_column(self):
        metric = KeywordMetric.from_dict({"keyword": "a", "siteAudit": "Indexed"})
        rows = list(csv.reader(io.StringIO(result_to_csv(AnalysisResult("s", (metric,))))))
        assert rows[1][6] == "Indexed"

    def test_empty_result_renders_nothing(self):
        assert result_to_csv(AnalysisResult(summary="x")) == ""

    def test_export_to_csv_writes_file(self, result, tmp_path):
        target = tmp_path / "out" / "metrics.csv"
        path = export_to_csv(result, str(target))
        assert path == os.path.abspath(str(target))
        assert target.read_text(encoding="utf-8").startswith("Keyword,Volume,")

    def test_export_to_csv_without_metrics(self, tmp_path):
        with pytest.raises(ValueError):
            export_to_csv(AnalysisResult(summary="x"), str(tmp_path / "x.csv"))

    def test_default_filename(self):
        assert default_csv_filename(date(2024, 3, 9)) == "seo_analysis_2024-03-09.csv"


class TestJsonExport:

    def test_writes_full_result(self, result, tmp_path):
        target = tmp_path / "result.json"
        export_to_json(result, str(target))
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["summary"] == "Strong demand."
        assert data["metrics"][1]["keyword"] == "plant based diet"
        assert data["groundingChunks"] == [{"web": {"uri": "https://a.example", "title": "a"}}]


class TestCharting:

    def test_frame_columns_and_values(self, result):
        frame = build_volume_frame(result.metrics)
        assert list(frame.columns) == CHART_COLUMNS
        assert frame["volume"].tolist() == [12500, 5500]
        assert frame["original_volume"].tolist() == ["12,500", "1k-10k"]
        assert frame["color"].tolist() == [
            COMPETITION_COLORS[CompetitionLevel.HIGH],
            COMPETITION_COLORS[CompetitionLevel.LOW],
        ]
        assert has_chartable_data(frame)

    def test_all_zero_volumes_not_chartable(self):
        metrics = metrics_from_records([{"keyword": "a", "searchVolume": "Data Unavailable"}])
        assert not has_chartable_data(build_volume_frame(metrics))
        assert not has_chartable_data(build_volume_frame([]))

    def test_site_audit_detection(self, result):
        assert not has_site_audit(result.metrics)
        na_only = metrics_from_records([{"keyword": "a", "siteAudit": "N/A"}])
        assert not has_site_audit(na_only)
        assert has_site_audit(metrics_from_records([{"keyword": "a", "siteAudit": "Indexed"}]))

    def test_bar_chart(self, result):
        fig = volume_bar_chart(build_volume_frame(result.metrics))
        assert len(fig.data) == 1
        assert list(fig.data[0].x) == ["vegan restaurants", "plant based diet"]
