"""Chart data for the volume-by-keyword bar chart."""

from typing import Iterable

import pandas as pd
import plotly.graph_objects as go

from geosearch_analyst.modules.keyword_analysis.schemas import (
    CompetitionLevel,
    KeywordMetric,
)

COMPETITION_COLORS = {
    CompetitionLevel.HIGH: "#EF4444",
    CompetitionLevel.MEDIUM: "#EAB308",
    CompetitionLevel.LOW: "#22C55E",
    CompetitionLevel.UNPARSED: "#9CA3AF",
}

CHART_COLUMNS = ["name", "volume", "original_volume", "competition", "color"]


def build_volume_frame(metrics: Iterable[KeywordMetric]) -> pd.DataFrame:
    """One row per metric with its normalized volume and bar colour."""
    rows = [
        {
            "name": metric.keyword,
            "volume": metric.search_volume.magnitude,
            "original_volume": metric.search_volume.raw,
            "competition": metric.competition.label,
            "color": COMPETITION_COLORS[metric.competition.level],
        }
        for metric in metrics
    ]
    return pd.DataFrame(rows, columns=CHART_COLUMNS)


def has_chartable_data(frame: pd.DataFrame) -> bool:
    return bool(len(frame)) and bool((frame["volume"] > 0).any())


def has_site_audit(metrics: Iterable[KeywordMetric]) -> bool:
    return any(m.site_audit and m.site_audit != "N/A" for m in metrics)


def volume_bar_chart(frame: pd.DataFrame, title: str = "Search Volume by Keyword") -> go.Figure:
    """Bar chart of normalized volume, hover shows the reported text."""
    fig = go.Figure(
        go.Bar(
            x=frame["name"],
            y=frame["volume"],
            marker_color=frame["color"],
            customdata=frame[["original_volume", "competition"]].values,
            hovertemplate=(
                "<b>%{x}</b><br>Volume: %{customdata[0]}"
                "<br>Competition: %{customdata[1]}<extra></extra>"
            ),
        )
    )
    fig.update_layout(
        title=title,
        xaxis_title="Keyword",
        yaxis_title="Relative volume",
        template="plotly_white",
        height=400,
    )
    return fig
