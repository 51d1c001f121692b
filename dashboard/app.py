"""GeoSearch Analyst -- Dashboard

Streamlit front end for grounded keyword analysis.
Run with: streamlit run dashboard/app.py
"""

import asyncio
import logging
import sys
from pathlib import Path

import streamlit as st

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from geosearch_analyst.app import GeoSearchAnalyst
from geosearch_analyst.exceptions import AnalysisError
from geosearch_analyst.modules.keyword_analysis.charting import (
    build_volume_frame,
    has_chartable_data,
    has_site_audit,
    volume_bar_chart,
)
from geosearch_analyst.utils.export import default_csv_filename, result_to_csv_bytes
from geosearch_analyst.utils.helpers import load_keywords_text

logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="GeoSearch Analyst",
    page_icon="🔎",
    layout="wide",
)


def _run_async(coro):
    """Run an async coroutine from synchronous Streamlit context."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def _get_app() -> GeoSearchAnalyst:
    """Create and cache the initialised application."""
    instance = GeoSearchAnalyst()
    instance.initialize()
    return instance


# ------------------------------------------------------------------
# Section renderers
# ------------------------------------------------------------------

def _render_history(app: GeoSearchAnalyst) -> None:
    with st.sidebar:
        st.markdown("### Recent Searches")
        items = app.history.list_recent()
        if not items:
            st.caption("No recent searches.")
            return
        for item in items:
            label = item.keywords[:40] + (" -- " + item.location if item.location else "")
            if st.button(label, key="hist_" + str(item.id), use_container_width=True):
                st.session_state["form_keywords"] = item.keywords
                st.session_state["form_location"] = item.location
                st.session_state["form_website"] = item.website or ""
                st.session_state["run_from_history"] = True
                st.rerun()
        if st.button("Clear history", type="secondary"):
            app.history.clear()
            st.rerun()


def _render_form() -> tuple[bool, str, str, str]:
    st.markdown(
        "Enter keywords manually or upload a file to get real-time search "
        "volume estimates via Google Search."
    )
    uploaded = st.file_uploader("Load keywords from file", type=["txt", "csv"])
    if uploaded is not None and st.session_state.get("loaded_file") != uploaded.file_id:
        st.session_state["loaded_file"] = uploaded.file_id
        try:
            st.session_state["form_keywords"] = load_keywords_text(uploaded.name, uploaded.getvalue())
        except ValueError as exc:
            st.warning(str(exc))

    with st.form("analysis_form"):
        keywords = st.text_area(
            "Keywords (comma or newline separated)",
            placeholder="vegan restaurants, plant based diet",
            height=120,
            key="form_keywords",
        )
        col1, col2 = st.columns(2)
        with col1:
            location = st.text_input("Location", placeholder="New York, NY", key="form_location")
        with col2:
            website = st.text_input("Your website (optional)", placeholder="example.com", key="form_website")
        submitted = st.form_submit_button("🔍 Analyze", use_container_width=True)

    if st.session_state.pop("run_from_history", False):
        submitted = True
    return submitted, keywords, location, website


def _render_result(result) -> None:
    st.markdown("### Market Insights")
    st.markdown(result.summary)

    if not result.metrics:
        st.info(
            "No structured keyword data was found in the response. "
            "Try again or rephrase the keywords."
        )
    else:
        frame = build_volume_frame(result.metrics)
        if has_chartable_data(frame):
            st.plotly_chart(volume_bar_chart(frame), use_container_width=True)

        show_audit = has_site_audit(result.metrics)
        rows = []
        for metric in result.metrics:
            row = {
                "Keyword": metric.keyword,
                "Volume": metric.search_volume.raw,
                "Competition": metric.competition.label,
                "Difficulty": metric.difficulty,
                "Type": metric.keyword_type.value,
                "Quick Win": "✔" if metric.is_quick_win else "",
                "Recommendation": metric.recommendation,
            }
            if show_audit:
                row["Site Audit"] = metric.site_audit or "N/A"
            rows.append(row)
        st.dataframe(rows, use_container_width=True, hide_index=True)

        st.download_button(
            "Download CSV",
            data=result_to_csv_bytes(result),
            file_name=default_csv_filename(),
            mime="text/csv",
        )

        for metric in result.metrics:
            with st.expander(metric.keyword):
                if metric.rationale:
                    st.markdown("**Rationale:** " + metric.rationale)
                if metric.related_keywords:
                    st.markdown("**Better alternatives**")
                    st.dataframe(
                        [r.to_dict() for r in metric.related_keywords],
                        use_container_width=True,
                        hide_index=True,
                    )
                if metric.serp_results:
                    st.markdown("**Top results**")
                    for serp in metric.serp_results:
                        st.markdown(f"{serp.position}. [{serp.title}]({serp.url}) -- {serp.snippet}")

    if result.grounding_chunks:
        st.markdown("### Sources")
        for chunk in result.grounding_chunks:
            st.markdown(f"- [{chunk.title or chunk.uri}]({chunk.uri})")


def main():
    st.title("🔎 GeoSearch Analyst")
    app = _get_app()
    _render_history(app)

    submitted, keywords, location, website = _render_form()
    if submitted:
        if not keywords.strip() or not location.strip():
            st.warning("Please enter keywords and a location.")
        else:
            with st.spinner("Searching and analyzing keywords..."):
                try:
                    st.session_state["analysis_result"] = _run_async(
                        app.analyze(keywords, location, website)
                    )
                except AnalysisError as exc:
                    st.session_state.pop("analysis_result", None)
                    st.error("Analysis Failed: " + exc.message)
                    logger.error("Analysis failed: %s", exc)

    if "analysis_result" in st.session_state:
        _render_result(st.session_state["analysis_result"])


main()
