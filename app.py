import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Dict, List, Optional

from roadmap.aggregate import aggregate
from roadmap.charts import status_bar_chart, type_donut_chart, volume_effort_chart
from roadmap.data import load_dashboard_data, reload_dashboard_data
from roadmap.filters import (
    ALL_QUARTERS,
    BUCKET_OPTIONS,
    CATEGORY_OPTIONS,
    OVERVIEW,
    ViewState,
    page_subtitle,
    page_title,
    select_bucket,
    select_category,
)
from roadmap.metrics_table import table_frame


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #2a2d35;margin-bottom: 10px;}
        .app-top-bar .subtitle {color: #94a3b8;font-size: 0.9rem;margin-top: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;}
        .card {border: 1px solid #2a2d35;border-radius: 12px;padding: 16px;margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;margin-bottom: 8px;}
        .load-error {padding: 40px;text-align: center;color: #ef4444;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_page_header(state: ViewState, export_df: Optional[pd.DataFrame] = None):
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='page-title'>{page_title(state)}</div>"
            f"<div class='subtitle'>{page_subtitle(state)}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        if st.button("Reload data"):
            reload_dashboard_data()
            st.rerun()
        if export_df is not None and not export_df.empty:
            st.download_button(
                "Export CSV",
                data=export_df.to_csv(index=False).encode("utf-8"),
                file_name="roadmap.csv",
                mime="text/csv",
            )


def render_load_error(message: str):
    st.markdown(
        f"<div class='load-error'><h3>Error loading data</h3>"
        f"<p>Make sure 'data.csv' is in the same folder.</p><pre>{message}</pre></div>",
        unsafe_allow_html=True,
    )


def render_kpis(kpis: Dict[str, object]):
    display = kpis["display"]
    cols = st.columns(5)
    cols[0].metric("Proyectos", display["total"])
    cols[1].metric("Horas", display["hours"])
    cols[2].metric("Promedio", display["avg_hours"])
    cols[3].metric("Done", kpis["done"])
    cols[4].metric("WIP", kpis["wip"])


def render_charts(state: ViewState, grouped: List[Dict[str, object]], types: Dict[str, int], radar: List[Dict[str, object]]):
    left, right = st.columns([2, 1])
    with left:
        with card("Estado por equipo" if state.is_overview else "Estado Actual"):
            st.altair_chart(status_bar_chart(grouped), use_container_width=True)
    with right:
        with card("Nuevos vs Mejoras"):
            st.altair_chart(type_donut_chart(types), use_container_width=True)
    if state.is_overview:
        with card("Volumen vs Esfuerzo"):
            st.altair_chart(volume_effort_chart(radar), use_container_width=True)


def render_table(filtered_df: pd.DataFrame):
    display = filtered_df.assign(hours=filtered_df["hours"].map(lambda h: f"{h}h"))
    st.dataframe(display, use_container_width=True, hide_index=True)


# ---------- UI setup ----------
st.set_page_config(page_title="Roadmap Dashboard", layout="wide")
inject_base_styles()

data_ctx = load_dashboard_data()
records = data_ctx.get("records", ())

# ----- Sidebar: navigation + quarter -----
with st.sidebar:
    st.markdown("### Navigate")
    category = st.radio("Navigate", CATEGORY_OPTIONS, index=0, label_visibility="collapsed")
    st.markdown("---")
    bucket = st.radio("Quarter", BUCKET_OPTIONS, index=BUCKET_OPTIONS.index(ALL_QUARTERS), horizontal=True)

state = select_bucket(select_category(ViewState(), category or OVERVIEW), bucket or ALL_QUARTERS)
agg = aggregate(records, state)
filtered_df = table_frame(agg.filtered)

render_page_header(state, export_df=filtered_df)

if data_ctx.get("error"):
    render_load_error(str(data_ctx["error"]))
    st.stop()

if state.is_table:
    render_table(filtered_df)
else:
    render_kpis(agg.kpis)
    render_charts(state, agg.grouped, agg.types, agg.radar)
