"""
Material Issuance Dashboard — Interactive Dashboard

Run with:  streamlit run app.py
"""

import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).resolve().parent))

from issuance_dashboard.charts import build_figure
from issuance_dashboard.dashboard import DashboardSession
from issuance_dashboard.loaders import (
    DatasetParseError,
    EmptyDatasetError,
    load_issuance_records,
)
from issuance_dashboard.simulator import generate_issuance_records

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Material Issuance Dashboard",
    page_icon="📦",
    layout="wide",
    initial_sidebar_state="expanded",
)

if "session" not in st.session_state:
    st.session_state["session"] = DashboardSession(figure_builder=build_figure)

session: DashboardSession = st.session_state["session"]


def load_into_session(records, name: str) -> None:
    try:
        session.load(records, source_name=name)
    except EmptyDatasetError as exc:
        st.warning(str(exc))


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title("Material Issuance")
st.sidebar.markdown("Store issuance analytics")
st.sidebar.divider()

uploaded = st.sidebar.file_uploader("Upload issuance export", type=["csv", "xlsx", "xlsm"])
if uploaded is not None and session.is_new_upload(uploaded.file_id):
    session.mark_processed(uploaded.file_id)
    try:
        records = load_issuance_records(uploaded, filename=uploaded.name)
    except DatasetParseError:
        st.error("Error parsing file. The previous dashboard is still shown.")
    else:
        load_into_session(records, uploaded.name)

if st.sidebar.button("Load sample data"):
    load_into_session(generate_issuance_records(), "sample data")

st.sidebar.divider()
if session.source_name:
    st.sidebar.caption(f"Data: {session.source_name}")


# ---------------------------------------------------------------------------
# Helper: KPI card
# ---------------------------------------------------------------------------
def kpi_card(card: dict) -> None:
    st.markdown(
        f"""
        <div title="{card['full']}" style="background: #f8fafc; border-left: 4px solid #3b82f6;
                    border-radius: 8px; padding: 16px; margin-bottom: 8px;">
            <div style="font-size: 13px; color: #64748b; font-weight: 600; text-transform: uppercase;">{card['title']}</div>
            <div style="font-size: 28px; font-weight: 700; color: #0f172a; margin: 4px 0;">{card['short']}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


# ===========================================================================
# Main page
# ===========================================================================
st.title("Material Issuance Dashboard")

if not session.loaded:
    st.info("Upload a CSV or Excel issuance export to build the dashboard.")
    st.stop()

st.caption(f"Source: **{session.source_name}**")

card_keys = list(session.cards)
for row_start in range(0, len(card_keys), 4):
    cols = st.columns(4)
    for col, key in zip(cols, card_keys[row_start:row_start + 4]):
        with col:
            kpi_card(session.cards[key])

st.divider()

tab_dept, tab_material, tab_trend = st.tabs(["Departments & Storekeepers", "Materials", "Trends"])

with tab_dept:
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(session.charts["dept_qty"], use_container_width=True)
    with col2:
        st.plotly_chart(session.charts["dept_value"], use_container_width=True)
    st.plotly_chart(session.charts["storekeeper_qty"], use_container_width=True)

with tab_material:
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(session.charts["material_qty"], use_container_width=True)
    with col2:
        st.plotly_chart(session.charts["material_value"], use_container_width=True)
    st.dataframe(session.series["material_value"].to_frame(), use_container_width=True, hide_index=True)

with tab_trend:
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(session.charts["daily_qty"], use_container_width=True)
        st.plotly_chart(session.charts["weekly_qty"], use_container_width=True)
    with col2:
        st.plotly_chart(session.charts["daily_value"], use_container_width=True)
        st.plotly_chart(session.charts["weekly_value"], use_container_width=True)
