"""Stock Dashboard - Main Entry Point.

Streamlit page hosting the quote table and the price chart.
Run with: streamlit run src/app/main.py
"""

import asyncio

import streamlit as st
from loguru import logger

from src.app.logic.dashboard import DashboardController
from src.app.views.dashboard import (
    render_controls,
    render_error_banner,
    render_price_chart,
    render_quote_table,
    render_sort_buttons,
)
from src.config.settings import load_config
from src.etl.extract import AlphaVantageClient

st.set_page_config(
    page_title="Stock Dashboard",
    page_icon="📈",
    layout="wide",
)

CONTROLLER_KEY = "dashboard_controller"


def get_controller() -> DashboardController:
    """Session-scoped controller, created and loaded once per session."""
    if CONTROLLER_KEY not in st.session_state:
        config = load_config()
        controller = DashboardController(AlphaVantageClient(config.settings), config.symbols)
        with st.spinner("Loading quotes..."):
            asyncio.run(controller.refresh_quotes())
        st.session_state[CONTROLLER_KEY] = controller
    return st.session_state[CONTROLLER_KEY]


st.title("📈 Stock Dashboard")

controller = get_controller()

search_term, refresh = render_controls(controller.view.search_term, controller.quotes_loading)
controller.set_search_term(search_term)

if refresh:
    logger.info("Manual refresh requested")
    with st.spinner("Loading quotes..."):
        asyncio.run(controller.refresh_quotes())

render_error_banner(controller.quotes_error)

col1, col2 = st.columns([3, 2])
with col1:
    clicked_key = render_sort_buttons(controller.view.sort)
    if clicked_key is not None:
        controller.request_sort(clicked_key)
        st.rerun()

    selected_symbol = render_quote_table(
        controller.visible_quotes(),
        controller.view.search_term,
        controller.view.selected_symbol,
    )

with col2:
    if selected_symbol and selected_symbol != controller.view.selected_symbol:
        with st.spinner(f"Loading {selected_symbol} price history..."):
            asyncio.run(controller.select_symbol(selected_symbol))
    render_price_chart(controller.series, controller.view.selected_symbol)
