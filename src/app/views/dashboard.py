"""Rendering components for the stock dashboard page.

Pure rendering - state changes are delegated to the DashboardController.
"""

from collections.abc import Sequence

import pandas as pd
import plotly.express as px
import polars as pl
import streamlit as st

from src.app.logic.view import resolve_selection, sort_indicator, table_key
from src.app.views.colors import Colors
from src.app.views.formatting import (
    change_color,
    empty_table_message,
    format_change,
    format_price,
)
from src.core.domain_models import PRICE_POINT_SCHEMA, PricePoint, Quote, SortConfig, SortKey

SORT_COLUMNS = {
    SortKey.SYMBOL: "Symbol",
    SortKey.PRICE: "Price",
    SortKey.CHANGE_PERCENT: "Change %",
}

QUOTE_TABLE_KEY = "quote_table"


def render_error_banner(message: str | None) -> None:
    if message:
        st.error(message, icon="⚠️")


def render_controls(search_term: str, loading: bool) -> tuple[str, bool]:
    """Render search box and refresh button.

    Returns:
        Tuple of (search term, refresh clicked)
    """
    col1, col2 = st.columns([5, 1])
    with col1:
        term = st.text_input(
            "Search stocks",
            value=search_term,
            placeholder="Search stocks...",
            label_visibility="collapsed",
        )
    with col2:
        refresh = st.button(
            "🔄 Refresh",
            disabled=loading,
            use_container_width=True,
        )
    return term, refresh


def render_sort_buttons(sort: SortConfig) -> SortKey | None:
    """Render one sort button per sortable column; returns the clicked key."""
    clicked = None
    cols = st.columns(len(SORT_COLUMNS))
    for col, (key, label) in zip(cols, SORT_COLUMNS.items()):
        with col:
            if st.button(f"{label} {sort_indicator(sort, key)}".strip(), key=f"sort_{key.value}"):
                clicked = key
    return clicked


def _color_change(quote: Quote) -> str:
    return f"color: {change_color(quote)}"


def render_quote_table(
    quotes: Sequence[Quote], search_term: str, selected_symbol: str | None
) -> str | None:
    """Render the quote table.

    Args:
        quotes: Projected quotes in display order
        search_term: Current search term, used for the empty-state message
        selected_symbol: Symbol selected before this rerun

    Returns:
        Symbol picked in the table, else `selected_symbol`
    """
    if not quotes:
        st.info(empty_table_message(search_term))
        return selected_symbol

    df_display = pd.DataFrame(
        {
            "Symbol": [q.symbol for q in quotes],
            "Price": [format_price(q) for q in quotes],
            "Change %": [format_change(q) for q in quotes],
            "Last Updated": [q.last_updated for q in quotes],
            "Volume": [None if q.error else q.volume for q in quotes],
            "Note": [q.error_message or "" for q in quotes],
        }
    )
    styler = df_display.style.apply(
        lambda _: [_color_change(q) for q in quotes],
        subset=["Change %"],
    )
    key = table_key(QUOTE_TABLE_KEY, quotes)
    st.dataframe(
        styler,
        column_config={
            "Symbol": st.column_config.TextColumn("Symbol", width="small"),
            "Price": st.column_config.TextColumn("Price", width="small"),
            "Change %": st.column_config.TextColumn("Change %", width="small"),
            "Volume": st.column_config.NumberColumn("Volume", format="%d"),
            "Note": st.column_config.TextColumn("Note", width="medium"),
        },
        selection_mode="single-row",
        key=key,
        on_select="rerun",
        hide_index=True,
        use_container_width=True,
    )
    selected_rows = st.session_state.get(key, {}).get("selection", {}).get("rows", [])
    return resolve_selection(quotes, selected_rows, selected_symbol)


def render_price_chart(series: Sequence[PricePoint], symbol: str | None) -> None:
    """Render closing price history of the selected symbol as line chart."""
    if symbol is None:
        st.info("📈 Select a stock to view its price history")
        return
    if not series:
        st.warning(f"No price data available for {symbol}")
        return

    df_series = pl.DataFrame([p.model_dump() for p in series], schema=PRICE_POINT_SCHEMA)
    fig = px.line(
        df_series,
        x="date",
        y="price",
        title=f"{symbol} - Last {len(series)} Trading Days",
        labels={"date": "Date", "price": "Closing Price ($)"},
        color_discrete_sequence=[Colors.blue],
    )
    fig.update_layout(
        margin=dict(t=40, l=5, r=5, b=0),
        hovermode="x unified",
    )
    st.plotly_chart(fig, use_container_width=True)
