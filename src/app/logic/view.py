"""Quote table projection.

Pure Python/Polars - no Streamlit UI calls, no I/O.
"""

from collections.abc import Sequence

import polars as pl

from src.core.domain_models import QUOTE_SCHEMA, Quote, SortConfig, SortDirection, SortKey

ROW_INDEX = "row_index"


def to_frame(quotes: Sequence[Quote]) -> pl.DataFrame:
    """Tabular view of a quote batch in `QUOTE_SCHEMA`."""
    return pl.DataFrame([q.model_dump() for q in quotes], schema=QUOTE_SCHEMA)


def project(quotes: Sequence[Quote], search_term: str, sort: SortConfig) -> list[Quote]:
    """Quotes to display for the current search term and sort configuration.

    Sorting is stable, so equal keys keep their input order. The search is a
    case-insensitive substring match on the symbol; an empty term selects all.
    The input sequence is never modified.
    """
    df = to_frame(quotes).with_row_index(ROW_INDEX)

    if sort.key is not None:
        df = df.sort(
            sort.key.value,
            descending=sort.direction == SortDirection.DESCENDING,
            maintain_order=True,
        )

    if search_term:
        df = df.filter(
            pl.col("symbol").str.to_lowercase().str.contains(search_term.lower(), literal=True)
        )

    return [quotes[i] for i in df.get_column(ROW_INDEX).to_list()]


def request_sort(sort: SortConfig, key: SortKey) -> SortConfig:
    """Toggle direction for the active key, otherwise sort ascending by the new key."""
    if sort.key == key and sort.direction == SortDirection.ASCENDING:
        return SortConfig(key=key, direction=SortDirection.DESCENDING)
    return SortConfig(key=key, direction=SortDirection.ASCENDING)


def sort_indicator(sort: SortConfig, key: SortKey) -> str:
    if sort.key != key:
        return ""
    return "↑" if sort.direction == SortDirection.ASCENDING else "↓"


def table_key(prefix: str, quotes: Sequence[Quote]) -> str:
    """Widget key tied to the visible row order.

    Streamlit stores table selections as row positions, so the key changes
    whenever sorting or filtering reorders the rows and stale positions are dropped.
    """
    return f"{prefix}:{'|'.join(q.symbol for q in quotes)}"


def resolve_selection(
    quotes: Sequence[Quote], selected_rows: Sequence[int], current: str | None
) -> str | None:
    """Symbol picked in the table, or the current selection if no row is picked."""
    if selected_rows and 0 <= selected_rows[0] < len(quotes):
        return quotes[selected_rows[0]].symbol
    return current
