"""Display formatting for quote table cells.

Pure functions, kept apart from the Streamlit widgets so they stay testable.
"""

from src.app.views.colors import Colors
from src.core.domain_models import Quote

API_LIMIT_LABEL = "API Limit"
NO_MATCH_MESSAGE = "No matching stocks found"
NO_STOCKS_MESSAGE = "No stocks available"


def format_price(quote: Quote) -> str:
    if quote.error:
        return "N/A"
    return f"${quote.price:,.2f}"


def format_change(quote: Quote) -> str:
    """Signed percent change, or the API limit label for errored quotes."""
    if quote.error:
        return API_LIMIT_LABEL
    return f"{quote.change_percent:+.2f}%"


def change_color(quote: Quote) -> str:
    if quote.error or not quote.is_gain:
        return Colors.red
    return Colors.green


def empty_table_message(search_term: str) -> str:
    return NO_MATCH_MESSAGE if search_term else NO_STOCKS_MESSAGE
