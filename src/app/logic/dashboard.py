"""Dashboard state controller.

Owns the current quote batch, the selected symbol's series and the view
state. Every state transition of the page goes through this class.
"""

from loguru import logger

from src.app.logic.view import project, request_sort
from src.core.domain_models import PricePoint, Quote, SortKey, ViewState
from src.etl.extract import AlphaVantageClient, FetchError

QUOTES_ERROR_MESSAGE = "Failed to fetch stock data. Please try again later."


class DashboardController:
    """Session-scoped controller for the quote table and the price chart.

    Each fetch is tagged with a sequence number. A response that arrives
    after a newer request of the same kind was issued is discarded, so a slow
    stale response never overwrites fresher data.
    """

    def __init__(self, client: AlphaVantageClient, symbols: list[str]) -> None:
        self.client = client
        self.symbols = list(symbols)
        self.view = ViewState()

        self.quotes: list[Quote] = []
        self.quotes_error: str | None = None
        self.quotes_loading = False

        self.series: list[PricePoint] = []
        self.series_loading = False

        self._quotes_seq = 0
        self._series_seq = 0

    async def refresh_quotes(self) -> bool:
        """Fetch a new batch and replace the current one as a whole.

        Returns:
            True if the result was applied, False if it was superseded
        """
        self._quotes_seq += 1
        seq = self._quotes_seq
        self.quotes_loading = True
        self.quotes_error = None

        try:
            quotes = await self.client.fetch_quotes(self.symbols)
        except FetchError as e:
            if seq != self._quotes_seq:
                return False
            logger.error(f"Error fetching stock data: {e}")
            self.quotes_error = QUOTES_ERROR_MESSAGE
            self.quotes_loading = False
            return True

        if seq != self._quotes_seq:
            logger.debug(f"Discarding stale quote batch #{seq}")
            return False

        self.quotes = quotes
        self.quotes_loading = False
        return True

    async def select_symbol(self, symbol: str) -> bool:
        """Select a symbol and load its series, discarding the previous one.

        Returns:
            True if the fetched series was applied, False if it was superseded
        """
        self._series_seq += 1
        seq = self._series_seq
        self.view.selected_symbol = symbol
        self.series = []
        self.series_loading = True

        series = await self.client.fetch_time_series(symbol)

        if seq != self._series_seq:
            logger.debug(f"[{symbol}] Discarding stale series response #{seq}")
            return False

        self.series = series
        self.series_loading = False
        return True

    def set_search_term(self, search_term: str) -> None:
        self.view.search_term = search_term

    def request_sort(self, key: SortKey) -> None:
        self.view.sort = request_sort(self.view.sort, key)

    def visible_quotes(self) -> list[Quote]:
        return project(self.quotes, self.view.search_term, self.view.sort)
