"""
Binance public REST API client used as the price data source.
Provides blocking queries with timeout and exponential backoff retry.
"""

import logging
import time
from typing import Any

import requests

from pricing.types import PriceDataUnavailable, PriceSourceConfig, TickerPrice

logger = logging.getLogger(__name__)

TICKER_PRICE_PATH = "/api/v3/ticker/price"
AVG_PRICE_PATH = "/api/v3/avgPrice"
EXCHANGE_INFO_PATH = "/api/v3/exchangeInfo"


class BinanceApiWrapper:
    """Price data source backed by the Binance spot market API."""

    def __init__(self, config: PriceSourceConfig | None = None, session: requests.Session | None = None):
        """
        Initialize the wrapper.

        Args:
            config: PriceSourceConfig instance, defaults are used when omitted
            session: Optional requests session (shared connection pool)
        """
        self.config = config or PriceSourceConfig()
        self.session = session or requests.Session()
        logger.info(f"BinanceApiWrapper initialized with base URL: {self.config.base_url}")

    def get_price(self, symbol: str) -> TickerPrice:
        data = self._get(TICKER_PRICE_PATH, {"symbol": symbol})
        return self._ticker_price(data)

    def get_average_price(self, symbol: str) -> str:
        data = self._get(AVG_PRICE_PATH, {"symbol": symbol})
        try:
            return str(data["price"])
        except (KeyError, TypeError) as e:
            raise PriceDataUnavailable(f"malformed average price for {symbol}") from e

    def get_all_tokens(self) -> list[str]:
        """Return every symbol listed on the exchange, in exchange order."""
        data = self._get(EXCHANGE_INFO_PATH)
        try:
            return [entry["symbol"] for entry in data["symbols"]]
        except (KeyError, TypeError) as e:
            raise PriceDataUnavailable("malformed exchange info") from e

    def get_all_prices(self) -> list[TickerPrice]:
        data = self._get(TICKER_PRICE_PATH)
        if not isinstance(data, list):
            raise PriceDataUnavailable("malformed price list")
        return [self._ticker_price(entry) for entry in data]

    @staticmethod
    def _ticker_price(data: Any) -> TickerPrice:
        try:
            return TickerPrice(symbol=str(data["symbol"]), price=str(data["price"]))
        except (KeyError, TypeError) as e:
            raise PriceDataUnavailable("malformed ticker price") from e

    def _get(self, path: str, params: dict[str, str] | None = None, attempt: int = 1) -> Any:
        """
        GET a JSON document with exponential backoff retry logic.

        Args:
            path: API path below the base URL
            params: Query parameters
            attempt: Current attempt number

        Returns:
            Decoded JSON body

        Raises:
            PriceDataUnavailable: On HTTP errors, malformed JSON, or when
                retries are exhausted
        """
        url = f"{self.config.base_url.rstrip('/')}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
            response.raise_for_status()
            return response.json()

        except (requests.ConnectionError, requests.Timeout) as e:
            if attempt < self.config.retry_attempts:
                # Exponential backoff
                wait_time = self.config.retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retry attempt {attempt}/{self.config.retry_attempts} for {path}, waiting {wait_time}s")
                time.sleep(wait_time)
                return self._get(path, params, attempt + 1)
            logger.error(f"Max retries exceeded for {path}: {e}")
            raise PriceDataUnavailable(f"price service unreachable: {e}") from e

        except requests.HTTPError as e:
            logger.error(f"HTTP error from {path}: {e}")
            raise PriceDataUnavailable(f"price service error: {e}") from e

        except requests.exceptions.JSONDecodeError as e:
            logger.error(f"Invalid JSON from {path}: {e}")
            raise PriceDataUnavailable("price service returned invalid JSON") from e

        except requests.RequestException as e:
            logger.error(f"Request to {path} failed: {e}")
            raise PriceDataUnavailable(f"price service request failed: {e}") from e
