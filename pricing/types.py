"""
Data types and the price data source interface.
"""

import os
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

DEFAULT_BASE_URL = "https://api.binance.com"


class PriceDataUnavailable(Exception):
    """Raised when the price data source cannot answer a query."""


@dataclass(frozen=True)
class TickerPrice:
    """Latest price of a single symbol."""

    symbol: str
    price: str

    def __str__(self) -> str:
        return self.price


@dataclass
class PriceSourceConfig:
    """Configuration for the Binance price source."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    retry_attempts: int = 3
    retry_delay: float = 1.0

    @classmethod
    def from_env(cls) -> "PriceSourceConfig":
        return cls(
            base_url=os.getenv("BINANCE_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.getenv("BINANCE_TIMEOUT", 10.0)),
            retry_attempts=int(os.getenv("BINANCE_RETRY_ATTEMPTS", 3)),
            retry_delay=float(os.getenv("BINANCE_RETRY_DELAY", 1.0)),
        )


@runtime_checkable
class PriceDataSource(Protocol):
    """Synchronous symbol price queries. Failures raise PriceDataUnavailable."""

    def get_price(self, symbol: str) -> TickerPrice: ...

    def get_average_price(self, symbol: str) -> str: ...

    def get_all_tokens(self) -> list[str]: ...

    def get_all_prices(self) -> list[TickerPrice]: ...
