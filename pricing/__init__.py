"""
Price data source for the ticker commands.
Provides the source interface, its data types, and a Binance client.
"""

from pricing.types import (
    PriceDataSource,
    PriceDataUnavailable,
    PriceSourceConfig,
    TickerPrice
)
from pricing.binance import BinanceApiWrapper

__all__ = [
    'BinanceApiWrapper',
    'PriceDataSource',
    'PriceDataUnavailable',
    'PriceSourceConfig',
    'TickerPrice'
]
