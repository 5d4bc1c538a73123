"""
Ticker command responder - price lookups against the price data source.
"""

import logging
import re
from typing import Callable

from command.base import SYMBOL_GRAMMAR, CommandPattern, ResponderConfig, TextResponse
from command.chunking import split_into_parts
from command.router import CommandParser
from pricing.types import PriceDataSource, PriceDataUnavailable

logger = logging.getLogger(__name__)

Handler = Callable[[str, Callable[[TextResponse], None]], None]


class TickerResponder:
    """Answer price queries: average price, price, all symbols, all prices."""

    def __init__(self, price_source: PriceDataSource, config: ResponderConfig | None = None):
        self.price_source = price_source
        self.config = config or ResponderConfig()

        prefix = re.escape(self.config.command_prefix)
        p = self.config.command_prefix
        # Single table drives both matches() and compute()
        self._commands: tuple[tuple[CommandPattern, Handler], ...] = (
            (CommandPattern("avgPrice", re.compile(rf"{prefix}avgPrice {SYMBOL_GRAMMAR}"),
                            f"{p}avgPrice <SYMBOL>"), self._average_price),
            (CommandPattern("price", re.compile(rf"{prefix}price {SYMBOL_GRAMMAR}"),
                            f"{p}price <SYMBOL>"), self._price),
            (CommandPattern("allTokens", re.compile(rf"{prefix}allTokens"),
                            f"{p}allTokens"), self._all_tokens),
            (CommandPattern("allPrices", re.compile(rf"{prefix}allPrices"),
                            f"{p}allPrices"), self._all_prices),
        )

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def patterns(self) -> tuple[CommandPattern, ...]:
        return tuple(pattern for pattern, _ in self._commands)

    def matches(self, message: str) -> bool:
        return self._handler_for(message) is not None

    def compute(self, message: str, sink: Callable[[TextResponse], None]) -> None:
        """Deliver the reply fragments for a ticker command."""
        handler = self._handler_for(message)
        if handler is None:
            sink(TextResponse(f"couldn't compute message {message}"))
            return

        try:
            handler(message, sink)
        except PriceDataUnavailable as e:
            logger.warning(f"Price data unavailable for '{message}': {e}")
            sink(TextResponse(f"price data unavailable: {e}"))
        except Exception as e:
            logger.error(f"Error computing ticker command '{message}': {e}", exc_info=True)
            sink(TextResponse(f"error computing {message}: {e}"))

    def help(self) -> str:
        lines = [f"Available commands for {self.name}"]
        lines.extend(f"    {pattern}" for pattern in self.patterns)
        return "\n".join(lines)

    def _handler_for(self, message: str) -> Handler | None:
        for pattern, handler in self._commands:
            if pattern.matches(message):
                return handler
        return None

    def _average_price(self, message: str, sink: Callable[[TextResponse], None]) -> None:
        symbol = CommandParser.argument(message)
        if symbol is None:
            sink(TextResponse(f"missing symbol parameter: {self.config.command_prefix}avgPrice <SYMBOL>"))
            return
        sink(TextResponse(str(self.price_source.get_average_price(symbol))))

    def _price(self, message: str, sink: Callable[[TextResponse], None]) -> None:
        symbol = CommandParser.argument(message)
        if symbol is None:
            sink(TextResponse(f"missing symbol parameter: {self.config.command_prefix}price <SYMBOL>"))
            return
        sink(TextResponse(str(self.price_source.get_price(symbol))))

    def _all_tokens(self, message: str, sink: Callable[[TextResponse], None]) -> None:
        joined = ", ".join(self.price_source.get_all_tokens())
        self._deliver_in_parts(joined, sink)

    def _all_prices(self, message: str, sink: Callable[[TextResponse], None]) -> None:
        joined = "".join(
            f"[{ticker.symbol}:{ticker.price}]" for ticker in self.price_source.get_all_prices()
        )
        self._deliver_in_parts(joined, sink)

    def _deliver_in_parts(self, text: str, sink: Callable[[TextResponse], None]) -> None:
        parts = split_into_parts(text, self.config.max_fragment_length)
        logger.debug(f"Delivering {len(text)} chars in {len(parts)} parts")
        for part in parts:
            sink(TextResponse(part))
