import pytest

from pricing.types import PriceDataUnavailable, TickerPrice


class StubPriceSource:
    """In-memory price data source for tests."""

    def __init__(self, prices=None, average_prices=None, tokens=None, fail=False):
        self.prices = prices or {}
        self.average_prices = average_prices or {}
        self.tokens = tokens if tokens is not None else list(self.prices)
        self.fail = fail
        self.calls = []

    def _check(self, call):
        self.calls.append(call)
        if self.fail:
            raise PriceDataUnavailable("service down")

    def get_price(self, symbol):
        self._check(("get_price", symbol))
        return TickerPrice(symbol, self.prices[symbol])

    def get_average_price(self, symbol):
        self._check(("get_average_price", symbol))
        return self.average_prices[symbol]

    def get_all_tokens(self):
        self._check(("get_all_tokens",))
        return list(self.tokens)

    def get_all_prices(self):
        self._check(("get_all_prices",))
        return [TickerPrice(symbol, price) for symbol, price in self.prices.items()]


@pytest.fixture
def price_source():
    return StubPriceSource(
        prices={"BTC": "123.45", "ETHUSDT": "2500.10"},
        average_prices={"BTC": "120.00"},
    )


@pytest.fixture
def failing_source():
    return StubPriceSource(fail=True)
