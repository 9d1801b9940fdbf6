"""Общие fixtures и тестовые дублёры коллабораторов оракула."""

import pytest

from src.core.math.fixed_point import PRECISION, SECONDS_PER_DAY
from src.oracle import ManualClock, PtOracle

T0 = 1_700_000_000
MANAGER = "0x00000000000000000000000000000000000000aa"
ADMIN = "0x00000000000000000000000000000000000000bb"
OUTSIDER = "0x00000000000000000000000000000000000000cc"


class StaticPriceSource:
    """Источник цены underlying с ручной установкой цены."""

    def __init__(self, price: int = PRECISION):
        self.stored_price = price
        self.calls = 0

    def price(self) -> int:
        self.calls += 1
        return self.stored_price

    def set_price(self, price: int) -> None:
        self.stored_price = price


class FixedExpiryToken:
    """Дескриптор PT с неизменяемым expiry."""

    def __init__(self, expiry: int):
        self._expiry = expiry

    @property
    def expiry(self) -> int:
        return self._expiry


@pytest.fixture
def clock():
    return ManualClock(start=T0)


@pytest.fixture
def price_source():
    return StaticPriceSource()


@pytest.fixture
def pt_token():
    """PT с погашением через 30 дней."""
    return FixedExpiryToken(T0 + 30 * SECONDS_PER_DAY)


@pytest.fixture
def oracle(clock, price_source, pt_token):
    """Оракул: slope 5% в год, intercept 0, cooldown 24 часа."""
    return PtOracle(
        pt=pt_token,
        underlying_oracle=price_source,
        slope=5 * 10**16,
        intercept=0,
        max_update_interval=86400,
        manager=MANAGER,
        admin=ADMIN,
        clock=clock,
    )


@pytest.fixture
def make_oracle(clock):
    """Фабрика оракулов с произвольным expiry и параметрами."""

    def _make(
        expiry_in: int,
        slope: int,
        intercept: int = 0,
        underlying: int = PRECISION,
        max_update_interval: int = 86400,
    ) -> PtOracle:
        return PtOracle(
            pt=FixedExpiryToken(clock.now() + expiry_in),
            underlying_oracle=StaticPriceSource(underlying),
            slope=slope,
            intercept=intercept,
            max_update_interval=max_update_interval,
            manager=MANAGER,
            admin=ADMIN,
            clock=clock,
        )

    return _make
