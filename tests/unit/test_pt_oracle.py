"""Тесты для PtOracle (фасад).

Coverage:
- Создание и начальные значения
- Валидация начальных параметров
- Сериализация вызовов (thread safety price_w)
- Clock абстракция
"""

import threading
import time

import pydantic
import pytest

from src.core.math.fixed_point import PRECISION, SECONDS_PER_DAY
from src.oracle import ManualClock, PtOracle, SystemClock

from tests.unit.conftest import ADMIN, MANAGER, T0, FixedExpiryToken, StaticPriceSource


class TestDeployment:
    def test_initial_values(self, oracle, pt_token, price_source):
        assert oracle.manager == MANAGER
        assert oracle.admin == ADMIN
        assert oracle.pt is pt_token
        assert oracle.underlying_oracle is price_source
        assert oracle.slope == 5 * 10**16
        assert oracle.intercept == 0
        assert oracle.max_update_interval == 86400
        assert oracle.max_slope_change == 0
        assert oracle.max_intercept_change == 0
        assert oracle.last_discount_update == T0
        assert oracle.last_price == 0
        assert oracle.last_update == 0
        assert oracle.events == ()

    def test_pt_expiry_cached_once(self, clock, price_source):
        class CountingToken:
            reads = 0

            @property
            def expiry(self):
                CountingToken.reads += 1
                return T0 + SECONDS_PER_DAY

        token = CountingToken()
        oracle = PtOracle(token, price_source, 0, 0, 1, MANAGER, ADMIN, clock=clock)
        oracle.price()
        oracle.price_w()

        assert oracle.pt_expiry == T0 + SECONDS_PER_DAY
        assert CountingToken.reads == 1

    def test_full_intercept_allowed(self, clock, price_source, pt_token):
        oracle = PtOracle(pt_token, price_source, 0, PRECISION, 86400, MANAGER, ADMIN, clock=clock)
        assert oracle.price() == 0

    @pytest.mark.parametrize(
        "slope, intercept, interval",
        [(PRECISION + 1, 0, 1), (0, PRECISION + 1, 1), (0, 0, 0), (-1, 0, 1)],
    )
    def test_invalid_initial_values(self, clock, price_source, pt_token, slope, intercept, interval):
        with pytest.raises(pydantic.ValidationError):
            PtOracle(pt_token, price_source, slope, intercept, interval, MANAGER, ADMIN, clock=clock)

    def test_null_roles_rejected(self, clock, price_source, pt_token):
        with pytest.raises(pydantic.ValidationError):
            PtOracle(pt_token, price_source, 0, 0, 1, "", ADMIN, clock=clock)

    def test_state_not_exposed(self, oracle):
        assert not hasattr(oracle, "state")

    def test_cache_updates_visible_through_reads(self, oracle, clock):
        price = oracle.price_w()
        assert oracle.last_update == clock.now()
        assert oracle.last_price == price


class TestConcurrency:
    def test_price_w_single_recompute_per_timestamp(self, clock):
        """Конкурентные price_w на одном timestamp → один пересчёт."""

        class SlowPriceSource(StaticPriceSource):
            def price(self) -> int:
                time.sleep(0.01)
                return super().price()

        source = SlowPriceSource()
        oracle = PtOracle(
            FixedExpiryToken(T0 + 30 * SECONDS_PER_DAY), source, 5 * 10**16, 0, 86400,
            MANAGER, ADMIN, clock=clock,
        )

        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(oracle.price_w())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(results)) == 1
        assert source.calls == 1

    def test_concurrent_mutations_single_winner(self, oracle, clock):
        """Только одна из конкурентных мутаций проходит cooldown."""
        clock.advance(86401)
        outcomes = []
        barrier = threading.Barrier(4)

        def worker(slope):
            barrier.wait()
            try:
                oracle.set_linear_discount(slope, 0, sender=MANAGER)
                outcomes.append("ok")
            except Exception as e:
                outcomes.append(type(e).__name__)

        threads = [threading.Thread(target=worker, args=(10**16 * (i + 1),)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("UpdateIntervalNotElapsed") == 3
        assert len(oracle.events) == 1


class TestClock:
    def test_manual_clock(self):
        clock = ManualClock(start=100)
        assert clock.now() == 100
        assert clock.advance(5) == 105
        clock.set(200)
        assert clock.now() == 200

    def test_manual_clock_rejects_negative(self):
        with pytest.raises(ValueError):
            ManualClock(start=0).set(-1)

    def test_system_clock_is_integer_seconds(self):
        now = SystemClock().now()
        assert isinstance(now, int)
        assert abs(now - time.time()) < 5

    def test_default_clock_is_system(self, price_source):
        token = FixedExpiryToken(int(time.time()) + SECONDS_PER_DAY)
        oracle = PtOracle(token, price_source, 0, 0, 1, MANAGER, ADMIN)
        assert oracle.price() == PRECISION
