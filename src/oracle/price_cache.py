"""
Price Cache — цена PT с мемоизацией на timestamp

- price(): всегда пересчитывает, кэш не трогает
- price_w(): при last_update == now возвращает кэш, иначе пересчитывает и сохраняет
  (пустой кэш, last_update=None, всегда пересчитывается, включая now == 0)
- price_at(ts): котировка на произвольный момент без побочных эффектов

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Не более одного пересчёта на distinct now
2. last_update/last_price меняются только при реальном пересчёте
3. При now >= pt_expiry возвращается цена underlying без дисконта
4. Вызовы никогда не отклоняются
"""

import logging

from src.core.domain.oracle_state import OracleState, PriceCacheEntry
from src.core.math.discount_model import discounted_price
from src.oracle.clock import Clock

logger = logging.getLogger(__name__)


class PriceCache:
    """Обёртка DiscountModel с кэшем цены на один timestamp."""

    def __init__(self, state: OracleState, clock: Clock):
        self._state = state
        self._clock = clock

    def _underlying_price(self) -> int:
        return self._state.instrument.underlying_oracle.price()

    def price_at(self, timestamp: int) -> int:
        """Цена на timestamp по текущей кривой и текущей цене underlying."""
        discount = self._state.discount
        return discounted_price(
            underlying_price=self._underlying_price(),
            slope=discount.slope,
            intercept=discount.intercept,
            now=timestamp,
            pt_expiry=self._state.instrument.pt_expiry,
        )

    def price(self) -> int:
        return self.price_at(self._clock.now())

    def price_w(self) -> int:
        now = self._clock.now()
        cache = self._state.cache

        if not cache.is_empty and cache.last_update == now:
            return cache.last_price

        price = self.price_at(now)
        self._state.cache = PriceCacheEntry(last_price=price, last_update=now)
        logger.debug("PT price recomputed: price=%d ts=%d", price, now)
        return price
