"""PT Oracle — публичный фасад оракула principal token.

Владеет единственным OracleState и передаёт его по ссылке в
AccessControl, PriceCache и ParameterGovernor.

Все публичные вызовы сериализуются одним RLock: каждый вызов
(чтение, расчёт, запись) завершается до того, как следующий увидит состояние.
Конкурентные price_w() на одном timestamp сходятся к одному пересчёту.
"""

import logging
import threading
from collections import deque
from typing import Any, Callable, Deque, Dict, Final, List, Optional

from src.core.contracts.validators import validate_change_record

from src.core.domain.change_records import (
    AnyChangeRecord,
    LimitsUpdated,
    LinearDiscountUpdated,
    ManagerUpdated,
)
from src.core.domain.interfaces import MaturingToken, PriceSource
from src.core.domain.oracle_state import (
    DiscountParameters,
    GovernanceLimits,
    InstrumentConfig,
    OracleState,
    PriceCacheEntry,
    Roles,
)
from src.oracle.access_control import AccessControl
from src.oracle.clock import Clock, SystemClock
from src.oracle.governor import ParameterGovernor
from src.oracle.price_cache import PriceCache

logger = logging.getLogger(__name__)

Listener = Callable[[AnyChangeRecord], None]

# Сколько последних change records хранит оракул (старые вытесняются)
MAX_RETAINED_EVENTS: Final[int] = 1024


class PtOracle:
    """Оракул цены PT с линейным дисконтом до погашения.

    Args:
        pt: дескриптор PT (expiry читается один раз)
        underlying_oracle: источник цены underlying
        slope: начальный slope (за год, fixed-point)
        intercept: начальный intercept (fixed-point)
        max_update_interval: cooldown между мутациями кривой (секунды, > 0)
        manager: идентичность manager
        admin: идентичность admin
        clock: источник времени (default: SystemClock)
        max_events: сколько последних change records хранить в events

    Raises:
        pydantic.ValidationError: если начальные значения вне допустимых диапазонов
    """

    def __init__(
        self,
        pt: MaturingToken,
        underlying_oracle: PriceSource,
        slope: int,
        intercept: int,
        max_update_interval: int,
        manager: str,
        admin: str,
        clock: Optional[Clock] = None,
        max_events: int = MAX_RETAINED_EVENTS,
    ):
        self._clock = clock or SystemClock()
        now = self._clock.now()

        self._state = OracleState(
            instrument=InstrumentConfig(
                pt_expiry=pt.expiry,
                pt=pt,
                underlying_oracle=underlying_oracle,
            ),
            discount=DiscountParameters(
                slope=slope,
                intercept=intercept,
                last_discount_update=now,
            ),
            limits=GovernanceLimits(max_update_interval=max_update_interval),
            roles=Roles(manager=manager, admin=admin),
            cache=PriceCacheEntry(),
        )

        self._lock = threading.RLock()
        self._events: Deque[AnyChangeRecord] = deque(maxlen=max_events)
        self._listeners: List[Listener] = []

        self._access = AccessControl(self._state)
        self._cache = PriceCache(self._state, self._clock)
        self._governor = ParameterGovernor(
            self._state, self._access, self._clock, emit=self._emit
        )

        logger.info(
            "PtOracle created: pt_expiry=%d slope=%d intercept=%d max_update_interval=%d",
            self._state.instrument.pt_expiry,
            slope,
            intercept,
            max_update_interval,
        )

    # =========================================================================
    # PRICE
    # =========================================================================

    def price(self) -> int:
        """Цена PT на текущий момент; кэш не меняется."""
        with self._lock:
            return self._cache.price()

    def price_w(self) -> int:
        """Цена PT с кэшированием на текущий timestamp."""
        with self._lock:
            return self._cache.price_w()

    def price_at(self, timestamp: int) -> int:
        """Котировка на произвольный timestamp по текущим параметрам."""
        with self._lock:
            return self._cache.price_at(timestamp)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def set_linear_discount(
        self, slope: int, intercept: int, *, sender: str
    ) -> LinearDiscountUpdated:
        with self._lock:
            return self._governor.set_linear_discount(slope, intercept, sender)

    def set_slope_from_apy(self, apy: int, *, sender: str) -> LinearDiscountUpdated:
        with self._lock:
            return self._governor.set_slope_from_apy(apy, sender)

    def set_limits(
        self,
        max_update_interval: int,
        max_slope_change: int | None = None,
        max_intercept_change: int | None = None,
        *,
        sender: str,
    ) -> LimitsUpdated:
        with self._lock:
            return self._governor.set_limits(
                max_update_interval,
                max_slope_change,
                max_intercept_change,
                sender=sender,
            )

    def set_manager(self, new_manager: str, *, sender: str) -> ManagerUpdated:
        with self._lock:
            return self._governor.set_manager(new_manager, sender)

    # =========================================================================
    # CHANGE RECORDS
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Подписка на change records; возвращает функцию отписки."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def events(self) -> tuple[AnyChangeRecord, ...]:
        """Последние change records (не более max_events), от старых к новым."""
        with self._lock:
            return tuple(self._events)

    def export_events(self) -> List[Dict[str, Any]]:
        """
        JSON-совместимые change records, проверенные по contracts/schema/change_record.json.

        Raises:
            ValidationError: если запись не соответствует контракту
        """
        with self._lock:
            records = list(self._events)

        exported = []
        for record in records:
            data = record.model_dump(mode="json")
            validate_change_record(data)
            exported.append(data)
        return exported

    def _emit(self, record: AnyChangeRecord) -> None:
        # Мутация уже применена: ошибка подписчика не должна дойти до вызывающего
        self._events.append(record)
        for listener in list(self._listeners):
            try:
                listener(record)
            except Exception:
                logger.exception("Change record listener failed: event=%s", record.event)

    # =========================================================================
    # READS
    # =========================================================================

    @property
    def pt(self) -> MaturingToken:
        return self._state.instrument.pt

    @property
    def underlying_oracle(self) -> PriceSource:
        return self._state.instrument.underlying_oracle

    @property
    def pt_expiry(self) -> int:
        return self._state.instrument.pt_expiry

    @property
    def slope(self) -> int:
        return self._state.discount.slope

    @property
    def intercept(self) -> int:
        return self._state.discount.intercept

    @property
    def last_discount_update(self) -> int:
        return self._state.discount.last_discount_update

    @property
    def max_update_interval(self) -> int:
        return self._state.limits.max_update_interval

    @property
    def max_slope_change(self) -> int:
        return self._state.limits.max_slope_change

    @property
    def max_intercept_change(self) -> int:
        return self._state.limits.max_intercept_change

    @property
    def manager(self) -> str:
        return self._state.roles.manager

    @property
    def admin(self) -> str:
        return self._state.roles.admin

    @property
    def last_price(self) -> int:
        return self._state.cache.last_price

    @property
    def last_update(self) -> int:
        """Timestamp последнего price_w(); 0 до первого пересчёта."""
        last_update = self._state.cache.last_update
        return 0 if last_update is None else last_update
