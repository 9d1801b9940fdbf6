"""Parameter Governor — управление кривой дисконта и governance лимитами.

State machine:
- Параметры кривой неизменны между мутациями
- Каждая принятая мутация manager сбрасывает cooldown (last_discount_update = now)
- Мутации admin cooldown не имеют

Порядок проверок set_linear_discount:
1. caller == manager
2. входы неотрицательные целые
3. now - last_discount_update > max_update_interval (строго)
4. intercept <= PRECISION
5. slope <= PRECISION
6. |Δslope| <= max_slope_change (если лимит > 0)
7. |Δintercept| <= max_intercept_change (если лимит > 0)

Любая ошибка поднимается до замены записи в OracleState, поэтому
неуспешный вызов ничего не меняет.
"""

import logging
from typing import Callable, Optional

from src.core.domain.change_records import (
    AnyChangeRecord,
    LimitsUpdated,
    LinearDiscountUpdated,
    ManagerUpdated,
)
from src.core.domain.oracle_state import (
    DiscountParameters,
    GovernanceLimits,
    OracleState,
    Roles,
    is_null_identity,
)
from src.core.math.discount_model import slope_from_apy
from src.core.math.fixed_point import PRECISION, is_non_negative_int
from src.oracle.access_control import AccessControl
from src.oracle.clock import Clock
from src.oracle.errors import (
    InterceptChangeExceedsLimit,
    InvalidManagerIdentity,
    InvalidUpdateInterval,
    NegativeParameter,
    OracleError,
    PrecisionExceeded,
    SlopeChangeExceedsLimit,
    UpdateIntervalNotElapsed,
)

logger = logging.getLogger(__name__)

Emitter = Callable[[AnyChangeRecord], None]


def _require_non_negative(value: object, field: str) -> None:
    if not is_non_negative_int(value):
        raise NegativeParameter(field, value)


class ParameterGovernor:
    """Мутации кривой дисконта (manager) и лимитов/ролей (admin)."""

    def __init__(
        self,
        state: OracleState,
        access: AccessControl,
        clock: Clock,
        emit: Optional[Emitter] = None,
    ):
        self._state = state
        self._access = access
        self._clock = clock
        self._emit = emit or (lambda record: None)

    # -------------------------------------------------------------------------
    # MANAGER
    # -------------------------------------------------------------------------

    def set_linear_discount(
        self, new_slope: int, new_intercept: int, sender: str | None
    ) -> LinearDiscountUpdated:
        """
        Установка slope и intercept.

        Returns:
            LinearDiscountUpdated с old/new значениями

        Raises:
            NotManager, NegativeParameter, UpdateIntervalNotElapsed,
            PrecisionExceeded, SlopeChangeExceedsLimit, InterceptChangeExceedsLimit
        """
        try:
            self._access.require_manager(sender)
            _require_non_negative(new_slope, "slope")
            _require_non_negative(new_intercept, "intercept")
            now = self._check_cooldown()
            if new_intercept > PRECISION:
                raise PrecisionExceeded("intercept", new_intercept, PRECISION)
            if new_slope > PRECISION:
                raise PrecisionExceeded("slope", new_slope, PRECISION)
            self._check_slope_change(new_slope)
            self._check_intercept_change(new_intercept)
        except OracleError as e:
            logger.warning("set_linear_discount rejected: %s (%s)", type(e).__name__, e)
            raise

        return self._apply_discount(new_slope, new_intercept, now)

    def set_slope_from_apy(self, apy: int, sender: str | None) -> LinearDiscountUpdated:
        """
        Установка slope по годовой доходности; intercept сбрасывается в 0.

        slope = apy / (1 + apy) (fixed-point). Проверяются роль, cooldown
        и лимит изменения slope.
        """
        try:
            self._access.require_manager(sender)
            _require_non_negative(apy, "apy")
            now = self._check_cooldown()
            new_slope = slope_from_apy(apy)
            self._check_slope_change(new_slope)
        except OracleError as e:
            logger.warning("set_slope_from_apy rejected: %s (%s)", type(e).__name__, e)
            raise

        return self._apply_discount(new_slope, 0, now)

    # -------------------------------------------------------------------------
    # ADMIN
    # -------------------------------------------------------------------------

    def set_limits(
        self,
        max_update_interval: int,
        max_slope_change: int | None = None,
        max_intercept_change: int | None = None,
        sender: str | None = None,
    ) -> LimitsUpdated:
        """
        Установка cooldown и лимитов изменений.

        Опущенные лимиты изменений сохраняют текущие значения.
        0 означает "без ограничений".
        """
        old = self._state.limits
        if max_slope_change is None:
            max_slope_change = old.max_slope_change
        if max_intercept_change is None:
            max_intercept_change = old.max_intercept_change

        try:
            self._access.require_admin(sender)
            if not is_non_negative_int(max_update_interval) or max_update_interval == 0:
                raise InvalidUpdateInterval()
            _require_non_negative(max_slope_change, "max_slope_change")
            _require_non_negative(max_intercept_change, "max_intercept_change")
        except OracleError as e:
            logger.warning("set_limits rejected: %s (%s)", type(e).__name__, e)
            raise

        self._state.limits = GovernanceLimits(
            max_update_interval=max_update_interval,
            max_slope_change=max_slope_change,
            max_intercept_change=max_intercept_change,
        )
        record = LimitsUpdated(
            timestamp=self._clock.now(),
            old_max_update_interval=old.max_update_interval,
            new_max_update_interval=max_update_interval,
            old_max_slope_change=old.max_slope_change,
            new_max_slope_change=max_slope_change,
            old_max_intercept_change=old.max_intercept_change,
            new_max_intercept_change=max_intercept_change,
        )
        logger.info(
            "Limits updated: interval %d -> %d, slope_change %d -> %d, intercept_change %d -> %d",
            old.max_update_interval,
            max_update_interval,
            old.max_slope_change,
            max_slope_change,
            old.max_intercept_change,
            max_intercept_change,
        )
        self._emit(record)
        return record

    def set_manager(self, new_manager: str, sender: str | None) -> ManagerUpdated:
        """Смена manager; нулевая идентичность отклоняется."""
        try:
            self._access.require_admin(sender)
            if not isinstance(new_manager, str) or is_null_identity(new_manager):
                raise InvalidManagerIdentity()
        except OracleError as e:
            logger.warning("set_manager rejected: %s (%s)", type(e).__name__, e)
            raise

        old_roles = self._state.roles
        self._state.roles = Roles(manager=new_manager, admin=old_roles.admin)
        record = ManagerUpdated(
            timestamp=self._clock.now(),
            old_manager=old_roles.manager,
            new_manager=new_manager,
        )
        logger.info("Manager updated: %s -> %s", old_roles.manager, new_manager)
        self._emit(record)
        return record

    # -------------------------------------------------------------------------
    # INTERNAL
    # -------------------------------------------------------------------------

    def _check_cooldown(self) -> int:
        now = self._clock.now()
        elapsed = now - self._state.discount.last_discount_update
        required = self._state.limits.max_update_interval
        if elapsed <= required:
            raise UpdateIntervalNotElapsed(elapsed=elapsed, required=required)
        return now

    def _check_slope_change(self, new_slope: int) -> None:
        limit = self._state.limits.max_slope_change
        delta = abs(new_slope - self._state.discount.slope)
        if limit > 0 and delta > limit:
            raise SlopeChangeExceedsLimit(delta=delta, limit=limit)

    def _check_intercept_change(self, new_intercept: int) -> None:
        limit = self._state.limits.max_intercept_change
        delta = abs(new_intercept - self._state.discount.intercept)
        if limit > 0 and delta > limit:
            raise InterceptChangeExceedsLimit(delta=delta, limit=limit)

    def _apply_discount(self, new_slope: int, new_intercept: int, now: int) -> LinearDiscountUpdated:
        old = self._state.discount
        self._state.discount = DiscountParameters(
            slope=new_slope,
            intercept=new_intercept,
            last_discount_update=now,
        )
        record = LinearDiscountUpdated(
            timestamp=now,
            old_slope=old.slope,
            new_slope=new_slope,
            old_intercept=old.intercept,
            new_intercept=new_intercept,
        )
        logger.info(
            "Linear discount updated: slope %d -> %d, intercept %d -> %d",
            old.slope,
            new_slope,
            old.intercept,
            new_intercept,
        )
        self._emit(record)
        return record
