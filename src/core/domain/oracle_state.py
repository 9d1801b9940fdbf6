"""
OracleState — Модели состояния PT оракула

Immutable Pydantic записи (frozen=True), из которых состоит состояние:
- InstrumentConfig: параметры инструмента, фиксируются при создании
- DiscountParameters: кривая дисконта (slope, intercept) + время последнего изменения
- GovernanceLimits: cooldown и лимиты изменений
- Roles: manager / admin
- PriceCacheEntry: кэш цены на один timestamp

OracleState — единственный изменяемый контейнер. Каждая мутация заменяет
запись целиком, поэтому неуспешный вызов не оставляет частичных изменений.
Полная совместимость с JSON Schema (contracts/schema/oracle_deployment.json)
для конфигурационных полей.
"""

from dataclasses import dataclass
from typing import Any, Final, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.math.fixed_point import PRECISION

# Нулевая идентичность (аналог zero address)
ZERO_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"


def is_null_identity(identity: str | None) -> bool:
    """True для None, пустой строки или zero address."""
    if identity is None:
        return True
    stripped = identity.strip()
    return stripped == "" or stripped.lower() == ZERO_ADDRESS


# =============================================================================
# INSTRUMENT
# =============================================================================


class InstrumentConfig(BaseModel):
    """
    Неизменяемая конфигурация инструмента.

    pt_expiry читается из pt.expiry один раз при создании оракула.
    """

    pt_expiry: int = Field(..., ge=0, description="Timestamp погашения PT (Unix seconds)")
    pt: Any = Field(..., description="Дескриптор PT (MaturingToken)")
    underlying_oracle: Any = Field(..., description="Источник цены underlying (PriceSource)")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("underlying_oracle")
    @classmethod
    def _check_price_source(cls, value: Any) -> Any:
        if not callable(getattr(value, "price", None)):
            raise ValueError("underlying_oracle must expose price()")
        return value

    @field_validator("pt")
    @classmethod
    def _check_token(cls, value: Any) -> Any:
        # Проверка через тип: property expiry не вычисляется повторно
        if not (hasattr(type(value), "expiry") or hasattr(value, "expiry")):
            raise ValueError("pt must expose expiry")
        return value


# =============================================================================
# DISCOUNT CURVE
# =============================================================================


class DiscountParameters(BaseModel):
    """
    Параметры линейной кривой дисконта.

    slope — ставка за год до погашения, intercept — абсолютный сдвиг.
    Оба в масштабе PRECISION (10**18 = 100%).
    """

    slope: int = Field(..., ge=0, le=PRECISION, description="Slope (за год, fixed-point)")
    intercept: int = Field(..., ge=0, le=PRECISION, description="Intercept (fixed-point)")
    last_discount_update: int = Field(
        ..., ge=0, description="Timestamp последней принятой мутации"
    )

    model_config = {"frozen": True}


class GovernanceLimits(BaseModel):
    """
    Лимиты governance.

    0 для max_slope_change / max_intercept_change означает "без ограничений".
    """

    max_update_interval: int = Field(
        ..., gt=0, description="Минимальный интервал между мутациями кривой (секунды)"
    )
    max_slope_change: int = Field(
        default=0, ge=0, description="Максимальное |Δslope| за мутацию (0 = без лимита)"
    )
    max_intercept_change: int = Field(
        default=0, ge=0, description="Максимальное |Δintercept| за мутацию (0 = без лимита)"
    )

    model_config = {"frozen": True}


# =============================================================================
# ROLES
# =============================================================================


class Roles(BaseModel):
    """Две привилегированные роли: manager настраивает кривую, admin — лимиты и manager."""

    manager: str = Field(..., description="Идентичность manager")
    admin: str = Field(..., description="Идентичность admin")

    model_config = {"frozen": True}

    @field_validator("manager", "admin")
    @classmethod
    def _reject_null_identity(cls, value: str) -> str:
        if is_null_identity(value):
            raise ValueError("role identity must not be null")
        return value


# =============================================================================
# PRICE CACHE
# =============================================================================


class PriceCacheEntry(BaseModel):
    """
    Кэшированная цена.

    last_update=None до первого price_w(): timestamp 0 валиден и не
    должен совпадать с пустым кэшем.
    """

    last_price: int = Field(default=0, ge=0, description="Последняя вычисленная цена")
    last_update: Optional[int] = Field(
        default=None, ge=0, description="Timestamp последнего вычисления (None = не вычислялась)"
    )

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return self.last_update is None


# =============================================================================
# MUTABLE STATE HOLDER
# =============================================================================


@dataclass
class OracleState:
    """
    Единственный изменяемый контейнер состояния оракула.

    Передаётся по ссылке в PriceCache и ParameterGovernor.
    Поля заменяются целиком, записи внутри неизменяемы.
    """

    instrument: InstrumentConfig
    discount: DiscountParameters
    limits: GovernanceLimits
    roles: Roles
    cache: PriceCacheEntry
