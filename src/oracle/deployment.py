"""
Deployment — параметры развёртывания и сборка PtOracle

Конфигурация:
- JSON файл проверяется контрактом contracts/schema/oracle_deployment.json
- затем строится frozen Pydantic модель OracleDeployment

Пример:
    {
        "slope": 50000000000000000,
        "intercept": 0,
        "max_update_interval": 86400,
        "max_slope_change": 20000000000000000,
        "manager": "0x...01",
        "admin": "0x...02"
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.contracts.validators import validate_oracle_deployment
from src.core.domain.interfaces import MaturingToken, PriceSource
from src.core.domain.oracle_state import is_null_identity
from src.core.math.fixed_point import PRECISION
from src.oracle.clock import Clock
from src.oracle.pt_oracle import PtOracle

logger = logging.getLogger(__name__)

# Значения по умолчанию для примерного развёртывания
DEFAULT_MAX_UPDATE_INTERVAL = 86400  # 24 часа


class OracleDeployment(BaseModel):
    """Параметры развёртывания оракула (fixed-point, масштаб PRECISION)."""

    slope: int = Field(..., ge=0, le=PRECISION, description="Начальный slope (за год)")
    intercept: int = Field(..., ge=0, le=PRECISION, description="Начальный intercept")
    max_update_interval: int = Field(
        default=DEFAULT_MAX_UPDATE_INTERVAL, gt=0, description="Cooldown (секунды)"
    )
    max_slope_change: int = Field(default=0, ge=0, description="Лимит |Δslope|, 0 = без лимита")
    max_intercept_change: int = Field(
        default=0, ge=0, description="Лимит |Δintercept|, 0 = без лимита"
    )
    manager: str = Field(..., description="Идентичность manager")
    admin: str = Field(..., description="Идентичность admin")

    model_config = {"frozen": True}

    @field_validator("manager", "admin")
    @classmethod
    def _reject_null_identity(cls, value: str) -> str:
        if is_null_identity(value):
            raise ValueError("role identity must not be null")
        return value


def parse_deployment(data: Dict[str, Any]) -> OracleDeployment:
    """
    Валидация dict против JSON Schema и построение OracleDeployment.

    Raises:
        jsonschema.ValidationError: если данные не соответствуют контракту
        pydantic.ValidationError: если нарушены ограничения модели
    """
    validate_oracle_deployment(data)
    return OracleDeployment(**data)


def load_deployment(path: str | Path) -> OracleDeployment:
    """Чтение параметров развёртывания из JSON файла."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    config = parse_deployment(data)
    logger.info("Loaded oracle deployment from %s", path)
    return config


def deploy(
    config: OracleDeployment,
    pt: MaturingToken,
    underlying_oracle: PriceSource,
    clock: Optional[Clock] = None,
) -> PtOracle:
    """
    Создание PtOracle по конфигурации.

    Ненулевые лимиты изменений применяются от имени admin сразу после создания
    (set_limits не имеет cooldown).
    """
    oracle = PtOracle(
        pt=pt,
        underlying_oracle=underlying_oracle,
        slope=config.slope,
        intercept=config.intercept,
        max_update_interval=config.max_update_interval,
        manager=config.manager,
        admin=config.admin,
        clock=clock,
    )

    if config.max_slope_change or config.max_intercept_change:
        oracle.set_limits(
            config.max_update_interval,
            config.max_slope_change,
            config.max_intercept_change,
            sender=config.admin,
        )

    logger.info(
        "PtOracle deployed: pt_expiry=%d price=%d", oracle.pt_expiry, oracle.price()
    )
    return oracle
