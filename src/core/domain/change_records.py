"""
Change Records — события принятых мутаций оракула

Каждая принятая мутация публикует запись со старым и новым значением
каждого затронутого поля. Отклонённые вызовы записей не создают.

Сериализация model_dump(mode="json") совместима с
contracts/schema/change_record.json.
"""

from typing import Literal, Union

from pydantic import BaseModel, Field


class ChangeRecord(BaseModel):
    """Базовая запись: имя события и timestamp мутации."""

    event: str = Field(..., description="Имя события")
    timestamp: int = Field(..., ge=0, description="Timestamp мутации (Unix seconds)")

    model_config = {"frozen": True}

    def changes(self) -> dict[str, tuple[object, object]]:
        """Словарь field -> (old, new) по парам old_*/new_*."""
        data = self.model_dump()
        result: dict[str, tuple[object, object]] = {}
        for key, value in data.items():
            if key.startswith("old_"):
                name = key[len("old_"):]
                result[name] = (value, data[f"new_{name}"])
        return result


class LinearDiscountUpdated(ChangeRecord):
    """Изменение кривой дисконта (set_linear_discount / set_slope_from_apy)."""

    event: Literal["LinearDiscountUpdated"] = "LinearDiscountUpdated"
    old_slope: int = Field(..., ge=0)
    new_slope: int = Field(..., ge=0)
    old_intercept: int = Field(..., ge=0)
    new_intercept: int = Field(..., ge=0)


class LimitsUpdated(ChangeRecord):
    """Изменение governance лимитов (set_limits)."""

    event: Literal["LimitsUpdated"] = "LimitsUpdated"
    old_max_update_interval: int = Field(..., ge=0)
    new_max_update_interval: int = Field(..., gt=0)
    old_max_slope_change: int = Field(..., ge=0)
    new_max_slope_change: int = Field(..., ge=0)
    old_max_intercept_change: int = Field(..., ge=0)
    new_max_intercept_change: int = Field(..., ge=0)


class ManagerUpdated(ChangeRecord):
    """Смена manager (set_manager)."""

    event: Literal["ManagerUpdated"] = "ManagerUpdated"
    old_manager: str
    new_manager: str


AnyChangeRecord = Union[LinearDiscountUpdated, LimitsUpdated, ManagerUpdated]
