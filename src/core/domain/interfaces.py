"""
Интерфейсы внешних коллабораторов оракула.

Оракул только читает их; надёжность и источник данных — ответственность
реализаций.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PriceSource(Protocol):
    """Источник цены underlying актива (fixed-point, масштаб PRECISION)."""

    def price(self) -> int:
        ...


@runtime_checkable
class MaturingToken(Protocol):
    """Дескриптор PT: неизменяемый timestamp погашения (Unix seconds)."""

    @property
    def expiry(self) -> int:
        ...
