"""
Core math modules для PT оракула

Fixed-point примитивы и чистая модель дисконта.
"""

# Fixed-point primitives
from src.core.math.fixed_point import (
    PRECISION,
    SECONDS_PER_DAY,
    SECONDS_PER_YEAR,
    clamp_int,
    is_non_negative_int,
    mul_div,
)

# Discount model
from src.core.math.discount_model import (
    compute_discount,
    compute_price,
    discounted_price,
    seconds_to_years,
    slope_from_apy,
)

__all__ = [
    # Fixed-point — Constants
    "PRECISION",
    "SECONDS_PER_DAY",
    "SECONDS_PER_YEAR",
    # Fixed-point — Functions
    "clamp_int",
    "is_non_negative_int",
    "mul_div",
    # Discount model
    "compute_discount",
    "compute_price",
    "discounted_price",
    "seconds_to_years",
    "slope_from_apy",
]
