"""
Core domain models, fixed-point primitives, and contracts.

This module contains the foundational building blocks that are independent
of external systems (price feeds, token descriptors, clocks).
"""
