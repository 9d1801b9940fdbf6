"""
Test suite for the PT discount oracle

Contains:
- tests/unit/          : Unit tests for individual modules and oracle scenarios
"""
