"""
Test suite for the collateral engine

Contains:
- tests/unit/          : Unit tests for individual modules and engine scenarios
- tests/fakes.py       : In-memory tokens and price feeds
"""
