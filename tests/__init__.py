"""
Test suite for tifloats

Contains:
- tests/unit/          : Unit tests for BCD primitives, Mantissa, Float, backends and contracts
"""
