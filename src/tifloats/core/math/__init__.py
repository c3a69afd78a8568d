"""
Core math modules для tifloats

Packed-decimal примитивы и 14-значная мантисса.
"""

# BCD primitives
from tifloats.core.math.bcd import (
    # Layout constants
    DIGITS,
    MANTISSA_MASK,
    MAX_10,
    # Validation
    validate_packed,
    # Conversions
    most_significant_digit,
    pack_decimal,
    packed_digits,
    unpack_decimal,
    # Bit-parallel arithmetic
    packed_add,
    packed_tens_complement,
    # Shifts
    packed_shift_left,
    packed_shift_right,
)

# Mantissa value type
from tifloats.core.math.mantissa import Mantissa

__all__ = [
    # BCD: Layout constants
    "DIGITS",
    "MANTISSA_MASK",
    "MAX_10",
    # BCD: Validation
    "validate_packed",
    # BCD: Conversions
    "most_significant_digit",
    "pack_decimal",
    "packed_digits",
    "unpack_decimal",
    # BCD: Bit-parallel arithmetic
    "packed_add",
    "packed_tens_complement",
    # BCD: Shifts
    "packed_shift_left",
    "packed_shift_right",
    # Mantissa
    "Mantissa",
]
