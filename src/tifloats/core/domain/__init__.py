"""
Domain models and value objects.

Contains the calculator Float, its status flags and the inspectable FloatRecord.
"""

from tifloats.core.domain.flags import (
    KNOWN_STATUS_BITS,
    NO_FLAGS,
    StatusFlags,
    is_known_status,
)
from tifloats.core.domain.record import FloatRecord
from tifloats.core.domain.tifloat import (
    EXPONENT_MAX,
    EXPONENT_MIN,
    EXPONENT_NORM,
    RAW_SIZE,
    Float,
    mantissa_from_digits,
    tifloat,
)

__all__ = [
    # Status flags
    "KNOWN_STATUS_BITS",
    "NO_FLAGS",
    "StatusFlags",
    "is_known_status",
    # Float
    "EXPONENT_MAX",
    "EXPONENT_MIN",
    "EXPONENT_NORM",
    "RAW_SIZE",
    "Float",
    "mantissa_from_digits",
    "tifloat",
    # Record
    "FloatRecord",
]
