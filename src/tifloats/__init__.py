"""
tifloats — эмуляция десятичного формата с плавающей точкой калькулятора

14-значная packed-decimal мантисса, смещённая экспонента, статусный байт,
9-байтовый wire-формат и арифметика с семантикой железа.

Examples:
    >>> from tifloats import tifloat
    >>> large = tifloat(0x50000000000000, 5)
    >>> small = tifloat(0x50000000000000, 4)
    >>> (large + small) == tifloat(0x55000000000000, 5)
    True
    >>> (large + small).to_bytes().hex()
    '008555000000000000'
"""

from tifloats.backends import CalculatorFloat, Engine, NativeFloat, resolve_backend
from tifloats.core.config import DEFAULT_CONFIG, Backend, EngineConfig, ValidationPolicy
from tifloats.core.domain import (
    EXPONENT_MAX,
    EXPONENT_MIN,
    EXPONENT_NORM,
    Float,
    FloatRecord,
    StatusFlags,
    mantissa_from_digits,
    tifloat,
)
from tifloats.core.errors import (
    DecodeErrorKind,
    DivideByZeroError,
    FloatDecodeError,
    FloatError,
    FloatOverflowError,
    InvalidMantissaError,
)
from tifloats.core.math import Mantissa

__version__ = "0.1.0"

__all__ = [
    # Values
    "Float",
    "Mantissa",
    "StatusFlags",
    "FloatRecord",
    "tifloat",
    "mantissa_from_digits",
    # Constants
    "EXPONENT_MAX",
    "EXPONENT_MIN",
    "EXPONENT_NORM",
    # Config
    "Backend",
    "DEFAULT_CONFIG",
    "EngineConfig",
    "ValidationPolicy",
    # Backends
    "CalculatorFloat",
    "Engine",
    "NativeFloat",
    "resolve_backend",
    # Errors
    "DecodeErrorKind",
    "DivideByZeroError",
    "FloatDecodeError",
    "FloatError",
    "FloatOverflowError",
    "InvalidMantissaError",
]
