"""
Errors — Иерархия исключений tifloats

Все ошибки движка наследуются от FloatError и одновременно от ближайшего
встроенного исключения Python, чтобы вызывающий код мог ловить как
`FloatError`, так и `OverflowError` / `ZeroDivisionError` / `ValueError`.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Операция либо возвращает валидное значение, либо бросает исключение
2. Частичных результатов нет
3. Повторные попытки внутри движка не выполняются (вычисления детерминированы)
"""

from enum import Enum


class FloatError(Exception):
    """Базовый класс всех ошибок tifloats."""

    pass


class FloatOverflowError(FloatError, OverflowError):
    """
    Экспонента результата вне допустимого диапазона.

    Используется для обоих направлений: слишком большой результат
    и underflow (например, при вычитании почти равных величин).
    """

    def __init__(self, exponent: int, message: str | None = None):
        self.exponent = exponent
        super().__init__(message or f"Exponent out of range: biased exponent {exponent:#x}")


class DivideByZeroError(FloatError, ZeroDivisionError):
    """Деление на значение с нулевой мантиссой."""

    pass


class InvalidMantissaError(FloatError, ValueError):
    """
    Попытка построить Mantissa из битов, не прошедших проверку цифр.

    Каждое 4-битное поле должно содержать значение 0..9, биты выше
    14-й цифры должны быть нулевыми.
    """

    def __init__(self, bits: int):
        self.bits = bits
        super().__init__(f"Invalid packed-decimal mantissa: {bits:#x}")


class DecodeErrorKind(str, Enum):
    """Причина отказа при разборе 9-байтового представления."""

    INVALID_LENGTH = "invalid_length"
    INVALID_FLAGS = "invalid_flags"
    INVALID_EXPONENT = "invalid_exponent"
    INVALID_MANTISSA = "invalid_mantissa"


class FloatDecodeError(FloatError, ValueError):
    """Ошибка разбора 9-байтового wire-формата."""

    def __init__(self, kind: DecodeErrorKind, message: str):
        self.kind = kind
        super().__init__(f"{message} ({kind.value})")
