"""
Float — Десятичное число с плавающей точкой калькулятора

Значение: (-1)^sign × d0.d1d2...d13 × 10^(exponent - EXPONENT_NORM)

- flags: статусный байт (знак + непрозрачные маркеры)
- exponent: смещённая экспонента, валидный диапазон NORM-99 .. NORM+99
- mantissa: 14-значная packed-decimal мантисса (d0 != 0 или значение 0)

Арифметика следует семантике железа: одна точка округления при выравнивании
слагаемых, усечение произведения, half-up округление частного.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Операции возвращают новые значения; на месте меняются только
   negate() и mark_complex_half() (и только статусный байт)
2. При политике CHECKED экспонента результата всегда в диапазоне,
   иначе FloatOverflowError
3. Деление на ноль — DivideByZeroError, отдельно от переполнения
4. Знак частного берётся только от делимого (наблюдаемое поведение железа)
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import ClassVar, Final, Sequence

from tifloats.core.config import ValidationPolicy
from tifloats.core.domain.flags import (
    NO_FLAGS,
    StatusFlags,
    is_known_status,
    with_complex_half,
    without_sign,
)
from tifloats.core.errors import (
    DecodeErrorKind,
    DivideByZeroError,
    FloatDecodeError,
    FloatOverflowError,
)
from tifloats.core.math.bcd import DIGIT_BITS, DIGITS, MANTISSA_MASK, packed_add, validate_packed
from tifloats.core.math.mantissa import Mantissa

logger = logging.getLogger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

EXPONENT_NORM: Final[int] = 0x80
EXPONENT_RANGE: Final[int] = 99
EXPONENT_MAX: Final[int] = EXPONENT_NORM + EXPONENT_RANGE
EXPONENT_MIN: Final[int] = EXPONENT_NORM - EXPONENT_RANGE

# Размер wire-представления: статус + экспонента + 7 байт мантиссы
RAW_SIZE: Final[int] = 9
_MANTISSA_BYTES: Final[int] = RAW_SIZE - 2

# Ключ сортировки: бит «неотрицательно» выше 64-битной величины
_MAGNITUDE_BITS: Final[int] = 64
_MAGNITUDE_MASK: Final[int] = (1 << _MAGNITUDE_BITS) - 1


# =============================================================================
# LITERAL HELPERS
# =============================================================================


def _round_digit_sequence(digits: Sequence[int]) -> tuple[int, bool]:
    """Первые 14 цифр + half-up по 15-й. Возвращает (bits, перенос за 14 цифр)."""
    for digit in digits:
        if not 0 <= digit <= 9:
            raise ValueError(f"Decimal digit must be in 0..9, got {digit}")

    bits = 0
    for index, digit in enumerate(digits[:DIGITS]):
        bits |= digit << (DIGIT_BITS * (DIGITS - 1 - index))

    if len(digits) > DIGITS and digits[DIGITS] >= 5:
        return packed_add(bits, 1)

    return bits, False


def mantissa_from_digits(digits: Sequence[int]) -> int:
    """
    Packed-decimal мантисса из последовательности цифр (старшая первой).

    Берутся не более 14 цифр; если 15-я цифра >= 5, результат округляется
    вверх на один ULP.

    Raises:
        ValueError: Если цифра вне 0..9 или округление переносит за 14 цифр
            (используйте Float.from_digits, который скорректирует экспоненту)

    Examples:
        >>> hex(mantissa_from_digits([5]))
        '0x50000000000000'
        >>> hex(mantissa_from_digits([1, 2, 3, 4, 5, 6, 7, 8, 9, 0, 1, 2, 3, 9, 9]))
        '0x12345678901240'
    """
    bits, carry = _round_digit_sequence(digits)
    if carry:
        raise ValueError("Digit sequence rounds past 14 digits")
    return bits


def _check_exponent(exponent: int, policy: ValidationPolicy) -> int:
    """Проверка смещённой экспоненты результата согласно политике."""
    if policy == ValidationPolicy.TRUSTED:
        # Железо: байт экспоненты просто оборачивается
        return exponent & 0xFF

    if not EXPONENT_MIN <= exponent <= EXPONENT_MAX:
        logger.debug("Exponent out of range: %d (unbiased %d)", exponent, exponent - EXPONENT_NORM)
        raise FloatOverflowError(exponent)

    return exponent


# =============================================================================
# FLOAT
# =============================================================================


@dataclass
class Float:
    """
    Десятичное число калькулятора.

    Равенство структурное (flags, exponent, mantissa) — нужно для
    round-trip через байты. Порядок задаётся sort_key() и учитывает
    только значение.

    Хэш согласован с равенством. negate() и mark_complex_half() меняют
    хэш, поэтому значение в множестве или ключе словаря не мутируют.
    """

    flags: StatusFlags
    exponent: int
    mantissa: Mantissa

    EXPONENT_NORM: ClassVar[int] = EXPONENT_NORM
    EXPONENT_MAX: ClassVar[int] = EXPONENT_MAX
    EXPONENT_MIN: ClassVar[int] = EXPONENT_MIN

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def new(
        cls,
        negative: bool,
        exponent: int,
        mantissa: int,
        policy: ValidationPolicy = ValidationPolicy.CHECKED,
    ) -> "Float":
        """
        Проверенный конструктор.

        Args:
            negative: Знак
            exponent: Несмещённая экспонента (-99..99)
            mantissa: Сырые packed-decimal цифры (например 0x55000000000000)
            policy: TRUSTED пропускает проверки и оборачивает экспоненту

        Raises:
            InvalidMantissaError: Если поле цифры > 9
            FloatOverflowError: Если экспонента вне диапазона
        """
        if policy == ValidationPolicy.TRUSTED:
            digits = Mantissa.from_bits_unchecked(mantissa)
        else:
            digits = Mantissa(mantissa)

        return cls(
            flags=StatusFlags.NEGATIVE if negative else NO_FLAGS,
            exponent=_check_exponent(exponent + EXPONENT_NORM, policy),
            mantissa=digits,
        )

    @classmethod
    def zero(cls) -> "Float":
        return cls(flags=NO_FLAGS, exponent=EXPONENT_NORM, mantissa=Mantissa.ZERO)

    @classmethod
    def from_digits(
        cls,
        negative: bool,
        exponent: int,
        digits: Sequence[int],
        policy: ValidationPolicy = ValidationPolicy.CHECKED,
    ) -> "Float":
        """
        Float из последовательности цифр с неявным округлением по 15-й цифре.

        Если округление переносит за 14 цифр (99...9|5), мантисса становится
        1.0000000000000, а экспонента увеличивается на 1.
        """
        bits, carry = _round_digit_sequence(digits)
        if carry:
            bits = Mantissa.ONE.bits
            exponent += 1

        return cls.new(negative, exponent, bits, policy)

    @classmethod
    def from_int(cls, value: int, policy: ValidationPolicy = ValidationPolicy.CHECKED) -> "Float":
        """
        Float из целого числа (с округлением после 14 цифр).

        Examples:
            >>> Float.from_int(12345) == tifloat(0x12345000000000, 4)
            True
        """
        if value == 0:
            return cls.zero()

        digits = [int(char) for char in str(abs(value))]
        return cls.from_digits(value < 0, len(digits) - 1, digits, policy)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Float":
        """
        Разбор 9-байтового представления (статус в байте 0).

        Raises:
            FloatDecodeError: длина, неизвестные биты статуса, экспонента
                вне диапазона или невалидная цифра мантиссы
        """
        data = bytes(data)
        if len(data) != RAW_SIZE:
            raise FloatDecodeError(
                DecodeErrorKind.INVALID_LENGTH, f"Expected {RAW_SIZE} bytes, got {len(data)}"
            )

        status, exponent = data[0], data[1]

        if not is_known_status(status):
            logger.debug("Rejecting status byte %#04x", status)
            raise FloatDecodeError(DecodeErrorKind.INVALID_FLAGS, f"Unknown status bits in {status:#04x}")

        if not EXPONENT_MIN <= exponent <= EXPONENT_MAX:
            logger.debug("Rejecting exponent byte %#04x", exponent)
            raise FloatDecodeError(
                DecodeErrorKind.INVALID_EXPONENT, f"Exponent byte {exponent:#04x} out of range"
            )

        bits = int.from_bytes(data[2:], "big")
        if not validate_packed(bits):
            logger.debug("Rejecting mantissa bytes %s", data[2:].hex())
            raise FloatDecodeError(
                DecodeErrorKind.INVALID_MANTISSA, f"Invalid packed-decimal mantissa {bits:#x}"
            )

        return cls(
            flags=StatusFlags(status),
            exponent=exponent,
            mantissa=Mantissa.from_bits_unchecked(bits),
        )

    def to_bytes(self) -> bytes:
        """9 байт: статус, смещённая экспонента, 7 байт мантиссы big-endian."""
        return bytes((int(self.flags), self.exponent)) + (self.mantissa.bits & MANTISSA_MASK).to_bytes(
            _MANTISSA_BYTES, "big"
        )

    # =========================================================================
    # СТАТУС
    # =========================================================================

    @property
    def unbiased_exponent(self) -> int:
        return self.exponent - EXPONENT_NORM

    def is_negative(self) -> bool:
        return bool(self.flags & StatusFlags.NEGATIVE)

    def is_zero(self) -> bool:
        return self.mantissa.is_zero()

    def is_undefined(self) -> bool:
        return bool(self.flags & StatusFlags.UNDEFINED)

    def is_complex_half(self) -> bool:
        return (self.flags & StatusFlags.COMPLEX_HALF) == StatusFlags.COMPLEX_HALF and not self.is_undefined()

    def negate(self) -> None:
        """Инверсия знака на месте."""
        self.flags = StatusFlags(self.flags ^ StatusFlags.NEGATIVE)

    def mark_complex_half(self) -> None:
        """Пометка значения как половины комплексной переменной (на месте)."""
        self.flags = with_complex_half(self.flags)

    def __neg__(self) -> "Float":
        return replace(self, flags=StatusFlags(self.flags ^ StatusFlags.NEGATIVE))

    def _zero_like(self) -> "Float":
        """Канонический ноль с маркерами self (без знака)."""
        return Float(flags=without_sign(self.flags), exponent=EXPONENT_NORM, mantissa=Mantissa.ZERO)

    def _normalized(self) -> tuple[Mantissa, int]:
        """
        Мантисса со старшей цифрой != 0 и соответствующая смещённая экспонента.

        Pre: значение ненулевое. Экспонента может временно выйти из диапазона,
        проверяется только экспонента результата.
        """
        mantissa, exponent = self.mantissa, self.exponent
        while not mantissa.is_zero() and mantissa.most_significant_digit() == 0:
            mantissa = mantissa.shift_left(1)
            exponent -= 1
        return mantissa, exponent

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def try_add(self, other: "Float", policy: ValidationPolicy = ValidationPolicy.CHECKED) -> "Float":
        """
        Сложение.

        Слагаемое с меньшей экспонентой выравнивается сдвигом вправо
        (единственная точка округления). При разных знаках мантиссы
        вычитаются через дополнение до 10^14 и результат нормализуется
        сдвигами влево.

        Raises:
            FloatOverflowError: Экспонента результата вне диапазона
        """
        if self.is_zero() and other.is_zero():
            return self._zero_like()
        if other.is_zero():
            return replace(self)
        if self.is_zero():
            return replace(other)

        if self.exponent < other.exponent:
            a, b = other, self
        else:
            a, b = self, other

        b_mantissa = b.mantissa.shift_right(a.exponent - b.exponent)
        exponent = a.exponent

        if a.is_negative() == b.is_negative():
            mantissa, carry = a.mantissa.checked_add(b_mantissa)

            if carry:
                exponent += 1
                # Перенесённая 15-я цифра всегда равна 1 и становится старшей
                mantissa = mantissa.shift_right(1) + Mantissa.ONE

            return Float(flags=a.flags, exponent=_check_exponent(exponent, policy), mantissa=mantissa)

        mantissa, borrowed = a.mantissa.checked_sub(b_mantissa)

        if mantissa.is_zero():
            return a._zero_like()

        flags = StatusFlags(a.flags ^ StatusFlags.NEGATIVE) if borrowed else a.flags

        while mantissa.most_significant_digit() == 0:
            exponent -= 1
            mantissa = mantissa.shift_left(1)

        return Float(flags=flags, exponent=_check_exponent(exponent, policy), mantissa=mantissa)

    def try_sub(self, other: "Float", policy: ValidationPolicy = ValidationPolicy.CHECKED) -> "Float":
        """a - b = a + (-b)"""
        return self.try_add(-other, policy)

    def try_mul(self, other: "Float", policy: ValidationPolicy = ValidationPolicy.CHECKED) -> "Float":
        """
        Умножение.

        Знак — XOR знаков операндов, маркеры — от левого операнда.
        Операнды с ведущими нулями сначала нормализуются.

        Raises:
            FloatOverflowError: Экспонента результата вне диапазона
        """
        if self.is_zero() or other.is_zero():
            return self._zero_like()

        left, left_exponent = self._normalized()
        right, right_exponent = other._normalized()

        exponent = left_exponent + right_exponent - EXPONENT_NORM

        mantissa, needs_shift = left.checked_mul(right)

        if needs_shift:
            exponent += 1
            mantissa = mantissa.shift_right(1)

        return Float(
            flags=StatusFlags(self.flags ^ (other.flags & StatusFlags.NEGATIVE)),
            exponent=_check_exponent(exponent, policy),
            mantissa=mantissa,
        )

    def try_div(self, other: "Float", policy: ValidationPolicy = ValidationPolicy.CHECKED) -> "Float":
        """
        Деление.

        Частное мантисс масштабировано на 10^14: при needs_shift оно сдвигается
        вправо без изменения экспоненты, иначе его старшая цифра стоит на одну
        декаду ниже и экспонента уменьшается на 1.

        Знак и маркеры берутся только от делимого. Операнды с ведущими
        нулями сначала нормализуются, иначе частное не уложится в 15 цифр.

        Raises:
            DivideByZeroError: Делитель равен нулю
            FloatOverflowError: Экспонента результата вне диапазона
        """
        if other.is_zero():
            logger.debug("Division by zero: %r / %r", self, other)
            raise DivideByZeroError(f"Division of {self} by zero")

        if self.is_zero():
            return self._zero_like()

        dividend, dividend_exponent = self._normalized()
        divisor, divisor_exponent = other._normalized()

        exponent = dividend_exponent - divisor_exponent + EXPONENT_NORM

        mantissa, needs_shift = dividend.checked_div(divisor)

        if needs_shift:
            mantissa = mantissa.shift_right(1)
        else:
            exponent -= 1

        return Float(flags=self.flags, exponent=_check_exponent(exponent, policy), mantissa=mantissa)

    def __add__(self, other: "Float") -> "Float":
        if not isinstance(other, Float):
            return NotImplemented
        return self.try_add(other)

    def __sub__(self, other: "Float") -> "Float":
        if not isinstance(other, Float):
            return NotImplemented
        return self.try_sub(other)

    def __mul__(self, other: "Float") -> "Float":
        if not isinstance(other, Float):
            return NotImplemented
        return self.try_mul(other)

    def __truediv__(self, other: "Float") -> "Float":
        if not isinstance(other, Float):
            return NotImplemented
        return self.try_div(other)

    # =========================================================================
    # ПОРЯДОК
    # =========================================================================

    def sort_key(self) -> int:
        """
        Беззнаковый ключ полного порядка.

        bit 64      — значение неотрицательно
        bits 56..63 — смещённая экспонента
        bits 0..55  — мантисса

        Для отрицательных значений величина инвертируется (большее по модулю
        меньше). Все нули (любой знак, любая экспонента) имеют один ключ.
        """
        if self.is_zero():
            return 1 << _MAGNITUDE_BITS

        magnitude = (self.exponent << (DIGITS * DIGIT_BITS)) | self.mantissa.bits

        if self.is_negative():
            return _MAGNITUDE_MASK - magnitude

        return (1 << _MAGNITUDE_BITS) | magnitude

    def __hash__(self) -> int:
        return hash((int(self.flags), self.exponent, self.mantissa))

    def compare(self, other: "Float") -> int:
        """-1, 0 или 1 по значению."""
        left, right = self.sort_key(), other.sort_key()
        return (left > right) - (left < right)

    def __lt__(self, other: "Float") -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: "Float") -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: "Float") -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: "Float") -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self.sort_key() >= other.sort_key()

    # =========================================================================
    # КОНВЕРСИИ
    # =========================================================================

    def to_decimal(self) -> Decimal:
        """Точное значение как decimal.Decimal."""
        if self.is_zero():
            return Decimal(0)

        return Decimal(
            (int(self.is_negative()), tuple(self.mantissa.digits()), self.unbiased_exponent - (DIGITS - 1))
        )

    def __float__(self) -> float:
        return float(self.to_decimal())

    def __str__(self) -> str:
        return format(self.to_decimal().normalize(), "E")


def tifloat(
    mantissa: int,
    exponent: int,
    negative: bool = False,
    policy: ValidationPolicy = ValidationPolicy.CHECKED,
) -> Float:
    """
    Литерал Float: tifloat(0x55000000000000, 5, negative=True) == -5.5e5

    Та же валидация, что и Float.new.
    """
    return Float.new(negative, exponent, mantissa, policy)
