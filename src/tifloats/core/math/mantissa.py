"""
Mantissa — 14-значная packed-decimal мантисса

Immutable value type поверх примитивов из bcd.py:
- валидация и конверсии цифр
- сложение / вычитание через дополнение до 10^14 с флагами переноса/заёма
- умножение / деление через обычные целые (до 28 цифр)
- сдвиги по цифрам с округлением half-up

Все операции возвращают новые значения. Результаты умножения/деления
могут временно содержать 15-ю цифру (флаг needs_shift); такие значения
создаются без проверки и сразу сдвигаются вызывающим кодом.
"""

from dataclasses import dataclass
from typing import ClassVar, Final

from tifloats.core.errors import DivideByZeroError, InvalidMantissaError
from tifloats.core.math.bcd import (
    DIGITS,
    MANTISSA_MASK,
    MAX_10,
    most_significant_digit,
    pack_decimal,
    packed_add,
    packed_digits,
    packed_shift_left,
    packed_shift_right,
    packed_tens_complement,
    unpack_decimal,
    validate_packed,
)

# Делитель, оставляющий старшие 14 цифр 28-значного произведения
_PRODUCT_SCALE: Final[int] = 10 ** (DIGITS - 1)

# Масштаб делимого: 14 дополнительных цифр точности частного
_QUOTIENT_SCALE: Final[int] = 10**DIGITS


@dataclass(frozen=True)
class Mantissa:
    """
    Беззнаковая 14-значная десятичная мантисса.

    Mantissa(bits) проверяет каждое 4-битное поле и бросает
    InvalidMantissaError для невалидного слова. from_bits_unchecked
    пропускает проверку для мест, где валидность уже доказана.
    """

    bits: int

    MASK: ClassVar[int] = MANTISSA_MASK
    MAX_10: ClassVar[int] = MAX_10

    ZERO: ClassVar["Mantissa"]
    ULP: ClassVar["Mantissa"]
    ONE: ClassVar["Mantissa"]
    FIVE: ClassVar["Mantissa"]
    PI: ClassVar["Mantissa"]
    E: ClassVar["Mantissa"]

    def __post_init__(self) -> None:
        if not validate_packed(self.bits):
            raise InvalidMantissaError(self.bits)

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @staticmethod
    def validate(bits: int) -> bool:
        """True если bits — валидное 14-значное packed-decimal слово."""
        return validate_packed(bits)

    @classmethod
    def from_bits(cls, bits: int) -> "Mantissa":
        """Проверенный конструктор (эквивалент Mantissa(bits))."""
        return cls(bits)

    @classmethod
    def from_bits_unchecked(cls, bits: int) -> "Mantissa":
        """Конструктор без проверки цифр."""
        mantissa = object.__new__(cls)
        object.__setattr__(mantissa, "bits", bits)
        return mantissa

    @classmethod
    def from_plain_integer(cls, value: int) -> "Mantissa":
        """
        Обычное целое → мантисса.

        Raises:
            InvalidMantissaError: Если value вне [0, MAX_10]
        """
        if not 0 <= value <= MAX_10:
            raise InvalidMantissaError(value)

        return cls.from_bits_unchecked(pack_decimal(value))

    @classmethod
    def from_plain_integer_normalized(cls, value: int) -> tuple["Mantissa", int]:
        """
        Обычное целое → нормализованная мантисса и величина сдвига влево.

        Examples:
            >>> Mantissa.from_plain_integer_normalized(12345)
            (Mantissa(bits=0x12345000000000), 9)
        """
        mantissa = cls.from_plain_integer(value)
        if mantissa.is_zero():
            return mantissa, 0

        shift = DIGITS - len(str(value))
        return mantissa.shift_left(shift), shift

    # =========================================================================
    # ЦИФРЫ
    # =========================================================================

    def to_plain_integer(self) -> int:
        """Packed-decimal → обычное целое."""
        return unpack_decimal(self.bits)

    def digits(self) -> list[int]:
        """14 цифр, старшая первой."""
        return packed_digits(self.bits)

    def most_significant_digit(self) -> int:
        return most_significant_digit(self.bits)

    def is_zero(self) -> bool:
        return self.bits == 0

    def is_normalized(self) -> bool:
        """Старшая цифра ненулевая (или значение равно нулю)."""
        return self.is_zero() or self.most_significant_digit() != 0

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def tens_complement(self) -> "Mantissa":
        """10^14 - m (0 для нулевой мантиссы)."""
        return Mantissa.from_bits_unchecked(packed_tens_complement(self.bits))

    def checked_add(self, other: "Mantissa") -> tuple["Mantissa", bool]:
        """
        Сумма по модулю 10^14 и флаг переноса из 14-й цифры.

        Прибавление нулевой мантиссы возвращает self без переноса.
        """
        total, carry = packed_add(self.bits, other.bits)
        return Mantissa.from_bits_unchecked(total), carry

    def checked_sub(self, other: "Mantissa") -> tuple["Mantissa", bool]:
        """
        Модуль разности и флаг заёма.

        Заём (True) означает self < other: результат равен other - self,
        знак итога должен инвертировать вызывающий код.

        Разность может требовать нескольких сдвигов влево для нормализации:
        102 - 101 = 001.
        """
        # Для валидных слов сравнение битов совпадает с десятичным
        if self.bits >= other.bits:
            return self.checked_add(other.tens_complement())[0], False

        return other.checked_add(self.tens_complement())[0], True

    def checked_mul(self, other: "Mantissa") -> tuple["Mantissa", bool]:
        """
        Старшие 14 цифр произведения (усечение) и флаг needs_shift.

        needs_shift = True, когда усечённое значение имеет 15 цифр:
        вызывающий код сдвигает вправо на 1 и увеличивает экспоненту.
        """
        full_product = self.to_plain_integer() * other.to_plain_integer()
        half_product = full_product // _PRODUCT_SCALE

        return (
            Mantissa.from_bits_unchecked(pack_decimal(half_product)),
            half_product > MAX_10,
        )

    def checked_div(self, other: "Mantissa") -> tuple["Mantissa", bool]:
        """
        round_half_up(self * 10^14 / other) и флаг needs_shift.

        Raises:
            DivideByZeroError: Если other == 0 (нарушение предусловия)
        """
        divisor = other.to_plain_integer()
        if divisor == 0:
            raise DivideByZeroError("Mantissa division by zero")

        dividend = self.to_plain_integer() * _QUOTIENT_SCALE
        quotient = (dividend + (divisor >> 1)) // divisor

        return Mantissa.from_bits_unchecked(pack_decimal(quotient)), quotient > MAX_10

    def shift_right(self, distance: int) -> "Mantissa":
        """Деление на 10^distance с округлением half-up, 0 при distance >= 15."""
        return Mantissa.from_bits_unchecked(packed_shift_right(self.bits, distance))

    def shift_left(self, distance: int) -> "Mantissa":
        """Умножение на 10^distance с отбрасыванием цифр старше 14-й."""
        return Mantissa.from_bits_unchecked(packed_shift_left(self.bits, distance))

    def __add__(self, other: "Mantissa") -> "Mantissa":
        if not isinstance(other, Mantissa):
            return NotImplemented
        return self.checked_add(other)[0]

    def __sub__(self, other: "Mantissa") -> "Mantissa":
        if not isinstance(other, Mantissa):
            return NotImplemented
        return self.checked_sub(other)[0]

    def __repr__(self) -> str:
        return f"Mantissa(bits={self.bits:#x})"


Mantissa.ZERO = Mantissa.from_bits_unchecked(0x0000000000000000)
Mantissa.ULP = Mantissa.from_bits_unchecked(0x0000000000000001)
Mantissa.ONE = Mantissa.from_bits_unchecked(0x0010000000000000)
Mantissa.FIVE = Mantissa.from_bits_unchecked(0x0050000000000000)
Mantissa.PI = Mantissa.from_bits_unchecked(0x0031415926535898)
Mantissa.E = Mantissa.from_bits_unchecked(0x0027182818284590)
