"""
Тесты для Mantissa

Проверяет:
1. Проверенный и непроверенный конструкторы
2. Конверсии цифр
3. Сложение / вычитание с флагами переноса и заёма
4. Умножение / деление с флагом needs_shift
5. Сдвиги и immutability
"""

import dataclasses

import pytest

from tifloats.core.errors import DivideByZeroError, FloatError, InvalidMantissaError
from tifloats.core.math.mantissa import Mantissa

PI_PLUS_ONE = Mantissa(0x41415926535898)


# =============================================================================
# КОНСТРУКТОРЫ
# =============================================================================


class TestMantissaConstruction:
    """Тесты конструкторов Mantissa"""

    def test_valid_bits_accepted(self) -> None:
        assert Mantissa(0x31415926535898) == Mantissa.PI

    def test_field_value_ten_rejected(self) -> None:
        """Поле 0xA — невалидная кодировка"""
        with pytest.raises(InvalidMantissaError):
            Mantissa(0x1234567890123A)

    def test_from_bits_is_checked(self) -> None:
        with pytest.raises(InvalidMantissaError):
            Mantissa.from_bits(0xF0000000000000)

    def test_invalid_mantissa_error_hierarchy(self) -> None:
        """InvalidMantissaError ловится как FloatError и как ValueError"""
        with pytest.raises(FloatError):
            Mantissa(0xA0000000000000)
        with pytest.raises(ValueError):
            Mantissa(0xA0000000000000)

    def test_unchecked_skips_validation(self) -> None:
        mantissa = Mantissa.from_bits_unchecked(0xA0000000000000)
        assert mantissa.bits == 0xA0000000000000

    def test_validate_static(self) -> None:
        assert Mantissa.validate(0x99999999999999)
        assert not Mantissa.validate(0x9999999999999A)

    def test_constants(self) -> None:
        assert Mantissa.ONE.to_plain_integer() == 10**13
        assert Mantissa.ULP.to_plain_integer() == 1
        assert Mantissa.MAX_10 == 10**14 - 1
        assert Mantissa.ZERO.is_zero()

    def test_frozen(self) -> None:
        """Mantissa immutable"""
        with pytest.raises(dataclasses.FrozenInstanceError):
            Mantissa.ONE.bits = 0  # type: ignore[misc]


# =============================================================================
# ЦИФРЫ
# =============================================================================


class TestMantissaDigits:
    """Тесты конверсий цифр"""

    def test_to_from_plain_integer(self) -> None:
        assert Mantissa.from_plain_integer(31415926535898) == Mantissa.PI
        assert Mantissa.PI.to_plain_integer() == 31415926535898

    @pytest.mark.parametrize("value", [-1, 10**14])
    def test_from_plain_integer_out_of_range(self, value: int) -> None:
        with pytest.raises(InvalidMantissaError):
            Mantissa.from_plain_integer(value)

    def test_from_plain_integer_normalized(self) -> None:
        assert Mantissa.from_plain_integer_normalized(12345) == (Mantissa(0x12345000000000), 9)

    def test_from_plain_integer_normalized_zero(self) -> None:
        assert Mantissa.from_plain_integer_normalized(0) == (Mantissa.ZERO, 0)

    def test_from_plain_integer_normalized_full_width(self) -> None:
        assert Mantissa.from_plain_integer_normalized(Mantissa.MAX_10) == (
            Mantissa(0x99999999999999),
            0,
        )

    def test_digits(self) -> None:
        assert Mantissa(0x14285714285714).digits() == [1, 4, 2, 8, 5, 7, 1, 4, 2, 8, 5, 7, 1, 4]

    def test_digits_is_a_list(self) -> None:
        """Материализованная последовательность, можно читать повторно"""
        digits = Mantissa.PI.digits()
        assert list(digits) == list(digits)
        assert len(digits) == 14

    def test_most_significant_digit(self) -> None:
        assert Mantissa.PI.most_significant_digit() == 3
        assert Mantissa(0x00100000000000).most_significant_digit() == 0

    def test_is_normalized(self) -> None:
        assert Mantissa.PI.is_normalized()
        assert Mantissa.ZERO.is_normalized()
        assert not Mantissa(0x09000000000000).is_normalized()


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


class TestMantissaAddSub:
    """Тесты для checked_add / checked_sub"""

    def test_add(self) -> None:
        assert Mantissa.PI + Mantissa.E == Mantissa(0x58598744820488)

    def test_checked_add_carry(self) -> None:
        assert Mantissa.FIVE.checked_add(Mantissa.FIVE) == (Mantissa.ZERO, True)

    def test_checked_add_zero(self) -> None:
        assert Mantissa.PI.checked_add(Mantissa.ZERO) == (Mantissa.PI, False)

    def test_sub(self) -> None:
        assert PI_PLUS_ONE - Mantissa.ONE == Mantissa.PI

    def test_sub_borrow(self) -> None:
        """PI - (PI + 1): заём, результат — модуль разности"""
        assert Mantissa.PI.checked_sub(PI_PLUS_ONE) == (Mantissa.ONE, True)

    def test_sub_equal_operands(self) -> None:
        """Равные операнды: ноль без заёма"""
        assert Mantissa.PI.checked_sub(Mantissa.PI) == (Mantissa.ZERO, False)

    def test_sub_zero(self) -> None:
        assert Mantissa.PI.checked_sub(Mantissa.ZERO) == (Mantissa.PI, False)

    def test_sub_leaves_multiple_leading_zeros(self) -> None:
        """1.02 - 1.01 = 0.01: две ведущие нулевые цифры"""
        difference, borrowed = Mantissa(0x10200000000000).checked_sub(Mantissa(0x10100000000000))

        assert difference == Mantissa(0x00100000000000)
        assert not borrowed
        assert difference.shift_left(2) == Mantissa.ONE

    def test_tens_complement(self) -> None:
        assert Mantissa.ONE.tens_complement() == Mantissa(0x90000000000000)
        assert Mantissa.ULP.tens_complement() == Mantissa(0x99999999999999)
        assert Mantissa.ZERO.tens_complement() == Mantissa.ZERO

    def test_operators_reject_other_types(self) -> None:
        with pytest.raises(TypeError):
            Mantissa.ONE + 1  # type: ignore[operator]


# =============================================================================
# УМНОЖЕНИЕ И ДЕЛЕНИЕ
# =============================================================================


class TestMantissaMulDiv:
    """Тесты для checked_mul / checked_div"""

    def test_mul_by_one(self) -> None:
        assert Mantissa.PI.checked_mul(Mantissa.ONE) == (Mantissa.PI, False)

    def test_mul_needs_shift(self) -> None:
        """5 × 5 = 25: 15 цифр → needs_shift"""
        product, needs_shift = Mantissa.FIVE.checked_mul(Mantissa.FIVE)

        assert product.bits == 0x250000000000000
        assert needs_shift
        assert product.shift_right(1) == Mantissa(0x25000000000000)

    def test_mul_truncates(self) -> None:
        """1.4285714285714 × 7 = 9.9999999999998 (усечение, не округление)"""
        assert Mantissa(0x14285714285714).checked_mul(Mantissa(0x70000000000000)) == (
            Mantissa(0x99999999999998),
            False,
        )

    def test_div_rounds_half_up(self) -> None:
        """6 / 7 = 0.857142857142857... → 85714285714286"""
        assert Mantissa(0x60000000000000).checked_div(Mantissa(0x70000000000000)) == (
            Mantissa(0x85714285714286),
            False,
        )

    def test_div_one_third(self) -> None:
        assert Mantissa.ONE.checked_div(Mantissa(0x30000000000000)) == (
            Mantissa(0x33333333333333),
            False,
        )

    def test_div_needs_shift(self) -> None:
        """3.55 / 1.13 ≥ 1 → 15-значное частное"""
        quotient, needs_shift = Mantissa(0x35500000000000).checked_div(Mantissa(0x11300000000000))

        assert quotient.bits == 0x314159292035398
        assert needs_shift
        assert quotient.shift_right(1) == Mantissa(0x31415929203540)

    def test_div_equal_operands(self) -> None:
        quotient, needs_shift = Mantissa.PI.checked_div(Mantissa.PI)

        assert quotient.bits == 0x100000000000000
        assert needs_shift

    def test_div_by_zero_raises(self) -> None:
        with pytest.raises(DivideByZeroError):
            Mantissa.ONE.checked_div(Mantissa.ZERO)


# =============================================================================
# СДВИГИ
# =============================================================================


class TestMantissaShifts:
    """Тесты для shift_right / shift_left"""

    def test_shift_right_rounds(self) -> None:
        assert Mantissa(0x99999999999999).shift_right(1) == Mantissa.ONE

    def test_shift_right_saturates(self) -> None:
        assert Mantissa(0x99999999999999).shift_right(15) == Mantissa.ZERO

    def test_shift_left(self) -> None:
        assert Mantissa(0x09000000000000).shift_left(1) == Mantissa(0x90000000000000)

    def test_shifts_return_new_values(self) -> None:
        original = Mantissa.PI
        original.shift_right(3)
        original.shift_left(3)

        assert original == Mantissa(0x31415926535898)
