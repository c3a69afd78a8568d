"""
BCD — Примитивы packed-decimal арифметики

Модуль работает с «сырыми» int: 14 десятичных цифр, упакованных по 4 бита
в 64-битное слово (старший байт слова всегда нулевой).

    bits 52..55  bits 48..51  ...  bits 0..3
    digit[0]     digit[1]     ...  digit[13]     (MSD first)

Сложение и дополнение до 10^14 выполняются бит-параллельно (SWAR):
каждая 4-битная полоса смещается на +6, складывается обычным двоичным
сложением, затем полосы без десятичного переноса корректируются обратно.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Входы packed_add / packed_tens_complement — валидные 14-значные слова
2. Результаты packed_add / packed_tens_complement — валидные 14-значные слова
3. Никакого глобального состояния, все функции чистые
"""

from typing import Final

# =============================================================================
# КОНСТАНТЫ РАЗМЕТКИ
# =============================================================================

# Количество десятичных цифр мантиссы
DIGITS: Final[int] = 14

# Ширина поля одной цифры (бит)
DIGIT_BITS: Final[int] = 4

# Полное 64-битное слово
WORD_MASK: Final[int] = 0xFFFFFFFFFFFFFFFF

# Биты, занятые 14 цифрами
MANTISSA_MASK: Final[int] = 0x00FFFFFFFFFFFFFF

# Максимальное значение мантиссы в base 10
MAX_10: Final[int] = 10**DIGITS - 1

# Бит переноса в 15-ю цифру
CARRY_DIGIT: Final[int] = 1 << (DIGITS * DIGIT_BITS)

# Смещение +6 во всех 14 полосах
_LANE_BIAS: Final[int] = 0x0066666666666666

# Младшие биты полос 1..14 (куда приходит перенос из полосы ниже)
_ADD_CARRY_LANES: Final[int] = 0x0111111111111110

# То же для дополнения, считается по всему 64-битному слову
_COMPLEMENT_CARRY_LANES: Final[int] = 0x1111111111111110

# Проверка цифр: floor(d / 2) + 3 >= 8  <=>  d >= 10
_HALF_DIGIT_MASK: Final[int] = 0x0077777777777777
_HALF_DIGIT_BIAS: Final[int] = 0x0033333333333333
_HIGH_BIT_MASK: Final[int] = 0x0088888888888888


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_packed(bits: int) -> bool:
    """
    Проверка packed-decimal слова.

    Returns:
        True если каждое 4-битное поле <= 9 и биты выше 14-й цифры нулевые
    """
    if bits < 0:
        return False

    invalid_digits = (((bits >> 1) & _HALF_DIGIT_MASK) + _HALF_DIGIT_BIAS) & _HIGH_BIT_MASK
    return (invalid_digits | (bits & ~MANTISSA_MASK)) == 0


# =============================================================================
# КОНВЕРСИИ
# =============================================================================


def pack_decimal(value: int) -> int:
    """
    Обычное целое → packed-decimal.

    Шестнадцатеричная запись упакованного слова совпадает с десятичной
    записью числа, поэтому цифры переносятся один-в-один.

    Args:
        value: Неотрицательное целое (может иметь больше 14 цифр)

    Returns:
        Упакованное слово (без маски)
    """
    if value < 0:
        raise ValueError(f"Cannot pack negative value: {value}")

    return int(str(value), 16)


def unpack_decimal(bits: int) -> int:
    """
    Packed-decimal → обычное целое.

    Предусловие: все поля <= 9 (иначе результат не определён).
    """
    return int(format(bits, "x"))


def packed_digits(bits: int) -> list[int]:
    """14 цифр слова, старшая первой."""
    return [(bits >> (DIGIT_BITS * i)) & 0xF for i in range(DIGITS - 1, -1, -1)]


def most_significant_digit(bits: int) -> int:
    """Старшая (14-я) цифра слова."""
    return (bits >> (DIGIT_BITS * (DIGITS - 1))) & 0xF


# =============================================================================
# БИТ-ПАРАЛЛЕЛЬНОЕ СЛОЖЕНИЕ
# =============================================================================


def packed_add(a: int, b: int) -> tuple[int, bool]:
    """
    Десятичное сложение двух packed-decimal слов.

    Pre:  a, b — валидные 14-значные слова
    Post: (sum mod 10^14 в packed виде, флаг переноса из 14-й цифры)

    Алгоритм:
    1. a + 0x66...6: каждая полоса смещается на 6, двоичный перенос из полосы
       возникает ровно тогда, когда десятичная сумма цифр >= 10
    2. Полосы, в которые перенос НЕ пришёл, хранят лишние +6 — вычитаем
    """
    if b == 0:
        return a, False

    t1 = a + _LANE_BIAS
    t2 = t1 + b
    t3 = t1 ^ b
    # Биты, получившие перенос из младшего разряда
    t4 = t2 ^ t3
    t5 = ~t4 & _ADD_CARRY_LANES
    t6 = (t5 >> 2) | (t5 >> 3)

    result = t2 - t6

    return result & MANTISSA_MASK, (result & ~MANTISSA_MASK) != 0


def packed_tens_complement(bits: int) -> int:
    """
    Дополнение до 10^14: (10^14 - bits) mod 10^14.

    Pre:  bits — валидное 14-значное слово
    Post: валидное 14-значное слово; для 0 возвращается 0

    (2^64 - 1) - bits даёт в каждой полосе 15 - d = (9 - d) + 6, т.е. дополнение
    до девяток со смещением +6. Прибавление единицы и та же коррекция полос,
    что и в packed_add, превращают его в дополнение до 10^14.
    """
    t1 = WORD_MASK - bits
    t2 = t1 + 1
    t3 = t1 ^ 1
    t4 = t2 ^ t3
    t5 = ~t4 & _COMPLEMENT_CARRY_LANES
    t6 = (t5 >> 2) | (t5 >> 3)

    return (t2 - t6) & MANTISSA_MASK


# =============================================================================
# СДВИГИ
# =============================================================================


def packed_shift_right(bits: int, distance: int) -> int:
    """
    Деление на 10^distance с округлением half-up.

    Округление по первой отбрасываемой цифре (>= 5 → +1 ULP).
    distance >= 15 отбрасывает всё значение → 0.

    Перенос, возникший при округлении, сохраняется в 15-й цифре.
    """
    if distance < 0:
        raise ValueError(f"Shift distance must be non-negative, got {distance}")

    if distance >= DIGITS + 1:
        return 0

    if distance == 0:
        return bits

    result = bits >> (DIGIT_BITS * distance)
    rounding_digit = (bits >> (DIGIT_BITS * (distance - 1))) & 0xF

    if rounding_digit >= 5:
        result, carry = packed_add(result & MANTISSA_MASK, 1)
        if carry:
            result |= CARRY_DIGIT

    return result


def packed_shift_left(bits: int, distance: int) -> int:
    """Умножение на 10^distance, цифры старше 14-й отбрасываются."""
    if distance < 0:
        raise ValueError(f"Shift distance must be non-negative, got {distance}")

    return (bits << (DIGIT_BITS * distance)) & MANTISSA_MASK
