"""
StatusFlags — Статусный байт Float (байт 0 wire-формата)

    bit 7      NEGATIVE      знак
    bit 6      UNMODIFIED    вероятно: значение не менялось с последнего построения графика
    bits 2-3   COMPLEX_HALF  значение — половина комплексной переменной
    bit 1      UNDEFINED     значение не определено (начальные значения последовательностей)

Все биты, кроме знака, — непрозрачное состояние, арифметика их не интерпретирует.
"""

from enum import IntFlag
from typing import Final


class StatusFlags(IntFlag):
    """Биты статусного байта."""

    UNDEFINED = 0x02
    # Половина комплексной переменной, если оба бита 2 и 3 установлены и бит 1 сброшен
    COMPLEX_HALF = 0x0C
    UNMODIFIED = 0x40
    NEGATIVE = 0x80


# Все биты, допустимые в статусном байте
KNOWN_STATUS_BITS: Final[int] = int(
    StatusFlags.UNDEFINED | StatusFlags.COMPLEX_HALF | StatusFlags.UNMODIFIED | StatusFlags.NEGATIVE
)

NO_FLAGS: Final[StatusFlags] = StatusFlags(0)


def is_known_status(value: int) -> bool:
    """True если value — байт без неизвестных битов."""
    return 0 <= value <= 0xFF and (value & ~KNOWN_STATUS_BITS) == 0


def with_complex_half(flags: StatusFlags) -> StatusFlags:
    """Установка маркера complex-half (биты 2-3 установлены, бит 1 сброшен)."""
    return StatusFlags((int(flags) | StatusFlags.COMPLEX_HALF) & ~int(StatusFlags.UNDEFINED))


def without_sign(flags: StatusFlags) -> StatusFlags:
    return StatusFlags(int(flags) & ~int(StatusFlags.NEGATIVE))
