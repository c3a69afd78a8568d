"""
CalculatorFloat — Общий арифметический контракт backend'ов

Обе реализации (packed-decimal Float и native double NativeFloat)
удовлетворяют этому протоколу; встраивающее приложение выбирает
реализацию и политику валидации через EngineConfig (см. Engine).

Общая семантика: знак частного берётся только от делимого,
деление на ноль — DivideByZeroError.
"""

from typing import Protocol, TypeVar, runtime_checkable

from tifloats.core.config import ValidationPolicy

T = TypeVar("T", bound="CalculatorFloat")


@runtime_checkable
class CalculatorFloat(Protocol):
    """Контракт: знак, инверсия, маркер complex-half, checked арифметика, порядок."""

    def is_negative(self) -> bool: ...

    def negate(self) -> None:
        """Инверсия знака на месте."""
        ...

    def mark_complex_half(self) -> None: ...

    def try_add(self: T, other: T, policy: ValidationPolicy = ...) -> T: ...

    def try_sub(self: T, other: T, policy: ValidationPolicy = ...) -> T: ...

    def try_mul(self: T, other: T, policy: ValidationPolicy = ...) -> T: ...

    def try_div(self: T, other: T, policy: ValidationPolicy = ...) -> T: ...

    def __lt__(self: T, other: T) -> bool: ...

    def __le__(self: T, other: T) -> bool: ...
