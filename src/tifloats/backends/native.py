"""
NativeFloat — Backend на native double

Используется только для сравнения производительности с packed-decimal
движком: арифметика IEEE 754 без эмуляции округлений калькулятора.

Отличия от Float:
- переполнения нет (результат может стать inf), поэтому policy не влияет
  на результат
- mark_complex_half — no-op
- деление на ноль — DivideByZeroError, как и у Float
- знак частного, как и у Float, берётся только от делимого
"""

import math
from dataclasses import dataclass

from tifloats.core.config import ValidationPolicy
from tifloats.core.domain.tifloat import Float
from tifloats.core.errors import DivideByZeroError


@dataclass
class NativeFloat:
    """Обёртка над float с контрактом CalculatorFloat."""

    value: float

    @classmethod
    def new(
        cls,
        negative: bool,
        exponent: int,
        mantissa: int,
        policy: ValidationPolicy = ValidationPolicy.CHECKED,
    ) -> "NativeFloat":
        """Тот же литерал, что и Float.new, с теми же проверками."""
        return cls.from_float(Float.new(negative, exponent, mantissa, policy))

    @classmethod
    def from_float(cls, value: Float) -> "NativeFloat":
        """Ближайший double к значению packed-decimal Float."""
        return cls(float(value))

    def is_negative(self) -> bool:
        # Как is_sign_negative: учитывает -0.0
        return math.copysign(1.0, self.value) < 0

    def negate(self) -> None:
        self.value = -self.value

    def mark_complex_half(self) -> None:
        pass

    def try_add(
        self, other: "NativeFloat", policy: ValidationPolicy = ValidationPolicy.CHECKED
    ) -> "NativeFloat":
        return NativeFloat(self.value + other.value)

    def try_sub(
        self, other: "NativeFloat", policy: ValidationPolicy = ValidationPolicy.CHECKED
    ) -> "NativeFloat":
        return NativeFloat(self.value - other.value)

    def try_mul(
        self, other: "NativeFloat", policy: ValidationPolicy = ValidationPolicy.CHECKED
    ) -> "NativeFloat":
        return NativeFloat(self.value * other.value)

    def try_div(
        self, other: "NativeFloat", policy: ValidationPolicy = ValidationPolicy.CHECKED
    ) -> "NativeFloat":
        try:
            quotient = self.value / other.value
        except ZeroDivisionError as e:
            raise DivideByZeroError(f"Division of {self.value!r} by zero") from e

        return NativeFloat(math.copysign(abs(quotient), self.value))

    def __lt__(self, other: "NativeFloat") -> bool:
        if not isinstance(other, NativeFloat):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: "NativeFloat") -> bool:
        if not isinstance(other, NativeFloat):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: "NativeFloat") -> bool:
        if not isinstance(other, NativeFloat):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: "NativeFloat") -> bool:
        if not isinstance(other, NativeFloat):
            return NotImplemented
        return self.value >= other.value

    def __float__(self) -> float:
        return self.value
