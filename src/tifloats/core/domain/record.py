"""
FloatRecord — Инспектируемое представление Float

Immutable Pydantic модель с теми же полями, что и 9-байтовый wire-формат,
но в человекочитаемом виде (несмещённая экспонента, цифры мантиссы строкой).
Соответствует JSON Schema contracts/schema/float_record.json.
"""

from pydantic import BaseModel, Field, field_validator

from tifloats.core.domain.flags import StatusFlags, is_known_status
from tifloats.core.domain.tifloat import EXPONENT_NORM, EXPONENT_RANGE, Float
from tifloats.core.math.bcd import pack_decimal
from tifloats.core.math.mantissa import Mantissa


class FloatRecord(BaseModel):
    """
    Словарное представление Float.

    Пример:
        {"status": 128, "exponent": 5, "mantissa": "55000000000000"}
    """

    status: int = Field(..., ge=0, le=0xFF, description="Статусный байт (знак + маркеры)")
    exponent: int = Field(
        ..., ge=-EXPONENT_RANGE, le=EXPONENT_RANGE, description="Несмещённая экспонента"
    )
    mantissa: str = Field(
        ..., pattern=r"^[0-9]{14}$", description="14 цифр мантиссы, старшая первой"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("status")
    @classmethod
    def validate_status_bits(cls, v: int) -> int:
        """Только известные биты статусного байта."""
        if not is_known_status(v):
            raise ValueError(f"status {v:#04x} contains unknown bits")
        return v

    @classmethod
    def from_float(cls, value: Float) -> "FloatRecord":
        return cls(
            status=int(value.flags),
            exponent=value.unbiased_exponent,
            mantissa="".join(str(digit) for digit in value.mantissa.digits()),
        )

    def to_float(self) -> Float:
        return Float(
            flags=StatusFlags(self.status),
            exponent=self.exponent + EXPONENT_NORM,
            mantissa=Mantissa(pack_decimal(int(self.mantissa))),
        )

    @property
    def is_negative(self) -> bool:
        return bool(self.status & StatusFlags.NEGATIVE)
