"""Backends — реализации арифметического контракта CalculatorFloat.

- Backend.DECIMAL: packed-decimal Float (эмуляция железа, по умолчанию)
- Backend.NATIVE: NativeFloat поверх double (только для сравнения производительности)

Engine связывает EngineConfig целиком: backend выбирает класс значений,
policy применяется к каждому литералу и каждой операции.
"""

import logging
from dataclasses import dataclass

from tifloats.backends.contract import CalculatorFloat
from tifloats.backends.native import NativeFloat
from tifloats.core.config import DEFAULT_CONFIG, Backend, EngineConfig
from tifloats.core.domain.tifloat import Float

logger = logging.getLogger(__name__)

_BACKENDS: dict[Backend, type] = {
    Backend.DECIMAL: Float,
    Backend.NATIVE: NativeFloat,
}


def resolve_backend(config: EngineConfig = DEFAULT_CONFIG) -> type:
    """Класс реализации для config.backend."""
    backend = _BACKENDS[config.backend]
    logger.debug("Resolved backend %s -> %s", config.backend.value, backend.__name__)
    return backend


@dataclass(frozen=True)
class Engine:
    """
    Арифметика с backend'ом и политикой валидации из конфигурации.

    Example:
        >>> engine = Engine(EngineConfig(policy="trusted"))
        >>> engine.mul(engine.new(False, 99, 0x10000000000000),
        ...            engine.new(False, 50, 0x10000000000000)).exponent
        21
    """

    config: EngineConfig = DEFAULT_CONFIG

    @property
    def backend(self) -> type:
        return resolve_backend(self.config)

    def new(self, negative: bool, exponent: int, mantissa: int) -> CalculatorFloat:
        """Литерал выбранного backend'а (аналог Float.new)."""
        return self.backend.new(negative, exponent, mantissa, self.config.policy)

    def add(self, a: CalculatorFloat, b: CalculatorFloat) -> CalculatorFloat:
        return a.try_add(b, policy=self.config.policy)

    def sub(self, a: CalculatorFloat, b: CalculatorFloat) -> CalculatorFloat:
        return a.try_sub(b, policy=self.config.policy)

    def mul(self, a: CalculatorFloat, b: CalculatorFloat) -> CalculatorFloat:
        return a.try_mul(b, policy=self.config.policy)

    def div(self, a: CalculatorFloat, b: CalculatorFloat) -> CalculatorFloat:
        return a.try_div(b, policy=self.config.policy)


__all__ = [
    "CalculatorFloat",
    "Engine",
    "NativeFloat",
    "resolve_backend",
]
