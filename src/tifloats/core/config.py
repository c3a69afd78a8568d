"""
Config — Конфигурация движка tifloats

Два независимых параметра:
- ValidationPolicy: checked (по умолчанию) или trusted-input
- Backend: packed-decimal движок или native double (для сравнения производительности)

Выбор делается встраивающим приложением при конфигурации,
ядро не содержит условной компиляции/глобального состояния.
Конфигурация применяется через tifloats.backends.Engine.
"""

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================


class ValidationPolicy(str, Enum):
    """
    Политика валидации движка.

    CHECKED: проверка цифр мантиссы и диапазона экспоненты, FloatOverflowError
        при выходе за диапазон.
    TRUSTED: входы считаются валидными; байт экспоненты оборачивается по модулю
        256, как у исходного железа, без проверок диапазона.
    """

    CHECKED = "checked"
    TRUSTED = "trusted"


class Backend(str, Enum):
    """Реализация арифметического контракта."""

    DECIMAL = "decimal"
    NATIVE = "native"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация движка.

    Значения enum можно передавать строками ("checked", "native"),
    они приводятся к enum при создании.
    """

    policy: ValidationPolicy = ValidationPolicy.CHECKED
    backend: Backend = Backend.DECIMAL

    def __post_init__(self) -> None:
        # frozen: приведение через object.__setattr__
        object.__setattr__(self, "policy", ValidationPolicy(self.policy))
        object.__setattr__(self, "backend", Backend(self.backend))

    @property
    def is_checked(self) -> bool:
        return self.policy == ValidationPolicy.CHECKED


DEFAULT_CONFIG = EngineConfig()
