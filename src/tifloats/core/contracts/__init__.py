"""
Contract Validation Module

Модуль для валидации JSON контрактов tifloats.
"""

from .validators import (
    ContractValidator,
    FloatRecordValidator,
    SchemaLoader,
    get_schema_loader,
    validate_float_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "FloatRecordValidator",
    # Functions
    "get_schema_loader",
    "validate_float_record",
]
