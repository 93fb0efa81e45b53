from specval.engine.engine import (
    Validatable,
    ValidationEngine,
    ValidationResult,
    configure,
    get_engine,
    is_nested_validatable,
)

__all__ = [
    "Validatable",
    "ValidationEngine",
    "ValidationResult",
    "configure",
    "get_engine",
    "is_nested_validatable",
]
