"""Column validators running check digit routines over Polars frames."""

from checkdigits.validators.base import (
    ColumnNotFoundError,
    ColumnValidator,
    ErrorContext,
    ValidationIssue,
    ValidationResult,
    Validator,
    ValidatorConfig,
    ValidatorExecutionResult,
)
from checkdigits.validators.registry import ValidatorRegistry, register_validator, registry
from checkdigits.validators.checksum import (
    ABAValidator,
    CASValidator,
    CheckDigitValidator,
    CUSIPValidator,
    EAN13Validator,
    ECNumberValidator,
    GermanTaxIdValidator,
    ISBNValidator,
    ISINValidator,
    ISSNValidator,
    LuhnValidator,
    SEDOLValidator,
    VerhoeffValidator,
)
from checkdigits.validators.financial import IBANValidator, VATValidator


def get_validator(name: str) -> type[Validator]:
    """Get a validator class by name."""
    return registry.get(name)


__all__ = [
    # Base
    "ColumnNotFoundError",
    "ColumnValidator",
    "ErrorContext",
    "ValidationIssue",
    "ValidationResult",
    "Validator",
    "ValidatorConfig",
    "ValidatorExecutionResult",
    # Registry
    "ValidatorRegistry",
    "get_validator",
    "register_validator",
    "registry",
    # Checksum
    "ABAValidator",
    "CASValidator",
    "CheckDigitValidator",
    "CUSIPValidator",
    "EAN13Validator",
    "ECNumberValidator",
    "GermanTaxIdValidator",
    "ISBNValidator",
    "ISINValidator",
    "ISSNValidator",
    "LuhnValidator",
    "SEDOLValidator",
    "VerhoeffValidator",
    # Financial
    "IBANValidator",
    "VATValidator",
]
