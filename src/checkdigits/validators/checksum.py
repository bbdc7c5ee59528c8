"""Check digit column validators.

``CheckDigitValidator`` runs any registered routine over a string column;
the named subclasses fix the routine and the usual separators for common
identifiers (card numbers, ISBNs, securities, chemical registry numbers).
"""

from typing import Any

from checkdigits.routines import CheckDigit, get_check_digit
from checkdigits.types import Severity
from checkdigits.validators.base import ColumnValidator
from checkdigits.validators.registry import register_validator


@register_validator
class CheckDigitValidator(ColumnValidator):
    """Validates a column with a check digit routine.

    Each non-null value is preprocessed (whitespace stripped, separators
    removed, optionally upper-cased) and passed to ``routine.is_valid``.

    Example:
        validator = CheckDigitValidator(
            column="isbn",
            routine="isbn",
            separators=" -",
        )
    """

    name = "check_digit"
    category = "checksum"

    # Routine used when none is passed; None means one is required
    routine_name: str | None = None
    default_separators: str = ""
    expected_format: str | None = None

    def __init__(
        self,
        column: str,
        routine: str | CheckDigit | None = None,
        separators: str | None = None,
        uppercase: bool = False,
        allow_null: bool = True,
        **kwargs: Any,
    ):
        """Initialize check digit validator.

        Args:
            column: Column containing codes
            routine: Routine name (see ``list_routines()``) or instance
            separators: Characters removed before validation
            uppercase: Whether to upper-case values before validation
            allow_null: Whether to allow null and blank values
            **kwargs: Additional config

        Raises:
            UnknownRoutineError: If the routine name is not registered
            ValueError: If no routine is given and the class has no default
        """
        super().__init__(
            column=column,
            ignore_case=uppercase,
            allow_null=allow_null,
            separators=self.default_separators if separators is None else separators,
            **kwargs,
        )
        routine = routine if routine is not None else self.routine_name
        if routine is None:
            raise ValueError(f"{type(self).__name__} requires a routine")
        if isinstance(routine, str):
            self.routine_label = routine
            self.routine = get_check_digit(routine)
        else:
            self.routine_label = getattr(routine, "name", type(routine).__name__)
            self.routine = routine

    def validate_value(self, value: str) -> bool:
        return self.routine.is_valid(value)

    def _issue_type(self) -> str:
        return f"invalid_{self.routine_label.replace('.', '_')}_check_digit"

    def _expected(self) -> str | None:
        return self.expected_format or f"Valid {self.routine_label} check digit"

    def _calculate_severity(
        self,
        ratio: float,
        thresholds: tuple[float, float, float] = (0.1, 0.05, 0.01),
    ) -> Severity:
        # Check digit failures are rarer than general data issues
        return super()._calculate_severity(ratio, thresholds)


# ============================================================================
# Payment
# ============================================================================

@register_validator
class LuhnValidator(CheckDigitValidator):
    """Validates numbers using the Luhn algorithm (mod 10).

    Used for payment card numbers, IMEI numbers and several national
    identification numbers.
    """

    name = "luhn"
    routine_name = "luhn"
    default_separators = " -"
    expected_format = "Valid Luhn checksum"


@register_validator
class VerhoeffValidator(CheckDigitValidator):
    name = "verhoeff"
    routine_name = "verhoeff"
    default_separators = " -"


@register_validator
class ABAValidator(CheckDigitValidator):
    """Validates 9-digit ABA routing transit numbers."""

    name = "aba"
    routine_name = "aba"
    default_separators = " -"
    expected_format = "9-digit ABA routing number"


# ============================================================================
# Publishing
# ============================================================================

@register_validator
class ISBNValidator(CheckDigitValidator):
    """Validates ISBN-10 and ISBN-13 numbers, hyphens and spaces ignored."""

    name = "isbn"
    routine_name = "isbn"
    default_separators = " -"
    expected_format = "ISBN-10 or ISBN-13"

    def __init__(self, column: str, **kwargs: Any):
        kwargs.setdefault("uppercase", True)  # ISBN-10 check character 'x'
        super().__init__(column=column, **kwargs)


@register_validator
class EAN13Validator(CheckDigitValidator):
    name = "ean13"
    routine_name = "ean13"
    default_separators = " -"


@register_validator
class ISSNValidator(CheckDigitValidator):
    """Validates 8-character ISSNs, e.g. ``0317-8471``."""

    name = "issn"
    routine_name = "issn"
    default_separators = " -"
    expected_format = "ISSN (NNNN-NNNC)"

    def __init__(self, column: str, **kwargs: Any):
        kwargs.setdefault("uppercase", True)
        super().__init__(column=column, **kwargs)


# ============================================================================
# Securities
# ============================================================================

@register_validator
class CUSIPValidator(CheckDigitValidator):
    name = "cusip"
    routine_name = "cusip"
    expected_format = "9-character CUSIP"

    def __init__(self, column: str, **kwargs: Any):
        kwargs.setdefault("uppercase", True)
        super().__init__(column=column, **kwargs)


@register_validator
class SEDOLValidator(CheckDigitValidator):
    name = "sedol"
    routine_name = "sedol"
    expected_format = "7-character SEDOL"

    def __init__(self, column: str, **kwargs: Any):
        kwargs.setdefault("uppercase", True)
        super().__init__(column=column, **kwargs)


@register_validator
class ISINValidator(CheckDigitValidator):
    """Validates 12-character ISINs (country prefix, NSIN, check digit)."""

    name = "isin"
    routine_name = "isin"
    expected_format = "12-character ISIN"

    def __init__(self, column: str, **kwargs: Any):
        kwargs.setdefault("uppercase", True)
        super().__init__(column=column, **kwargs)


# ============================================================================
# Chemical
# ============================================================================

@register_validator
class CASValidator(CheckDigitValidator):
    """Validates CAS registry numbers written with hyphens (``7732-18-5``)."""

    name = "cas"
    routine_name = "cas"
    expected_format = "CAS number (NNNNNNN-NN-N)"


@register_validator
class ECNumberValidator(CheckDigitValidator):
    name = "ec_number"
    routine_name = "ec_number"
    expected_format = "EC number (NNN-NNN-N)"


# ============================================================================
# Tax
# ============================================================================

@register_validator
class GermanTaxIdValidator(CheckDigitValidator):
    """Validates 11-digit German tax identification numbers."""

    name = "tid_de"
    routine_name = "tid_de"
    default_separators = " "
    expected_format = "11-digit German tax id"
