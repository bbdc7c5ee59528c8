"""checkdigits - Check digit routines and identifier validation powered by Polars."""

from checkdigits.api import calculate, check, check_vatin, is_valid
from checkdigits.codes import VATIN_VALIDATOR, VATINFormat, VATINValidator
from checkdigits.report import Report
from checkdigits.routines import (
    CheckDigit,
    CheckDigitError,
    UnknownRoutineError,
    get_check_digit,
    list_routines,
)
from checkdigits.rules import ColumnRule, RuleFileError, RuleSet, infer_rules
from checkdigits.types import Severity

try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("checkdigits")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    # API
    "calculate",
    "check",
    "check_vatin",
    "is_valid",
    "infer_rules",
    # Routines
    "CheckDigit",
    "CheckDigitError",
    "UnknownRoutineError",
    "get_check_digit",
    "list_routines",
    # VATIN
    "VATIN_VALIDATOR",
    "VATINFormat",
    "VATINValidator",
    # Rules and reports
    "ColumnRule",
    "RuleFileError",
    "RuleSet",
    "Report",
    "Severity",
]
