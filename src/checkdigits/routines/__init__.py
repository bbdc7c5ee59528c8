"""Check digit routines.

Every routine is a stateless ``CheckDigit`` with two operations:

- ``calculate(code)``: the check digit(s) for a code body, raising a
  ``CheckDigitError`` on bad input
- ``is_valid(code)``: whether a full code carries correct check digit(s),
  never raising for bad input

Routines are shared singletons, also reachable by name through
``ROUTINES`` / ``get_check_digit``:

    from checkdigits.routines import get_check_digit

    get_check_digit("luhn").calculate("7992739871")   # "3"
    get_check_digit("vatin").is_valid("ATU13585627")  # True
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from checkdigits.routines.base import CheckDigit, ModulusCheckDigit, numeric_value, sum_digits
from checkdigits.routines.chemical import (
    CAS_CHECK_DIGIT,
    EC_INDEX_NUMBER_CHECK_DIGIT,
    EC_NUMBER_CHECK_DIGIT,
    CASNumberCheckDigit,
    ECIndexNumberCheckDigit,
    ECNumberCheckDigit,
)
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidCharacterError,
    InvalidCodeError,
    InvalidCountryCodeError,
    InvalidLengthError,
    MissingCodeError,
    UnsupportedCheckDigitValueError,
    ZeroSumError,
)
from checkdigits.routines.modulus import (
    Modulus11TenCheckDigit,
    Modulus11XCheckDigit,
    Modulus97CheckDigit,
    ModulusCheckXDigit,
    ModulusTenCheckDigit,
)
from checkdigits.routines.payment import (
    ABA_CHECK_DIGIT,
    LUHN_CHECK_DIGIT,
    VERHOEFF_CHECK_DIGIT,
    ABANumberCheckDigit,
    LuhnCheckDigit,
    VerhoeffCheckDigit,
)
from checkdigits.routines.publishing import (
    EAN13_CHECK_DIGIT,
    ISBN10_CHECK_DIGIT,
    ISBN_CHECK_DIGIT,
    ISSN_CHECK_DIGIT,
    EAN13CheckDigit,
    ISBN10CheckDigit,
    ISBNCheckDigit,
    ISSNCheckDigit,
    convert_issn_to_ean13,
    convert_to_isbn13,
)
from checkdigits.routines.securities import (
    CNB_CHECK_DIGIT,
    CUSIP_CHECK_DIGIT,
    IBAN_CHECK_DIGIT,
    ISIN_CHECK_DIGIT,
    SEDOL_CHECK_DIGIT,
    CNBCheckDigit,
    CUSIPCheckDigit,
    IBANCheckDigit,
    ISINCheckDigit,
    SedolCheckDigit,
)
from checkdigits.routines.sirene import SIRENE_VALIDATOR, SireneValidator
from checkdigits.routines.tax_id import TID_DE_CHECK_DIGIT, TidDECheckDigit
from checkdigits.routines.vat import COUNTRY_ROUTINES, VATIN_CHECK_DIGIT, VATINCheckDigit


# ============================================================================
# Routine registry
# ============================================================================

class UnknownRoutineError(KeyError):
    """Raised when no routine is registered under a name."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = available or []
        super().__init__(name)

    def __str__(self) -> str:
        message = f"Unknown check digit routine: '{self.name}'"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        return message


def _build_routines() -> Mapping[str, CheckDigit]:
    routines: dict[str, CheckDigit] = {
        # Generic engines
        "modulus_11x": Modulus11XCheckDigit(),
        "modulus_97": Modulus97CheckDigit(),
        "modulus_11_10": Modulus11TenCheckDigit(),
        # Payment
        "luhn": LUHN_CHECK_DIGIT,
        "verhoeff": VERHOEFF_CHECK_DIGIT,
        "aba": ABA_CHECK_DIGIT,
        # Securities and banking
        "cusip": CUSIP_CHECK_DIGIT,
        "sedol": SEDOL_CHECK_DIGIT,
        "isin": ISIN_CHECK_DIGIT,
        "iban": IBAN_CHECK_DIGIT,
        "cnb": CNB_CHECK_DIGIT,
        # Publishing
        "isbn10": ISBN10_CHECK_DIGIT,
        "ean13": EAN13_CHECK_DIGIT,
        "isbn": ISBN_CHECK_DIGIT,
        "issn": ISSN_CHECK_DIGIT,
        # Chemical
        "cas": CAS_CHECK_DIGIT,
        "ec_number": EC_NUMBER_CHECK_DIGIT,
        "ec_index_number": EC_INDEX_NUMBER_CHECK_DIGIT,
        # Tax
        "tid_de": TID_DE_CHECK_DIGIT,
        "vatin": VATIN_CHECK_DIGIT,
    }
    for country, routine in COUNTRY_ROUTINES.items():
        routines[f"vat_{country.lower()}"] = routine
    return MappingProxyType(routines)


ROUTINES: Mapping[str, CheckDigit] = _build_routines()


def get_check_digit(name: str) -> CheckDigit:
    """Get a routine by its registered name.

    Args:
        name: Routine name, e.g. ``"luhn"``, ``"iban"`` or ``"vat_fr"``

    Returns:
        The shared routine instance

    Raises:
        UnknownRoutineError: If no routine has that name
    """
    try:
        return ROUTINES[name]
    except KeyError:
        raise UnknownRoutineError(name, sorted(ROUTINES)) from None


def list_routines() -> list[str]:
    """List registered routine names, sorted."""
    return sorted(ROUTINES)


__all__ = [
    # Base
    "CheckDigit",
    "ModulusCheckDigit",
    "numeric_value",
    "sum_digits",
    # Errors
    "CheckDigitError",
    "InvalidCharacterError",
    "InvalidCodeError",
    "InvalidCountryCodeError",
    "InvalidLengthError",
    "MissingCodeError",
    "UnsupportedCheckDigitValueError",
    "ZeroSumError",
    # Modulus variants
    "ModulusCheckXDigit",
    "Modulus11XCheckDigit",
    "ModulusTenCheckDigit",
    "Modulus97CheckDigit",
    "Modulus11TenCheckDigit",
    # Named routines
    "LuhnCheckDigit",
    "VerhoeffCheckDigit",
    "ABANumberCheckDigit",
    "CUSIPCheckDigit",
    "SedolCheckDigit",
    "ISINCheckDigit",
    "IBANCheckDigit",
    "CNBCheckDigit",
    "ISBN10CheckDigit",
    "EAN13CheckDigit",
    "ISBNCheckDigit",
    "ISSNCheckDigit",
    "CASNumberCheckDigit",
    "ECNumberCheckDigit",
    "ECIndexNumberCheckDigit",
    "TidDECheckDigit",
    "SireneValidator",
    "VATINCheckDigit",
    # Singletons
    "LUHN_CHECK_DIGIT",
    "VERHOEFF_CHECK_DIGIT",
    "ABA_CHECK_DIGIT",
    "CUSIP_CHECK_DIGIT",
    "SEDOL_CHECK_DIGIT",
    "ISIN_CHECK_DIGIT",
    "IBAN_CHECK_DIGIT",
    "CNB_CHECK_DIGIT",
    "ISBN10_CHECK_DIGIT",
    "EAN13_CHECK_DIGIT",
    "ISBN_CHECK_DIGIT",
    "ISSN_CHECK_DIGIT",
    "CAS_CHECK_DIGIT",
    "EC_NUMBER_CHECK_DIGIT",
    "EC_INDEX_NUMBER_CHECK_DIGIT",
    "TID_DE_CHECK_DIGIT",
    "SIRENE_VALIDATOR",
    "VATIN_CHECK_DIGIT",
    "COUNTRY_ROUTINES",
    # Conversions
    "convert_to_isbn13",
    "convert_issn_to_ean13",
    # Registry
    "ROUTINES",
    "UnknownRoutineError",
    "get_check_digit",
    "list_routines",
]
