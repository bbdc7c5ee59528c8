"""Financial and tax identifier column validators.

This module provides validators for:
- IBAN (International Bank Account Number)
- VATIN (EU VAT identification number)
"""

from typing import Any

from checkdigits.codes import VATIN_VALIDATOR, VATINValidator
from checkdigits.routines import IBAN_CHECK_DIGIT
from checkdigits.types import Severity
from checkdigits.validators.base import ColumnValidator
from checkdigits.validators.registry import register_validator


@register_validator
class IBANValidator(ColumnValidator):
    """Validates IBAN (International Bank Account Number).

    IBAN validation includes:
    - Country code check (2 letters, known country)
    - Length validation per country
    - Check digits validation (ISO 7064 MOD 97-10)

    Sample values in issues are masked.

    Example:
        validator = IBANValidator(
            column="bank_account",
            allowed_countries=["DE", "FR", "GB"],
        )
    """

    name = "iban"
    category = "financial"

    # IBAN lengths by country (ISO 3166-1 alpha-2)
    IBAN_LENGTHS: dict[str, int] = {
        "AL": 28, "AD": 24, "AT": 20, "AZ": 28, "BH": 22, "BY": 28,
        "BE": 16, "BA": 20, "BR": 29, "BG": 22, "CR": 22, "HR": 21,
        "CY": 28, "CZ": 24, "DK": 18, "DO": 28, "TL": 23, "EE": 20,
        "FO": 18, "FI": 18, "FR": 27, "GE": 22, "DE": 22, "GI": 23,
        "GR": 27, "GL": 18, "GT": 28, "HU": 28, "IS": 26, "IQ": 23,
        "IE": 22, "IL": 23, "IT": 27, "JO": 30, "KZ": 20, "XK": 20,
        "KW": 30, "LV": 21, "LB": 28, "LI": 21, "LT": 20, "LU": 20,
        "MK": 19, "MT": 31, "MR": 27, "MU": 30, "MC": 27, "MD": 24,
        "ME": 22, "NL": 18, "NO": 15, "PK": 24, "PS": 29, "PL": 28,
        "PT": 25, "QA": 29, "RO": 24, "SM": 27, "SA": 24, "RS": 22,
        "SC": 31, "SK": 24, "SI": 19, "ES": 24, "SE": 24, "CH": 21,
        "TN": 24, "TR": 26, "UA": 29, "AE": 23, "GB": 22, "VA": 22,
        "VG": 24,
    }

    def __init__(
        self,
        column: str,
        allowed_countries: list[str] | None = None,
        **kwargs: Any,
    ):
        """Initialize IBAN validator.

        Args:
            column: Column containing IBANs
            allowed_countries: List of allowed country codes (None = all)
            **kwargs: Additional config
        """
        kwargs.setdefault("separators", " -")
        super().__init__(column=column, ignore_case=True, **kwargs)
        self.allowed_countries = (
            [c.upper() for c in allowed_countries]
            if allowed_countries
            else None
        )

    def validate_value(self, value: str) -> bool:
        country = value[:2]
        expected_length = self.IBAN_LENGTHS.get(country)
        if expected_length is None or len(value) != expected_length:
            return False

        if self.allowed_countries and country not in self.allowed_countries:
            return False

        return IBAN_CHECK_DIGIT.is_valid(value)

    def _format_samples(self, samples: list[Any]) -> list[Any]:
        return [f"{str(s)[:4]}****{str(s)[-4:]}" if len(str(s)) > 8 else "****" for s in samples]

    def _issue_type(self) -> str:
        return "invalid_iban"

    def _expected(self) -> str | None:
        return "Valid IBAN with correct checksum"

    def _calculate_severity(
        self,
        ratio: float,
        thresholds: tuple[float, float, float] = (0.1, 0.05, 0.01),
    ) -> Severity:
        return super()._calculate_severity(ratio, thresholds)


@register_validator
class VATValidator(ColumnValidator):
    """Validates EU VAT identification numbers.

    Each value must match the format registered for its country prefix
    and carry valid check digit(s). ``GR`` is accepted as an alias of
    the Greek ``EL`` prefix.

    Example:
        validator = VATValidator(
            column="vat_number",
            allowed_countries=["DE", "FR", "IT"],
        )
    """

    name = "vat"
    category = "tax"

    def __init__(
        self,
        column: str,
        allowed_countries: list[str] | None = None,
        strict_format: bool = True,
        vatin_validator: VATINValidator = VATIN_VALIDATOR,
        **kwargs: Any,
    ):
        """Initialize VAT validator.

        Args:
            column: Column containing VAT numbers
            allowed_countries: List of allowed country codes (None = all)
            strict_format: Whether to require the country format, not just
                valid check digits
            vatin_validator: Format table and check digit dispatcher
            **kwargs: Additional config
        """
        kwargs.setdefault("separators", " -.")
        super().__init__(column=column, ignore_case=True, **kwargs)
        self.allowed_countries = (
            [self._normalize_country(c.upper()) for c in allowed_countries]
            if allowed_countries
            else None
        )
        self.strict_format = strict_format
        self.vatin_validator = vatin_validator

    @staticmethod
    def _normalize_country(country: str) -> str:
        # Greece uses EL instead of GR
        return "EL" if country == "GR" else country

    def _normalize(self, vat: str) -> str:
        return self._normalize_country(vat[:2]) + vat[2:]

    def validate_value(self, value: str) -> bool:
        vat = self._normalize(value)

        if self.allowed_countries and vat[:2] not in self.allowed_countries:
            return False

        if self.strict_format:
            return self.vatin_validator.is_valid(vat)
        return self.vatin_validator.check_digit.is_valid(vat)

    def _issue_type(self) -> str:
        return "invalid_vat_number"

    def _expected(self) -> str | None:
        return "Valid EU VAT number"

    def _calculate_severity(
        self,
        ratio: float,
        thresholds: tuple[float, float, float] = (0.1, 0.05, 0.01),
    ) -> Severity:
        return super()._calculate_severity(ratio, thresholds)
