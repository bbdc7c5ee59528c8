"""VATIN format validation.

A VATIN is valid when it matches the format registered for its country
prefix (a regular expression plus a maximum length) and its check
digit(s) pass the national routine.

Example:
    from checkdigits.codes import VATIN_VALIDATOR

    VATIN_VALIDATOR.is_valid("ATU13585627")       # True
    VATIN_VALIDATOR.check("ATU13585628").reason   # "check digit mismatch"
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from checkdigits.routines.base import CheckDigit
from checkdigits.routines.vat import VATIN_CHECK_DIGIT

logger = logging.getLogger("checkdigits.codes")


COUNTRY_CODE_LEN = 2


# ============================================================================
# Formats
# ============================================================================

@dataclass(frozen=True)
class VATINFormat:
    """Format of the VATINs of one country.

    Attributes:
        country_code: 2-letter upper-case prefix
        max_length: Maximum length of the full VATIN, prefix included
        pattern: Regular expression for the part after the prefix
        other_country_codes: Further prefixes sharing the same format
    """

    MIN_LEN = 10
    MAX_LEN = 16

    country_code: str
    max_length: int
    pattern: str
    other_country_codes: tuple[str, ...] = ()
    _regexes: tuple[re.Pattern[str], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not (len(self.country_code) == COUNTRY_CODE_LEN and self.country_code.isalpha()
                and self.country_code.isupper()):
            raise ValueError(
                f"Invalid country code '{self.country_code}': must be exactly 2 upper-case letters"
            )
        if not self.MIN_LEN <= self.max_length <= self.MAX_LEN:
            raise ValueError(
                f"Invalid length {self.max_length}: must be in range "
                f"{self.MIN_LEN} to {self.MAX_LEN} inclusive"
            )
        prefixes = (self.country_code, *self.other_country_codes)
        object.__setattr__(
            self,
            "_regexes",
            tuple(re.compile(re.escape(prefix) + self.pattern) for prefix in prefixes),
        )

    def matches(self, code: str) -> bool:
        """Check a full VATIN against the length limit and the pattern."""
        if len(code) > self.max_length:
            return False
        return any(regex.fullmatch(code) for regex in self._regexes)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "country_code": self.country_code,
            "max_length": self.max_length,
            "pattern": self.pattern,
        }
        if self.other_country_codes:
            result["other_country_codes"] = list(self.other_country_codes)
        return result


# Foreign companies selling to consumers in the EU may use the "EU" prefix
# (e.g. EU826010755); no check digit routine exists for it.
DEFAULT_FORMATS: tuple[VATINFormat, ...] = (
    VATINFormat("AT", 11, r"U[0-9]{8}"),
    VATINFormat("BE", 12, r"[0-1][0-9]{9}"),
    VATINFormat("BG", 12, r"[0-9]?[0-9]{9}"),
    VATINFormat("CY", 11, r"[013459][0-9]{7}[A-Z]"),
    VATINFormat("CZ", 12, r"[0-9]{8,10}"),
    VATINFormat("DE", 11, r"[0-9]{9}"),
    VATINFormat("DK", 10, r"[1-9][0-9]{7}"),
    VATINFormat("EE", 11, r"[0-9]{9}"),
    VATINFormat("EL", 11, r"[0-9]{9}"),
    VATINFormat("ES", 11, r"[A-Z0-9][0-9]{7}[A-Z0-9]"),
    VATINFormat("EU", 11, r"[0-9]{9}"),
    VATINFormat("FI", 10, r"[0-9]{8}"),
    VATINFormat("FR", 13, r"[A-Z0-9]{2}[0-9]{9}"),
    VATINFormat("HR", 13, r"[0-9]{11}"),
    VATINFormat("HU", 10, r"[0-9]{8}"),
    VATINFormat("IE", 11, r"[0-9]{7}[A-W][A-I]?"),
    VATINFormat("IT", 13, r"[0-9]{11}"),
    # 12 digits for temporarily registered taxpayers, 11th digit is 1
    VATINFormat("LT", 14, r"[0-9]{9}(?:[0-9]1[0-9])?"),
    VATINFormat("LU", 13, r"[0-9]{8}"),
    VATINFormat("LV", 13, r"[0-9]{11}"),
    VATINFormat("MT", 14, r"[0-9]{8}"),
    VATINFormat("NL", 14, r"[0-9]{9}B[0-9]{2}"),
    VATINFormat("PL", 12, r"[0-9]{10}"),
    VATINFormat("PT", 11, r"[0-9]{9}"),
    VATINFormat("RO", 12, r"[1-9][0-9]{1,9}"),
    VATINFormat("SE", 14, r"[0-9]{10}01"),
    VATINFormat("SI", 10, r"[1-9][0-9]{7}"),
    VATINFormat("SK", 12, r"[1-9][0-9][2-47-9][0-9]{7}"),
    VATINFormat("XI", 14, r"(?:[0-9]{3})?[0-9]{9}"),
)


# ============================================================================
# Validator
# ============================================================================

@dataclass
class VATINCheckResult:
    """Outcome of checking one VATIN."""

    code: str
    country_code: str | None
    valid: bool
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "country_code": self.country_code,
            "valid": self.valid,
            "reason": self.reason,
        }


class VATINValidator:
    """Validates VATINs: country format first, then the check digit(s).

    The default instance ``VATIN_VALIDATOR`` is read-only; create a new
    validator to add, replace or remove formats.
    """

    def __init__(
        self,
        formats: tuple[VATINFormat, ...] | list[VATINFormat] = DEFAULT_FORMATS,
        check_digit: CheckDigit = VATIN_CHECK_DIGIT,
    ):
        self._formats: dict[str, VATINFormat] = {}
        for fmt in formats:
            self._formats[fmt.country_code] = fmt
            for other in fmt.other_country_codes:
                self._formats[other] = fmt
        self.check_digit = check_digit
        self._frozen = False

    @property
    def formats(self) -> Mapping[str, VATINFormat]:
        """Country prefix to format, read-only."""
        return MappingProxyType(self._formats)

    def get_format(self, code: str | None) -> VATINFormat | None:
        """Get the format for a VATIN's prefix, or None."""
        if code is None or len(code) < COUNTRY_CODE_LEN:
            return None
        return self._formats.get(code[:COUNTRY_CODE_LEN])

    def has_format(self, code: str | None) -> bool:
        return self.get_format(code) is not None

    def check(self, code: str | None) -> VATINCheckResult:
        """Check a VATIN and report why it fails, if it does."""
        if code is None or len(code) < COUNTRY_CODE_LEN:
            return VATINCheckResult(code or "", None, False, "too short")

        country = code[:COUNTRY_CODE_LEN]
        fmt = self._formats.get(country)
        if fmt is None:
            return VATINCheckResult(code, country, False, f"unknown country '{country}'")
        if not fmt.matches(code):
            return VATINCheckResult(code, country, False, "invalid format")
        if not self.check_digit.is_valid(code):
            logger.debug("%s: format ok, check digit mismatch", code)
            return VATINCheckResult(code, country, False, "check digit mismatch")
        return VATINCheckResult(code, country, True)

    def is_valid(self, code: str | None) -> bool:
        """Check a VATIN's format and check digit(s)."""
        return self.check(code).valid

    def set_format(self, fmt: VATINFormat) -> VATINFormat | None:
        """Add or replace the format for a country.

        Returns:
            The format previously registered for that country, if any

        Raises:
            RuntimeError: On the shared default instance
        """
        self._check_mutable()
        previous = self._formats.get(fmt.country_code)
        self._formats[fmt.country_code] = fmt
        return previous

    def remove_format(self, country_code: str) -> VATINFormat | None:
        """Remove the format for a country, returning it if present."""
        self._check_mutable()
        return self._formats.pop(country_code, None)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("The default VATIN validator cannot be modified")


VATIN_VALIDATOR = VATINValidator()
VATIN_VALIDATOR._frozen = True
