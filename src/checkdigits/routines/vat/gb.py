"""United Kingdom VAT number, also used with the ``XI`` prefix.

9 digits, optionally followed by a 3-digit branch suffix that does not
take part in the check. The last two of the 9 digits are check digits
under one of two schemes:

- old style: ``(sum + check) % 97 == 0``
- new style (from 2010): ``(sum + check + 55) % 97 == 0``

where ``sum`` weights the first 7 digits 8 down to 2.
"""

from __future__ import annotations

from checkdigits.routines.base import CheckDigit, _get_logger, is_blank, parse_digits
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidLengthError,
    MissingCodeError,
    ZeroSumError,
)


class VATidGBCheckDigit(CheckDigit):
    """UK VAT check digits, accepting both schemes."""

    name = "vat.gb"

    LEN = 9
    BRANCH_LEN = 12
    BODY_LEN = 7
    CHECK_DIGIT_LEN = 2
    MODULUS_97 = 97
    NEW_STYLE_OFFSET = 55
    # Sums whose remainder reaches this bound have a new style check
    NEW_STYLE_MIN_REMAINDER = 42

    def __init__(self) -> None:
        self.logger = _get_logger(self.name)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.BODY_LEN:
            raise InvalidLengthError(len(code))
        remainder = self._weighted_sum(code) % self.MODULUS_97
        if remainder >= self.NEW_STYLE_MIN_REMAINDER:
            self.logger.debug("%s: new style check digits", code)
            return f"{self.MODULUS_97 + self.NEW_STYLE_MIN_REMAINDER - remainder:02d}"
        self.logger.debug("%s: old style check digits", code)
        return f"{0 if remainder == 0 else self.MODULUS_97 - remainder:02d}"

    def is_valid(self, code: str) -> bool:
        if is_blank(code):
            return False
        if len(code) == self.BRANCH_LEN:
            code = code[: self.LEN]
        if len(code) != self.LEN:
            return False
        try:
            total = self._weighted_sum(code[: self.BODY_LEN])
            check = parse_digits(code[self.BODY_LEN:])
        except CheckDigitError:
            return False
        return (total + check) % self.MODULUS_97 == 0 or (
            total + check + self.NEW_STYLE_OFFSET
        ) % self.MODULUS_97 == 0

    def _weighted_sum(self, body: str) -> int:
        parse_digits(body)
        total = sum(int(c) * (8 - i) for i, c in enumerate(body))
        if total == 0:
            raise ZeroSumError()
        return total


VATID_GB_CHECK_DIGIT = VATidGBCheckDigit()
