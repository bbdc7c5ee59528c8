"""Slovak VAT number (IC DPH): 10 digits divisible by 11."""

from __future__ import annotations

from checkdigits.routines.base import CheckDigit, is_blank, parse_digits
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidLengthError,
    MissingCodeError,
    UnsupportedCheckDigitValueError,
    ZeroSumError,
)


class VATidSKCheckDigit(CheckDigit):
    """Slovak VAT check digit.

    The whole number must be divisible by 11, so the last digit is the
    body modulo 11. Bodies whose remainder is 10 have no valid last digit.
    """

    name = "vat.sk"

    LEN = 10
    MODULUS_11 = 11

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        body = parse_digits(code)
        if body == 0:
            raise ZeroSumError()
        remainder = body % self.MODULUS_11
        if remainder == 10:
            raise UnsupportedCheckDigitValueError(remainder)
        return str(remainder)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        try:
            number = parse_digits(code)
        except CheckDigitError:
            return False
        return number != 0 and number % self.MODULUS_11 == 0


VATID_SK_CHECK_DIGIT = VATidSKCheckDigit()
