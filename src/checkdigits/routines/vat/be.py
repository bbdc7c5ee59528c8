"""Belgian VAT number (enterprise number): 10 digits, two check digits."""

from __future__ import annotations

from checkdigits.routines.base import is_blank, parse_digits
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidLengthError,
    MissingCodeError,
    ZeroSumError,
)
from checkdigits.routines.modulus import Modulus97CheckDigit


class VATidBECheckDigit(Modulus97CheckDigit):
    """Belgian VAT check digits: ``97 - (body % 97)``.

    The legacy 9-digit form is the same number without its leading zero,
    so both lengths are accepted.
    """

    name = "vat.be"

    LEN = 10
    LEGACY_LEN = 9

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) not in (self.LEN - self.CHECK_DIGIT_LEN, self.LEGACY_LEN - self.CHECK_DIGIT_LEN):
            raise InvalidLengthError(len(code))
        body = parse_digits(code)
        if body == 0:
            raise ZeroSumError()
        return self.to_check_digit(self.modulus - body % self.modulus)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) not in (self.LEN, self.LEGACY_LEN):
            return False
        try:
            return self.calculate(code[:-self.CHECK_DIGIT_LEN]) == code[-self.CHECK_DIGIT_LEN:]
        except CheckDigitError:
            return False


VATID_BE_CHECK_DIGIT = VATidBECheckDigit()
