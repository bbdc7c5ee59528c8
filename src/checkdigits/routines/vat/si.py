"""Slovenian VAT number (ID za DDV): 8 digits."""

from __future__ import annotations

from checkdigits.routines.base import is_blank
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidLengthError,
    MissingCodeError,
    UnsupportedCheckDigitValueError,
)
from checkdigits.routines.modulus import Modulus11XCheckDigit


class VATidSICheckDigit(Modulus11XCheckDigit):
    """Slovenian VAT check digit.

    Weight = right position, check value ``(11 - sum % 11) % 11``. A
    check value of 10 is written as 0 and a check value of 0 is never
    issued.
    """

    name = "vat.si"

    LEN = 8

    def to_check_digit(self, char_value: int) -> str:
        if char_value == 0:
            raise UnsupportedCheckDigitValueError(char_value)
        return super().to_check_digit(char_value % self.X)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        return super().calculate(code)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False


VATID_SI_CHECK_DIGIT = VATidSICheckDigit()
