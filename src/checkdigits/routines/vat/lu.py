"""Luxembourg VAT number: 6 digits and 2 check digits."""

from __future__ import annotations

from checkdigits.routines.base import is_blank, parse_digits
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidLengthError,
    MissingCodeError,
    ZeroSumError,
)
from checkdigits.routines.modulus import Modulus97CheckDigit


class VATidLUCheckDigit(Modulus97CheckDigit):
    """Luxembourg VAT check digits: the body modulo 89."""

    name = "vat.lu"

    LEN = 8
    MODULUS_89 = 89

    def __init__(self) -> None:
        super().__init__(self.MODULUS_89)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - self.CHECK_DIGIT_LEN:
            raise InvalidLengthError(len(code))
        remainder = parse_digits(code) % self.modulus
        if remainder == 0:
            raise ZeroSumError()
        return self.to_check_digit(remainder)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        try:
            return self.calculate(code[: -self.CHECK_DIGIT_LEN]) == code[-self.CHECK_DIGIT_LEN:]
        except CheckDigitError:
            return False


VATID_LU_CHECK_DIGIT = VATidLUCheckDigit()
