"""Dutch VAT number (btw-id): 9 digits, ``B`` and a 2-digit suffix.

The check covers the 9 digits only. The suffix ``B00`` is not issued.
"""

from __future__ import annotations

from checkdigits.routines.base import is_blank, to_number
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidLengthError,
    MissingCodeError,
    UnsupportedCheckDigitValueError,
    ZeroSumError,
)
from checkdigits.routines.modulus import Modulus11XCheckDigit


class VATidNLCheckDigit(Modulus11XCheckDigit):
    """Dutch VAT check digit.

    The first 8 digits are weighted 9 down to 2 and the check digit is
    the sum modulo 11. A remainder of 10 is never issued.
    """

    name = "vat.nl"

    LEN = 9
    SUFFIX_LEN = 3

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        if left_pos < self.LEN:
            return char_value * right_pos
        return 0

    def to_check_digit(self, char_value: int) -> str:
        if char_value == self.X:
            raise UnsupportedCheckDigitValueError(char_value)
        return super().to_check_digit(char_value)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        if to_number(code) == 0:
            raise ZeroSumError()
        return self.to_check_digit(self.calculate_modulus(code, False))

    def is_valid(self, code: str) -> bool:
        if is_blank(code):
            return False
        if len(code) == self.LEN + self.SUFFIX_LEN:
            if code[self.LEN] != "B" or code.endswith("B00"):
                return False
            code = code[: self.LEN]
        if len(code) != self.LEN:
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False


VATID_NL_CHECK_DIGIT = VATidNLCheckDigit()
