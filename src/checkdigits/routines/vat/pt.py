"""Portuguese VAT number (NIF): 9 digits."""

from __future__ import annotations

from checkdigits.routines.base import is_blank
from checkdigits.routines.errors import CheckDigitError, InvalidLengthError, MissingCodeError
from checkdigits.routines.modulus import Modulus11XCheckDigit


class VATidPTCheckDigit(Modulus11XCheckDigit):
    """Portuguese VAT check digit: modulus 11 where 10 is written as ``0``."""

    name = "vat.pt"

    LEN = 9

    def to_check_digit(self, char_value: int) -> str:
        return "0" if char_value == self.X else super().to_check_digit(char_value)

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


VATID_PT_CHECK_DIGIT = VATidPTCheckDigit()
