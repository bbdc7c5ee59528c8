"""Estonian VAT number (KMKR): 9 digits."""

from __future__ import annotations

from checkdigits.routines.base import MODULUS_10, ModulusCheckDigit, is_blank
from checkdigits.routines.errors import CheckDigitError, InvalidLengthError, MissingCodeError


class VATidEECheckDigit(ModulusCheckDigit):
    """Estonian VAT check digit: weights 3, 7, 1 repeating, modulus 10."""

    name = "vat.ee"

    LEN = 9
    POSITION_WEIGHT = (3, 7, 1)

    def __init__(self) -> None:
        super().__init__(MODULUS_10)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        if left_pos >= self.LEN:
            return 0
        return char_value * self.POSITION_WEIGHT[(left_pos - 1) % len(self.POSITION_WEIGHT)]

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


VATID_EE_CHECK_DIGIT = VATidEECheckDigit()
