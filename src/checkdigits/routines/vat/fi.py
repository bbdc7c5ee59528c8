"""Finnish VAT number (ALV): 8 digits."""

from __future__ import annotations

from checkdigits.routines.base import MODULUS_11, ModulusCheckDigit, is_blank, to_number
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidLengthError,
    MissingCodeError,
    ZeroSumError,
)


class VATidFICheckDigit(ModulusCheckDigit):
    """Finnish VAT check digit: weights 7, 9, 10, 5, 8, 4, 2, modulus 11.

    A remainder of 1 would need the check value 10 and is never issued.
    """

    name = "vat.fi"

    LEN = 8
    POSITION_WEIGHT = (7, 9, 10, 5, 8, 4, 2)

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        if left_pos > len(self.POSITION_WEIGHT):
            return 0
        return char_value * self.POSITION_WEIGHT[left_pos - 1]

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        if to_number(code) == 0:
            raise ZeroSumError()
        return super().calculate(code)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False


VATID_FI_CHECK_DIGIT = VATidFICheckDigit()
