"""Danish VAT number (CVR): 8 digits, the last one a check digit."""

from __future__ import annotations

from checkdigits.routines.base import MODULUS_11, ModulusCheckDigit, is_blank
from checkdigits.routines.errors import InvalidLengthError, MissingCodeError


class VATidDKCheckDigit(ModulusCheckDigit):
    """Danish VAT check digit: the weighted sum must be divisible by 11."""

    name = "vat.dk"

    LEN = 8
    POSITION_WEIGHT = (2, 7, 6, 5, 4, 3, 2, 1)

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.POSITION_WEIGHT[left_pos - 1]

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        return super().calculate(code)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        return super().is_valid(code)


VATID_DK_CHECK_DIGIT = VATidDKCheckDigit()
