"""Polish VAT number (NIP): 10 digits."""

from __future__ import annotations

from checkdigits.routines.base import MODULUS_11, ModulusCheckDigit, is_blank
from checkdigits.routines.errors import CheckDigitError, InvalidLengthError, MissingCodeError


class VATidPLCheckDigit(ModulusCheckDigit):
    """Polish VAT check digit: ``sum % 11`` over weights 6, 5, 7, 2, 3, 4, 5, 6, 7.

    A remainder of 10 is never issued.
    """

    name = "vat.pl"

    LEN = 10
    POSITION_WEIGHT = (6, 5, 7, 2, 3, 4, 5, 6, 7)

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.POSITION_WEIGHT[left_pos - 1]

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        return self.to_check_digit(self.calculate_modulus(code, False))

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False


VATID_PL_CHECK_DIGIT = VATidPLCheckDigit()
