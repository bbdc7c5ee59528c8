"""Greek VAT number (AFM): 9 digits."""

from __future__ import annotations

from checkdigits.routines.base import MODULUS_10, MODULUS_11, ModulusCheckDigit, is_blank, to_number
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidLengthError,
    MissingCodeError,
    ZeroSumError,
)


class VATidELCheckDigit(ModulusCheckDigit):
    """Greek VAT check digit.

    Each digit is weighted by a power of two, ``2 ** (right_pos - 1)``,
    so the body reads as a binary-weighted number. The check digit is
    ``sum % 11 % 10``.
    """

    name = "vat.el"

    LEN = 9

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        if left_pos >= self.LEN:
            return 0
        return char_value * 2 ** (right_pos - 1)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        if to_number(code) == 0:
            raise ZeroSumError()
        return self.to_check_digit(self.calculate_modulus(code, False) % MODULUS_10)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False


VATID_EL_CHECK_DIGIT = VATidELCheckDigit()
