"""Romanian VAT number (CIF): 2 to 10 digits."""

from __future__ import annotations

from checkdigits.routines.base import MODULUS_10, MODULUS_11, ModulusCheckDigit, is_blank
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidLengthError,
    MissingCodeError,
    ZeroSumError,
)


class VATidROCheckDigit(ModulusCheckDigit):
    """Romanian VAT check digit.

    The body is left padded with zeros to 9 digits and weighted
    7, 5, 3, 2, 1, 7, 5, 3, 2. The check digit is ``sum * 10 % 11``,
    with 10 written as 0.
    """

    name = "vat.ro"

    MIN_LEN = 2
    LEN = 10
    POSITION_WEIGHT = (7, 5, 3, 2, 1)

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.POSITION_WEIGHT[(left_pos - 1) % len(self.POSITION_WEIGHT)]

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if not self.MIN_LEN - 1 <= len(code) <= self.LEN - 1:
            raise InvalidLengthError(len(code))
        padded = code.zfill(self.LEN - 1)
        total = 0
        for i, character in enumerate(padded):
            total += self.weighted_value(self.to_int(character, i + 1, len(padded) - i), i + 1, len(padded) - i)
        if total == 0:
            raise ZeroSumError()
        value = total * MODULUS_10 % MODULUS_11
        return self.to_check_digit(0 if value == MODULUS_10 else value)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or not self.MIN_LEN <= len(code) <= self.LEN:
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False


VATID_RO_CHECK_DIGIT = VATidROCheckDigit()
