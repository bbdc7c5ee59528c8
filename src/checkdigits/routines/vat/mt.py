"""Maltese VAT number: 6 digits and 2 check digits."""

from __future__ import annotations

from checkdigits.routines.base import ModulusCheckDigit, is_blank
from checkdigits.routines.errors import CheckDigitError, InvalidLengthError, MissingCodeError


class VATidMTCheckDigit(ModulusCheckDigit):
    """Maltese VAT check digits: ``37 - sum % 37`` over weights 3, 4, 6, 7, 8, 9."""

    name = "vat.mt"

    LEN = 8
    CHECK_DIGIT_LEN = 2
    MODULUS_37 = 37
    POSITION_WEIGHT = (3, 4, 6, 7, 8, 9)

    def __init__(self) -> None:
        super().__init__(self.MODULUS_37)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.POSITION_WEIGHT[left_pos - 1]

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - self.CHECK_DIGIT_LEN:
            raise InvalidLengthError(len(code))
        return self.to_check_digit(self.modulus - self.calculate_modulus(code, False))

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        try:
            return self.calculate(code[: -self.CHECK_DIGIT_LEN]) == code[-self.CHECK_DIGIT_LEN:]
        except CheckDigitError:
            return False

    def to_check_digit(self, char_value: int) -> str:
        return f"{char_value:02d}"


VATID_MT_CHECK_DIGIT = VATidMTCheckDigit()
