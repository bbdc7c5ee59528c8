"""Cypriot VAT number: 8 digits and a check letter."""

from __future__ import annotations

from checkdigits.routines.base import ModulusCheckDigit, is_blank, to_number
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidCodeError,
    InvalidLengthError,
    MissingCodeError,
    UnsupportedCheckDigitValueError,
    ZeroSumError,
)


class VATidCYCheckDigit(ModulusCheckDigit):
    """Cypriot VAT check letter.

    Digits in odd positions are remapped through ``ODD_POSITION_VALUE``,
    digits in even positions count as they are. The check letter is
    ``A..Z`` indexed by the sum modulo 26. Numbers starting with ``12``
    are not issued.
    """

    name = "vat.cy"

    LEN = 9
    MODULUS_26 = 26
    ODD_POSITION_VALUE = (1, 0, 5, 7, 9, 13, 15, 17, 19, 21)
    CHECK_CHARACTER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    FORBIDDEN_PREFIX = "12"

    def __init__(self) -> None:
        super().__init__(self.MODULUS_26)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        if left_pos % 2 == 0:
            return char_value
        return self.ODD_POSITION_VALUE[char_value]

    def to_check_digit(self, char_value: int) -> str:
        if 0 <= char_value < len(self.CHECK_CHARACTER):
            return self.CHECK_CHARACTER[char_value]
        raise UnsupportedCheckDigitValueError(char_value)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        if code.startswith(self.FORBIDDEN_PREFIX):
            raise InvalidCodeError(code, f"must not start with '{self.FORBIDDEN_PREFIX}'")
        if to_number(code) == 0:
            raise ZeroSumError()
        modulus_result = self.calculate_modulus(code, False)
        self.logger.debug("%s: sum mod 26 = %d", code, modulus_result)
        return self.to_check_digit(modulus_result)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False


VATID_CY_CHECK_DIGIT = VATidCYCheckDigit()
