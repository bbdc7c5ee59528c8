"""Austrian VAT number (UID): ``U`` followed by 8 digits."""

from __future__ import annotations

from checkdigits.routines.base import MODULUS_10, ModulusCheckDigit, is_blank, to_number
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidCodeError,
    MissingCodeError,
    ZeroSumError,
)


class VATidATCheckDigit(ModulusCheckDigit):
    """Austrian VAT check digit.

    Digits in odd positions count as they are; digits in even positions
    count as ``d // 5 + (d * 2) % 10``. The check digit is
    ``(10 - (sum + 4) % 10) % 10``.

    Codes are given without the ``AT`` prefix but with the leading ``U``.
    """

    name = "vat.at"

    PREFIX = "U"
    LEN = 8

    def __init__(self) -> None:
        super().__init__(MODULUS_10)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        if left_pos >= self.LEN:
            return 0
        if left_pos % 2 == 1:
            return char_value
        return char_value // 5 + (char_value * 2) % 10

    def calculate_modulus(self, code: str, includes_check_digit: bool) -> int:
        total = 0
        for i, character in enumerate(code):
            left_pos = i + 1
            char_value = self.to_int(character, left_pos, len(code) - i)
            total += self.weighted_value(char_value, left_pos, len(code) - i)
        if total == 0:
            raise ZeroSumError()
        return (total + 4) % self.modulus

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if not code.startswith(self.PREFIX):
            raise InvalidCodeError(code, f"must start with '{self.PREFIX}'")
        digits = code[len(self.PREFIX):]
        if to_number(digits) == 0:
            raise ZeroSumError()
        return super().calculate(digits)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != len(self.PREFIX) + self.LEN:
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False


VATID_AT_CHECK_DIGIT = VATidATCheckDigit()
