"""Irish VAT number.

Seven digits and a check letter, optionally followed by a second letter
(numbers issued since 2013). The second letter takes part in the check:
its position in ``EXTRA_LETTERS`` is weighted 9.
"""

from __future__ import annotations

from checkdigits.routines.base import ModulusCheckDigit, is_blank, is_digit
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidCharacterError,
    InvalidLengthError,
    MissingCodeError,
    UnsupportedCheckDigitValueError,
    ZeroSumError,
)


class VATidIECheckDigit(ModulusCheckDigit):
    """Irish VAT check letter: weights 8 down to 2, modulus 23.

    ``calculate`` takes the 7 digits, or the 7 digits followed by the
    extra letter; the check letter goes between them.
    """

    name = "vat.ie"

    LEN = 7
    EXTRA_POS = 8
    EXTRA_WEIGHT = 9
    MODULUS_23 = 23
    CHECK_CHARACTER = "WABCDEFGHIJKLMNOPQRSTUV"
    EXTRA_LETTERS = "WABCDEFGHI"

    def __init__(self) -> None:
        super().__init__(self.MODULUS_23)

    def to_int(self, character: str, left_pos: int, right_pos: int) -> int:
        if left_pos == self.EXTRA_POS:
            if character not in self.EXTRA_LETTERS:
                raise InvalidCharacterError(left_pos, character)
            return self.EXTRA_LETTERS.index(character)
        return super().to_int(character, left_pos, right_pos)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        if left_pos == self.EXTRA_POS:
            return char_value * self.EXTRA_WEIGHT
        return char_value * (9 - left_pos)

    def to_check_digit(self, char_value: int) -> str:
        if 0 <= char_value < len(self.CHECK_CHARACTER):
            return self.CHECK_CHARACTER[char_value]
        raise UnsupportedCheckDigitValueError(char_value)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) not in (self.LEN, self.LEN + 1):
            raise InvalidLengthError(len(code))
        digits = code[: self.LEN]
        if all(is_digit(c) for c in digits) and int(digits) == 0:
            raise ZeroSumError()
        return self.to_check_digit(self.calculate_modulus(code, True))

    def is_valid(self, code: str) -> bool:
        if is_blank(code):
            return False
        try:
            if len(code) == self.LEN + 1:
                return self.calculate(code[: self.LEN]) == code[self.LEN]
            if len(code) == self.LEN + 2:
                return self.calculate(code[: self.LEN] + code[self.LEN + 1]) == code[self.LEN]
        except CheckDigitError:
            return False
        return False


VATID_IE_CHECK_DIGIT = VATidIECheckDigit()
