"""Lithuanian VAT number (PVM): 9 digits for legal entities, 12 otherwise."""

from __future__ import annotations

from checkdigits.routines.base import MODULUS_10, MODULUS_11, ModulusCheckDigit, is_blank, parse_digits
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidLengthError,
    MissingCodeError,
    ZeroSumError,
)


class VATidLTCheckDigit(ModulusCheckDigit):
    """Lithuanian VAT check digit.

    First pass weights 1..9 then 1, 2; a remainder of 10 triggers a
    second pass with the weights shifted by two (3..9, 1..4). If the
    second remainder is still 10 the check digit is 0.
    """

    name = "vat.lt"

    LEGAL_LEN = 9
    LEN = 12

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * (left_pos - 7 if left_pos > 7 else left_pos + 2)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) not in (self.LEGAL_LEN - 1, self.LEN - 1):
            raise InvalidLengthError(len(code))
        if parse_digits(code) == 0:
            raise ZeroSumError()
        remainder = sum(int(c) * (i + 1 if i < 9 else i - 8) for i, c in enumerate(code)) % MODULUS_11
        if remainder == MODULUS_10:
            remainder = self.calculate_modulus(code, False)
            self.logger.debug("%s: second pass remainder %d", code, remainder)
            if remainder == MODULUS_10:
                remainder = 0
        return self.to_check_digit(remainder)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) not in (self.LEGAL_LEN, self.LEN):
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False


VATID_LT_CHECK_DIGIT = VATidLTCheckDigit()
