"""Latvian VAT number (PVN): 11 digits.

A first digit above 3 marks a legal person. Natural persons use their
personal code, which starts with the birth date ``DDMMYY`` followed by a
century digit (0 = 1800s, 1 = 1900s, 2 = 2000s). Personal codes issued
since 2017 start with ``32`` and carry no date.
"""

from __future__ import annotations

from checkdigits.routines.base import MODULUS_11, ModulusCheckDigit, is_blank, parse_digits
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidCodeError,
    InvalidLengthError,
    MissingCodeError,
    UnsupportedCheckDigitValueError,
    ZeroSumError,
)
from checkdigits.routines.vat._dates import birth_date


class VATidLVCheckDigit(ModulusCheckDigit):
    """Latvian VAT check digit for legal and natural persons."""

    name = "vat.lv"

    LEN = 11
    LEGAL_PERSON_MIN_FIRST_DIGIT = 4
    LEGAL_WEIGHTS = (9, 1, 4, 8, 3, 10, 2, 5, 7, 6)
    PERSONAL_WEIGHTS = (1, 6, 3, 7, 9, 10, 5, 8, 4, 2)
    CENTURIES = {0: 1800, 1: 1900, 2: 2000}

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.LEGAL_WEIGHTS[left_pos - 1]

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        if parse_digits(code) == 0:
            raise ZeroSumError()
        if int(code[0]) >= self.LEGAL_PERSON_MIN_FIRST_DIGIT:
            return self._check_value(3 - self.calculate_modulus(code, False))
        self._check_birth_date(code)
        total = sum(int(c) * w for c, w in zip(code, self.PERSONAL_WEIGHTS))
        return self._check_value(1 - total % MODULUS_11)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False

    def _check_value(self, value: int) -> str:
        if value == -1:
            raise UnsupportedCheckDigitValueError(value)
        return self.to_check_digit(value + MODULUS_11 if value < -1 else value)

    def _check_birth_date(self, code: str) -> None:
        day = int(code[0:2])
        if not 1 <= day <= 31:
            return
        century = self.CENTURIES.get(int(code[6]))
        if century is None:
            raise InvalidCodeError(code, f"invalid century digit {code[6]}")
        born = birth_date(code, century + int(code[4:6]), int(code[2:4]), day)
        self.logger.debug("%s: personal code of a person born %s", code, born.isoformat())


VATID_LV_CHECK_DIGIT = VATidLVCheckDigit()
