"""Check digit routines for chemical substance identifiers.

This module provides:

- CAS Registry Numbers (``7732-18-5``)
- EC numbers of the European Community inventory (``200-001-8``)
- EC index numbers of the CLP regulation (``601-001-00-4``)

CAS and EC index routines ignore ``-`` separators. EC numbers must be
written in their ``ddd-ddd-d`` form to validate.
"""

from __future__ import annotations

import re

from checkdigits.routines.base import (
    MODULUS_10,
    MODULUS_11,
    ModulusCheckDigit,
    is_blank,
    is_digit,
    numeric_value,
)
from checkdigits.routines.errors import CheckDigitError, MissingCodeError
from checkdigits.routines.modulus import ModulusCheckXDigit

SEPARATOR = "-"


def _strip_separators(code: str) -> str:
    return code.replace(SEPARATOR, "")


class CASNumberCheckDigit(ModulusCheckDigit):
    """CAS Registry Number check digit.

    Counting from the right of the body, digits are weighted 1, 2, 3, ...
    and the check digit is the weighted sum modulo 10.

    Example:
        CAS_CHECK_DIGIT.calculate("7732-18")  # "5" (water, 7732-18-5)
    """

    name = "cas"

    MIN_LEN = 5
    MAX_LEN = 10
    POSITION_WEIGHT = (0, 1, 2, 3, 4, 5, 6, 7, 8, 9)

    def __init__(self) -> None:
        super().__init__(MODULUS_10)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.POSITION_WEIGHT[(right_pos - 1) % MODULUS_10]

    def calculate(self, code: str) -> str:
        if is_blank(code) or is_blank(_strip_separators(code)):
            raise MissingCodeError()
        return self.to_check_digit(self.calculate_modulus(_strip_separators(code), False))

    def is_valid(self, code: str) -> bool:
        if is_blank(code):
            return False
        digits = _strip_separators(code)
        if not self.MIN_LEN <= len(digits) <= self.MAX_LEN:
            return False
        try:
            modulus_result = self.calculate_modulus(digits, True)
        except CheckDigitError:
            return False
        return modulus_result == numeric_value(digits[-1])


class ECNumberCheckDigit(ModulusCheckDigit):
    """EC number check digit.

    The six body digits are weighted 1 to 6 from the left and the check
    digit is the weighted sum modulo 11. A remainder of 10 has no
    representation, so such numbers are never issued.
    """

    name = "ec_number"

    LEN = 7
    FORMAT = re.compile(r"^([0-9]{3})-([0-9]{3})-([0-9])$")

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return 0 if left_pos >= self.LEN else char_value * left_pos

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        return self.to_check_digit(self.calculate_modulus(_strip_separators(code), False))

    def is_valid(self, code: str) -> bool:
        if is_blank(code):
            return False
        match = self.FORMAT.match(code)
        if match is None:
            return False
        digits = "".join(match.groups())
        try:
            return self.to_check_digit(self.calculate_modulus(digits, True)) == digits[-1]
        except CheckDigitError:
            return False


class ECIndexNumberCheckDigit(ModulusCheckXDigit):
    """EC index number check digit.

    The eight body digits are weighted 1 to 8 from the left; the check
    character is the weighted sum modulo 11, with ``X`` for 10.
    """

    name = "ec_index_number"

    LEN = 9

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return 0 if left_pos >= self.LEN else char_value * left_pos

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        return self.to_check_digit(self.calculate_modulus(_strip_separators(code), False))

    def is_valid(self, code: str) -> bool:
        if is_blank(code):
            return False
        digits = _strip_separators(code)
        if len(digits) != self.LEN:
            return False
        if not all(is_digit(c) for c in digits[:-1]):
            return False
        try:
            return self.to_check_digit(self.calculate_modulus(digits, True)) == digits[-1]
        except CheckDigitError:
            return False


# Singleton instances
CAS_CHECK_DIGIT = CASNumberCheckDigit()
EC_NUMBER_CHECK_DIGIT = ECNumberCheckDigit()
EC_INDEX_NUMBER_CHECK_DIGIT = ECIndexNumberCheckDigit()
