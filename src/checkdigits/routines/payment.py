"""Check digit routines for payment and card numbers.

This module provides:

- Luhn (mod 10): credit cards, IMEI, many national identifiers
- ABA routing transit numbers
- Verhoeff: dihedral group check digit, detects all single-digit
  errors and all adjacent transpositions
"""

from __future__ import annotations

from checkdigits.routines.base import (
    MODULUS_10,
    CheckDigit,
    ModulusCheckDigit,
    is_blank,
    is_digit,
    numeric_value,
)
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidCharacterError,
    MissingCodeError,
)


class LuhnCheckDigit(ModulusCheckDigit):
    """Luhn (mod 10) check digit.

    Every second digit counted from the check digit is doubled; doubled
    values above 9 have 9 subtracted (the same as adding their digits).

    Example:
        LUHN_CHECK_DIGIT.calculate("7992739871")  # "3"
    """

    name = "luhn"

    POSITION_WEIGHT = (2, 1)

    def __init__(self) -> None:
        super().__init__(MODULUS_10)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        weighted = char_value * self.POSITION_WEIGHT[right_pos % 2]
        return weighted - 9 if weighted > 9 else weighted


class ABANumberCheckDigit(ModulusCheckDigit):
    """ABA routing transit number check digit.

    Weights 3, 7, 1 repeat from the left over the nine digits.
    """

    name = "aba"

    POSITION_WEIGHT = (3, 1, 7)

    def __init__(self) -> None:
        super().__init__(MODULUS_10)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.POSITION_WEIGHT[right_pos % 3]


class VerhoeffCheckDigit(CheckDigit):
    """Verhoeff (dihedral) check digit.

    Not a modulus scheme: the checksum is accumulated right to left as
    ``D[checksum][P[pos % 8][digit]]`` over the multiplication table D of
    the dihedral group of order 10 and the permutation table P. A full
    code is valid when the checksum ends at 0; the check digit of a body
    is ``INV[checksum]``.
    """

    name = "verhoeff"

    D_TABLE = (
        (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
        (1, 2, 3, 4, 0, 6, 7, 8, 9, 5),
        (2, 3, 4, 0, 1, 7, 8, 9, 5, 6),
        (3, 4, 0, 1, 2, 8, 9, 5, 6, 7),
        (4, 0, 1, 2, 3, 9, 5, 6, 7, 8),
        (5, 9, 8, 7, 6, 0, 4, 3, 2, 1),
        (6, 5, 9, 8, 7, 1, 0, 4, 3, 2),
        (7, 6, 5, 9, 8, 2, 1, 0, 4, 3),
        (8, 7, 6, 5, 9, 3, 2, 1, 0, 4),
        (9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
    )

    P_TABLE = (
        (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
        (1, 5, 7, 6, 2, 8, 3, 0, 9, 4),
        (5, 8, 0, 3, 7, 9, 6, 1, 4, 2),
        (8, 9, 1, 6, 0, 4, 3, 5, 2, 7),
        (9, 4, 5, 3, 1, 2, 6, 8, 7, 0),
        (4, 2, 8, 6, 5, 7, 3, 9, 0, 1),
        (2, 7, 9, 3, 8, 0, 6, 4, 1, 5),
        (7, 0, 4, 6, 9, 1, 3, 2, 5, 8),
    )

    INV_TABLE = (0, 4, 3, 2, 1, 5, 6, 7, 8, 9)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        checksum = self._calculate_checksum(code, False)
        return str(self.INV_TABLE[checksum])

    def is_valid(self, code: str) -> bool:
        if is_blank(code):
            return False
        try:
            return self._calculate_checksum(code, True) == 0
        except CheckDigitError:
            return False

    def _calculate_checksum(self, code: str, includes_check_digit: bool) -> int:
        checksum = 0
        for i, character in enumerate(reversed(code)):
            if not is_digit(character):
                raise InvalidCharacterError(len(code) - i, character)
            pos = i if includes_check_digit else i + 1
            checksum = self.D_TABLE[checksum][self.P_TABLE[pos % 8][numeric_value(character)]]
        return checksum


# Singleton instances
LUHN_CHECK_DIGIT = LuhnCheckDigit()
ABA_CHECK_DIGIT = ABANumberCheckDigit()
VERHOEFF_CHECK_DIGIT = VerhoeffCheckDigit()
