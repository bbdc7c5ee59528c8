"""Check digit routines for book, serial and article numbers.

This module provides:

- ISBN-10 (mod 11, ``X`` for 10)
- EAN-13 / ISBN-13 (mod 10, weights 1 and 3)
- ISBN, choosing between the two by length
- ISSN (mod 11, ``X`` for 10)

plus conversions from ISBN-10 and ISSN to their EAN-13 forms.
"""

from __future__ import annotations

from checkdigits.routines.base import MODULUS_10, CheckDigit, ModulusCheckDigit, is_blank
from checkdigits.routines.errors import InvalidLengthError, MissingCodeError
from checkdigits.routines.modulus import Modulus11XCheckDigit, ModulusCheckXDigit


class ISBN10CheckDigit(Modulus11XCheckDigit):
    """ISBN-10 check digit: weights 10 down to 1, ``X`` stands for 10."""

    name = "isbn10"


class EAN13CheckDigit(ModulusCheckDigit):
    """EAN-13 check digit: weights 1 and 3 alternating from the check digit."""

    name = "ean13"

    POSITION_WEIGHT = (3, 1)

    def __init__(self) -> None:
        super().__init__(MODULUS_10)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.POSITION_WEIGHT[right_pos % 2]


class ISBNCheckDigit(CheckDigit):
    """ISBN-10 or ISBN-13 check digit, selected by the code length.

    ``calculate`` takes 9 characters (ISBN-10) or 12 (ISBN-13),
    ``is_valid`` takes 10 or 13.
    """

    name = "isbn"

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError("ISBN Code is missing")
        if len(code) == 9:
            return ISBN10_CHECK_DIGIT.calculate(code)
        if len(code) == 12:
            return EAN13_CHECK_DIGIT.calculate(code)
        raise InvalidLengthError(len(code), "ISBN body must have 9 or 12 characters")

    def is_valid(self, code: str) -> bool:
        if code is None:
            return False
        if len(code) == 10:
            return ISBN10_CHECK_DIGIT.is_valid(code)
        if len(code) == 13:
            return EAN13_CHECK_DIGIT.is_valid(code)
        return False


class ISSNCheckDigit(ModulusCheckXDigit):
    """ISSN check digit: weights 8 down to 2 over seven digits, ``X`` for 10.

    Example:
        ISSN_CHECK_DIGIT.is_valid("03178471")  # True
    """

    name = "issn"

    LEN = 8

    def calculate(self, code: str) -> str:
        if not is_blank(code) and len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code), f"ISSN body must have {self.LEN - 1} digits")
        return super().calculate(code)

    def is_valid(self, code: str) -> bool:
        if code is None or len(code) != self.LEN:
            return False
        return super().is_valid(code)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * (9 - left_pos)


# Singleton instances
ISBN10_CHECK_DIGIT = ISBN10CheckDigit()
EAN13_CHECK_DIGIT = EAN13CheckDigit()
ISBN_CHECK_DIGIT = ISBNCheckDigit()
ISSN_CHECK_DIGIT = ISSNCheckDigit()


def convert_to_isbn13(isbn10: str) -> str | None:
    """Convert a valid ISBN-10 to its ISBN-13 (``978`` prefix) form.

    Args:
        isbn10: ISBN-10 without separators

    Returns:
        ISBN-13, or None if the input is not a valid ISBN-10
    """
    if not ISBN10_CHECK_DIGIT.is_valid(isbn10) or len(isbn10) != 10:
        return None
    body = "978" + isbn10[:9]
    return body + EAN13_CHECK_DIGIT.calculate(body)


def convert_issn_to_ean13(issn: str, suffix: str = "00") -> str | None:
    """Convert a valid ISSN to its EAN-13 (``977`` prefix) form.

    Args:
        issn: ISSN without separators
        suffix: Two-digit issue/variant code placed after the ISSN body

    Returns:
        EAN-13, or None if the input is not a valid ISSN

    Raises:
        ValueError: If the suffix is not two digits
    """
    if len(suffix) != 2 or not suffix.isdigit():
        raise ValueError(f"suffix must be two digits, got '{suffix}'")
    if not ISSN_CHECK_DIGIT.is_valid(issn):
        return None
    body = "977" + issn[:7] + suffix
    return body + EAN13_CHECK_DIGIT.calculate(body)
