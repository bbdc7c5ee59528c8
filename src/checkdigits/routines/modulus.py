"""Modulus check digit variants.

This module specializes the modulus-N skeleton for the families that
most named and national routines build on:

- Modulus 11 where the value 10 is written as ``X``
- Modulus 10 with a configurable weight table
- ISO 7064 MOD 97-10 with two check digits
- ISO 7064 MOD 11,10 (a recurrence rather than a weighted sum)
"""

from __future__ import annotations

from checkdigits.routines.base import (
    MODULUS_10,
    MODULUS_11,
    CheckDigit,
    ModulusCheckDigit,
    _get_logger,
    is_blank,
    is_digit,
    numeric_value,
    sum_digits,
    to_number,
)
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidCharacterError,
    InvalidLengthError,
    MissingCodeError,
    UnsupportedCheckDigitValueError,
    ZeroSumError,
)


class ModulusCheckXDigit(ModulusCheckDigit):
    """Modulus 11 routine whose check digit may be ``X`` (value 10)."""

    X = 10

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def to_int(self, character: str, left_pos: int, right_pos: int) -> int:
        if right_pos == 1 and character == "X":
            return self.X
        return super().to_int(character, left_pos, right_pos)

    def to_check_digit(self, char_value: int) -> str:
        if char_value == self.X:
            return "X"
        return super().to_check_digit(char_value)


class Modulus11XCheckDigit(ModulusCheckXDigit):
    """Modulus 11 routine weighting each digit by its right position."""

    name = "modulus_11x"

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * right_pos


class ModulusTenCheckDigit(ModulusCheckDigit):
    """General modulus 10 routine with a configurable weight table.

    The weight for a character is ``weights[(pos - 1) % len(weights)]``
    where ``pos`` is its left position, or its right position when
    ``use_right_pos`` is set. Letters are accepted in the body and take
    their numeric value (A=10 ... Z=35).

    Example:
        # Hungarian VAT: 9, 7, 3, 1 repeating, counted from the right
        routine = ModulusTenCheckDigit((1, 3, 7, 9), use_right_pos=True)
    """

    name = "modulus_10"

    def __init__(
        self,
        weights: tuple[int, ...] | list[int],
        use_right_pos: bool = False,
        sum_weighted_digits: bool = False,
    ):
        """Initialize the routine.

        Args:
            weights: Position weights, repeated as needed
            use_right_pos: Index weights from the right instead of the left
            sum_weighted_digits: Replace each weighted value by its digit sum
        """
        super().__init__(MODULUS_10)
        if not weights:
            raise ValueError("weights must not be empty")
        self.weights = tuple(weights)
        self.use_right_pos = use_right_pos
        self.sum_weighted_digits = sum_weighted_digits

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or not is_digit(code[-1]):
            return False
        return super().is_valid(code)

    def to_int(self, character: str, left_pos: int, right_pos: int) -> int:
        value = numeric_value(character)
        if value < 0:
            raise InvalidCharacterError(left_pos, character)
        return value

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        pos = right_pos if self.use_right_pos else left_pos
        weighted = char_value * self.weights[(pos - 1) % len(self.weights)]
        if self.sum_weighted_digits:
            weighted = sum_digits(weighted)
        return weighted

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(weights={list(self.weights)}, "
            f"use_right_pos={self.use_right_pos}, "
            f"sum_weighted_digits={self.sum_weighted_digits})"
        )


class Modulus97CheckDigit(CheckDigit):
    """ISO 7064 MOD 97-10 routine with two check digits.

    The code is read as one big number, left to right. Digits append one
    decimal place, letters (A=10 ... Z=35) append two. The accumulator is
    reduced by the modulus whenever it exceeds ``MAX``, so codes of any
    length are handled with small integers.

    A full code is valid when the remainder is 1. ``calculate`` treats the
    missing check digits as ``00`` and returns the two digits that bring
    the remainder to 1.
    """

    name = "modulus_97"

    CHECK_DIGIT_LEN = 2
    MIN_CODE_LEN = 4
    MAX = 999_999_999
    MAX_ALPHANUMERIC_VALUE = 35

    def __init__(self, modulus: int = 97):
        self.modulus = modulus
        self.logger = _get_logger(self.name)

    def calculate(self, code: str) -> str:
        """Calculate the two check digits for a code.

        Args:
            code: Code without the check digits

        Returns:
            Two-digit check string

        Raises:
            MissingCodeError: If the code is blank
            InvalidLengthError: If the code is shorter than ``MIN_CODE_LEN``
            ZeroSumError: If every character of the code is zero
        """
        if is_blank(code):
            raise MissingCodeError()
        if len(code) < self.MIN_CODE_LEN:
            raise InvalidLengthError(len(code))
        remainder = self.calculate_modulus(code, False)
        return self.to_check_digit((self.modulus + 1 - remainder) % self.modulus)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) < self.MIN_CODE_LEN:
            return False
        if not all(is_digit(c) for c in code[-self.CHECK_DIGIT_LEN:]):
            return False
        try:
            return self.calculate_modulus(code, True) == 1
        except CheckDigitError:
            return False

    def calculate_modulus(self, code: str, includes_check_digit: bool) -> int:
        """Reduce the code, read as a number, by the modulus.

        Args:
            code: Code to process
            includes_check_digit: If False, ``00`` is appended first

        Returns:
            Remainder

        Raises:
            ZeroSumError: If every character of the code is zero
        """
        total = 0
        nonzero = False
        for i, character in enumerate(code):
            value = self.to_int(character, i + 1, len(code) - i)
            nonzero = nonzero or value != 0
            total = total * 100 + value if value > 9 else total * 10 + value
            if total > self.MAX:
                total %= self.modulus
        if not nonzero:
            raise ZeroSumError()
        if not includes_check_digit:
            total *= 100
        return total % self.modulus

    def to_int(self, character: str, left_pos: int, right_pos: int) -> int:
        value = numeric_value(character)
        if value < 0 or value > self.MAX_ALPHANUMERIC_VALUE:
            raise InvalidCharacterError(left_pos, character)
        return value

    def to_check_digit(self, char_value: int) -> str:
        """Render a value 0-99 as a zero padded two-digit string."""
        if 0 <= char_value <= 99:
            return f"{char_value:02d}"
        raise UnsupportedCheckDigitValueError(char_value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(modulus={self.modulus})"


class Modulus11TenCheckDigit(ModulusCheckDigit):
    """ISO 7064 MOD 11,10 routine.

    Instead of a weighted sum, a running product seeded at 10 is updated
    digit by digit::

        s = (digit + product) % 10, with 0 replaced by 10
        product = (2 * s) % 11

    and the check digit is ``(11 - product) % 10``. A body whose numeric
    value is zero is rejected regardless of its check digit.

    Used for the German and Croatian VAT numbers.
    """

    name = "modulus_11_10"

    MIN_CODE_LEN = 2

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if to_number(code) == 0:
            raise ZeroSumError()
        return self.to_check_digit(self.calculate_modulus(code, False))

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) < self.MIN_CODE_LEN:
            return False
        if to_number(code[:-1]) == 0:
            return False
        try:
            return self.to_check_digit(self.calculate_modulus(code, True)) == code[-1]
        except CheckDigitError:
            return False

    def calculate_modulus(self, code: str, includes_check_digit: bool) -> int:
        """Run the MOD 11,10 recurrence over the body and return the check value."""
        body = code[:-1] if includes_check_digit else code
        length = len(body) + 1
        product = MODULUS_10
        for i, character in enumerate(body):
            left_pos = i + 1
            digit = self.to_int(character, left_pos, length - i)
            total = (self.weighted_value(digit, left_pos, length - i) + product) % MODULUS_10
            if total == 0:
                total = MODULUS_10
            product = 2 * total % MODULUS_11
        check = MODULUS_11 - product
        return 0 if check == MODULUS_10 else check
