"""Base classes for check digit routines.

This module provides the modulus-N skeleton shared by most routines:
characters are converted to integers, weighted by position and summed,
and the sum reduced modulo N gives the check digit.

Positions are 1-based. ``left_pos`` counts from the first character,
``right_pos`` from the last one. When the code passed in does not yet
carry its check digit, ``right_pos`` is shifted by one so that the
weights line up with the full code.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidCharacterError,
    MissingCodeError,
    UnsupportedCheckDigitValueError,
    ZeroSumError,
)


# ============================================================================
# Logging - Uses standard Python logging directly
# ============================================================================

def _get_logger(name: str) -> logging.Logger:
    """Get a logger for the given routine name."""
    return logging.getLogger(f"checkdigits.{name}")


# ============================================================================
# Character helpers
# ============================================================================

MODULUS_10 = 10
MODULUS_11 = 11


def numeric_value(character: str) -> int:
    """Return the numeric value of a character.

    Digits map to 0-9, ASCII letters (either case) to 10-35 and anything
    else to -1.
    """
    if "0" <= character <= "9":
        return ord(character) - ord("0")
    if "A" <= character <= "Z":
        return ord(character) - ord("A") + 10
    if "a" <= character <= "z":
        return ord(character) - ord("a") + 10
    return -1


def is_digit(character: str) -> bool:
    """Check for an ASCII decimal digit."""
    return "0" <= character <= "9"


def is_blank(code: str | None) -> bool:
    """Check if a code is None, empty or whitespace only."""
    return code is None or code.strip() == ""


def to_number(code: str) -> int | None:
    """Parse an all-digit string, returning None for anything else."""
    if code and all(is_digit(c) for c in code):
        return int(code)
    return None


def parse_digits(code: str) -> int:
    """Parse a digits-only code.

    Raises:
        InvalidCharacterError: At the first character that is not a digit
    """
    for i, character in enumerate(code):
        if not is_digit(character):
            raise InvalidCharacterError(i + 1, character)
    return int(code)


def sum_digits(number: int) -> int:
    """Add up the decimal digits of a number."""
    total = 0
    todo = number
    while todo > 0:
        total += todo % 10
        todo //= 10
    return total


# ============================================================================
# Base Routines
# ============================================================================

class CheckDigit(ABC):
    """Abstract base class for all check digit routines.

    A routine is stateless once constructed and safe to share between
    threads. ``calculate`` takes the code without its check digit and
    raises a ``CheckDigitError`` on bad input; ``is_valid`` takes the
    full code and never raises.
    """

    name: str = "base"

    @abstractmethod
    def calculate(self, code: str) -> str:
        """Calculate the check digit(s) for a code body."""
        pass

    @abstractmethod
    def is_valid(self, code: str) -> bool:
        """Validate a code including its check digit(s)."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class ModulusCheckDigit(CheckDigit):
    """Abstract modulus-N check digit routine.

    Subclasses supply ``weighted_value`` and may override ``to_int``,
    ``to_check_digit`` or ``calculate_modulus`` for their scheme.
    """

    def __init__(self, modulus: int):
        """Initialize the routine.

        Args:
            modulus: Modulus used to reduce the weighted sum
        """
        self.modulus = modulus
        self.logger = _get_logger(self.name)

    def calculate(self, code: str) -> str:
        """Calculate the check digit for a code.

        Args:
            code: Code without the check digit

        Returns:
            Check digit

        Raises:
            MissingCodeError: If the code is blank
            CheckDigitError: If the code cannot be processed
        """
        if is_blank(code):
            raise MissingCodeError()
        modulus_result = self.calculate_modulus(code, False)
        char_value = (self.modulus - modulus_result) % self.modulus
        return self.to_check_digit(char_value)

    def is_valid(self, code: str) -> bool:
        """Validate a code whose weighted sum must be divisible by the modulus.

        Args:
            code: Code including the check digit

        Returns:
            True if the check digit is valid
        """
        if is_blank(code):
            return False
        try:
            return self.calculate_modulus(code, True) == 0
        except CheckDigitError:
            return False

    def calculate_modulus(self, code: str, includes_check_digit: bool) -> int:
        """Calculate the weighted sum of a code, reduced by the modulus.

        Args:
            code: Code to process
            includes_check_digit: Whether the last character is the check digit

        Returns:
            Weighted sum modulo ``self.modulus``

        Raises:
            ZeroSumError: If the weighted sum is zero
        """
        length = len(code) + (0 if includes_check_digit else 1)
        total = 0
        for i, character in enumerate(code):
            left_pos = i + 1
            right_pos = length - i
            char_value = self.to_int(character, left_pos, right_pos)
            total += self.weighted_value(char_value, left_pos, right_pos)
        if total == 0:
            raise ZeroSumError()
        return total % self.modulus

    @abstractmethod
    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        """Weight a character value by its position.

        Args:
            char_value: Numeric value of the character
            left_pos: Position counted from the left (1-based)
            right_pos: Position counted from the right (1-based)

        Returns:
            Weighted value
        """
        pass

    def to_int(self, character: str, left_pos: int, right_pos: int) -> int:
        """Convert a character to its integer value (digits only)."""
        if is_digit(character):
            return numeric_value(character)
        raise InvalidCharacterError(left_pos, character)

    def to_check_digit(self, char_value: int) -> str:
        """Render a value 0-9 as a check digit."""
        if 0 <= char_value <= 9:
            return str(char_value)
        raise UnsupportedCheckDigitValueError(char_value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(modulus={self.modulus})"
