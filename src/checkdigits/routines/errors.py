"""Error types raised by check digit routines.

Only ``calculate`` raises these. ``is_valid`` catches every
``CheckDigitError`` and reports the code as invalid.
"""

from __future__ import annotations


class CheckDigitError(Exception):
    """Base exception for all check digit errors."""

    pass


class MissingCodeError(CheckDigitError):
    """Raised when the code is None or blank."""

    def __init__(self, message: str = "Code is missing") -> None:
        super().__init__(message)


class InvalidCharacterError(CheckDigitError):
    """Raised when a character is outside the accepted range for its position."""

    def __init__(self, position: int, character: str) -> None:
        self.position = position
        self.character = character
        super().__init__(f"Invalid Character[{position}] = '{character}'")


class ZeroSumError(CheckDigitError):
    """Raised when the weighted sum (or numeric value) of the code is zero."""

    def __init__(self, message: str = "Invalid code, sum is zero") -> None:
        super().__init__(message)


class InvalidLengthError(CheckDigitError):
    """Raised when the code length is not accepted by the routine."""

    def __init__(self, length: int, detail: str = "") -> None:
        self.length = length
        message = f"Invalid Code length={length}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidCountryCodeError(CheckDigitError):
    """Raised when a VATIN prefix has no registered routine."""

    def __init__(self, country: str) -> None:
        self.country = country
        super().__init__(f"No check digit routine registered for country '{country}'")


class UnsupportedCheckDigitValueError(CheckDigitError):
    """Raised when a computed value has no check digit representation."""

    def __init__(self, value: int | str) -> None:
        self.value = value
        super().__init__(f"Invalid Check Digit Value = {value}")


class InvalidCodeError(CheckDigitError):
    """Raised when a code violates a structural rule of its scheme."""

    def __init__(self, code: str, reason: str) -> None:
        self.code = code
        self.reason = reason
        super().__init__(f"Invalid code '{code}': {reason}")
