"""Check digit routines for securities and bank account identifiers.

This module provides:

- CUSIP (North American securities)
- SEDOL (London Stock Exchange)
- ISIN (ISO 6166)
- IBAN (ISO 13616, ISO 7064 MOD 97-10)
- Czech bank account numbers (Czech National Bank mod 11 scheme)
"""

from __future__ import annotations

from checkdigits.routines.base import (
    MODULUS_10,
    MODULUS_11,
    ModulusCheckDigit,
    is_blank,
    is_digit,
    numeric_value,
    sum_digits,
)
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidCharacterError,
    InvalidCodeError,
    InvalidLengthError,
    MissingCodeError,
)
from checkdigits.routines.modulus import Modulus97CheckDigit

MAX_ALPHANUMERIC_VALUE = 35


def _alphanumeric_value(character: str, left_pos: int, right_pos: int) -> int:
    """Letters and digits in the body, digits only in the check position."""
    value = numeric_value(character)
    limit = 9 if right_pos == 1 else MAX_ALPHANUMERIC_VALUE
    if value < 0 or value > limit:
        raise InvalidCharacterError(left_pos, character)
    return value


class CUSIPCheckDigit(ModulusCheckDigit):
    """CUSIP check digit.

    Letters count as 10-35. Every second character counted from the
    check digit is doubled and the digits of each weighted value are
    summed.
    """

    name = "cusip"

    POSITION_WEIGHT = (2, 1)

    def __init__(self) -> None:
        super().__init__(MODULUS_10)

    def to_int(self, character: str, left_pos: int, right_pos: int) -> int:
        return _alphanumeric_value(character, left_pos, right_pos)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return sum_digits(char_value * self.POSITION_WEIGHT[right_pos % 2])


class SedolCheckDigit(ModulusCheckDigit):
    """SEDOL check digit: weights 1, 3, 1, 7, 3, 9, 1 from the left."""

    name = "sedol"

    POSITION_WEIGHT = (1, 3, 1, 7, 3, 9, 1)

    def __init__(self) -> None:
        super().__init__(MODULUS_10)

    def calculate_modulus(self, code: str, includes_check_digit: bool) -> int:
        if len(code) > len(self.POSITION_WEIGHT):
            raise InvalidLengthError(len(code), f"max {len(self.POSITION_WEIGHT)}")
        return super().calculate_modulus(code, includes_check_digit)

    def to_int(self, character: str, left_pos: int, right_pos: int) -> int:
        return _alphanumeric_value(character, left_pos, right_pos)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.POSITION_WEIGHT[left_pos - 1]


class ISINCheckDigit(ModulusCheckDigit):
    """ISIN check digit.

    Letters are first expanded to their two-digit values (A=10 ... Z=35),
    then the Luhn scheme runs over the resulting digit string.

    Example:
        ISIN_CHECK_DIGIT.is_valid("US0378331005")  # True
    """

    name = "isin"

    POSITION_WEIGHT = (2, 1)

    def __init__(self) -> None:
        super().__init__(MODULUS_10)

    def calculate_modulus(self, code: str, includes_check_digit: bool) -> int:
        if includes_check_digit and not is_digit(code[-1]):
            raise InvalidCharacterError(len(code), code[-1])
        transformed = []
        for i, character in enumerate(code):
            value = numeric_value(character)
            if value < 0 or value > MAX_ALPHANUMERIC_VALUE:
                raise InvalidCharacterError(i + 1, character)
            transformed.append(str(value))
        return super().calculate_modulus("".join(transformed), includes_check_digit)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return sum_digits(char_value * self.POSITION_WEIGHT[right_pos % 2])


class IBANCheckDigit(Modulus97CheckDigit):
    """IBAN check digits (ISO 7064 MOD 97-10).

    The country code and check digits (the first four characters) are
    moved to the end and the result must leave remainder 1 modulo 97.
    ``calculate`` takes a full IBAN whose check digit positions (3-4)
    hold any placeholder, and returns the two check digits.

    Example:
        IBAN_CHECK_DIGIT.is_valid("GB82WEST12345698765432")  # True
        IBAN_CHECK_DIGIT.calculate("GB00WEST12345698765432")  # "82"
    """

    name = "iban"

    MIN_CODE_LEN = 5
    INVALID_CHECK_DIGITS = frozenset({"00", "01", "99"})

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) < self.MIN_CODE_LEN:
            raise InvalidLengthError(len(code))
        reformatted = code[:2] + "00" + code[4:]
        remainder = self.calculate_modulus(self._rotate(reformatted), True)
        return self.to_check_digit(98 - remainder)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) < self.MIN_CODE_LEN:
            return False
        if code[2:4] in self.INVALID_CHECK_DIGITS:
            return False
        try:
            return self.calculate_modulus(self._rotate(code), True) == 1
        except CheckDigitError:
            return False

    @staticmethod
    def _rotate(code: str) -> str:
        return code[4:] + code[:4]


class CNBCheckDigit(ModulusCheckDigit):
    """Czech bank account number check digits.

    A domestic account number is an optional 6-digit prefix followed by a
    10-digit number, each protected by its own mod 11 check with weights
    1, 2, 4, 8, 5, 10, 9, 7, 3, 6 counted from the right. A prefix of
    ``000000`` is absent and not checked.

    ``is_valid`` reads the last 16 characters, so it accepts the 16-digit
    account as well as a Czech IBAN. ``calculate`` returns the check digit
    of the account number part: it takes either the number without its
    check digit (up to 9 digits) or prefix plus that body (15 digits), in
    which case the prefix must already be valid.
    """

    name = "cnb"

    POSITION_WEIGHT = (1, 2, 4, 8, 5, 10, 9, 7, 3, 6)
    PREFIX_LEN = 6
    NUMBER_LEN = 10
    EMPTY_PREFIX = "000000"

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        body_len = self.NUMBER_LEN - 1
        if len(code) > body_len:
            if len(code) != self.PREFIX_LEN + body_len:
                raise InvalidLengthError(len(code))
            prefix = code[: self.PREFIX_LEN]
            if not self._is_valid_part(prefix, optional=True):
                raise InvalidCodeError(code, "account prefix check digit is invalid")
            code = code[self.PREFIX_LEN:]
        return super().calculate(code)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) < self.PREFIX_LEN + self.NUMBER_LEN:
            return False
        prefix = code[-(self.PREFIX_LEN + self.NUMBER_LEN):-self.NUMBER_LEN]
        number = code[-self.NUMBER_LEN:]
        try:
            return self._is_valid_part(prefix, optional=True) and self._is_valid_part(number)
        except CheckDigitError:
            return False

    def _is_valid_part(self, part: str, optional: bool = False) -> bool:
        if optional and part == self.EMPTY_PREFIX:
            return True
        return self.calculate_modulus(part, True) == 0

    def calculate_modulus(self, code: str, includes_check_digit: bool) -> int:
        if len(code) + (0 if includes_check_digit else 1) > len(self.POSITION_WEIGHT):
            raise InvalidLengthError(len(code))
        return super().calculate_modulus(code, includes_check_digit)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.POSITION_WEIGHT[right_pos - 1]


# Singleton instances
CUSIP_CHECK_DIGIT = CUSIPCheckDigit()
SEDOL_CHECK_DIGIT = SedolCheckDigit()
ISIN_CHECK_DIGIT = ISINCheckDigit()
IBAN_CHECK_DIGIT = IBANCheckDigit()
CNB_CHECK_DIGIT = CNBCheckDigit()
