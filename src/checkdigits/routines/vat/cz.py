"""Czech VAT number (DIC).

The body after ``CZ`` takes one of three forms:

- 8 digits: legal entity
- 9 digits starting with ``6``: individual, special case
- 10 digits: individual, the birth number (rodne cislo)

Nine-digit birth numbers issued before 1954 carry no check digit and
are not accepted.
"""

from __future__ import annotations

from checkdigits.routines.base import (
    MODULUS_10,
    MODULUS_11,
    ModulusCheckDigit,
    is_blank,
    parse_digits,
)
from checkdigits.routines.errors import (
    CheckDigitError,
    InvalidCodeError,
    InvalidLengthError,
    MissingCodeError,
    UnsupportedCheckDigitValueError,
    ZeroSumError,
)
from checkdigits.routines.vat._dates import birth_date


class VATidCZCheckDigit(ModulusCheckDigit):
    """Czech VAT check digit for the three DIC forms."""

    name = "vat.cz"

    LEGAL_LEN = 8
    SPECIAL_LEN = 9
    BIRTH_NUMBER_LEN = 10

    SPECIAL_PREFIX = "6"
    DIFF_TABLE = (8, 7, 6, 5, 4, 3, 2, 1, 0, 9, 8)

    # Month offsets: 50 for women, 20 (and 70) for numbers issued after 2004
    MONTH_OFFSETS = (0, 20, 50, 70)
    CENTURY_PIVOT = 54

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return 0 if right_pos == 1 else char_value * right_pos

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if parse_digits(code) == 0:
            raise ZeroSumError()
        if len(code) == self.LEGAL_LEN - 1:
            return self._legal_entity(code)
        if len(code) == self.SPECIAL_LEN - 1:
            return self._special_case(code)
        if len(code) == self.BIRTH_NUMBER_LEN - 1:
            return self._birth_number(code)
        raise InvalidLengthError(len(code), "expected 7, 8 or 9 digits")

    def is_valid(self, code: str) -> bool:
        if is_blank(code):
            return False
        if len(code) not in (self.LEGAL_LEN, self.SPECIAL_LEN, self.BIRTH_NUMBER_LEN):
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False

    def _legal_entity(self, code: str) -> str:
        if code[0] == "9":
            raise InvalidCodeError(code, "legal entity numbers cannot start with '9'")
        modulus_result = self.calculate_modulus(code, False)
        self.logger.debug("%s: legal entity, sum mod 11 = %d", code, modulus_result)
        return self.to_check_digit((MODULUS_11 - modulus_result) % MODULUS_10)

    def _special_case(self, code: str) -> str:
        if not code.startswith(self.SPECIAL_PREFIX):
            raise InvalidCodeError(code, f"9-digit numbers must start with '{self.SPECIAL_PREFIX}'")
        modulus_result = self.calculate_modulus(code[1:], False)
        difference = MODULUS_11 if modulus_result == 0 else MODULUS_11 - modulus_result
        return self.to_check_digit(self.DIFF_TABLE[difference - 1])

    def _birth_number(self, code: str) -> str:
        year = int(code[0:2])
        year += 1900 if year >= self.CENTURY_PIVOT else 2000
        month = int(code[2:4])
        day = int(code[4:6])
        for offset in reversed(self.MONTH_OFFSETS):
            if offset < month <= offset + 12:
                month -= offset
                break
        else:
            raise InvalidCodeError(code, f"invalid month {month:02d}")
        birth_date(code, year, month, day)
        remainder = int(code) % MODULUS_11
        if remainder == MODULUS_10:
            raise UnsupportedCheckDigitValueError(remainder)
        return str(remainder)


VATID_CZ_CHECK_DIGIT = VATidCZCheckDigit()
