"""Bulgarian VAT number.

Three forms share the ``BG`` prefix:

- 9 digits: legal entity (BULSTAT / EIK)
- 10 digits: natural person, the civil number (EGN) encoding a birth date
- 13 digits: legal entity branch, a valid 9-digit EIK plus 4 digits
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
    ZeroSumError,
)
from checkdigits.routines.vat._dates import birth_date


class VATidBGCheckDigit(ModulusCheckDigit):
    """Bulgarian VAT check digit for all three forms.

    The legal entity and branch forms retry with a second weight table
    when the first remainder is 10; a remainder of 10 after the retry
    gives 0. The civil number uses a single table and ``sum % 11 % 10``.
    """

    name = "vat.bg"

    LEGAL_LEN = 9
    CIVIL_LEN = 10
    BRANCH_LEN = 13

    CIVIL_WEIGHTS = (2, 4, 8, 5, 10, 9, 7, 3, 6)
    BRANCH_WEIGHTS = (2, 7, 3, 5)
    BRANCH_RETRY_WEIGHTS = (4, 9, 5, 7)

    def __init__(self) -> None:
        super().__init__(MODULUS_11)

    def weighted_value(self, char_value: int, left_pos: int, right_pos: int) -> int:
        return char_value * self.CIVIL_WEIGHTS[left_pos - 1]

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if parse_digits(code) == 0:
            raise ZeroSumError()
        if len(code) == self.LEGAL_LEN - 1:
            return self._legal_entity(code)
        if len(code) == self.CIVIL_LEN - 1:
            return self._civil_number(code)
        if len(code) == self.BRANCH_LEN - 1:
            return self._branch(code)
        raise InvalidLengthError(len(code), "expected 8, 9 or 12 digits")

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) not in (self.LEGAL_LEN, self.CIVIL_LEN, self.BRANCH_LEN):
            return False
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False

    def _legal_entity(self, code: str) -> str:
        digits = [int(c) for c in code]
        remainder = sum(d * w for d, w in zip(digits, range(1, 9))) % MODULUS_11
        if remainder == MODULUS_10:
            remainder = sum(d * w for d, w in zip(digits, range(3, 11))) % MODULUS_11
            self.logger.debug("%s: recalculated with increased weights", code)
        return self.to_check_digit(remainder % MODULUS_10)

    def _civil_number(self, code: str) -> str:
        year = int(code[0:2])
        month = int(code[2:4])
        day = int(code[4:6])
        if 1 <= month <= 12:
            year += 1900
        elif 21 <= month <= 32:
            year += 1800
            month -= 20
        elif 41 <= month <= 52:
            year += 2000
            month -= 40
        else:
            raise InvalidCodeError(code, f"invalid month {month:02d}")
        birth_date(code, year, month, day)
        return self.to_check_digit(self.calculate_modulus(code, False) % MODULUS_10)

    def _branch(self, code: str) -> str:
        head = code[: self.LEGAL_LEN]
        if not self.is_valid(head):
            raise InvalidCodeError(code, f"subcode {head} is not a valid legal entity number")
        digits = [int(c) for c in code[8:12]]
        remainder = sum(d * w for d, w in zip(digits, self.BRANCH_WEIGHTS)) % MODULUS_11
        if remainder == MODULUS_10:
            remainder = sum(d * w for d, w in zip(digits, self.BRANCH_RETRY_WEIGHTS)) % MODULUS_11
        return self.to_check_digit(remainder % MODULUS_10)


VATID_BG_CHECK_DIGIT = VATidBGCheckDigit()
