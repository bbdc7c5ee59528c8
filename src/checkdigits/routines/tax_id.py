"""German tax identification number (Steuer-Identifikationsnummer).

The eleventh digit is an ISO 7064 MOD 11,10 check digit. In addition
the ten body digits must repeat in a specific way: exactly one digit
occurs twice or three times, and a digit occurring three times must not
occupy three consecutive positions.
"""

from __future__ import annotations

from collections import Counter

from checkdigits.routines.base import is_blank
from checkdigits.routines.errors import InvalidCodeError, InvalidLengthError
from checkdigits.routines.modulus import Modulus11TenCheckDigit


class TidDECheckDigit(Modulus11TenCheckDigit):
    """German tax id check digit.

    Example:
        TID_DE_CHECK_DIGIT.is_valid("02476291358")  # True (test id)
    """

    name = "tid_de"

    LEN = 11

    def calculate(self, code: str) -> str:
        if not is_blank(code) and len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code), f"tax id body must have {self.LEN - 1} digits")
        return super().calculate(code)

    def is_valid(self, code: str) -> bool:
        if code is None or len(code) != self.LEN:
            return False
        return super().is_valid(code)

    def calculate_modulus(self, code: str, includes_check_digit: bool) -> int:
        check = super().calculate_modulus(code, includes_check_digit)
        body = code[:-1] if includes_check_digit else code
        self._check_repetitions(body)
        return check

    def _check_repetitions(self, body: str) -> None:
        repeated = {d: n for d, n in Counter(body).items() if n > 1}

        if len(repeated) != 1:
            self.logger.debug("%s: %d digits repeat, expected exactly one", body, len(repeated))
            raise InvalidCodeError(body, "exactly one digit must occur more than once")
        digit, count = next(iter(repeated.items()))
        if count > 3:
            self.logger.debug("%s: digit %s occurs %d times", body, digit, count)
            raise InvalidCodeError(body, f"digit {digit} occurs more than three times")
        if count == 3:
            first = body.index(digit)
            if body[first:first + 3] == digit * 3:
                self.logger.debug("%s: digit %s occurs three times in a row", body, digit)
                raise InvalidCodeError(body, f"digit {digit} occurs three times in a row")


TID_DE_CHECK_DIGIT = TidDECheckDigit()
