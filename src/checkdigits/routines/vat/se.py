"""Swedish VAT number: the 10-digit organisation number followed by ``01``."""

from __future__ import annotations

from checkdigits.routines.base import is_blank
from checkdigits.routines.errors import InvalidLengthError, MissingCodeError
from checkdigits.routines.payment import LuhnCheckDigit


class VATidSECheckDigit(LuhnCheckDigit):
    """Swedish VAT check digit: Luhn over the organisation number."""

    name = "vat.se"

    LEN = 10
    SUFFIX = "01"

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        return super().calculate(code)

    def is_valid(self, code: str) -> bool:
        if is_blank(code):
            return False
        if len(code) == self.LEN + len(self.SUFFIX) and code.endswith(self.SUFFIX):
            code = code[: self.LEN]
        if len(code) != self.LEN:
            return False
        return super().is_valid(code)


VATID_SE_CHECK_DIGIT = VATidSECheckDigit()
