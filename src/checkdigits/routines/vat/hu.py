"""Hungarian VAT number (ANUM): 8 digits."""

from __future__ import annotations

from checkdigits.routines.base import is_blank
from checkdigits.routines.errors import InvalidLengthError, MissingCodeError
from checkdigits.routines.modulus import ModulusTenCheckDigit


class VATidHUCheckDigit(ModulusTenCheckDigit):
    """Hungarian VAT check digit: weights 9, 7, 3, 1 from the left, modulus 10."""

    name = "vat.hu"

    LEN = 8

    def __init__(self) -> None:
        super().__init__((1, 3, 7, 9), use_right_pos=True)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - 1:
            raise InvalidLengthError(len(code))
        return super().calculate(code)

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        return super().is_valid(code)


VATID_HU_CHECK_DIGIT = VATidHUCheckDigit()
