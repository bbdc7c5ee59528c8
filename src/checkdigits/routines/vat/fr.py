"""French VAT number: a 2-character key followed by the 9-digit SIREN.

Two keying schemes coexist. The legacy key is numeric,
``(SIREN * 100 + 12) % 97``. The newer keys mix digits and letters from
``ALPHABET`` and are derived from a sequence number rather than from the
SIREN alone, so a SIREN has several valid keys. ``calculate`` returns
the legacy key: a valid answer, not necessarily the one issued.
"""

from __future__ import annotations

from checkdigits.routines.base import CheckDigit, _get_logger, is_blank, is_digit, parse_digits
from checkdigits.routines.errors import (
    InvalidCodeError,
    InvalidLengthError,
    MissingCodeError,
    ZeroSumError,
)
from checkdigits.routines.sirene import SIRENE_VALIDATOR


class VATidFRCheckDigit(CheckDigit):
    """French VAT key over a SIREN."""

    name = "vat.fr"

    LEN = 11
    CHECK_DIGIT_LEN = 2
    MODULUS_97 = 97
    MODULUS_11 = 11
    # Digits and upper case letters without I and O
    ALPHABET = "0123456789ABCDEFGHJKLMNPQRSTUVWXYZ"

    def __init__(self) -> None:
        self.logger = _get_logger(self.name)

    def calculate(self, code: str) -> str:
        """Calculate the legacy numeric key of a SIREN.

        Args:
            code: The 9-digit SIREN

        Returns:
            Two-digit key

        Raises:
            MissingCodeError: If the code is blank
            InvalidLengthError: If the code is not 9 characters long
            ZeroSumError: If the SIREN is all zeros
            InvalidCodeError: If the SIREN fails its own Luhn check
        """
        if is_blank(code):
            raise MissingCodeError()
        if len(code) != self.LEN - self.CHECK_DIGIT_LEN:
            raise InvalidLengthError(len(code))
        siren = parse_digits(code)
        if siren == 0:
            raise ZeroSumError()
        if not SIRENE_VALIDATOR.is_valid_siren(code):
            raise InvalidCodeError(code, "not a valid SIREN")
        return f"{self._legacy_key(siren):02d}"

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) != self.LEN:
            return False
        key, siren_code = code[: self.CHECK_DIGIT_LEN], code[self.CHECK_DIGIT_LEN:]
        if not all(is_digit(c) for c in siren_code):
            return False
        if not SIRENE_VALIDATOR.is_valid_siren(siren_code):
            return False
        if any(c not in self.ALPHABET for c in key):
            return False

        siren = int(siren_code)
        first, second = self.ALPHABET.index(key[0]), self.ALPHABET.index(key[1])
        if is_digit(key[0]) and is_digit(key[1]):
            return int(key) == self._legacy_key(siren)
        if is_digit(key[1]):
            s = first * 34 + second - 100
        elif is_digit(key[0]):
            s = first * 24 + second - 10
        else:
            self.logger.debug("%s: key %s has no digit", code, key)
            return False
        p = s // self.MODULUS_11 + 1
        return s % self.MODULUS_11 == (siren + p) % self.MODULUS_11

    def _legacy_key(self, siren: int) -> int:
        return (siren * 100 + 12) % self.MODULUS_97


VATID_FR_CHECK_DIGIT = VATidFRCheckDigit()
