"""Spanish VAT number (NIF).

The first character selects the kind of taxpayer and with it the check
character scheme:

- a digit: Spanish national (DNI), check letter from ``CHECK_CHARACTER``
- X, Y, Z, K, L, M: foreign or special natural person (NIE), same
  letters; X, Y and Z count as a leading 0, 1 and 2
- N, P, Q, R, S, W: entities whose check character is a Luhn letter
- any other letter: entities with a Luhn check digit
"""

from __future__ import annotations

from checkdigits.routines.base import CheckDigit, _get_logger, is_blank, is_digit, parse_digits
from checkdigits.routines.errors import CheckDigitError, MissingCodeError, ZeroSumError
from checkdigits.routines.payment import LUHN_CHECK_DIGIT


class VATidESCheckDigit(CheckDigit):
    """Spanish VAT check character, dispatched on the first character."""

    name = "vat.es"

    MIN_CODE_LEN = 4
    MODULUS_23 = 23
    CHECK_CHARACTER = "TRWAGMYFPDXBNJZSQVHLCKE"
    NATURAL_PERSON_PREFIXES = "XYZKLM"
    # NIE prefixes standing for a leading digit
    NIE_DIGITS = {"X": "0", "Y": "1", "Z": "2"}
    LUHN_LETTER_PREFIXES = "NPQRSW"
    LUHN_CHECK_LETTER = "JABCDEFGHI"

    ENTITY_KINDS = {
        "A": "Sociedades anonimas",
        "B": "Sociedades de responsabilidad limitada",
        "C": "Sociedades colectivas",
        "D": "Sociedades comanditarias",
        "E": "Comunidades de bienes",
        "F": "Sociedades cooperativas",
        "G": "Asociaciones y fundaciones",
        "H": "Comunidades de propietarios",
        "J": "Sociedades civiles",
        "U": "Uniones temporales de empresas",
        "V": "Otros tipos no definidos",
    }

    def __init__(self) -> None:
        self.logger = _get_logger(self.name)

    def calculate(self, code: str) -> str:
        if is_blank(code):
            raise MissingCodeError()
        first = code[0]
        if is_digit(first):
            return self._mod23_letter(code)
        if first in self.NATURAL_PERSON_PREFIXES:
            return self._mod23_letter(self.NIE_DIGITS.get(first, "") + code[1:])
        luhn_digit = LUHN_CHECK_DIGIT.calculate(code[1:])
        if first in self.LUHN_LETTER_PREFIXES:
            return self.LUHN_CHECK_LETTER[int(luhn_digit)]
        return luhn_digit

    def is_valid(self, code: str) -> bool:
        if is_blank(code) or len(code) <= self.MIN_CODE_LEN:
            return False
        kind = self.ENTITY_KINDS.get(code[0])
        if kind:
            self.logger.debug("%s: %s", code, kind)
        try:
            return self.calculate(code[:-1]) == code[-1]
        except CheckDigitError:
            return False

    def _mod23_letter(self, digits: str) -> str:
        value = parse_digits(digits)
        if value == 0:
            raise ZeroSumError()
        return self.CHECK_CHARACTER[value % self.MODULUS_23]


VATID_ES_CHECK_DIGIT = VATidESCheckDigit()
