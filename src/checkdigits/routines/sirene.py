"""French business registry numbers (SIREN and SIRET).

A SIREN identifies a company and has 9 digits; a SIRET identifies one
establishment and is the SIREN followed by a 5-digit sequence number.
Both the SIREN and the complete SIRET carry a Luhn check digit.
"""

from __future__ import annotations

import re

from checkdigits.routines.base import _get_logger
from checkdigits.routines.payment import LUHN_CHECK_DIGIT

logger = _get_logger("sirene")


class SireneValidator:
    """Validates SIREN and SIRET numbers.

    Example:
        SIRENE_VALIDATOR.is_valid("404833048")       # SIREN
        SIRENE_VALIDATOR.is_valid("40483304800022")  # SIRET
    """

    SIREN_LEN = 9
    SIRET_LEN = 14
    FORMAT = re.compile(r"^(?:[0-9]{9}|[0-9]{14})$")

    def is_valid(self, code: str | None) -> bool:
        """Validate a SIREN or SIRET number.

        Args:
            code: 9 or 14 digits, surrounding whitespace is ignored

        Returns:
            True if the number is well formed and its check digits are valid
        """
        if code is None:
            return False
        code = code.strip()
        if not self.FORMAT.match(code):
            return False
        if len(code) == self.SIREN_LEN:
            return self.is_valid_siren(code)
        if not self.is_valid_siren(code[: self.SIREN_LEN]):
            logger.debug("%s is a SIRET whose SIREN check digit is not valid", code)
            return False
        return LUHN_CHECK_DIGIT.is_valid(code)

    def is_valid_siren(self, siren: str) -> bool:
        """Validate a 9-digit SIREN."""
        return len(siren) == self.SIREN_LEN and LUHN_CHECK_DIGIT.is_valid(siren)


SIRENE_VALIDATOR = SireneValidator()
