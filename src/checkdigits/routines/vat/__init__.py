"""VAT identification number routines.

One module per member state, plus ``VATINCheckDigit`` which dispatches a
full VATIN (``"ATU13585627"``) to the routine registered for its
2-letter country prefix.

Example:
    from checkdigits.routines.vat import VATIN_CHECK_DIGIT

    VATIN_CHECK_DIGIT.is_valid("ATU13585627")   # True
    VATIN_CHECK_DIGIT.calculate("ATU1358562")   # "7"
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from checkdigits.routines.base import CheckDigit, _get_logger, is_blank
from checkdigits.routines.errors import InvalidCountryCodeError, MissingCodeError
from checkdigits.routines.modulus import Modulus11TenCheckDigit
from checkdigits.routines.payment import LUHN_CHECK_DIGIT
from checkdigits.routines.vat.at import VATID_AT_CHECK_DIGIT, VATidATCheckDigit
from checkdigits.routines.vat.be import VATID_BE_CHECK_DIGIT, VATidBECheckDigit
from checkdigits.routines.vat.bg import VATID_BG_CHECK_DIGIT, VATidBGCheckDigit
from checkdigits.routines.vat.cy import VATID_CY_CHECK_DIGIT, VATidCYCheckDigit
from checkdigits.routines.vat.cz import VATID_CZ_CHECK_DIGIT, VATidCZCheckDigit
from checkdigits.routines.vat.dk import VATID_DK_CHECK_DIGIT, VATidDKCheckDigit
from checkdigits.routines.vat.ee import VATID_EE_CHECK_DIGIT, VATidEECheckDigit
from checkdigits.routines.vat.el import VATID_EL_CHECK_DIGIT, VATidELCheckDigit
from checkdigits.routines.vat.es import VATID_ES_CHECK_DIGIT, VATidESCheckDigit
from checkdigits.routines.vat.fi import VATID_FI_CHECK_DIGIT, VATidFICheckDigit
from checkdigits.routines.vat.fr import VATID_FR_CHECK_DIGIT, VATidFRCheckDigit
from checkdigits.routines.vat.gb import VATID_GB_CHECK_DIGIT, VATidGBCheckDigit
from checkdigits.routines.vat.hu import VATID_HU_CHECK_DIGIT, VATidHUCheckDigit
from checkdigits.routines.vat.ie import VATID_IE_CHECK_DIGIT, VATidIECheckDigit
from checkdigits.routines.vat.lt import VATID_LT_CHECK_DIGIT, VATidLTCheckDigit
from checkdigits.routines.vat.lu import VATID_LU_CHECK_DIGIT, VATidLUCheckDigit
from checkdigits.routines.vat.lv import VATID_LV_CHECK_DIGIT, VATidLVCheckDigit
from checkdigits.routines.vat.mt import VATID_MT_CHECK_DIGIT, VATidMTCheckDigit
from checkdigits.routines.vat.nl import VATID_NL_CHECK_DIGIT, VATidNLCheckDigit
from checkdigits.routines.vat.pl import VATID_PL_CHECK_DIGIT, VATidPLCheckDigit
from checkdigits.routines.vat.pt import VATID_PT_CHECK_DIGIT, VATidPTCheckDigit
from checkdigits.routines.vat.ro import VATID_RO_CHECK_DIGIT, VATidROCheckDigit
from checkdigits.routines.vat.se import VATID_SE_CHECK_DIGIT, VATidSECheckDigit
from checkdigits.routines.vat.si import VATID_SI_CHECK_DIGIT, VATidSICheckDigit
from checkdigits.routines.vat.sk import VATID_SK_CHECK_DIGIT, VATidSKCheckDigit


# Germany and Croatia use ISO 7064 MOD 11,10 as is, Italy uses Luhn
VATID_DE_CHECK_DIGIT = Modulus11TenCheckDigit()
VATID_HR_CHECK_DIGIT = Modulus11TenCheckDigit()
VATID_IT_CHECK_DIGIT = LUHN_CHECK_DIGIT


# ============================================================================
# Country registry
# ============================================================================

COUNTRY_ROUTINES: Mapping[str, CheckDigit] = MappingProxyType({
    "AT": VATID_AT_CHECK_DIGIT,
    "BE": VATID_BE_CHECK_DIGIT,
    "BG": VATID_BG_CHECK_DIGIT,
    "CY": VATID_CY_CHECK_DIGIT,
    "CZ": VATID_CZ_CHECK_DIGIT,
    "DE": VATID_DE_CHECK_DIGIT,
    "DK": VATID_DK_CHECK_DIGIT,
    "EE": VATID_EE_CHECK_DIGIT,
    "EL": VATID_EL_CHECK_DIGIT,
    "ES": VATID_ES_CHECK_DIGIT,
    "FI": VATID_FI_CHECK_DIGIT,
    "FR": VATID_FR_CHECK_DIGIT,
    "HR": VATID_HR_CHECK_DIGIT,
    "HU": VATID_HU_CHECK_DIGIT,
    "IE": VATID_IE_CHECK_DIGIT,
    "IT": VATID_IT_CHECK_DIGIT,
    "LT": VATID_LT_CHECK_DIGIT,
    "LU": VATID_LU_CHECK_DIGIT,
    "LV": VATID_LV_CHECK_DIGIT,
    "MT": VATID_MT_CHECK_DIGIT,
    "NL": VATID_NL_CHECK_DIGIT,
    "PL": VATID_PL_CHECK_DIGIT,
    "PT": VATID_PT_CHECK_DIGIT,
    "RO": VATID_RO_CHECK_DIGIT,
    "SE": VATID_SE_CHECK_DIGIT,
    "SI": VATID_SI_CHECK_DIGIT,
    "SK": VATID_SK_CHECK_DIGIT,
    "XI": VATID_GB_CHECK_DIGIT,
})


# ============================================================================
# Dispatcher
# ============================================================================

class VATINCheckDigit(CheckDigit):
    """Check digit routine for a full VATIN, country prefix included.

    The first two characters select the national routine (case
    sensitive); the rest of the code is handed to it unchanged.
    """

    name = "vatin"

    COUNTRY_CODE_LEN = 2

    def __init__(self, routines: Mapping[str, CheckDigit] = COUNTRY_ROUTINES):
        """Initialize the dispatcher.

        Args:
            routines: Country key to routine mapping
        """
        self._routines = MappingProxyType(dict(routines))
        self.logger = _get_logger(self.name)

    @property
    def countries(self) -> tuple[str, ...]:
        """Registered country keys, sorted."""
        return tuple(sorted(self._routines))

    def get_routine(self, code: str | None) -> CheckDigit | None:
        """Get the national routine for a VATIN.

        Args:
            code: VATIN, at least the 2-letter country prefix

        Returns:
            The routine, or None for short codes and unregistered prefixes
        """
        if code is None or len(code) < self.COUNTRY_CODE_LEN:
            return None
        return self._routines.get(code[: self.COUNTRY_CODE_LEN])

    def calculate(self, code: str) -> str:
        """Calculate the check digit(s) of a VATIN without its check digit(s).

        Raises:
            MissingCodeError: If the code is blank
            InvalidCountryCodeError: If the prefix has no registered routine
            CheckDigitError: Whatever the national routine raises
        """
        if is_blank(code):
            raise MissingCodeError()
        routine = self.get_routine(code)
        if routine is None:
            raise InvalidCountryCodeError(code[: self.COUNTRY_CODE_LEN])
        return routine.calculate(code[self.COUNTRY_CODE_LEN:])

    def is_valid(self, code: str) -> bool:
        if is_blank(code):
            return False
        routine = self.get_routine(code)
        if routine is None:
            self.logger.debug("No routine registered for '%s'", code[: self.COUNTRY_CODE_LEN])
            return False
        return routine.is_valid(code[self.COUNTRY_CODE_LEN:])


VATIN_CHECK_DIGIT = VATINCheckDigit()


__all__ = [
    # Dispatcher
    "COUNTRY_ROUTINES",
    "VATINCheckDigit",
    "VATIN_CHECK_DIGIT",
    # National routines
    "VATidATCheckDigit",
    "VATidBECheckDigit",
    "VATidBGCheckDigit",
    "VATidCYCheckDigit",
    "VATidCZCheckDigit",
    "VATidDKCheckDigit",
    "VATidEECheckDigit",
    "VATidELCheckDigit",
    "VATidESCheckDigit",
    "VATidFICheckDigit",
    "VATidFRCheckDigit",
    "VATidGBCheckDigit",
    "VATidHUCheckDigit",
    "VATidIECheckDigit",
    "VATidLTCheckDigit",
    "VATidLUCheckDigit",
    "VATidLVCheckDigit",
    "VATidMTCheckDigit",
    "VATidNLCheckDigit",
    "VATidPLCheckDigit",
    "VATidPTCheckDigit",
    "VATidROCheckDigit",
    "VATidSECheckDigit",
    "VATidSICheckDigit",
    "VATidSKCheckDigit",
    # Singletons
    "VATID_AT_CHECK_DIGIT",
    "VATID_BE_CHECK_DIGIT",
    "VATID_BG_CHECK_DIGIT",
    "VATID_CY_CHECK_DIGIT",
    "VATID_CZ_CHECK_DIGIT",
    "VATID_DE_CHECK_DIGIT",
    "VATID_DK_CHECK_DIGIT",
    "VATID_EE_CHECK_DIGIT",
    "VATID_EL_CHECK_DIGIT",
    "VATID_ES_CHECK_DIGIT",
    "VATID_FI_CHECK_DIGIT",
    "VATID_FR_CHECK_DIGIT",
    "VATID_GB_CHECK_DIGIT",
    "VATID_HR_CHECK_DIGIT",
    "VATID_HU_CHECK_DIGIT",
    "VATID_IE_CHECK_DIGIT",
    "VATID_IT_CHECK_DIGIT",
    "VATID_LT_CHECK_DIGIT",
    "VATID_LU_CHECK_DIGIT",
    "VATID_LV_CHECK_DIGIT",
    "VATID_MT_CHECK_DIGIT",
    "VATID_NL_CHECK_DIGIT",
    "VATID_PL_CHECK_DIGIT",
    "VATID_PT_CHECK_DIGIT",
    "VATID_RO_CHECK_DIGIT",
    "VATID_SE_CHECK_DIGIT",
    "VATID_SI_CHECK_DIGIT",
    "VATID_SK_CHECK_DIGIT",
]
