"""Tests for the national VAT routines and the VATIN dispatcher."""

import pytest

from checkdigits.routines import (
    COUNTRY_ROUTINES,
    VATIN_CHECK_DIGIT,
    InvalidCountryCodeError,
    MissingCodeError,
    VATINCheckDigit,
    get_check_digit,
)


VALID_NUMBERS = {
    "AT": ["U13585627"],
    "BE": ["0411905847"],
    "BG": ["108511243", "474074760", "7524169268", "8319195360016", "8319195360048"],
    "CY": ["30010823A", "10259033P"],
    "CZ": ["00000019", "45799504", "640903926", "600000010", "7103192745", "6852294449", "9982319996"],
    "DE": ["136695976"],
    "DK": ["13585628", "88146328"],
    "EE": ["100594102"],
    "EL": ["040127797", "000000130"],
    "ES": ["54362315K", "X2482300W", "X5253868R", "M1234567L", "A58818501", "Q2876031B"],
    "FI": ["13669598"],
    "FR": ["00300076965", "K7399859412", "11123456782", "02813197589"],
    "HR": ["33392005961"],
    "HU": ["21376414"],
    "IE": ["3628739UA", "6433435OA", "6433435F"],
    "IT": ["00743110157"],
    "LT": ["213179412", "290061371314"],
    "LU": ["25180625"],
    "LV": ["40003009497", "07091910933", "01010100000"],
    "MT": ["15121333"],
    "NL": ["123456782", "004495445", "123456782B01"],
    "PL": ["5260250274"],
    "PT": ["501964843", "000000310", "000000019"],
    "RO": ["18547290", "9999999994"],
    "SE": ["556188840401"],
    "SI": ["50223054", "15012557"],
    "SK": ["2022749619", "0000000011"],
    "XI": ["434031494", "110305878"],
}

INVALID_NUMBERS = {
    "BG": ["7502300013", "8319195370016"],
    "CZ": ["99999994", "395601439", "1113311111"],
    "EE": ["100594103"],
    "ES": ["54362315Z", "X2482300A"],
    "IE": ["0000000IA"],
    "LV": ["31129910930", "18097230924"],
    "NL": ["010001440"],
    "PL": ["0000000000", "1234567890"],
    "SK": ["0000000010"],
}


def _cases(table):
    return [(cc, code) for cc, codes in table.items() for code in codes]


class TestCountryRoutines:
    """Published and corrupted numbers per member state."""

    @pytest.mark.parametrize("country,code", _cases(VALID_NUMBERS))
    def test_valid_number(self, country, code):
        """Published numbers validate with the national routine."""
        assert COUNTRY_ROUTINES[country].is_valid(code)

    @pytest.mark.parametrize("country,code", _cases(VALID_NUMBERS))
    def test_valid_number_with_prefix(self, country, code):
        """The dispatcher accepts the same numbers with their prefix."""
        assert VATIN_CHECK_DIGIT.is_valid(country + code)

    @pytest.mark.parametrize("country,code", _cases(INVALID_NUMBERS))
    def test_invalid_number(self, country, code):
        """Known bad numbers are rejected."""
        assert not COUNTRY_ROUTINES[country].is_valid(code)

    def test_all_countries_reject_blank(self):
        """Every national routine rejects blank and None."""
        for routine in COUNTRY_ROUTINES.values():
            assert not routine.is_valid("")
            assert not routine.is_valid(None)

    def test_registered_under_routine_names(self):
        """National routines are reachable as vat_<cc>."""
        assert get_check_digit("vat_at") is COUNTRY_ROUTINES["AT"]
        assert get_check_digit("vat_xi") is COUNTRY_ROUTINES["XI"]


class TestCalculate:
    """calculate() on national bodies."""

    def test_austria(self):
        """The leading U is part of the body."""
        assert COUNTRY_ROUTINES["AT"].calculate("U1358562") == "7"

    def test_germany(self):
        """Germany uses MOD 11,10."""
        assert COUNTRY_ROUTINES["DE"].calculate("13669597") == "6"

    def test_france_legacy_key(self):
        """France returns the two-digit numeric key."""
        assert COUNTRY_ROUTINES["FR"].calculate("300076965") == "00"

    def test_slovakia(self):
        """The last digit is the body modulo 11."""
        assert COUNTRY_ROUTINES["SK"].calculate("202274961") == "9"

    def test_poland(self):
        """Poland uses weighted modulus 11."""
        assert COUNTRY_ROUTINES["PL"].calculate("526025027") == "4"


class TestEdgeCases:
    """Country-specific rules beyond the check digit."""

    def test_austria_requires_u(self):
        """Austrian numbers must start with U."""
        assert not COUNTRY_ROUTINES["AT"].is_valid("X13585627")
        assert not COUNTRY_ROUTINES["AT"].is_valid("13585627")

    def test_wrong_length(self):
        """Fixed-length countries reject other lengths."""
        assert not COUNTRY_ROUTINES["DK"].is_valid("1358562")
        assert not COUNTRY_ROUTINES["SK"].is_valid("202274961")
        assert not COUNTRY_ROUTINES["PT"].is_valid("5019648430")

    def test_spanish_nie_letter_matters(self):
        """Only X, Y and Z prefix foreigner numbers."""
        assert COUNTRY_ROUTINES["ES"].is_valid("X2482300W")
        assert not COUNTRY_ROUTINES["ES"].is_valid("X2482300A")


class TestVATINDispatcher:
    """Tests for the full-VATIN dispatcher."""

    def test_valid(self):
        """A prefixed number is dispatched to its country."""
        assert VATIN_CHECK_DIGIT.is_valid("ATU13585627")
        assert VATIN_CHECK_DIGIT.is_valid("DE136695976")

    def test_unknown_or_lowercase_prefix(self):
        """Prefixes are case sensitive and must be registered."""
        assert not VATIN_CHECK_DIGIT.is_valid("atU13585627")
        assert not VATIN_CHECK_DIGIT.is_valid("XX123456789")
        assert not VATIN_CHECK_DIGIT.is_valid("GR040127797")

    def test_short_codes(self):
        """Codes shorter than a prefix are invalid."""
        assert not VATIN_CHECK_DIGIT.is_valid("A")
        assert not VATIN_CHECK_DIGIT.is_valid("")
        assert not VATIN_CHECK_DIGIT.is_valid(None)

    def test_calculate(self):
        """calculate() strips the prefix before delegating."""
        assert VATIN_CHECK_DIGIT.calculate("ATU1358562") == "7"

    def test_calculate_errors(self):
        """Blank codes and unknown prefixes raise."""
        with pytest.raises(MissingCodeError):
            VATIN_CHECK_DIGIT.calculate("")
        with pytest.raises(InvalidCountryCodeError):
            VATIN_CHECK_DIGIT.calculate("XX123")

    @pytest.mark.parametrize("code", ["ATU13585627", "ATU13585628", "NL123456782B01", "ES54362315Z"])
    def test_matches_country_routine(self, code):
        """The dispatcher agrees with the country routine on the body."""
        routine = COUNTRY_ROUTINES[code[:2]]
        assert VATIN_CHECK_DIGIT.is_valid(code) == routine.is_valid(code[2:])

    def test_countries(self):
        """Registered countries are listed sorted."""
        countries = VATIN_CHECK_DIGIT.countries
        assert countries == tuple(sorted(countries))
        assert "EL" in countries
        assert "XI" in countries
        assert "GR" not in countries
        assert "GB" not in countries

    def test_custom_routines(self):
        """A dispatcher can be built over a subset of countries."""
        dispatcher = VATINCheckDigit({"AT": COUNTRY_ROUTINES["AT"]})
        assert dispatcher.countries == ("AT",)
        assert dispatcher.is_valid("ATU13585627")
        assert not dispatcher.is_valid("DE136695976")
