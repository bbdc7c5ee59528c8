"""Tests for VATIN formats and the format-aware VATIN validator."""

import pytest

from checkdigits.codes import (
    DEFAULT_FORMATS,
    VATIN_VALIDATOR,
    VATINCheckResult,
    VATINFormat,
    VATINValidator,
)
from checkdigits.routines import VATIN_CHECK_DIGIT


class TestVATINFormat:
    """Tests for VATINFormat."""

    def test_matches(self):
        """Prefix, pattern and length must all fit."""
        fmt = VATINFormat("AT", 11, "U[0-9]{8}")
        assert fmt.matches("ATU13585627")
        assert not fmt.matches("ATU1358562")
        assert not fmt.matches("DEU13585627")
        assert not fmt.matches("ATX13585627")

    def test_max_length(self):
        """Codes longer than max_length never match."""
        fmt = VATINFormat("XX", 10, "[0-9]+")
        assert fmt.matches("XX12345678")
        assert not fmt.matches("XX123456789")

    def test_other_country_codes(self):
        """Further prefixes share the pattern."""
        fmt = VATINFormat("EL", 11, "[0-9]{9}", other_country_codes=("GR",))
        assert fmt.matches("EL040127797")
        assert fmt.matches("GR040127797")

    def test_invalid_country_code(self):
        """Country codes must be 2 upper-case letters."""
        for bad in ("at", "A", "AUT", "A1"):
            with pytest.raises(ValueError, match="Invalid country code"):
                VATINFormat(bad, 11, "[0-9]{9}")

    def test_invalid_length(self):
        """max_length must be between 10 and 16."""
        with pytest.raises(ValueError, match="Invalid length"):
            VATINFormat("AT", 9, "[0-9]{7}")
        with pytest.raises(ValueError, match="Invalid length"):
            VATINFormat("AT", 17, "[0-9]{15}")

    def test_to_dict(self):
        """Serialization omits empty alternative prefixes."""
        assert VATINFormat("AT", 11, "U[0-9]{8}").to_dict() == {
            "country_code": "AT",
            "max_length": 11,
            "pattern": "U[0-9]{8}",
        }
        data = VATINFormat("EL", 11, "[0-9]{9}", ("GR",)).to_dict()
        assert data["other_country_codes"] == ["GR"]

    def test_defaults_are_unique(self):
        """Each default country appears once."""
        codes = [fmt.country_code for fmt in DEFAULT_FORMATS]
        assert len(codes) == len(set(codes))
        assert "EL" in codes
        assert "GR" not in codes


class TestVATINValidator:
    """Tests for VATINValidator.check()."""

    @pytest.mark.parametrize(
        "code",
        ["ATU13585627", "DE136695976", "FRK7399859412", "NL123456782B01", "ESX2482300W", "XI434031494"],
    )
    def test_valid(self, code):
        """Well-formed numbers with correct check digits pass."""
        result = VATIN_VALIDATOR.check(code)
        assert result.valid
        assert result.reason is None
        assert result.country_code == code[:2]

    def test_too_short(self):
        """Codes without a full prefix are too short."""
        assert VATIN_VALIDATOR.check("A").reason == "too short"
        assert VATIN_VALIDATOR.check(None).reason == "too short"
        assert VATIN_VALIDATOR.check(None).code == ""

    def test_unknown_country(self):
        """Unregistered prefixes are reported by name."""
        result = VATIN_VALIDATOR.check("XX123456789")
        assert not result.valid
        assert result.reason == "unknown country 'XX'"
        assert result.country_code == "XX"

    def test_invalid_format(self):
        """Pattern or length failures are format errors."""
        assert VATIN_VALIDATOR.check("ATX13585627").reason == "invalid format"
        assert VATIN_VALIDATOR.check("DE13669597").reason == "invalid format"

    def test_check_digit_mismatch(self):
        """A well-formed number with a wrong check digit."""
        assert VATIN_VALIDATOR.check("ATU13585628").reason == "check digit mismatch"

    def test_eu_prefix_has_no_routine(self):
        """The EU prefix has a format but no check digit routine."""
        assert VATIN_VALIDATOR.has_format("EU826010755")
        assert VATIN_VALIDATOR.check("EU826010755").reason == "check digit mismatch"

    def test_format_is_stricter_than_check_digit(self):
        """Bulgarian 13-digit numbers pass the routine but not the format."""
        assert VATIN_CHECK_DIGIT.is_valid("BG8319195360016")
        assert VATIN_VALIDATOR.check("BG8319195360016").reason == "invalid format"

    def test_result_to_dict(self):
        """Results serialize to plain dicts."""
        result = VATINCheckResult("ATU13585627", "AT", True)
        assert result.to_dict() == {
            "code": "ATU13585627",
            "country_code": "AT",
            "valid": True,
            "reason": None,
        }

    def test_get_format(self):
        """Formats are looked up by prefix."""
        assert VATIN_VALIDATOR.get_format("ATU13585627").country_code == "AT"
        assert VATIN_VALIDATOR.get_format("XX1") is None
        assert VATIN_VALIDATOR.get_format(None) is None


class TestFormatRegistry:
    """Tests for adding and removing formats."""

    def test_default_is_frozen(self):
        """The shared validator cannot be modified."""
        with pytest.raises(RuntimeError):
            VATIN_VALIDATOR.set_format(VATINFormat("XX", 11, "[0-9]{9}"))
        with pytest.raises(RuntimeError):
            VATIN_VALIDATOR.remove_format("AT")
        assert VATIN_VALIDATOR.has_format("ATU13585627")

    def test_formats_are_read_only(self):
        """The formats mapping cannot be written to."""
        with pytest.raises(TypeError):
            VATIN_VALIDATOR.formats["XX"] = VATINFormat("XX", 11, "[0-9]{9}")

    def test_set_format(self):
        """A custom validator accepts new and replacement formats."""
        validator = VATINValidator()
        previous = validator.set_format(VATINFormat("AT", 11, "[A-Z][0-9]{8}"))
        assert previous.pattern == "U[0-9]{8}"
        assert validator.has_format("ATX13585627")
        assert validator.check("ATX13585627").reason == "check digit mismatch"
        assert VATIN_VALIDATOR.check("ATX13585627").reason == "invalid format"

    def test_remove_format(self):
        """Removed countries become unknown."""
        validator = VATINValidator()
        removed = validator.remove_format("AT")
        assert removed.country_code == "AT"
        assert validator.remove_format("AT") is None
        assert validator.check("ATU13585627").reason == "unknown country 'AT'"

    def test_alias_registration(self):
        """Alternative prefixes are registered at construction."""
        validator = VATINValidator(
            formats=[VATINFormat("EL", 11, "[0-9]{9}", other_country_codes=("GR",))],
        )
        assert validator.get_format("GR040127797").country_code == "EL"
        # the dispatcher has no GR routine
        assert validator.check("GR040127797").reason == "check digit mismatch"
        assert validator.is_valid("EL040127797")
