"""Tests for the column validators."""

import polars as pl
import pytest

from checkdigits.routines import UnknownRoutineError
from checkdigits.types import Severity
from checkdigits.validators import (
    CheckDigitValidator,
    ColumnNotFoundError,
    ColumnValidator,
    GermanTaxIdValidator,
    IBANValidator,
    ISBNValidator,
    LuhnValidator,
    ValidationIssue,
    ValidationResult,
    ValidatorConfig,
    VATValidator,
    get_validator,
    registry,
)


class TestLuhnValidator:
    """Tests for LuhnValidator."""

    def test_valid_cards(self, payments_frame):
        """Valid card numbers produce no issues."""
        validator = LuhnValidator(column="card")
        assert validator.validate(payments_frame.lazy()) == []

    def test_invalid_card(self, broken_payments_frame):
        """One bad card number is reported with a sample."""
        validator = LuhnValidator(column="card")
        issues = validator.validate(broken_payments_frame.lazy())

        assert len(issues) == 1
        issue = issues[0]
        assert issue.column == "card"
        assert issue.count == 1
        assert issue.issue_type == "invalid_luhn_check_digit"
        assert issue.severity == Severity.CRITICAL
        assert issue.sample_values == ["79927398710"]
        assert issue.expected == "Valid Luhn checksum"

    def test_separators(self):
        """Spaces and hyphens are ignored."""
        lf = pl.LazyFrame({"card": ["4532 0151 1283 0366", "4532-0151-1283-0366"]})
        assert LuhnValidator(column="card").validate(lf) == []

    def test_nulls_allowed(self):
        """Nulls and blanks pass by default."""
        lf = pl.LazyFrame({"card": ["79927398713", None, "  "]})
        assert LuhnValidator(column="card").validate(lf) == []

    def test_nulls_rejected(self):
        """Nulls and blanks fail with allow_null=False."""
        lf = pl.LazyFrame({"card": ["79927398713", None, "  "]})
        issues = LuhnValidator(column="card", allow_null=False).validate(lf)
        assert len(issues) == 1
        assert issues[0].count == 2

    def test_empty_frame(self):
        """An empty column has nothing to report."""
        lf = pl.LazyFrame({"card": pl.Series([], dtype=pl.String)})
        assert LuhnValidator(column="card").validate(lf) == []

    def test_severity_override(self, broken_payments_frame):
        """severity_override replaces the computed severity."""
        validator = LuhnValidator(column="card", severity_override=Severity.LOW)
        issues = validator.validate(broken_payments_frame.lazy())
        assert issues[0].severity == Severity.LOW

    def test_severity_override_from_string(self, broken_payments_frame):
        """String severities are coerced."""
        validator = LuhnValidator(column="card", severity_override="medium")
        issues = validator.validate(broken_payments_frame.lazy())
        assert issues[0].severity == Severity.MEDIUM

    def test_mostly(self, broken_payments_frame):
        """Failures within the mostly threshold are tolerated."""
        lf = broken_payments_frame.lazy()
        assert LuhnValidator(column="card", mostly=0.6).validate(lf) == []
        assert len(LuhnValidator(column="card", mostly=0.9).validate(lf)) == 1

    def test_sample_size(self):
        """Samples are capped at sample_size."""
        lf = pl.LazyFrame({"card": ["79927398710", "79927398711", "79927398712"]})
        issues = LuhnValidator(column="card", sample_size=2).validate(lf)
        assert issues[0].count == 3
        assert len(issues[0].sample_values) == 2


class TestCheckDigitValidator:
    """Tests for the generic CheckDigitValidator."""

    def test_routine_by_name(self):
        """Any registered routine can be used by name."""
        lf = pl.LazyFrame({"vat": ["00300076965", "00300076966"]})
        validator = CheckDigitValidator(column="vat", routine="vat_fr")
        issues = validator.validate(lf)

        assert len(issues) == 1
        assert issues[0].issue_type == "invalid_vat_fr_check_digit"
        assert issues[0].expected == "Valid vat_fr check digit"

    def test_routine_instance(self):
        """A routine instance can be passed directly."""
        from checkdigits.routines import VERHOEFF_CHECK_DIGIT

        validator = CheckDigitValidator(column="code", routine=VERHOEFF_CHECK_DIGIT)
        assert validator.routine is VERHOEFF_CHECK_DIGIT
        assert validator.routine_label == "verhoeff"

    def test_unknown_routine(self):
        """Unknown routine names fail at construction."""
        with pytest.raises(UnknownRoutineError):
            CheckDigitValidator(column="code", routine="nope")

    def test_routine_required(self):
        """The generic validator needs a routine."""
        with pytest.raises(ValueError):
            CheckDigitValidator(column="code")

    def test_missing_column(self, payments_frame):
        """A missing column raises ColumnNotFoundError."""
        validator = LuhnValidator(column="missing")
        with pytest.raises(ColumnNotFoundError):
            validator.validate(payments_frame.lazy())

    def test_missing_column_safe(self, payments_frame):
        """validate_safe skips validators with missing columns."""
        result = LuhnValidator(column="missing").validate_safe(payments_frame.lazy())
        assert result.status == ValidationResult.SKIPPED
        assert result.issues == []
        assert result.error_context.error_type == "ColumnNotFoundError"
        assert result.to_dict()["status"] == "skipped"

    def test_isbn(self):
        """ISBN-10 and ISBN-13 with hyphens, lower-case x accepted."""
        lf = pl.LazyFrame({"isbn": ["0-306-40615-2", "978-0-306-40615-7", "080442957x"]})
        assert ISBNValidator(column="isbn").validate(lf) == []

    def test_german_tax_id(self):
        """Spaces are removed from tax ids."""
        lf = pl.LazyFrame({"tid": ["02 476 291 358", "02476291359"]})
        issues = GermanTaxIdValidator(column="tid").validate(lf)
        assert issues[0].count == 1
        assert issues[0].issue_type == "invalid_tid_de_check_digit"


class _ExplodingValidator(ColumnValidator):
    name = "exploding"

    def validate_value(self, value):
        raise RuntimeError("boom")


class TestSafeExecution:
    """Tests for validate_safe error handling."""

    def test_failure_is_captured(self, payments_frame):
        """Unexpected errors become FAILED results."""
        validator = _ExplodingValidator(column="name", log_errors=False)
        result = validator.validate_safe(payments_frame.lazy())
        assert result.status == ValidationResult.FAILED
        assert result.error_context.error_type == "RuntimeError"
        assert result.error_message == "boom"

    def test_failure_propagates_without_degradation(self, payments_frame):
        """graceful_degradation=False re-raises."""
        validator = _ExplodingValidator(column="name", graceful_degradation=False, log_errors=False)
        with pytest.raises(RuntimeError):
            validator.validate_safe(payments_frame.lazy())


class TestIBANValidator:
    """Tests for IBANValidator."""

    def test_valid(self, payments_frame):
        """Compact and grouped IBANs validate."""
        assert IBANValidator(column="iban").validate(payments_frame.lazy()) == []

    def test_invalid_is_masked(self, broken_payments_frame):
        """Sample IBANs are masked in issues."""
        issues = IBANValidator(column="iban").validate(broken_payments_frame.lazy())
        assert issues[0].issue_type == "invalid_iban"
        assert issues[0].sample_values == ["GB82****5431"]
        assert "GB82WEST12345698765431" not in issues[0].details

    def test_lowercase(self):
        """IBANs are upper-cased before validation."""
        lf = pl.LazyFrame({"iban": ["gb82west12345698765432"]})
        assert IBANValidator(column="iban").validate(lf) == []

    def test_wrong_length(self):
        """Country lengths are enforced."""
        lf = pl.LazyFrame({"iban": ["GB82WEST1234569876543"]})
        assert IBANValidator(column="iban").validate(lf)[0].count == 1

    def test_allowed_countries(self, payments_frame):
        """IBANs from other countries fail."""
        validator = IBANValidator(column="iban", allowed_countries=["de"])
        issues = validator.validate(payments_frame.lazy())
        assert issues[0].count == 2


class TestVATValidator:
    """Tests for VATValidator."""

    def test_valid(self, payments_frame):
        """Valid VAT numbers produce no issues."""
        assert VATValidator(column="vat").validate(payments_frame.lazy()) == []

    def test_invalid(self, broken_payments_frame):
        """A wrong check digit is reported."""
        issues = VATValidator(column="vat").validate(broken_payments_frame.lazy())
        assert issues[0].count == 1
        assert issues[0].issue_type == "invalid_vat_number"
        assert issues[0].sample_values == ["DE136695975"]

    def test_normalization(self):
        """Case, separators and the GR prefix are normalized."""
        lf = pl.LazyFrame({"vat": ["atu13585627", "GR040127797", "EL 040.127.797"]})
        assert VATValidator(column="vat").validate(lf) == []

    def test_strict_format(self):
        """Strict mode also requires the country format."""
        lf = pl.LazyFrame({"vat": ["BG8319195360016"]})
        assert len(VATValidator(column="vat").validate(lf)) == 1
        assert VATValidator(column="vat", strict_format=False).validate(lf) == []

    def test_allowed_countries(self, payments_frame):
        """Only listed countries pass; GR and EL are the same."""
        issues = VATValidator(column="vat", allowed_countries=["AT"]).validate(payments_frame.lazy())
        assert issues[0].count == 2

        lf = pl.LazyFrame({"vat": ["EL040127797"]})
        assert VATValidator(column="vat", allowed_countries=["GR"]).validate(lf) == []


class TestValidatorConfig:
    """Tests for ValidatorConfig."""

    def test_defaults(self):
        """Default configuration values."""
        config = ValidatorConfig()
        assert config.sample_size == 5
        assert config.mostly is None
        assert config.graceful_degradation

    def test_invalid_values(self):
        """Out-of-range values are rejected."""
        with pytest.raises(ValueError):
            ValidatorConfig(mostly=1.5)
        with pytest.raises(ValueError):
            ValidatorConfig(sample_size=-1)

    def test_replace(self):
        """replace() returns an updated copy."""
        config = ValidatorConfig(sample_size=3)
        updated = config.replace(mostly=0.5)
        assert updated.sample_size == 3
        assert updated.mostly == 0.5
        assert config.mostly is None

    def test_from_kwargs_ignores_unknown(self):
        """Unknown keys are dropped."""
        config = ValidatorConfig.from_kwargs(sample_size=2, column="x")
        assert config.sample_size == 2

    def test_issue_to_dict(self):
        """Issues serialize without empty optional fields."""
        issue = ValidationIssue("card", "invalid_luhn_check_digit", 1, Severity.HIGH, "details")
        assert issue.to_dict() == {
            "column": "card",
            "issue_type": "invalid_luhn_check_digit",
            "count": 1,
            "severity": "high",
            "details": "details",
        }


class TestRegistry:
    """Tests for the validator registry."""

    def test_lookup(self):
        """Validators are found by name."""
        assert get_validator("luhn") is LuhnValidator
        assert get_validator("iban") is IBANValidator
        assert "vat" in registry
        assert "check_digit" in registry

    def test_unknown(self):
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown validator"):
            get_validator("nope")

    def test_categories(self):
        """Validators are grouped by category."""
        categories = registry.list_categories()
        assert "checksum" in categories
        assert "financial" in categories
        assert "tax" in categories
        assert "isbn" in registry.get_by_category("checksum")
        assert list(registry.get_by_category("tax")) == ["vat"]
