"""Tests for rule files and rule inference."""

import polars as pl
import pytest

from checkdigits.rules import ColumnRule, RuleFileError, RuleSet, infer_rules
from checkdigits.types import Severity
from checkdigits.validators import (
    CheckDigitValidator,
    IBANValidator,
    ISBNValidator,
    LuhnValidator,
    VATValidator,
)


class TestColumnRule:
    """Tests for ColumnRule."""

    def test_from_string(self):
        """A bare string is a routine name."""
        rule = ColumnRule.from_dict("card", "luhn")
        assert rule.column == "card"
        assert rule.routine == "luhn"
        assert rule.separators is None

    def test_from_dict(self):
        """All options are read from a mapping."""
        rule = ColumnRule.from_dict("vat", {
            "routine": "vat",
            "allowed_countries": ["DE"],
            "severity": "HIGH",
            "mostly": 0.95,
            "allow_null": False,
        })
        assert rule.allowed_countries == ["DE"]
        assert rule.severity == Severity.HIGH
        assert rule.mostly == 0.95
        assert not rule.allow_null

    def test_missing_routine(self):
        """A rule mapping needs a routine."""
        with pytest.raises(ValueError, match="no routine"):
            ColumnRule.from_dict("card", {"separators": " "})

    def test_to_dict_omits_defaults(self):
        """Only non-default options are written."""
        assert ColumnRule("card", "luhn").to_dict() == {"routine": "luhn"}
        rule = ColumnRule("isbn", "isbn", separators=" -", severity=Severity.LOW)
        assert rule.to_dict() == {"routine": "isbn", "separators": " -", "severity": "low"}

    def test_named_validators(self):
        """Routine names of column validators build those validators."""
        assert isinstance(ColumnRule("card", "luhn").to_validator(), LuhnValidator)
        assert isinstance(ColumnRule("isbn", "isbn").to_validator(), ISBNValidator)

        iban = ColumnRule("iban", "iban", allowed_countries=["DE"]).to_validator()
        assert isinstance(iban, IBANValidator)
        assert iban.allowed_countries == ["DE"]

        vat = ColumnRule("vat", "vat", severity=Severity.LOW, mostly=0.5).to_validator()
        assert isinstance(vat, VATValidator)
        assert vat.config.severity_override == Severity.LOW
        assert vat.config.mostly == 0.5

    def test_plain_routine(self):
        """Other routine names build a CheckDigitValidator."""
        validator = ColumnRule("vat_fr", "vat_fr", uppercase=True).to_validator()
        assert type(validator) is CheckDigitValidator
        assert validator.routine_label == "vat_fr"
        assert validator.ignore_case

    def test_separators_override(self):
        """Explicit separators replace the validator default."""
        validator = ColumnRule("card", "luhn", separators="/").to_validator()
        assert validator.separators == "/"
        assert ColumnRule("card", "luhn").to_validator().separators == " -"


class TestRuleSet:
    """Tests for RuleSet."""

    def test_round_trip(self, tmp_path):
        """Rules survive save and load."""
        rules = RuleSet()
        rules.add(ColumnRule("iban", "iban", allowed_countries=["DE", "GB"]))
        rules.add(ColumnRule("card", "luhn", mostly=0.99))

        path = tmp_path / "rules.yaml"
        rules.save(path)
        loaded = RuleSet.load(path)

        assert list(loaded) == ["iban", "card"]
        assert loaded["iban"].allowed_countries == ["DE", "GB"]
        assert loaded["card"].mostly == 0.99
        assert loaded.to_dict() == rules.to_dict()

    def test_load(self, rules_file):
        """A hand-written rule file loads."""
        rules = RuleSet.load(rules_file)
        assert len(rules) == 2
        assert "isbn" in rules
        assert rules["isbn"].separators == " -"
        assert len(rules.validators()) == 2

    def test_missing_file(self, tmp_path):
        """Missing files raise RuleFileError."""
        with pytest.raises(RuleFileError):
            RuleSet.load(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Unparseable YAML raises RuleFileError."""
        path = tmp_path / "bad.yaml"
        path.write_text("columns: [unclosed\n")
        with pytest.raises(RuleFileError, match="not valid YAML"):
            RuleSet.load(path)

    def test_not_a_mapping(self, tmp_path):
        """A top-level list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- iban\n- luhn\n")
        with pytest.raises(RuleFileError):
            RuleSet.load(path)

    def test_columns_not_a_mapping(self, tmp_path):
        """columns must map names to rules."""
        path = tmp_path / "columns.yaml"
        path.write_text("columns:\n  - iban\n")
        with pytest.raises(RuleFileError) as exc_info:
            RuleSet.load(path)
        assert exc_info.value.path == str(path)

    def test_rule_without_routine(self, tmp_path):
        """Rules without a routine are rejected with the file name."""
        path = tmp_path / "norule.yaml"
        path.write_text("columns:\n  card:\n    separators: ' '\n")
        with pytest.raises(RuleFileError, match="norule.yaml"):
            RuleSet.load(path)


class TestInferRules:
    """Tests for infer_rules()."""

    def test_infer_from_frame(self, payments_frame):
        """IBAN and VAT columns are recognized, free text is not."""
        rules = infer_rules(payments_frame)
        assert rules["iban"].routine == "iban"
        assert rules["vat"].routine == "vat"
        assert "name" not in rules

    def test_infer_from_csv(self, payments_csv):
        """Leading zeros survive CSV loading."""
        rules = infer_rules(str(payments_csv))
        assert rules["isbn"].routine == "isbn"
        assert "name" not in rules

    def test_min_ratio(self, payments_csv):
        """Columns with too many bad values are not inferred."""
        assert infer_rules(str(payments_csv), min_ratio=0.6)["iban"].routine == "iban"
        strict = infer_rules(str(payments_csv), min_ratio=1.0)
        assert "iban" not in strict or strict["iban"].routine != "iban"

    def test_skips_non_string_columns(self):
        """Numeric columns are never inferred."""
        df = pl.DataFrame({"number": [79927398713, 4532015112830366]})
        assert len(infer_rules(df)) == 0

    def test_invalid_min_ratio(self, payments_frame):
        """min_ratio must be in (0, 1]."""
        with pytest.raises(ValueError):
            infer_rules(payments_frame, min_ratio=0.0)
        with pytest.raises(ValueError):
            infer_rules(payments_frame, min_ratio=1.5)