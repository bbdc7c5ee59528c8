"""Tests for the main API functions."""

import json

import pytest

import checkdigits as cd
from checkdigits.report import Report
from checkdigits.types import Severity
from checkdigits.validators import LuhnValidator


PAYMENT_RULES = {"card": "luhn", "iban": "iban", "vat": "vat"}


class TestRoutineAPI:
    """Tests for cd.calculate(), cd.is_valid() and cd.check_vatin()."""

    def test_calculate(self):
        """Check digits are calculated by routine name."""
        assert cd.calculate("luhn", "7992739871") == "3"
        assert cd.calculate("iban", "GB00WEST12345698765432") == "82"
        assert cd.calculate("vat_fr", "300076965") == "00"

    def test_is_valid(self):
        """Codes are validated by routine name."""
        assert cd.is_valid("isbn", "9780306406157")
        assert not cd.is_valid("isbn", "9780306406158")
        assert cd.is_valid("vatin", "ATU13585627")

    def test_unknown_routine(self):
        """Unknown routine names raise UnknownRoutineError."""
        with pytest.raises(cd.UnknownRoutineError):
            cd.calculate("nope", "123")
        with pytest.raises(cd.UnknownRoutineError):
            cd.is_valid("nope", "123")

    def test_calculate_error(self):
        """Routine errors propagate as CheckDigitError."""
        with pytest.raises(cd.CheckDigitError):
            cd.calculate("luhn", "")

    def test_check_vatin(self):
        """VATIN checks report the failure reason."""
        assert cd.check_vatin("ATU13585627").valid
        assert cd.check_vatin("ATU13585628").reason == "check digit mismatch"
        assert cd.check_vatin("XX123456789").reason == "unknown country 'XX'"

    def test_list_routines(self):
        """Routine names are listed sorted."""
        names = cd.list_routines()
        assert "luhn" in names
        assert "vat_de" in names
        assert names == sorted(names)


class TestCheck:
    """Tests for cd.check()."""

    def test_clean_frame(self, payments_frame):
        """Valid identifiers produce an empty report."""
        report = cd.check(payments_frame, rules=PAYMENT_RULES)

        assert isinstance(report, Report)
        assert not report.has_issues
        assert report.row_count == 3
        assert report.column_count == 4
        assert report.source == "DataFrame"

    def test_broken_frame(self, broken_payments_frame):
        """Each bad column yields one issue."""
        report = cd.check(broken_payments_frame, rules=PAYMENT_RULES)

        assert {i.column for i in report.issues} == {"card", "iban", "vat"}
        assert all(i.count == 1 for i in report.issues)
        assert report.has_critical
        assert report.has_high

    def test_dict_input(self):
        """Dictionaries are accepted as data."""
        report = cd.check({"card": ["79927398713", "79927398710"]}, rules={"card": "luhn"})
        assert report.source == "dict"
        assert report.issues[0].issue_type == "invalid_luhn_check_digit"

    def test_file_and_rule_file(self, payments_csv, rules_file):
        """Paths are accepted for data and rules."""
        report = cd.check(str(payments_csv), rules=str(rules_file))

        assert report.source == str(payments_csv)
        assert len(report.issues) == 1
        assert report.issues[0].column == "iban"

    def test_full_rule_mapping(self, broken_payments_frame):
        """Mappings with a columns key are read as rule files."""
        rules = {"columns": {"card": {"routine": "luhn", "severity": "low"}}}
        report = cd.check(broken_payments_frame, rules=rules)
        assert report.issues[0].severity == Severity.LOW

    def test_rule_set(self, broken_payments_frame):
        """RuleSet instances are used as they are."""
        rules = cd.RuleSet()
        rules.add(cd.ColumnRule("card", "luhn"))
        report = cd.check(broken_payments_frame, rules=rules)
        assert len(report.issues) == 1

    def test_validators(self, broken_payments_frame):
        """Validator instances run alongside rules."""
        report = cd.check(broken_payments_frame, validators=[LuhnValidator(column="card")])
        assert len(report.issues) == 1

    def test_requires_rules_or_validators(self, payments_frame):
        """Nothing to run is an error."""
        with pytest.raises(ValueError):
            cd.check(payments_frame)

    def test_unknown_routine_in_rules(self, payments_frame):
        """Unknown routines fail before validation."""
        with pytest.raises(cd.UnknownRoutineError):
            cd.check(payments_frame, rules={"card": "nope"})

    def test_missing_column_is_skipped(self, payments_frame):
        """Rules for missing columns are reported as skipped."""
        report = cd.check(payments_frame, rules={"card": "luhn", "missing": "iban"})

        assert not report.has_issues
        assert len(report.skipped) == 1
        assert report.to_dict()["skipped"][0]["status"] == "skipped"

    def test_min_severity(self, broken_payments_frame):
        """Issues below min_severity are dropped."""
        rules = {
            "card": {"routine": "luhn", "severity": "low"},
            "iban": "iban",
        }
        report = cd.check(broken_payments_frame, rules=rules, min_severity="high")
        assert [i.column for i in report.issues] == ["iban"]


class TestReport:
    """Tests for Report output."""

    def test_str_no_issues(self, payments_frame):
        """Clean reports say so."""
        output = str(cd.check(payments_frame, rules=PAYMENT_RULES))
        assert "Check Digit Report" in output
        assert "No issues found" in output

    def test_str_with_issues(self, broken_payments_frame):
        """Issue tables list the issue types."""
        output = str(cd.check(broken_payments_frame, rules=PAYMENT_RULES))
        assert "invalid_iban" in output
        assert "Summary:" in output

    def test_to_json(self, broken_payments_frame):
        """JSON output carries counts and issues."""
        data = json.loads(cd.check(broken_payments_frame, rules=PAYMENT_RULES).to_json())
        assert data["issue_count"] == 3
        assert data["row_count"] == 3
        assert "skipped" not in data
        assert {i["issue_type"] for i in data["issues"]} == {
            "invalid_luhn_check_digit",
            "invalid_iban",
            "invalid_vat_number",
        }

    def test_filter_by_severity(self, broken_payments_frame):
        """Filtering keeps issues at or above the level."""
        report = cd.check(broken_payments_frame, rules=PAYMENT_RULES)
        assert len(report.filter_by_severity(Severity.CRITICAL).issues) == 3

        low = Report(issues=[], source="x")
        assert not low.filter_by_severity(Severity.LOW).has_issues


class TestVersion:
    """Tests for package metadata."""

    def test_version(self):
        """A version string is always available."""
        assert isinstance(cd.__version__, str)
