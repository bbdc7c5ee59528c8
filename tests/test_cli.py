"""Tests for the checkdigits CLI."""

import json

import pytest
from typer.testing import CliRunner

from checkdigits.cli import app
from checkdigits.rules import RuleSet


@pytest.fixture
def runner():
    """Create CLI runner."""
    return CliRunner()


class TestCalculateCommand:
    """Tests for 'checkdigits calculate'."""

    def test_calculate(self, runner):
        """The check digit is printed."""
        result = runner.invoke(app, ["calculate", "luhn", "7992739871"])
        assert result.exit_code == 0
        assert result.output.strip() == "3"

    def test_unknown_routine(self, runner):
        """Unknown routines exit with 1."""
        result = runner.invoke(app, ["calculate", "nope", "123"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_code(self, runner):
        """Routine errors exit with 1."""
        result = runner.invoke(app, ["calculate", "luhn", "0000"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestValidateCommand:
    """Tests for 'checkdigits validate'."""

    def test_all_valid(self, runner):
        """Valid codes exit with 0."""
        result = runner.invoke(app, ["validate", "luhn", "79927398713", "4532015112830366"])
        assert result.exit_code == 0
        assert "79927398713: valid" in result.output

    def test_some_invalid(self, runner):
        """Any invalid code exits with 1."""
        result = runner.invoke(app, ["validate", "luhn", "79927398713", "79927398710"])
        assert result.exit_code == 1
        assert "79927398713: valid" in result.output
        assert "79927398710: invalid" in result.output

    def test_unknown_routine(self, runner):
        """Unknown routines exit with 1."""
        result = runner.invoke(app, ["validate", "nope", "123"])
        assert result.exit_code == 1


class TestVatCommand:
    """Tests for 'checkdigits vat'."""

    def test_valid(self, runner):
        """Valid numbers report their country."""
        result = runner.invoke(app, ["vat", "ATU13585627", "de 136695976"])
        assert result.exit_code == 0
        assert "ATU13585627: valid (AT)" in result.output
        assert "de 136695976: valid (DE)" in result.output

    def test_invalid(self, runner):
        """Invalid numbers report the reason."""
        result = runner.invoke(app, ["vat", "ATU13585628", "XX123456789"])
        assert result.exit_code == 1
        assert "ATU13585628: invalid (check digit mismatch)" in result.output
        assert "unknown country 'XX'" in result.output


class TestCheckCommand:
    """Tests for 'checkdigits check'."""

    def test_json_output(self, runner, payments_csv, rules_file):
        """JSON reports are printed to stdout."""
        result = runner.invoke(app, [
            "check", str(payments_csv),
            "--rules", str(rules_file),
            "--format", "json",
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["issue_count"] == 1
        assert data["issues"][0]["column"] == "iban"

    def test_output_file(self, runner, payments_csv, rules_file, tmp_path):
        """JSON reports can be written to a file."""
        output = tmp_path / "report.json"
        result = runner.invoke(app, [
            "check", str(payments_csv),
            "-r", str(rules_file),
            "-f", "json",
            "-o", str(output),
        ])
        assert result.exit_code == 0
        assert "Report written to" in result.output
        assert json.loads(output.read_text())["row_count"] == 3

    def test_strict(self, runner, payments_csv, rules_file):
        """--strict exits with 1 when issues are found."""
        result = runner.invoke(app, ["check", str(payments_csv), "-r", str(rules_file), "--strict"])
        assert result.exit_code == 1
        assert "Check Digit Report" in result.output

    def test_min_severity(self, runner, payments_csv, rules_file):
        """Invalid severities are rejected."""
        result = runner.invoke(app, [
            "check", str(payments_csv),
            "-r", str(rules_file),
            "--min-severity", "bogus",
        ])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_inferred_rules(self, runner, payments_csv):
        """Without --rules, rules are inferred from the data."""
        result = runner.invoke(app, ["check", str(payments_csv), "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["issue_count"] == 0

    def test_nothing_recognized(self, runner, tmp_path):
        """Files without identifier columns are reported as such."""
        path = tmp_path / "names.csv"
        path.write_text("name\nAlice\nBob\n")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 0
        assert "No identifier columns recognized" in result.output

    def test_missing_file(self, runner, tmp_path):
        """Missing data files exit with 1."""
        result = runner.invoke(app, ["check", str(tmp_path / "missing.csv")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_missing_rule_file(self, runner, payments_csv, tmp_path):
        """Missing rule files exit with 1."""
        result = runner.invoke(app, ["check", str(payments_csv), "-r", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert "Rule file not found" in result.output


class TestInferCommand:
    """Tests for 'checkdigits infer'."""

    def test_infer(self, runner, payments_csv, tmp_path):
        """Inferred rules are saved and listed."""
        output = tmp_path / "inferred.yaml"
        result = runner.invoke(app, ["infer", str(payments_csv), "-o", str(output)])

        assert result.exit_code == 0
        assert "Rules saved to" in result.output
        assert "isbn: isbn" in result.output
        assert RuleSet.load(output)["isbn"].routine == "isbn"

    def test_invalid_min_ratio(self, runner, payments_csv, tmp_path):
        """Out-of-range ratios exit with 1."""
        result = runner.invoke(app, [
            "infer", str(payments_csv),
            "-o", str(tmp_path / "rules.yaml"),
            "--min-ratio", "2",
        ])
        assert result.exit_code == 1


class TestRoutinesCommand:
    """Tests for 'checkdigits routines'."""

    def test_lists_routines(self, runner):
        """Registered routines are listed."""
        result = runner.invoke(app, ["routines"])
        assert result.exit_code == 0
        assert "luhn" in result.output
        assert "vat_at" in result.output
