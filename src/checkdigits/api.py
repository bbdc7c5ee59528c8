"""Main API functions for checkdigits."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from checkdigits.adapters import describe_source, to_lazyframe
from checkdigits.codes import VATIN_VALIDATOR, VATINCheckResult
from checkdigits.report import Report
from checkdigits.routines import get_check_digit
from checkdigits.rules import ColumnRule, RuleSet
from checkdigits.types import Severity
from checkdigits.validators import ValidationResult, Validator

logger = logging.getLogger("checkdigits.api")


def calculate(routine: str, code: str) -> str:
    """Calculate the check digit(s) for a code.

    Args:
        routine: Routine name, e.g. ``"luhn"`` or ``"vat_fr"``
        code: Code without its check digit(s)

    Returns:
        The check digit(s) as a string.

    Raises:
        UnknownRoutineError: If the routine is not registered.
        CheckDigitError: If the code cannot be processed.

    Example:
        >>> import checkdigits as cd
        >>> cd.calculate("luhn", "7992739871")
        '3'
    """
    return get_check_digit(routine).calculate(code)


def is_valid(routine: str, code: str) -> bool:
    """Check a code's check digit(s) with a named routine.

    Raises:
        UnknownRoutineError: If the routine is not registered.
    """
    return get_check_digit(routine).is_valid(code)


def check_vatin(code: str) -> VATINCheckResult:
    """Check a VATIN's country format and check digit(s).

    Example:
        >>> cd.check_vatin("ATU13585627").valid
        True
    """
    return VATIN_VALIDATOR.check(code)


def _to_rule_set(rules: RuleSet | Mapping[str, Any] | str | Path) -> RuleSet:
    if isinstance(rules, RuleSet):
        return rules
    if isinstance(rules, (str, Path)):
        return RuleSet.load(rules)
    if "columns" in rules:
        return RuleSet.from_dict(dict(rules))
    # Shorthand: {"column": "routine"} or {"column": {...}}
    return RuleSet(rules={name: ColumnRule.from_dict(name, rule) for name, rule in rules.items()})


def check(
    data: Any,
    rules: RuleSet | Mapping[str, Any] | str | Path | None = None,
    validators: list[Validator] | None = None,
    min_severity: str | Severity | None = None,
) -> Report:
    """Validate the check digits of identifier columns.

    Args:
        data: Input data (file path, DataFrame, LazyFrame, dict, etc.)
        rules: RuleSet, path to a YAML rule file, or a mapping of column
               name to routine name or rule options.
        validators: Additional validator instances to run.
        min_severity: Minimum severity level to include in results.
                     Can be "low", "medium", "high", or "critical".

    Returns:
        Report containing all validation issues found.

    Raises:
        ValueError: If neither rules nor validators are given.
        RuleFileError: If the rule file cannot be loaded.

    Example:
        >>> import checkdigits as cd
        >>> report = cd.check("payments.csv", rules={"iban": "iban", "card": "luhn"})
        >>> print(report)

        >>> # With a rule file
        >>> report = cd.check(df, rules="rules.yaml", min_severity="medium")
    """
    validator_instances: list[Validator] = []
    if rules is not None:
        validator_instances.extend(_to_rule_set(rules).validators())
    if validators:
        validator_instances.extend(validators)
    if not validator_instances:
        raise ValueError("Either 'rules' or 'validators' must be provided")

    lf = to_lazyframe(data)
    df_collected = lf.collect()
    row_count = len(df_collected)
    column_count = len(df_collected.columns)
    lf = df_collected.lazy()

    all_issues = []
    skipped = []
    for validator in validator_instances:
        result = validator.validate_safe(lf)
        all_issues.extend(result.issues)
        if result.status is not ValidationResult.SUCCESS:
            skipped.append(result)

    report = Report(
        issues=all_issues,
        source=describe_source(data),
        row_count=row_count,
        column_count=column_count,
        skipped=skipped,
    )

    if min_severity is not None:
        if isinstance(min_severity, str):
            min_severity = Severity(min_severity.lower())
        report = report.filter_by_severity(min_severity)

    return report
