"""Rule files binding columns to check digit routines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import polars as pl
import yaml

from checkdigits.adapters import to_lazyframe
from checkdigits.types import Severity
from checkdigits.validators import CheckDigitValidator, Validator, registry

logger = logging.getLogger("checkdigits.rules")


class RuleFileError(Exception):
    """Raised when a rule file cannot be read or is malformed."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Invalid rule file '{path}': {reason}")


@dataclass
class ColumnRule:
    """Check digit rule for a single column.

    ``routine`` names either a column validator (``iban``, ``vat``, ...)
    or any registered check digit routine (``vat_fr``, ``cnb``, ...).
    """

    column: str
    routine: str
    separators: str | None = None
    uppercase: bool = False
    allow_null: bool = True
    allowed_countries: list[str] | None = None
    severity: Severity | None = None
    mostly: float | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary, excluding unset options."""
        result: dict[str, Any] = {"routine": self.routine}
        if self.separators is not None:
            result["separators"] = self.separators
        if self.uppercase:
            result["uppercase"] = True
        if not self.allow_null:
            result["allow_null"] = False
        if self.allowed_countries is not None:
            result["allowed_countries"] = list(self.allowed_countries)
        if self.severity is not None:
            result["severity"] = self.severity.value
        if self.mostly is not None:
            result["mostly"] = self.mostly
        return result

    @classmethod
    def from_dict(cls, column: str, data: dict | str) -> ColumnRule:
        """Create ColumnRule from a mapping, or from a bare routine name."""
        if isinstance(data, str):
            return cls(column=column, routine=data)
        if "routine" not in data:
            raise ValueError(f"column '{column}' has no routine")
        severity = data.get("severity")
        return cls(
            column=column,
            routine=data["routine"],
            separators=data.get("separators"),
            uppercase=data.get("uppercase", False),
            allow_null=data.get("allow_null", True),
            allowed_countries=data.get("allowed_countries"),
            severity=Severity(str(severity).lower()) if severity is not None else None,
            mostly=data.get("mostly"),
        )

    def to_validator(self) -> Validator:
        """Build the column validator for this rule.

        Raises:
            UnknownRoutineError: If the routine is neither a validator nor
                a registered routine
        """
        options: dict[str, Any] = {"allow_null": self.allow_null}
        if self.separators is not None:
            options["separators"] = self.separators
        if self.severity is not None:
            options["severity_override"] = self.severity
        if self.mostly is not None:
            options["mostly"] = self.mostly

        if self.routine in registry and self.routine != CheckDigitValidator.name:
            validator_cls = registry.get(self.routine)
            if self.allowed_countries is not None:
                options["allowed_countries"] = self.allowed_countries
            if issubclass(validator_cls, CheckDigitValidator) and self.uppercase:
                options["uppercase"] = True
            return validator_cls(column=self.column, **options)

        return CheckDigitValidator(
            column=self.column,
            routine=self.routine,
            uppercase=self.uppercase,
            **options,
        )


@dataclass
class RuleSet:
    """Check digit rules for a dataset, keyed by column."""

    rules: dict[str, ColumnRule] = field(default_factory=dict)
    version: str = "1.0"

    def __getitem__(self, key: str) -> ColumnRule:
        return self.rules[key]

    def __contains__(self, key: str) -> bool:
        return key in self.rules

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def add(self, rule: ColumnRule) -> None:
        self.rules[rule.column] = rule

    def validators(self) -> list[Validator]:
        """Build one validator per rule."""
        return [rule.to_validator() for rule in self.rules.values()]

    def save(self, path: str | Path) -> None:
        """Save rules to YAML file."""
        path = Path(path)
        data = self.to_dict()

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    @classmethod
    def load(cls, path: str | Path) -> RuleSet:
        """Load rules from YAML file.

        Raises:
            RuleFileError: If the file is missing, not YAML, or malformed
        """
        path = Path(path)

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise RuleFileError(path, str(e)) from e
        except yaml.YAMLError as e:
            raise RuleFileError(path, f"not valid YAML: {e}") from e

        if not isinstance(data, dict):
            raise RuleFileError(path, "expected a mapping with a 'columns' key")
        try:
            return cls.from_dict(data)
        except (ValueError, TypeError) as e:
            raise RuleFileError(path, str(e)) from e

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "columns": {name: rule.to_dict() for name, rule in self.rules.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> RuleSet:
        """Create RuleSet from dictionary.

        Raises:
            ValueError: If ``columns`` is not a mapping or a rule has no routine
        """
        columns = data.get("columns") or {}
        if not isinstance(columns, dict):
            raise ValueError("'columns' must be a mapping of column name to rule")
        rules = {name: ColumnRule.from_dict(name, rule) for name, rule in columns.items()}
        return cls(rules=rules, version=str(data.get("version", "1.0")))


# Routines tried when inferring rules, most specific first
INFERENCE_CANDIDATES: tuple[tuple[str, str | None, bool], ...] = (
    ("iban", " -", True),
    ("vat", " -.", True),
    ("isin", None, True),
    ("isbn", " -", True),
    ("issn", " -", True),
    ("cas", None, False),
    ("ec_number", None, False),
    ("cusip", None, True),
    ("sedol", None, True),
    ("tid_de", " ", False),
    ("aba", " -", False),
    ("luhn", " -", False),
)


def infer_rules(
    data: Any,
    min_ratio: float = 0.9,
    min_values: int = 1,
) -> RuleSet:
    """Infer check digit rules from data.

    For each string column, the first candidate routine accepting at
    least ``min_ratio`` of the non-null values becomes the column's rule.

    Args:
        data: Input data (file path, DataFrame, dict, etc.)
        min_ratio: Minimum share of values that must validate
        min_values: Minimum number of non-null values in a column

    Returns:
        RuleSet with one rule per recognized column.

    Example:
        >>> rules = infer_rules("customers.csv")
        >>> rules.save("rules.yaml")
    """
    if not 0.0 < min_ratio <= 1.0:
        raise ValueError(f"min_ratio must be in (0.0, 1.0], got {min_ratio}")

    df = to_lazyframe(data).collect()
    rule_set = RuleSet()

    for col_name in df.columns:
        if df.schema[col_name] not in (pl.String, pl.Utf8):
            continue
        values = [v.strip() for v in df.get_column(col_name).drop_nulls().to_list() if v.strip()]
        if len(values) < max(min_values, 1):
            continue

        for routine, separators, uppercase in INFERENCE_CANDIDATES:
            rule = ColumnRule(
                column=col_name,
                routine=routine,
                separators=separators,
                uppercase=uppercase,
            )
            validator = rule.to_validator()
            valid = sum(
                1 for v in values if validator.validate_value(validator._preprocess_value(v))
            )
            ratio = valid / len(values)
            if ratio >= min_ratio:
                logger.debug("%s: inferred %s (%.2f%% valid)", col_name, routine, ratio * 100)
                rule_set.add(rule)
                break

    return rule_set


__all__ = [
    "ColumnRule",
    "RuleFileError",
    "RuleSet",
    "infer_rules",
]
