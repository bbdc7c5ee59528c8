"""Base classes for column validators.

Features:
- Immutable configuration
- Column existence checks before collecting data
- Graceful degradation on errors
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any
import logging
import time

import polars as pl

from checkdigits.types import Severity


# ============================================================================
# Logging - Uses standard Python logging directly
# ============================================================================

def _get_logger(name: str) -> logging.Logger:
    """Get a logger for the given validator name."""
    return logging.getLogger(f"checkdigits.validators.{name}")


# ============================================================================
# Error Types
# ============================================================================

class ColumnNotFoundError(Exception):
    """Raised when a required column is not found in the schema."""

    def __init__(self, column: str, available_columns: list[str]):
        self.column = column
        self.available_columns = available_columns
        super().__init__(
            f"Column '{column}' not found. Available: {available_columns[:10]}"
            + ("..." if len(available_columns) > 10 else "")
        )


# ============================================================================
# Graceful Degradation
# ============================================================================

class ValidationResult(Enum):
    """Result status for individual validation operations."""
    SUCCESS = "success"
    SKIPPED = "skipped"  # Skipped due to missing columns
    FAILED = "failed"    # Unrecoverable error


@dataclass
class ErrorContext:
    """Simplified error context for validation failures."""
    error_type: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"error_type": self.error_type, "message": self.message}


@dataclass
class ValidatorExecutionResult:
    """Result of a single validator execution with error handling."""
    validator_name: str
    status: ValidationResult
    issues: list["ValidationIssue"]
    error_message: str | None = None
    error_context: ErrorContext | None = None
    execution_time_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "validator": self.validator_name,
            "status": self.status.value,
            "issue_count": len(self.issues),
            "execution_time_ms": self.execution_time_ms,
            "error": self.error_context.to_dict() if self.error_context else None,
        }


def _validate_safe(
    validator: "Validator",
    lf: pl.LazyFrame,
    skip_on_error: bool = True,
    log_errors: bool = True,
) -> ValidatorExecutionResult:
    """Execute validation with error handling.

    Returns:
        ValidatorExecutionResult with status and any issues found
    """
    start_time = time.time()
    logger = _get_logger(validator.name)

    try:
        issues = validator.validate(lf)
        return ValidatorExecutionResult(
            validator_name=validator.name,
            status=ValidationResult.SUCCESS,
            issues=issues,
            execution_time_ms=(time.time() - start_time) * 1000,
        )

    except ColumnNotFoundError as e:
        if log_errors:
            logger.warning("Column not found: %s", e.column)
        return ValidatorExecutionResult(
            validator_name=validator.name,
            status=ValidationResult.SKIPPED,
            issues=[],
            error_message=str(e),
            error_context=ErrorContext("ColumnNotFoundError", str(e)),
            execution_time_ms=(time.time() - start_time) * 1000,
        )

    except Exception as e:
        if log_errors:
            logger.exception("Error in %s: %s", validator.name, e)
        if skip_on_error:
            return ValidatorExecutionResult(
                validator_name=validator.name,
                status=ValidationResult.FAILED,
                issues=[],
                error_message=str(e),
                error_context=ErrorContext(type(e).__name__, str(e)),
                execution_time_ms=(time.time() - start_time) * 1000,
            )
        raise


def check_column_exists(lf: pl.LazyFrame, column: str) -> None:
    """Raise ColumnNotFoundError if the LazyFrame has no such column."""
    available = list(lf.collect_schema().names())
    if column not in available:
        raise ColumnNotFoundError(column, available)


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class ValidatorConfig:
    """Immutable configuration for validators."""

    severity_override: Severity | None = None
    sample_size: int = 5
    mostly: float | None = None  # Fraction of rows that must pass (0.0 to 1.0)
    graceful_degradation: bool = True
    log_errors: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.sample_size < 0:
            raise ValueError(f"sample_size must be >= 0, got {self.sample_size}")
        if self.mostly is not None and not (0.0 <= self.mostly <= 1.0):
            raise ValueError(f"mostly must be in [0.0, 1.0], got {self.mostly}")
        if self.severity_override is not None and not isinstance(self.severity_override, Severity):
            object.__setattr__(self, "severity_override", Severity(str(self.severity_override).lower()))

    def replace(self, **kwargs: Any) -> "ValidatorConfig":
        """Create a new config with updated values."""
        from dataclasses import asdict
        current = asdict(self)
        current.update(kwargs)
        return ValidatorConfig(**current)

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> "ValidatorConfig":
        """Create config from kwargs, ignoring unknown keys."""
        valid_fields = {
            "severity_override", "sample_size", "mostly",
            "graceful_degradation", "log_errors",
        }
        filtered = {k: v for k, v in kwargs.items() if k in valid_fields}
        return cls(**filtered)


@dataclass
class ValidationIssue:
    """Represents a single check digit issue found during validation."""

    column: str
    issue_type: str
    count: int
    severity: Severity
    details: str | None = None
    expected: Any | None = None
    actual: Any | None = None
    sample_values: list[Any] | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "column": self.column,
            "issue_type": self.issue_type,
            "count": self.count,
            "severity": self.severity.value,
            "details": self.details,
        }
        if self.expected is not None:
            result["expected"] = self.expected
        if self.actual is not None:
            result["actual"] = self.actual
        if self.sample_values is not None:
            result["sample_values"] = self.sample_values
        return result


# ============================================================================
# Base Validator
# ============================================================================

class Validator(ABC):
    """Abstract base class for all validators.

    Class Attributes:
        name: Unique identifier for this validator
        category: Validator category (checksum, financial, tax, ...)

    Example:
        class MyValidator(Validator):
            name = "my_validator"
            category = "custom"

            def validate(self, lf):
                ...
    """

    name: str = "base"
    category: str = "general"

    def __init__(self, config: ValidatorConfig | None = None, **kwargs: Any):
        """Initialize the validator.

        Args:
            config: Immutable validator configuration
            **kwargs: Additional config options (merged into config)
        """
        if config is not None:
            self.config = config.replace(**kwargs) if kwargs else config
        else:
            self.config = ValidatorConfig.from_kwargs(**kwargs)
        self.logger = _get_logger(self.name)

    @abstractmethod
    def validate(self, lf: pl.LazyFrame) -> list[ValidationIssue]:
        """Run validation on the given LazyFrame."""
        pass

    def validate_safe(self, lf: pl.LazyFrame) -> ValidatorExecutionResult:
        """Run validation with graceful error handling."""
        return _validate_safe(
            self,
            lf,
            skip_on_error=self.config.graceful_degradation,
            log_errors=self.config.log_errors,
        )

    def _calculate_severity(
        self,
        ratio: float,
        thresholds: tuple[float, float, float] = (0.5, 0.2, 0.05),
    ) -> Severity:
        """Calculate severity based on ratio and thresholds."""
        if self.config.severity_override:
            return self.config.severity_override

        critical_th, high_th, medium_th = thresholds
        if ratio > critical_th:
            return Severity.CRITICAL
        elif ratio > high_th:
            return Severity.HIGH
        elif ratio > medium_th:
            return Severity.MEDIUM
        return Severity.LOW

    def _passes_mostly(self, failure_count: int, total_count: int) -> bool:
        """Check if validation passes based on mostly threshold."""
        if self.config.mostly is None:
            return False

        if total_count == 0:
            return True

        pass_ratio = 1 - (failure_count / total_count)
        return pass_ratio >= self.config.mostly


# ============================================================================
# Column validators
# ============================================================================

class ColumnValidator(Validator):
    """Base class for validators that check the values of one column.

    Subclasses implement ``validate_value`` for a single preprocessed
    string; nulls and blank strings are handled here according to
    ``allow_null``.
    """

    category = "checksum"

    def __init__(
        self,
        column: str,
        strip_whitespace: bool = True,
        ignore_case: bool = False,
        allow_null: bool = True,
        separators: str = "",
        **kwargs: Any,
    ):
        """Initialize column validator.

        Args:
            column: Column to validate
            strip_whitespace: Whether to strip whitespace before validation
            ignore_case: Whether to upper-case values before validation
            allow_null: Whether to allow null values
            separators: Characters removed from each value before validation
            **kwargs: Additional config
        """
        super().__init__(**kwargs)
        self.column = column
        self.strip_whitespace = strip_whitespace
        self.ignore_case = ignore_case
        self.allow_null = allow_null
        self.separators = separators

    def _preprocess_value(self, value: str | None) -> str | None:
        """Preprocess a value before validation."""
        if value is None:
            return None

        if self.strip_whitespace:
            value = value.strip()

        if self.separators:
            value = self._remove_separators(value, self.separators)

        if self.ignore_case:
            value = value.upper()

        return value

    def _remove_separators(self, value: str, separators: str = " -") -> str:
        """Remove separator characters from a value."""
        result = value
        for sep in separators:
            result = result.replace(sep, "")
        return result

    @abstractmethod
    def validate_value(self, value: str) -> bool:
        """Validate a single preprocessed value."""
        pass

    def _get_invalid_mask(self, df: pl.DataFrame) -> pl.Series:
        """Get mask of invalid values, True where a row fails."""
        invalid = []

        for val in df[self.column].to_list():
            if val is None:
                invalid.append(not self.allow_null)
                continue
            processed = self._preprocess_value(str(val))
            if processed is None or processed == "":
                invalid.append(not self.allow_null)
            else:
                invalid.append(not self.validate_value(processed))

        return pl.Series(invalid, dtype=pl.Boolean)

    def _format_samples(self, samples: list[Any]) -> list[Any]:
        """Format sample values for reporting. Override to mask values."""
        return samples

    def _issue_type(self) -> str:
        return f"invalid_{self.name}"

    def _expected(self) -> str | None:
        return None

    def validate(self, lf: pl.LazyFrame) -> list[ValidationIssue]:
        check_column_exists(lf, self.column)
        df = lf.select(pl.col(self.column)).collect()

        if len(df) == 0:
            return []

        mask = self._get_invalid_mask(df)
        invalid_count = int(mask.sum())

        if invalid_count == 0:
            return []

        total = len(df)
        if self._passes_mostly(invalid_count, total):
            self.logger.debug(
                "%s: %d invalid values within mostly=%s", self.column, invalid_count, self.config.mostly
            )
            return []

        ratio = invalid_count / total
        samples = self._format_samples(
            df.filter(mask)[self.column].head(self.config.sample_size).to_list()
        )

        return [
            ValidationIssue(
                column=self.column,
                issue_type=self._issue_type(),
                count=invalid_count,
                severity=self._calculate_severity(ratio),
                details=(
                    f"Found {invalid_count} values ({ratio:.2%}) failing "
                    f"{self.name} validation. Samples: {samples}"
                ),
                expected=self._expected(),
                sample_values=samples,
            )
        ]
