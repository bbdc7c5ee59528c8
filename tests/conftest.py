"""Shared fixtures for checkdigits tests."""

from pathlib import Path

import polars as pl
import pytest


@pytest.fixture
def payments_frame() -> pl.DataFrame:
    """Frame with valid card numbers, IBANs and VAT numbers."""
    return pl.DataFrame({
        "card": ["79927398713", "4532015112830366", "6011514433546201"],
        "iban": ["GB82WEST12345698765432", "DE89370400440532013000", "GB82 WEST 1234 5698 7654 32"],
        "vat": ["ATU13585627", "DE136695976", "NL123456782B01"],
        "name": ["Alice", "Bob", "Carol"],
    })


@pytest.fixture
def broken_payments_frame() -> pl.DataFrame:
    """Frame where each identifier column has one bad check digit."""
    return pl.DataFrame({
        "card": ["79927398713", "79927398710", "6011514433546201"],
        "iban": ["GB82WEST12345698765432", "DE89370400440532013000", "GB82WEST12345698765431"],
        "vat": ["ATU13585627", "DE136695975", "NL123456782B01"],
    })


@pytest.fixture
def payments_csv(tmp_path: Path) -> Path:
    """CSV file with a leading-zero identifier column and one bad IBAN."""
    path = tmp_path / "payments.csv"
    path.write_text(
        "iban,isbn,name\n"
        "GB82WEST12345698765432,0306406152,Alice\n"
        "DE89370400440532013000,9780306406157,Bob\n"
        "GB82WEST12345698765431,0306406152,Carol\n"
    )
    return path


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    """YAML rule file for the payments CSV."""
    path = tmp_path / "rules.yaml"
    path.write_text(
        "version: '1.0'\n"
        "columns:\n"
        "  iban:\n"
        "    routine: iban\n"
        "  isbn:\n"
        "    routine: isbn\n"
        "    separators: ' -'\n"
    )
    return path
