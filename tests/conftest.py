"""Shared test fixtures for pathwise."""

import os
import sys
import tempfile

import pytest
from loguru import logger

from pathwise.financial.models import Account, AccountType, CompoundingType, DebtCategory


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture(autouse=True)
def _restore_logger():
    """CLI tests reconfigure loguru; put the default stderr sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def credit_card():
    return Account(
        id="visa",
        name="Visa",
        balance=5_000,
        interest_rate=20.0,
        minimum_payment=100,
        compounding_type=CompoundingType.DAILY_COMPOUND,
        debt_category=DebtCategory.CREDIT_CARD,
    )


@pytest.fixture
def student_loan():
    return Account(
        id="loan",
        name="Student Loan",
        balance=12_000,
        interest_rate=5.5,
        minimum_payment=150,
        compounding_type=CompoundingType.DAILY_SIMPLE,
        debt_category=DebtCategory.STUDENT_LOAN,
    )


@pytest.fixture
def savings():
    return Account(id="savings", name="Savings", type=AccountType.CASH, balance=3_000)


@pytest.fixture
def household_file(tmp_dir):
    """A small YAML household file: one salary, two expenses, two debts and savings."""
    import yaml

    data = {
        "income": {
            "base_salary": 60_000,
            "state_tax_rate": 0,
            "filing_status": "single",
        },
        "expenses": [
            {"name": "Rent", "amount": 1_500, "category": "Housing"},
            {"name": "Groceries", "amount": 500},
        ],
        "accounts": [
            {
                "name": "Visa",
                "balance": 5_000,
                "interest_rate": 20,
                "minimum_payment": 100,
                "debt_category": "credit_card",
            },
            {
                "name": "Car",
                "balance": 8_000,
                "interest_rate": 6,
                "minimum_payment": 250,
                "debt_category": "auto_loan",
            },
            {"name": "Savings", "type": "cash", "balance": 2_000},
        ],
    }
    path = os.path.join(tmp_dir, "household.yaml")
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
