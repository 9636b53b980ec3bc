"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import json
from typing import Dict

import pytest

from project_finance.config import FinanceTrackerConfig, reload_config
from project_finance.config.logging_config import (
    LoggingConfig,
    configure_logging,
    reset_logging,
)
from project_finance.models import LaborDayRecord, LedgerEntry, Project, RoleRate
from project_finance.stores import InMemoryStore


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        "STORE_BACKEND": "memory",
        "STORE_FILE_PATH": "test-store.json",
        "SPREADSHEET_ID": "test-spreadsheet-id",
        "IMPORT_WEBHOOK_URL": "https://hooks.example.com/upload-csv",
        "IMPORT_API_KEY": "test-api-key",
        "CURRENCY_LABEL": "Rp",
        "ENVIRONMENT": "testing",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    import project_finance.config.settings

    project_finance.config.settings._config = None

    yield test_env_vars

    project_finance.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> FinanceTrackerConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def seeded_store() -> InMemoryStore:
    """In-memory store holding one fully populated project.

    proj-001 has a 100000 budget, a BE rate of 500, 80 BE hours in April
    2024 (10 labor-days) and one 20000 budget debit, so its spend is
    25000 and its burn rate 0.25.
    """
    store = InMemoryStore()
    store.create_project(
        Project(
            id="proj-001",
            name="CRM Implementation",
            budget=100000,
            created_at=dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc),
        )
    )
    store.create_project(
        Project(
            id="proj-002",
            name="Website Redesign",
            budget=0,
            status="on-hold",
            created_at=dt.datetime(2024, 2, 1, tzinfo=dt.timezone.utc),
        )
    )
    store.create_role_rate(
        RoleRate(id="rate-be", project_id="proj-001", role="BE", cost_per_labor_day=500)
    )
    store.upsert_labor_day(
        LaborDayRecord(
            project_id="proj-001", role="BE", month="04", year="2024", total_hours=80
        )
    )
    store.create_ledger_entry(
        LedgerEntry(
            project_id="proj-001", type="credit", category="budget", amount=100000
        )
    )
    store.create_ledger_entry(
        LedgerEntry(project_id="proj-001", type="debit", category="budget", amount=20000)
    )
    return store


@pytest.fixture
def sample_import_rows():
    """Rows as returned by the import webhook."""
    return [
        {"Role": "BE", "Month": "4", "TotalDuration": "80"},
        {"Role": "QA", "Month": "04", "TotalDuration": "23.38"},
        {"Role": "", "Month": "05", "TotalDuration": "8"},
        {"Role": "FE", "Month": "05"},
    ]


@pytest.fixture
def json_log_file(tmp_path):
    """Route DEBUG logging as JSON lines into a temporary file."""
    log_file = tmp_path / "finance.log"
    configure_logging(
        LoggingConfig(
            log_level="DEBUG", log_format="json", console=False, log_file=str(log_file)
        )
    )
    yield log_file
    reset_logging()


@pytest.fixture
def json_records(json_log_file):
    """Callable returning the JSON records logged so far."""

    def read():
        with open(json_log_file, encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    return read


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "api: mark test as exercising Google API code")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "sheets" in item.name.lower() or "google" in item.name.lower():
            item.add_marker(pytest.mark.api)
