"""Fixtures shared by the CLI tests."""

from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from project_finance.stores import restricted


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_store(seeded_store):
    """Route every command's store through the seeded in-memory store."""

    def fake_create_store(config=None, admin=True):
        return seeded_store if admin else restricted(seeded_store)

    config = Mock()
    config.currency_label = "Rp"
    with patch("project_finance.cli.context.get_config", return_value=config), patch(
        "project_finance.cli.context.create_store", side_effect=fake_create_store
    ):
        yield seeded_store
