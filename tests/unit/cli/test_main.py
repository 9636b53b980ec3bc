"""Unit tests for the CLI entry point."""

from unittest.mock import Mock, patch

import pytest

from project_finance import __version__
from project_finance.cli import cli, main


class TestCLI:
    """Test the top-level command group."""

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in [
            "projects",
            "ledger",
            "rates",
            "labor-days",
            "spending-summary",
            "reconcile",
            "resource-usage",
            "health",
        ]:
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestMain:
    """Test logging setup in main()."""

    def test_logging_follows_settings(self):
        settings = Mock(debug=False, log_level="ERROR")

        with patch("project_finance.cli.get_config", return_value=settings), patch(
            "project_finance.cli.configure_logging"
        ) as mock_configure, patch("project_finance.cli.cli") as mock_cli:
            main()

        logging_config = mock_configure.call_args[0][0]
        assert logging_config.log_level == "ERROR"
        mock_cli.assert_called_once_with()

    def test_debug_setting_forces_debug_logging(self, mock_env):
        with patch("project_finance.cli.configure_logging") as mock_configure, patch(
            "project_finance.cli.cli"
        ):
            main()

        assert mock_configure.call_args[0][0].log_level == "DEBUG"

    def test_invalid_settings_exit_with_configuration_code(
        self, mock_env, monkeypatch, capsys
    ):
        monkeypatch.setenv("STORE_BACKEND", "postgres")

        with patch("project_finance.cli.cli") as mock_cli:
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
        assert "Configuration Error" in capsys.readouterr().out
        mock_cli.assert_not_called()
