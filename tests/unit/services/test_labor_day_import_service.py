"""Unit tests for the bulk-import webhook client."""

from unittest.mock import Mock

import pytest
import requests

from project_finance.errors import ImportServiceError
from project_finance.services.labor_day_import_service import LaborDayImportService


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "timesheet.csv"
    path.write_text("Role,Month,TotalDuration\nBE,04,80\n", encoding="utf-8")
    return path


@pytest.fixture
def mock_session():
    session = Mock(spec=requests.Session)
    response = Mock()
    response.json.return_value = [{"Role": "BE", "Month": "04", "TotalDuration": "80"}]
    session.post.return_value = response
    return session


@pytest.fixture
def service(mock_session):
    return LaborDayImportService(
        "https://hooks.example.com/upload-csv",
        api_key="secret",
        timeout=5,
        session=mock_session,
    )


class TestLaborDayImportService:
    """Test uploading CSVs and validating the webhook response."""

    def test_upload_posts_multipart_form(self, service, mock_session, csv_file):
        rows = service.upload(csv_file, "proj-001", "2024")

        assert rows == [{"Role": "BE", "Month": "04", "TotalDuration": "80"}]
        args, kwargs = mock_session.post.call_args
        assert args == ("https://hooks.example.com/upload-csv",)
        assert kwargs["headers"] == {"x-api-key": "secret"}
        assert kwargs["data"] == {"projectId": "proj-001", "year": "2024"}
        assert kwargs["files"]["file"][0] == "timesheet.csv"
        assert kwargs["files"]["file"][2] == "text/csv"
        assert kwargs["timeout"] == 5

    def test_data_wrapper_accepted(self, service, mock_session, csv_file):
        mock_session.post.return_value.json.return_value = {
            "data": [{"Role": "QA", "Month": "05", "TotalDuration": "8"}]
        }

        rows = service.upload(csv_file, "proj-001", "2024")

        assert rows[0]["Role"] == "QA"

    def test_no_api_key_sends_no_header(self, mock_session, csv_file):
        service = LaborDayImportService(
            "https://hooks.example.com/upload-csv", session=mock_session
        )

        service.upload(csv_file, "proj-001", "2024")

        assert mock_session.post.call_args.kwargs["headers"] == {}

    def test_unexpected_shape(self, service, mock_session, csv_file):
        mock_session.post.return_value.json.return_value = {"rows": []}

        with pytest.raises(ImportServiceError, match="Unexpected response format"):
            service.upload(csv_file, "proj-001", "2024")

    def test_invalid_json(self, service, mock_session, csv_file):
        mock_session.post.return_value.json.side_effect = ValueError("no json")

        with pytest.raises(ImportServiceError, match="invalid JSON"):
            service.upload(csv_file, "proj-001", "2024")

    def test_http_error(self, service, mock_session, csv_file):
        mock_session.post.return_value.raise_for_status.side_effect = (
            requests.exceptions.HTTPError("502 Bad Gateway")
        )

        with pytest.raises(ImportServiceError, match="502") as exc_info:
            service.upload(csv_file, "proj-001", "2024")
        assert "IMPORT_WEBHOOK_URL" in exc_info.value.recovery_hint

    def test_connection_error(self, service, mock_session, csv_file):
        mock_session.post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(ImportServiceError, match="refused"):
            service.upload(csv_file, "proj-001", "2024")

    def test_missing_file(self, service, mock_session, tmp_path):
        with pytest.raises(ImportServiceError, match="CSV file not found"):
            service.upload(tmp_path / "missing.csv", "proj-001", "2024")
        mock_session.post.assert_not_called()

    def test_requires_webhook_url(self):
        with pytest.raises(ImportServiceError, match="No import webhook"):
            LaborDayImportService("")

    def test_from_config(self, test_config):
        service = LaborDayImportService.from_config(test_config)

        assert service.webhook_url == "https://hooks.example.com/upload-csv"
        assert service.api_key == "test-api-key"
        assert service.timeout == 30.0
