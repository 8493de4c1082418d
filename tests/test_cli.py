"""Tests for CLI routing, validation and output."""
from unittest import mock

import pytest
from google.cloud import tasks_v2

from nimbus.cli import main as cli
from nimbus.cli.validators import parse_headers, validate_secret_name, validate_secret_value
from nimbus.errors import NoDataError


class TestValidators:

    @pytest.mark.parametrize("name", ["MY_SECRET", "api-key-prod", "DATABASE_PASSWORD_123"])
    def test_valid_secret_names(self, name):
        validate_secret_name(name)

    @pytest.mark.parametrize("name", ["", "api.key", "MY SECRET", "test@prod"])
    def test_invalid_secret_names(self, name):
        with pytest.raises(SystemExit) as exc_info:
            validate_secret_name(name)

        assert exc_info.value.code == 2

    def test_empty_secret_value(self):
        with pytest.raises(SystemExit) as exc_info:
            validate_secret_value("   ")

        assert exc_info.value.code == 2

    def test_parse_headers(self):
        headers = parse_headers(["Content-Type: application/json", "X-Trace:abc:def"])

        assert headers == {"Content-Type": "application/json", "X-Trace": "abc:def"}

    def test_parse_headers_none(self):
        assert parse_headers(None) == {}

    def test_parse_headers_rejects_missing_colon(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_headers(["Content-Type application/json"])

        assert exc_info.value.code == 2


class TestMain:

    def test_no_command_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == 2

    def test_group_without_subcommand_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["storage"])

        assert exc_info.value.code == 2

    def test_version(self, capsys):
        cli.main(["version"])

        assert capsys.readouterr().out.strip() == f"nimbus {cli.VERSION}"

    def test_secrets_get_quiet(self, capsys):
        with mock.patch("nimbus.secrets.workflows.secret_operations.get_secret", return_value=b"s3cr3t") as get_secret:
            cli.main(["secrets", "get", "API_KEY", "-q", "--project-id", "proj"])

        assert capsys.readouterr().out == "s3cr3t\n"
        get_secret.assert_called_once_with("API_KEY", "proj", version=None, provider="gcp")

    def test_secrets_get_verbose_with_version(self, capsys):
        with mock.patch("nimbus.secrets.workflows.secret_operations.get_secret", return_value=b"old") as get_secret:
            cli.main(["secrets", "get", "API_KEY", "--version", "2", "--provider", "aws"])

        assert "Secret 'API_KEY': old" in capsys.readouterr().out
        get_secret.assert_called_once_with("API_KEY", None, version="2", provider="aws")

    def test_secrets_get_failure_exits_1(self, capsys):
        with mock.patch("nimbus.secrets.workflows.secret_operations.get_secret", side_effect=NoDataError()):
            with pytest.raises(SystemExit) as exc_info:
                cli.main(["secrets", "get", "API_KEY"])

        assert exc_info.value.code == 1
        assert "No data in payload" in capsys.readouterr().err

    def test_secrets_get_invalid_name(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["secrets", "get", "api.key"])

        assert exc_info.value.code == 2

    def test_secrets_create(self, capsys):
        with mock.patch("nimbus.secrets.workflows.secret_operations.create_secret") as create_secret:
            cli.main(["secrets", "create", "API_KEY", "value", "--project-id", "proj"])

        create_secret.assert_called_once_with("API_KEY", "value", "proj", provider="gcp")
        assert "created" in capsys.readouterr().out

    def test_storage_upload(self, tmp_path):
        source = tmp_path / "file.txt"
        source.write_text("data")

        with mock.patch("nimbus.storage.workflows.storage_operations.upload") as upload:
            cli.main(["storage", "upload", "bucket", "key", str(source), "--mime", "text/plain"])

        upload.assert_called_once_with("bucket", "key", str(source), mime="text/plain", provider="gcp")

    def test_storage_download_prints_path(self, tmp_path, capsys):
        dest = tmp_path / "key"
        with mock.patch("nimbus.storage.workflows.storage_operations.download", return_value=dest) as download:
            cli.main(["storage", "download", "bucket", "key", str(tmp_path), "--expect", "pdf", "--provider", "aws"])

        download.assert_called_once_with("bucket", "key", str(tmp_path), expected_type="pdf", provider="aws")
        assert capsys.readouterr().out.strip() == str(dest)

    def test_storage_delete(self):
        with mock.patch("nimbus.storage.workflows.storage_operations.delete") as delete:
            cli.main(["storage", "delete", "bucket", "key"])

        delete.assert_called_once_with("bucket", "key", provider="gcp")

    def test_tasks_push(self, capsys):
        created = tasks_v2.Task(name="projects/p/locations/l/queues/q/tasks/1")
        with mock.patch("nimbus.tasks.workflows.task_operations.push_http_task", return_value=created) as push:
            cli.main([
                "tasks", "push", "q", "https://example.com",
                "--method", "PUT",
                "--body", "{}",
                "--header", "Content-Type: application/json",
                "--schedule-in", "30",
            ])

        assert capsys.readouterr().out.strip() == created.name
        args, kwargs = push.call_args
        assert args == ("q", "https://example.com")
        assert kwargs["method"] == "PUT"
        assert kwargs["body"] == b"{}"
        assert kwargs["headers"] == {"Content-Type": "application/json"}
        assert kwargs["schedule_in"] == 30.0
        assert kwargs["task_id"] is None
