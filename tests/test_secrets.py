"""Tests for the Secret Manager helpers and workflow."""
from unittest import mock

import pytest
from botocore.exceptions import ClientError
from google.api_core.exceptions import NotFound, PermissionDenied
from google.cloud import secretmanager

from nimbus.errors import ConfigError, NoDataError, NoPayloadError, SecretManagerError
from nimbus.secrets import AWSSecretManager, GCPSecretManager, SecretPath
from nimbus.secrets.workflows import secret_operations


def _access_response(data=None, with_payload=True):
    if not with_payload:
        return secretmanager.AccessSecretVersionResponse(name="projects/p/secrets/s/versions/1")
    return secretmanager.AccessSecretVersionResponse(
        name="projects/p/secrets/s/versions/1",
        payload=secretmanager.SecretPayload(data=data or b"", data_crc32c=123),
    )


def _client_error(operation):
    return ClientError({"Error": {"Code": "ResourceNotFoundException", "Message": "not found"}}, operation)


class TestSecretPath:

    def test_latest_version_name(self):
        path = SecretPath("proj", "API_KEY")
        assert path.version_name == "projects/proj/secrets/API_KEY/versions/latest"

    def test_names(self):
        path = SecretPath("proj", "API_KEY", "3")
        assert path.parent == "projects/proj"
        assert path.secret_name == "projects/proj/secrets/API_KEY"
        assert path.version_name == "projects/proj/secrets/API_KEY/versions/3"


class TestGCPSecretManager:

    @pytest.fixture
    def client(self):
        return mock.Mock(spec=secretmanager.SecretManagerServiceClient)

    def test_get_secret_reads_latest(self, client):
        client.access_secret_version.return_value = _access_response(b"s3cr3t")

        value = GCPSecretManager(client).get_secret("proj", "API_KEY")

        assert value == b"s3cr3t"
        client.access_secret_version.assert_called_once_with(
            request={"name": "projects/proj/secrets/API_KEY/versions/latest"}
        )

    def test_get_secret_version(self, client):
        client.access_secret_version.return_value = _access_response(b"old")

        value = GCPSecretManager(client).get_secret_version("proj", "API_KEY", "2")

        assert value == b"old"
        client.access_secret_version.assert_called_once_with(
            request={"name": "projects/proj/secrets/API_KEY/versions/2"}
        )

    def test_missing_payload(self, client):
        client.access_secret_version.return_value = _access_response(with_payload=False)

        with pytest.raises(NoPayloadError):
            GCPSecretManager(client).get_secret("proj", "API_KEY")

    def test_missing_data(self, client):
        client.access_secret_version.return_value = _access_response(b"")

        with pytest.raises(NoDataError):
            GCPSecretManager(client).get_secret("proj", "API_KEY")

    def test_sdk_error_is_wrapped(self, client):
        sdk_error = NotFound("Secret [API_KEY] not found")
        client.access_secret_version.side_effect = sdk_error

        with pytest.raises(SecretManagerError) as exc_info:
            GCPSecretManager(client).get_secret("proj", "API_KEY")

        assert exc_info.value.__cause__ is sdk_error
        assert not isinstance(exc_info.value, (NoDataError, NoPayloadError))

    def test_create_secret(self, client):
        GCPSecretManager(client).create_secret("proj", "API_KEY", "value")

        client.create_secret.assert_called_once_with(
            request={
                "parent": "projects/proj",
                "secret_id": "API_KEY",
                "secret": {"replication": {"automatic": {}}},
            }
        )
        client.add_secret_version.assert_called_once_with(
            request={
                "parent": "projects/proj/secrets/API_KEY",
                "payload": {"data": b"value"},
            }
        )

    def test_create_secret_stops_when_create_fails(self, client):
        client.create_secret.side_effect = PermissionDenied("denied")

        with pytest.raises(SecretManagerError):
            GCPSecretManager(client).create_secret("proj", "API_KEY", "value")

        client.add_secret_version.assert_not_called()

    def test_client_created_lazily(self):
        with mock.patch.object(secretmanager, "SecretManagerServiceClient") as factory:
            helper = GCPSecretManager()
            factory.assert_not_called()

            assert helper.client is factory.return_value
            assert helper.client is factory.return_value
            factory.assert_called_once_with()


class TestAWSSecretManager:

    @pytest.fixture
    def client(self):
        return mock.Mock()

    def test_get_secret_ignores_project(self, client):
        client.get_secret_value.return_value = {"SecretString": "s3cr3t"}

        value = AWSSecretManager(client).get_secret("ignored", "api-key")

        assert value == b"s3cr3t"
        client.get_secret_value.assert_called_once_with(SecretId="api-key")

    def test_get_secret_without_string(self, client):
        client.get_secret_value.return_value = {"SecretBinary": b"\x00\x01"}

        with pytest.raises(NoDataError):
            AWSSecretManager(client).get_secret("", "api-key")

    def test_get_secret_version_reads_binary(self, client):
        client.get_secret_value.return_value = {"SecretBinary": b"\x00\x01"}

        value = AWSSecretManager(client).get_secret_version("", "api-key", "AWSPREVIOUS")

        assert value == b"\x00\x01"
        client.get_secret_value.assert_called_once_with(SecretId="api-key", VersionStage="AWSPREVIOUS")

    def test_get_secret_version_falls_back_to_string(self, client):
        client.get_secret_value.return_value = {"SecretString": "text"}

        assert AWSSecretManager(client).get_secret_version("", "api-key", "AWSCURRENT") == b"text"

    def test_get_secret_version_without_data(self, client):
        client.get_secret_value.return_value = {}

        with pytest.raises(NoDataError):
            AWSSecretManager(client).get_secret_version("", "api-key", "AWSCURRENT")

    def test_client_error_is_wrapped(self, client):
        client.get_secret_value.side_effect = _client_error("GetSecretValue")

        with pytest.raises(SecretManagerError, match="ResourceNotFoundException"):
            AWSSecretManager(client).get_secret("", "api-key")

    def test_create_secret(self, client):
        AWSSecretManager(client).create_secret("", "api-key", "value")

        client.create_secret.assert_called_once_with(Name="api-key", SecretString="value")

    def test_create_secret_error(self, client):
        client.create_secret.side_effect = _client_error("CreateSecret")

        with pytest.raises(SecretManagerError):
            AWSSecretManager(client).create_secret("", "api-key", "value")

    def test_client_uses_region(self):
        with mock.patch("nimbus.secrets.domains.aws_client.boto3") as boto3:
            helper = AWSSecretManager(region_name="eu-west-1")

            assert helper.client is boto3.client.return_value
            boto3.client.assert_called_once_with("secretsmanager", region_name="eu-west-1")


class TestSecretOperations:

    @pytest.fixture
    def helper(self, monkeypatch):
        helper = mock.Mock()
        monkeypatch.setattr(secret_operations, "get_helper", lambda provider="gcp": helper)
        return helper

    def test_get_secret_uses_env_project(self, helper, monkeypatch):
        monkeypatch.setenv("GCP_PROJECT", "env-project")
        helper.get_secret.return_value = b"value"

        assert secret_operations.get_secret("API_KEY") == b"value"
        helper.get_secret.assert_called_once_with("env-project", "API_KEY")

    def test_get_secret_with_version(self, helper):
        helper.get_secret_version.return_value = b"v2"

        assert secret_operations.get_secret("API_KEY", "proj", version="2") == b"v2"
        helper.get_secret_version.assert_called_once_with("proj", "API_KEY", "2")

    def test_get_secret_without_project_fails(self, helper, temp_home):
        with pytest.raises(ConfigError, match="Project ID not found"):
            secret_operations.get_secret("API_KEY")

        helper.get_secret.assert_not_called()

    def test_aws_needs_no_project(self, helper, temp_home):
        helper.get_secret.return_value = b"value"

        secret_operations.get_secret("api-key", provider="aws")

        helper.get_secret.assert_called_once_with("", "api-key")

    def test_create_secret(self, helper):
        secret_operations.create_secret("API_KEY", "value", "proj")

        helper.create_secret.assert_called_once_with("proj", "API_KEY", "value")

    def test_unknown_provider(self):
        with pytest.raises(ConfigError, match="Unsupported secrets provider"):
            secret_operations.get_helper("azure")

    def test_get_helper_builds_provider_clients(self, temp_home):
        assert isinstance(secret_operations.get_helper("gcp"), GCPSecretManager)
        assert isinstance(secret_operations.get_helper("aws"), AWSSecretManager)
