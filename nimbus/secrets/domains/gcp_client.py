"""GCP Secret Manager client wrapper."""
import logging
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import secretmanager

from ...config.credentials import apply_credentials
from ...errors import NoDataError, NoPayloadError, SecretManagerError
from .helper import SecretManagerHelper
from .models import SecretPath

logger = logging.getLogger(__name__)


class GCPSecretManager(SecretManagerHelper):
    """Wrapper around GCP Secret Manager client."""

    def __init__(self, client: Optional[secretmanager.SecretManagerServiceClient] = None):
        self._client = client

    @classmethod
    def from_config(cls) -> "GCPSecretManager":
        """Build a helper using the credentials named in the nimbus config."""
        apply_credentials()
        return cls()

    @property
    def client(self) -> secretmanager.SecretManagerServiceClient:
        """Lazy-initialize client."""
        if self._client is None:
            self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def _access(self, path: SecretPath) -> bytes:
        name = path.version_name
        logger.debug(f"Accessing secret version {name}")
        try:
            response = self.client.access_secret_version(request={"name": name})
        except GoogleAPIError as e:
            raise SecretManagerError(f"SecretManager error: {e}") from e

        if "payload" not in response:
            raise NoPayloadError()
        if not response.payload.data:
            raise NoDataError()

        logger.info(f"Fetched secret version {response.name or name}")
        return response.payload.data

    def get_secret(self, project: str, secret: str) -> bytes:
        return self._access(SecretPath(project, secret))

    def get_secret_version(self, project: str, secret: str, version: str) -> bytes:
        return self._access(SecretPath(project, secret, version))

    def create_secret(self, project: str, secret_name: str, secret_val: str) -> None:
        """
        Create a secret with automatic replication and add its first version.

        Args:
            project: GCP project ID
            secret_name: Secret ID, unique within the project
            secret_val: Secret value, stored UTF-8 encoded
        """
        path = SecretPath(project, secret_name)
        try:
            self.client.create_secret(
                request={
                    "parent": path.parent,
                    "secret_id": secret_name,
                    "secret": {"replication": {"automatic": {}}},
                }
            )
            self.client.add_secret_version(
                request={
                    "parent": path.secret_name,
                    "payload": {"data": secret_val.encode("UTF-8")},
                }
            )
        except GoogleAPIError as e:
            raise SecretManagerError(f"SecretManager error: {e}") from e

        logger.info(f"Created secret {path.secret_name}")
