"""Common interface for secret stores."""
from abc import ABC, abstractmethod


class SecretManagerHelper(ABC):
    """Read and create secrets as raw bytes.

    ``project`` scopes the secret on GCP; stores without projects ignore it.
    """

    @abstractmethod
    def get_secret(self, project: str, secret: str) -> bytes:
        """Get the latest version of a secret."""

    @abstractmethod
    def get_secret_version(self, project: str, secret: str, version: str) -> bytes:
        """Get a specific version of a secret."""

    @abstractmethod
    def create_secret(self, project: str, secret_name: str, secret_val: str) -> None:
        """Create a new secret holding ``secret_val`` as its first version."""
