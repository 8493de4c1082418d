"""Domain models for secret management."""
from dataclasses import dataclass


@dataclass(frozen=True)
class SecretPath:
    """Identifies a secret version in Secret Manager."""
    project: str
    name: str
    version: str = "latest"

    @property
    def parent(self) -> str:
        return f"projects/{self.project}"

    @property
    def secret_name(self) -> str:
        return f"{self.parent}/secrets/{self.name}"

    @property
    def version_name(self) -> str:
        return f"{self.secret_name}/versions/{self.version}"
