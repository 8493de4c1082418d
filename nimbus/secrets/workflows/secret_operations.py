"""Workflow for secret operations driven by the nimbus config."""
import logging
from typing import Optional

from ...config.credentials import get_project_id
from ...errors import ConfigError
from ..domains.aws_client import AWSSecretManager
from ..domains.gcp_client import GCPSecretManager
from ..domains.helper import SecretManagerHelper

logger = logging.getLogger(__name__)


def get_helper(provider: str = "gcp") -> SecretManagerHelper:
    """Return a configured secret helper for ``provider``."""
    if provider == "gcp":
        return GCPSecretManager.from_config()
    if provider == "aws":
        return AWSSecretManager.from_config()
    raise ConfigError(f"Unsupported secrets provider: {provider}")


def _resolve_project(project_id: Optional[str], provider: str) -> str:
    if project_id:
        return project_id
    if provider != "gcp":
        return ""
    project_id = get_project_id()
    if not project_id:
        raise ConfigError("Project ID not found. Set GCP_PROJECT or gcp.project_id in the config file")
    return project_id


def get_secret(
    secret_name: str,
    project_id: Optional[str] = None,
    version: Optional[str] = None,
    provider: str = "gcp",
) -> bytes:
    """
    Fetch a secret.

    Args:
        secret_name: Name of the secret to fetch
        project_id: GCP project ID (auto-detected if not provided)
        version: Version to fetch; latest when omitted
        provider: "gcp" or "aws"

    Returns:
        Secret payload bytes

    Raises:
        ConfigError: If the project cannot be resolved
        SecretManagerError: If the secret store rejects the request
    """
    helper = get_helper(provider)
    project_id = _resolve_project(project_id, provider)

    if version:
        logger.debug(f"Fetching {secret_name} version {version}")
        return helper.get_secret_version(project_id, secret_name, version)
    return helper.get_secret(project_id, secret_name)


def create_secret(
    secret_name: str,
    secret_value: str,
    project_id: Optional[str] = None,
    provider: str = "gcp",
) -> None:
    """Create ``secret_name`` holding ``secret_value``."""
    helper = get_helper(provider)
    helper.create_secret(_resolve_project(project_id, provider), secret_name, secret_value)
