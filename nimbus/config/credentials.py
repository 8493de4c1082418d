"""Lazy configuration access and credential setup for the SDK clients."""
import logging
import os
from typing import Any, Dict, Optional

from ..errors import ConfigError
from .config_loader import load_config

logger = logging.getLogger(__name__)

# Deferred until a cloud call actually needs it, so `nimbus --help` works without a config file
_CONFIG: Optional[Dict[str, Any]] = None


def get_config() -> Dict[str, Any]:
    """
    Load configuration on first use.

    For service account authentication, GOOGLE_APPLICATION_CREDENTIALS is
    pointed at the configured key file so the Google client libraries pick it up.

    Raises:
        ConfigError: If config file is missing or invalid
    """
    global _CONFIG

    if _CONFIG is None:
        try:
            config = load_config()
        except FileNotFoundError as e:
            raise ConfigError(str(e)) from e

        # Set GOOGLE_APPLICATION_CREDENTIALS from config
        auth = config["authentication"]
        if auth["type"] == "service_account":
            os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = auth["service_account_path"]
            logger.info(f"Set GOOGLE_APPLICATION_CREDENTIALS from config: {auth['service_account_path']}")
        _CONFIG = config

    return _CONFIG


def reset_config() -> None:
    """Forget the loaded configuration so the next access reads it again."""
    global _CONFIG
    _CONFIG = None


def _from_env_or_config(env_var: str, section: str, key: str, quiet: bool = False) -> Optional[str]:
    # Environment variable first (allows override)
    value = os.getenv(env_var)
    if value:
        logger.debug(f"Using {env_var} from environment: {value}")
        return value

    try:
        config = get_config()
    except ConfigError as e:
        if not quiet:
            logger.warning(f"Failed to load config: {e}")
        return None

    # Fall back to the config file
    value = (config.get(section) or {}).get(key)
    if value:
        logger.debug(f"Using {section}.{key} from config: {value}")
    return value


def get_project_id(quiet: bool = False) -> Optional[str]:
    """
    Get GCP project ID.

    Priority order:
    1. GCP_PROJECT environment variable
    2. gcp.project_id in the config file

    Args:
        quiet: If True, a missing project is not logged (for callers that can do without one)

    Returns:
        Project ID string, or None if not found
    """
    project_id = _from_env_or_config("GCP_PROJECT", "gcp", "project_id", quiet=quiet)
    if not project_id and not quiet:
        logger.error("Project ID not found. Please set GCP_PROJECT environment variable or configure project_id in config file")
    return project_id


def get_location() -> Optional[str]:
    """Cloud Tasks location from GCP_LOCATION or gcp.location."""
    return _from_env_or_config("GCP_LOCATION", "gcp", "location")


def get_aws_region() -> Optional[str]:
    """AWS region from AWS_REGION or aws.region; None lets boto3 resolve its own default."""
    return _from_env_or_config("AWS_REGION", "aws", "region")


def apply_credentials() -> None:
    """Point the Google client libraries at configured credentials, if any."""
    try:
        get_config()
    except ConfigError as e:
        logger.warning(f"No usable config, falling back to application default credentials: {e}")
