"""Configuration loader for nimbus."""
import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from ..errors import ConfigError
from .preferences import get_preference

logger = logging.getLogger(__name__)

AUTH_TYPES = ("service_account", "application_default")


def default_config_path() -> Path:
    """Default config location, resolved against the current home directory."""
    return Path.home() / ".config" / "nimbus" / "config.yml"


def _get_config_path() -> str:
    """
    Get config file path using XDG Base Directory standard.

    Priority order:
    1. User preference (stored in ~/.config/nimbus/preferences.json)
    2. Default location: ~/.config/nimbus/config.yml

    Returns:
        Absolute path to config file

    Raises:
        FileNotFoundError: If config file doesn't exist in any location
    """
    # 1. Check user preference
    config_path_pref = get_preference("config_path")
    if config_path_pref:
        config_path = Path(config_path_pref)
        if config_path.exists():
            logger.info(f"Using config from preference: {config_path}")
            return str(config_path)
        logger.warning(f"Config path from preference doesn't exist: {config_path}")

    # 2. Check default location
    default_config = default_config_path()
    if default_config.exists():
        logger.info(f"Using default config location: {default_config}")
        return str(default_config)

    # Config not found - raise clear error with setup instructions
    raise FileNotFoundError(
        "Configuration file not found. Please set up your config file using one of these methods:\n\n"
        "1. Use the default location:\n"
        f"   mkdir -p {default_config.parent}\n"
        f"   cp /path/to/your/config.yml {default_config}\n\n"
        "2. Point to an existing config file:\n"
        "   nimbus config set-path /path/to/your/config.yml\n\n"
        "3. Run interactive setup:\n"
        "   nimbus config init\n"
    )


def _validate_authentication(auth: Dict[str, Any], config_path: str) -> None:
    if "type" not in auth:
        raise ConfigError("Missing 'authentication.type' in config")

    if auth["type"] not in AUTH_TYPES:
        raise ConfigError(
            f"Unsupported authentication type: {auth['type']}\n"
            f"Supported types: {', '.join(AUTH_TYPES)}."
        )

    # Application default credentials need no key file
    if auth["type"] != "service_account":
        return

    if "service_account_path" not in auth:
        raise ConfigError(
            "Missing 'authentication.service_account_path' in config\n"
            "Please specify the absolute path to your service account JSON file."
        )

    service_account_path = auth["service_account_path"]
    # Validate service account file exists
    if not os.path.exists(service_account_path):
        raise ConfigError(
            f"Service account file not found at: {service_account_path}\n"
            f"Please ensure the file exists or update the path in {config_path}"
        )
    if not os.path.isfile(service_account_path):
        raise ConfigError(f"Service account path is not a file: {service_account_path}")


def load_config() -> Dict[str, Any]:
    """
    Load and validate configuration from YAML file.

    Returns:
        Dict containing configuration with keys:
        - authentication: dict with type and, for service accounts, service_account_path
        - gcp: dict with project_id and optional location
        - aws: dict with optional region

    Raises:
        FileNotFoundError: If no config file can be located
        ConfigError: If the config file is invalid
    """
    config_path = _get_config_path()

    # Load YAML
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}") from e

    # Validate required fields
    if not config:
        raise ConfigError(f"Config file at {config_path} is empty")
    if not isinstance(config, dict):
        raise ConfigError(f"Config file at {config_path} must be a YAML mapping")

    if "authentication" not in config:
        raise ConfigError(
            f"Missing 'authentication' section in config at {config_path}\n"
            f"Required format:\n"
            f"authentication:\n"
            f"  type: service_account\n"
            f"  service_account_path: /path/to/service-account.json"
        )
    # Every section present must be a mapping before its keys are inspected
    for section in ("authentication", "gcp", "aws"):
        if section in config and not isinstance(config[section], dict):
            raise ConfigError(f"'{section}' must be a mapping in config at {config_path}")

    _validate_authentication(config["authentication"], config_path)

    # Validate provider sections
    if "gcp" not in config and "aws" not in config:
        raise ConfigError(
            f"Missing 'gcp' or 'aws' section in config at {config_path}\n"
            f"Required format:\n"
            f"gcp:\n"
            f"  project_id: your-project-id"
        )

    if "gcp" in config and "project_id" not in config["gcp"]:
        raise ConfigError("Missing 'gcp.project_id' in config")

    logger.info(f"Configuration loaded successfully from {config_path}")
    logger.debug(f"Authentication type: {config['authentication']['type']}")
    return config
