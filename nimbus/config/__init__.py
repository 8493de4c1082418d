"""Configuration and preferences for nimbus."""
from .config_loader import default_config_path, load_config
from .credentials import apply_credentials, get_aws_region, get_config, get_location, get_project_id, reset_config

__all__ = [
    "apply_credentials",
    "default_config_path",
    "get_aws_region",
    "get_config",
    "get_location",
    "get_project_id",
    "load_config",
    "reset_config",
]
