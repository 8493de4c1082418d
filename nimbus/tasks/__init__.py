"""Cloud Tasks helpers."""
from .domains.gcp_client import GCPCloudTasks
from .domains.helper import CloudTaskHelper, TaskHelper, oidc_token

__all__ = ["CloudTaskHelper", "GCPCloudTasks", "TaskHelper", "oidc_token"]
