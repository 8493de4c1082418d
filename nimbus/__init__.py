"""Nimbus: helpers for cloud secret, storage and task services.

Helpers:
- ``SecretManagerHelper``: ``GCPSecretManager`` (Secret Manager), ``AWSSecretManager`` (Secrets Manager)
- ``StorageHelper``: ``GCSStorage`` (Cloud Storage), ``S3Storage`` (S3)
- ``CloudTaskHelper`` / ``TaskHelper``: ``GCPCloudTasks`` (Cloud Tasks)

Example::

    from nimbus import GCSStorage

    storage = GCSStorage.from_config()
    storage.upload_from_bytes("bucket", "key", None, b"test")
    assert storage.download_to_bytes("bucket", "key") == b"test"
"""
from google.cloud.tasks_v2 import OidcToken, Task

from .errors import (
    ConfigError,
    InvalidFileTypeError,
    NimbusError,
    NoDataError,
    NoPayloadError,
    SecretManagerError,
    StorageError,
    StorageIOError,
    TasksError,
)
from .secrets import AWSSecretManager, GCPSecretManager, SecretManagerHelper, SecretPath
from .storage import GCSStorage, S3Storage, StorageHelper
from .tasks import CloudTaskHelper, GCPCloudTasks, TaskHelper, oidc_token

__version__ = "0.1.0"

__all__ = [
    "AWSSecretManager",
    "CloudTaskHelper",
    "ConfigError",
    "GCPCloudTasks",
    "GCPSecretManager",
    "GCSStorage",
    "InvalidFileTypeError",
    "NimbusError",
    "NoDataError",
    "NoPayloadError",
    "OidcToken",
    "S3Storage",
    "SecretManagerError",
    "SecretManagerHelper",
    "SecretPath",
    "StorageError",
    "StorageHelper",
    "StorageIOError",
    "Task",
    "TaskHelper",
    "TasksError",
    "oidc_token",
]
