"""Object storage helpers."""
from .domains.gcs_client import GCSStorage
from .domains.helper import StorageHelper
from .domains.s3_client import S3Storage

__all__ = ["GCSStorage", "S3Storage", "StorageHelper"]
