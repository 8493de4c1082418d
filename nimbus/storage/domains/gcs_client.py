"""Google Cloud Storage client wrapper."""
import logging
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import storage

from ...config.credentials import apply_credentials, get_project_id
from ...errors import StorageError
from .helper import StorageHelper

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class GCSStorage(StorageHelper):
    """Wrapper around ``google.cloud.storage.Client``."""

    def __init__(self, client: Optional[storage.Client] = None, project: Optional[str] = None):
        self._client = client
        self._project = project

    @classmethod
    def from_config(cls) -> "GCSStorage":
        apply_credentials()
        # Object calls work without a project; the client infers one if it can
        return cls(project=get_project_id(quiet=True))

    @property
    def client(self) -> storage.Client:
        """Lazy-initialize client."""
        if self._client is None:
            self._client = storage.Client(project=self._project)
        return self._client

    def _blob(self, bucket: str, key: str) -> storage.Blob:
        return self.client.bucket(bucket).blob(key)

    def upload_from_bytes(self, bucket: str, key: str, mime: Optional[str], data: bytes) -> None:
        try:
            self._blob(bucket, key).upload_from_string(data, content_type=mime or DEFAULT_CONTENT_TYPE)
        except GoogleAPIError as e:
            raise StorageError(f"Storage error: {e}") from e
        logger.info(f"Uploaded {len(data)} bytes to gs://{bucket}/{key}")

    def download_to_bytes(self, bucket: str, key: str) -> bytes:
        try:
            data = self._blob(bucket, key).download_as_bytes()
        except GoogleAPIError as e:
            raise StorageError(f"Storage error: {e}") from e
        logger.info(f"Downloaded {len(data)} bytes from gs://{bucket}/{key}")
        return data

    def delete_file(self, bucket: str, key: str) -> None:
        try:
            self._blob(bucket, key).delete()
        except GoogleAPIError as e:
            raise StorageError(f"Storage error: {e}") from e
        logger.info(f"Deleted gs://{bucket}/{key}")
