"""Amazon S3 client wrapper."""
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...config.credentials import get_aws_region
from ...errors import StorageError
from .helper import StorageHelper

logger = logging.getLogger(__name__)


class S3Storage(StorageHelper):
    """Wrapper around a boto3 ``s3`` client."""

    def __init__(self, client: Optional[Any] = None, region_name: Optional[str] = None):
        self._client = client
        self._region_name = region_name

    @classmethod
    def from_config(cls) -> "S3Storage":
        return cls(region_name=get_aws_region())

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("s3", region_name=self._region_name)
        return self._client

    def upload_from_bytes(self, bucket: str, key: str, mime: Optional[str], data: bytes) -> None:
        params = {"Bucket": bucket, "Key": key, "Body": data}
        if mime:
            params["ContentType"] = mime

        try:
            self.client.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Storage error: {e}") from e
        logger.info(f"Uploaded {len(data)} bytes to s3://{bucket}/{key}")

    def download_to_bytes(self, bucket: str, key: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            data = response["Body"].read()
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Storage error: {e}") from e
        logger.info(f"Downloaded {len(data)} bytes from s3://{bucket}/{key}")
        return data

    def delete_file(self, bucket: str, key: str) -> None:
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Storage error: {e}") from e
        logger.info(f"Deleted s3://{bucket}/{key}")
