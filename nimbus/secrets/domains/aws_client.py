"""AWS Secrets Manager client wrapper."""
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...config.credentials import get_aws_region
from ...errors import NoDataError, SecretManagerError
from .helper import SecretManagerHelper

logger = logging.getLogger(__name__)


class AWSSecretManager(SecretManagerHelper):
    """Wrapper around a boto3 ``secretsmanager`` client.

    AWS secrets are not scoped by project, so the ``project`` argument is ignored.
    """

    def __init__(self, client: Optional[Any] = None, region_name: Optional[str] = None):
        self._client = client
        self._region_name = region_name

    @classmethod
    def from_config(cls) -> "AWSSecretManager":
        return cls(region_name=get_aws_region())

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("secretsmanager", region_name=self._region_name)
        return self._client

    def _get_secret_value(self, **kwargs) -> dict:
        try:
            response = self.client.get_secret_value(**kwargs)
        except (BotoCoreError, ClientError) as e:
            raise SecretManagerError(f"SecretManager error: {e}") from e
        logger.info(f"Fetched secret {kwargs['SecretId']}")
        return response

    def get_secret(self, project: str, secret: str) -> bytes:
        response = self._get_secret_value(SecretId=secret)
        value = response.get("SecretString")
        if value is None:
            raise NoDataError(f"Secret '{secret}' has no SecretString")
        return value.encode("UTF-8")

    def get_secret_version(self, project: str, secret: str, version: str) -> bytes:
        response = self._get_secret_value(SecretId=secret, VersionStage=version)
        if response.get("SecretBinary") is not None:
            return response["SecretBinary"]
        if response.get("SecretString") is not None:
            return response["SecretString"].encode("UTF-8")
        raise NoDataError(f"Secret '{secret}' at stage '{version}' has no data")

    def create_secret(self, project: str, secret_name: str, secret_val: str) -> None:
        try:
            self.client.create_secret(Name=secret_name, SecretString=secret_val)
        except (BotoCoreError, ClientError) as e:
            raise SecretManagerError(f"SecretManager error: {e}") from e
        logger.info(f"Created secret {secret_name}")
