"""Workflow for object storage operations driven by the nimbus config."""
import logging
from pathlib import Path
from typing import Optional, Union

from ...errors import ConfigError, InvalidFileTypeError, StorageIOError
from ..domains.file_types import sniff_mime
from ..domains.gcs_client import GCSStorage
from ..domains.helper import StorageHelper
from ..domains.s3_client import S3Storage

logger = logging.getLogger(__name__)


def get_helper(provider: str = "gcp") -> StorageHelper:
    """Return a configured storage helper for ``provider``."""
    if provider == "gcp":
        return GCSStorage.from_config()
    if provider == "aws":
        return S3Storage.from_config()
    raise ConfigError(f"Unsupported storage provider: {provider}")


def upload(
    bucket: str,
    key: str,
    path: Union[str, Path],
    mime: Optional[str] = None,
    provider: str = "gcp",
) -> None:
    """
    Upload the local file at ``path`` to ``bucket/key``.

    Without an explicit ``mime`` the content type is sniffed from the file's
    magic bytes; unrecognised files are uploaded untyped.
    """
    helper = get_helper(provider)
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise StorageIOError(f"IO error: {e}") from e

    if not mime:
        mime = sniff_mime(data)
        logger.debug(f"Sniffed content type for {path}: {mime}")
    helper.upload_from_bytes(bucket, key, mime, data)


def download(
    bucket: str,
    key: str,
    dest_dir: Union[str, Path],
    expected_type: Optional[str] = None,
    provider: str = "gcp",
) -> Path:
    """
    Download ``bucket/key`` into ``dest_dir``.

    When ``expected_type`` is given, the downloaded file is checked against it
    and removed again if it does not match.

    Returns:
        Path of the downloaded file
    """
    helper = get_helper(provider)
    path = helper.download_file(bucket, key, dest_dir)

    if expected_type:
        try:
            helper.valid_file_type(path.read_bytes(), expected_type)
        except InvalidFileTypeError:
            logger.warning(f"Removing {path}: not a valid {expected_type} file")
            path.unlink()
            raise

    return path


def delete(bucket: str, key: str, provider: str = "gcp") -> None:
    get_helper(provider).delete_file(bucket, key)
