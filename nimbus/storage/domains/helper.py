"""Common interface for object stores, with local file conveniences."""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ...errors import InvalidFileTypeError, StorageError, StorageIOError
from .file_types import sniff_extension

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class StorageHelper(ABC):
    """Upload, download and delete objects addressed by (bucket, key)."""

    @abstractmethod
    def upload_from_bytes(self, bucket: str, key: str, mime: Optional[str], data: bytes) -> None:
        """Upload ``data`` to ``bucket/key``."""

    @abstractmethod
    def download_to_bytes(self, bucket: str, key: str) -> bytes:
        """Download ``bucket/key`` into memory."""

    @abstractmethod
    def delete_file(self, bucket: str, key: str) -> None:
        """Delete ``bucket/key``."""

    def upload_file(self, bucket: str, key: str, path: PathLike) -> None:
        """
        Upload a local file.

        The local file name does not matter; ``key`` names the object in the bucket.

        Raises:
            StorageIOError: If the file cannot be read
        """
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise StorageIOError(f"IO error: {e}") from e

        self.upload_from_bytes(bucket, key, None, data)

    def download_file(self, bucket: str, key: str, path_dir: PathLike) -> Path:
        """
        Download an object into ``path_dir``.

        The object is written to ``path_dir / key``; directories in the key are
        created as needed, as is ``path_dir`` itself.

        Returns:
            Path of the written file

        Raises:
            StorageError: If ``path_dir`` exists and is not a directory, or ``key``
                resolves to a location outside ``path_dir``
            StorageIOError: If the directory or file cannot be written
        """
        path_dir = Path(path_dir)
        try:
            if not path_dir.exists():
                path_dir.mkdir(parents=True)
        except OSError as e:
            raise StorageIOError(f"IO error: {e}") from e

        if not path_dir.is_dir():
            raise StorageError(f"Path {path_dir} is not a directory")

        path = path_dir / key
        # Absolute keys and ".." segments must not escape path_dir
        if not path.resolve().is_relative_to(path_dir.resolve()):
            raise StorageError(f"Key {key} resolves outside {path_dir}")

        data = self.download_to_bytes(bucket, key)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageIOError(f"IO error: {e}") from e

        logger.info(f"Downloaded {bucket}/{key} to {path}")
        return path

    def valid_file_type(self, file: bytes, expected: str) -> None:
        """
        Check that ``file`` is of the ``expected`` type, judged by its magic bytes.

        Args:
            file: File contents
            expected: Expected extension without the dot, e.g. "jpg" or "pdf"

        Raises:
            InvalidFileTypeError: If the type is unknown or differs from ``expected``
        """
        extension = sniff_extension(file)
        if extension is None:
            raise InvalidFileTypeError("Failed to get file type")

        if extension != expected:
            raise InvalidFileTypeError(
                f"File type is not valid. Expected: {expected}, got: {extension}"
            )
