"""Error types raised by nimbus helpers."""


class NimbusError(Exception):
    """Base class for all nimbus errors."""
    pass


class ConfigError(NimbusError):
    """Configuration error exception."""
    pass


class SecretManagerError(NimbusError):
    """Secret Manager call failed."""
    pass


class NoPayloadError(SecretManagerError):
    """Secret version response carried no payload."""

    def __init__(self, message: str = "No payload in AccessSecretVersionResponse"):
        super().__init__(message)


class NoDataError(SecretManagerError):
    """Secret payload carried no data."""

    def __init__(self, message: str = "No data in payload from AccessSecretVersionResponse"):
        super().__init__(message)


class StorageError(NimbusError):
    """Object storage call failed."""
    pass


class StorageIOError(StorageError):
    """Local filesystem read or write failed."""
    pass


class InvalidFileTypeError(StorageError):
    """Downloaded bytes do not match the expected file type."""
    pass


class TasksError(NimbusError):
    """Cloud Tasks call failed or the task could not be built."""
    pass
