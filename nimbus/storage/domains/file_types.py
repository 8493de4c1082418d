"""File type detection from magic bytes."""
from typing import Optional

import filetype


def sniff_extension(data: bytes) -> Optional[str]:
    """Return the canonical extension for ``data`` (e.g. "jpg"), or None if unknown."""
    kind = filetype.guess(data)
    if kind is None:
        return None
    return kind.extension


def sniff_mime(data: bytes) -> Optional[str]:
    """Return the MIME type for ``data``, or None if unknown."""
    kind = filetype.guess(data)
    if kind is None:
        return None
    return kind.mime
