"""A byte stream wrapper that counts how many bytes have been read."""

from __future__ import annotations

from typing import BinaryIO


class ReadCounter:
    """Wraps a binary stream and keeps a running total of bytes read."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._count = 0

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes from the wrapped stream and count them."""
        data = self._stream.read(size)
        self._count += len(data)
        return data

    def bytes_read(self) -> int:
        """Total number of bytes read through this wrapper so far."""
        return self._count