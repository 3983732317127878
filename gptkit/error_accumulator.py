"""Collects the raw bytes of an error body spread over several stream lines."""

from __future__ import annotations

import io
from typing import Any


class ErrorAccumulatorWriteError(Exception):
    """Raised when the underlying buffer refuses a write."""


class ErrorAccumulator:
    """Accumulates bytes in a buffer that offers ``write`` and ``getvalue``."""

    def __init__(self, buffer: Any = None) -> None:
        self._buffer = io.BytesIO() if buffer is None else buffer

    def write(self, data: bytes) -> None:
        try:
            self._buffer.write(data)
        except Exception as exc:
            raise ErrorAccumulatorWriteError(f"error accumulator write error, {exc}") from exc

    def contents(self) -> bytes:
        """Return everything written so far, or empty bytes."""
        return bytes(self._buffer.getvalue())