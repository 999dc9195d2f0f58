"""Error hierarchy shared by every part of the vault."""

from __future__ import annotations

import json
import uuid


class BarqError(Exception):
    """Base class for all vault errors."""

    prefix = "Barq error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class CompressionError(BarqError):
    prefix = "Compression error"


class StorageError(BarqError):
    prefix = "Storage error"


class IndexingError(BarqError):
    prefix = "Index error"


class IngestError(BarqError):
    prefix = "Ingest error"


class RecordNotFoundError(BarqError):
    prefix = "Record not found"

    def __init__(self, record_id: uuid.UUID) -> None:
        super().__init__(str(record_id))
        self.record_id = record_id


class InvalidInputError(BarqError):
    prefix = "Invalid input"


class ProviderError(BarqError):
    prefix = "Provider error"


class BarqIOError(BarqError):
    prefix = "I/O error"


class SerdeError(BarqError):
    prefix = "Serde error"


def from_exception(exc: BaseException) -> BarqError:
    """Wrap an I/O or JSON exception in the matching vault error."""
    if isinstance(exc, BarqError):
        return exc
    if isinstance(exc, json.JSONDecodeError):
        err: BarqError = SerdeError(str(exc))
    elif isinstance(exc, OSError):
        err = BarqIOError(str(exc))
    else:
        raise TypeError(f"cannot convert {type(exc).__name__} to a vault error")
    err.__cause__ = exc
    return err