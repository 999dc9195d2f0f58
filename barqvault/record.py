"""The master record kept for every stored chunk."""

from __future__ import annotations

import json
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any

from .errors import SerdeError
from .modality import CodecType, Modality, StorageMode


@contextmanager
def _decoding() -> Iterator[None]:
    """Turn lookup and conversion failures into SerdeError."""
    try:
        yield
    except KeyError as exc:
        raise SerdeError(f"missing field `{exc.args[0]}`") from None
    except (ValueError, TypeError) as exc:
        raise SerdeError(str(exc)) from exc


def _opt(convert: Callable[[Any], Any], value: Any) -> Any:
    return None if value is None else convert(value)


def _opt_str(value: Any) -> str | None:
    return None if value is None else str(value)


@dataclass
class BarqRecord:
    """One stored chunk: summary, embedding, payload and bookkeeping.

    ``embedding`` and ``compressed_payload`` are carried in memory only;
    the store strips them before persisting.
    """

    id: uuid.UUID = field(default_factory=uuid.uuid4)
    parent_id: uuid.UUID | None = None
    chunk_index: int = 0
    total_chunks: int = 1
    modality: Modality = Modality.TEXT
    storage_mode: StorageMode = StorageMode.TEXT_ONLY
    codec: CodecType = CodecType.lzma(6)
    filename: str | None = None
    mime_type: str | None = None
    summary: str = ""
    embedding: list[float] = field(default_factory=list)
    compressed_embed: bytes = b""
    embedding_dim: int = 0
    bm25_tokens: list[str] = field(default_factory=list)
    metadata: Any = field(default_factory=dict)
    compressed_payload: bytes | None = None
    original_size: int = 0
    compressed_size: int = 0
    compression_ratio: float = 1.0
    created_at: int = 0
    updated_at: int = 0
    checksum: bytes = bytes(32)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation."""
        return {
            "id": str(self.id),
            "parent_id": _opt_str(self.parent_id),
            "chunk_index": self.chunk_index,
            "total_chunks": self.total_chunks,
            "modality": self.modality.value,
            "storage_mode": self.storage_mode.value,
            "codec": self.codec.to_json(),
            "filename": self.filename,
            "mime_type": self.mime_type,
            "summary": self.summary,
            "embedding": list(self.embedding),
            "compressed_embed": list(self.compressed_embed),
            "embedding_dim": self.embedding_dim,
            "bm25_tokens": list(self.bm25_tokens),
            "metadata": self.metadata,
            "compressed_payload": _opt(list, self.compressed_payload),
            "original_size": self.original_size,
            "compressed_size": self.compressed_size,
            "compression_ratio": self.compression_ratio,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "checksum": list(self.checksum),
        }

    @classmethod
    def from_dict(cls, data: Any) -> BarqRecord:
        """Build a record from its JSON-ready representation."""
        with _decoding():
            checksum = bytes(data["checksum"])
            if len(checksum) != 32:
                raise ValueError(f"invalid length {len(checksum)}, expected 32 checksum bytes")
            return cls(
                id=uuid.UUID(data["id"]),
                parent_id=_opt(uuid.UUID, data.get("parent_id")),
                chunk_index=int(data["chunk_index"]),
                total_chunks=int(data["total_chunks"]),
                modality=Modality(data["modality"]),
                storage_mode=StorageMode(data["storage_mode"]),
                codec=CodecType.from_json(data["codec"]),
                filename=data.get("filename"),
                mime_type=data.get("mime_type"),
                summary=str(data["summary"]),
                embedding=[float(v) for v in data.get("embedding", [])],
                compressed_embed=bytes(data["compressed_embed"]),
                embedding_dim=int(data["embedding_dim"]),
                bm25_tokens=[str(t) for t in data["bm25_tokens"]],
                metadata=data["metadata"],
                compressed_payload=_opt(bytes, data.get("compressed_payload")),
                original_size=int(data["original_size"]),
                compressed_size=int(data["compressed_size"]),
                compression_ratio=float(data["compression_ratio"]),
                created_at=int(data["created_at"]),
                updated_at=int(data["updated_at"]),
                checksum=checksum,
            )

    def to_json(self) -> str:
        """Encode as a JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str | bytes) -> BarqRecord:
        """Decode a JSON string or bytes."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SerdeError(str(exc)) from exc
        return cls.from_dict(data)

    def stripped(self) -> BarqRecord:
        """Return a copy without the payload bytes and raw embedding."""
        return replace(self, compressed_payload=None, embedding=[])