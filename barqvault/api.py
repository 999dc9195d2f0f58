"""Request and response messages of the vault's public interface."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from .modality import Modality, StorageMode
from .record import _decoding, _opt, _opt_str


@dataclass
class IngestRequest:
    """Request to ingest a file or chunk."""

    summary: str
    modality: Modality
    storage_mode: StorageMode
    embedding: list[float] = field(default_factory=list)
    filename: str | None = None
    raw_payload: bytes | None = None
    metadata: Any = field(default_factory=dict)
    chunk_index: int = 0
    total_chunks: int = 1
    parent_id: uuid.UUID | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "embedding": list(self.embedding),
            "modality": self.modality.value,
            "storage_mode": self.storage_mode.value,
            "filename": self.filename,
            "raw_payload": _opt(list, self.raw_payload),
            "metadata": self.metadata,
            "chunk_index": self.chunk_index,
            "total_chunks": self.total_chunks,
            "parent_id": _opt_str(self.parent_id),
        }

    @classmethod
    def from_dict(cls, data: Any) -> IngestRequest:
        with _decoding():
            return cls(
                summary=str(data["summary"]),
                embedding=[float(v) for v in data["embedding"]],
                modality=Modality(data["modality"]),
                storage_mode=StorageMode(data["storage_mode"]),
                filename=data.get("filename"),
                raw_payload=_opt(bytes, data.get("raw_payload")),
                metadata=data["metadata"],
                chunk_index=int(data["chunk_index"]),
                total_chunks=int(data["total_chunks"]),
                parent_id=_opt(uuid.UUID, data.get("parent_id")),
            )


@dataclass
class IngestResponse:
    """Outcome of an ingest."""

    id: uuid.UUID
    success: bool
    compressed_size: int
    compression_ratio: float
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "success": self.success,
            "compressed_size": self.compressed_size,
            "compression_ratio": self.compression_ratio,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: Any) -> IngestResponse:
        with _decoding():
            return cls(
                id=uuid.UUID(data["id"]),
                success=bool(data["success"]),
                compressed_size=int(data["compressed_size"]),
                compression_ratio=float(data["compression_ratio"]),
                error=data.get("error"),
            )


@dataclass
class SearchRequest:
    """Hybrid search request; vector_weight 0.0 is pure BM25, 1.0 pure vector."""

    query_embedding: list[float]
    query_text: str
    vector_weight: float
    top_k: int
    modality_filter: Modality | None = None
    metadata_filters: Any = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "query_embedding": list(self.query_embedding),
            "query_text": self.query_text,
            "vector_weight": self.vector_weight,
            "top_k": self.top_k,
            "modality_filter": _opt(lambda m: m.value, self.modality_filter),
            "metadata_filters": self.metadata_filters,
        }

    @classmethod
    def from_dict(cls, data: Any) -> SearchRequest:
        with _decoding():
            return cls(
                query_embedding=[float(v) for v in data["query_embedding"]],
                query_text=str(data["query_text"]),
                vector_weight=float(data["vector_weight"]),
                top_k=int(data["top_k"]),
                modality_filter=_opt(Modality, data.get("modality_filter")),
                metadata_filters=data["metadata_filters"],
            )


@dataclass
class SearchResult:
    """One search hit."""

    id: uuid.UUID
    summary: str
    modality: Modality
    score: float
    has_payload: bool
    filename: str | None = None
    metadata: Any = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "summary": self.summary,
            "filename": self.filename,
            "modality": self.modality.value,
            "score": self.score,
            "has_payload": self.has_payload,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Any) -> SearchResult:
        with _decoding():
            return cls(
                id=uuid.UUID(data["id"]),
                summary=str(data["summary"]),
                filename=data.get("filename"),
                modality=Modality(data["modality"]),
                score=float(data["score"]),
                has_payload=bool(data["has_payload"]),
                metadata=data["metadata"],
            )


@dataclass
class SearchResponse:
    """Search hits with the query latency in milliseconds."""

    results: list[SearchResult]
    total_found: int
    took_ms: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [result.to_dict() for result in self.results],
            "total_found": self.total_found,
            "took_ms": self.took_ms,
        }

    @classmethod
    def from_dict(cls, data: Any) -> SearchResponse:
        with _decoding():
            return cls(
                results=[SearchResult.from_dict(item) for item in data["results"]],
                total_found=int(data["total_found"]),
                took_ms=int(data["took_ms"]),
            )


@dataclass
class FetchRequest:
    """Request for the raw payload of a record."""

    id: uuid.UUID
    decompress: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": str(self.id), "decompress": self.decompress}

    @classmethod
    def from_dict(cls, data: Any) -> FetchRequest:
        with _decoding():
            return cls(id=uuid.UUID(data["id"]), decompress=bool(data["decompress"]))


@dataclass
class FetchResponse:
    """Raw or decompressed bytes of a record."""

    id: uuid.UUID
    modality: Modality
    data: bytes
    original_size: int
    compressed_size: int
    filename: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "modality": self.modality.value,
            "filename": self.filename,
            "data": list(self.data),
            "original_size": self.original_size,
            "compressed_size": self.compressed_size,
        }

    @classmethod
    def from_dict(cls, data: Any) -> FetchResponse:
        with _decoding():
            return cls(
                id=uuid.UUID(data["id"]),
                modality=Modality(data["modality"]),
                filename=data.get("filename"),
                data=bytes(data["data"]),
                original_size=int(data["original_size"]),
                compressed_size=int(data["compressed_size"]),
            )