"""Content modality, storage mode and codec descriptors."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

__all__ = ["Modality", "StorageMode", "CodecKind", "CodecType"]


class Modality(enum.StrEnum):
    """The content type of an ingested record."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"

    @classmethod
    def parse(cls, text: str) -> Modality:
        """Parse a modality name, ignoring case."""
        lowered = text.lower()
        try:
            return cls(lowered)
        except ValueError:
            raise ValueError(f"Unknown modality: {lowered}") from None


class StorageMode(enum.StrEnum):
    """How, or whether, raw bytes are kept next to the summary."""

    TEXT_ONLY = "text_only"
    HYBRID_FILE = "hybrid_file"
    FULL_RAW = "full_raw"

    @classmethod
    def parse(cls, text: str) -> StorageMode:
        """Parse a storage mode name, ignoring case."""
        lowered = text.lower()
        try:
            return cls(lowered)
        except ValueError:
            raise ValueError(f"Unknown storage mode: {lowered}") from None


class CodecKind(enum.Enum):
    """Compression algorithm family."""

    LZMA = "Lzma"
    LZ4 = "Lz4"
    ZSTD = "Zstd"


@dataclass(frozen=True)
class CodecType:
    """A compression codec together with its level, where it has one."""

    kind: CodecKind
    level: int | None = None

    def __post_init__(self) -> None:
        if self.kind is CodecKind.LZ4:
            if self.level is not None:
                raise ValueError("lz4 takes no level")
            return
        if not isinstance(self.level, int) or isinstance(self.level, bool):
            raise ValueError(f"{self.kind.value} needs an integer level")
        if self.kind is CodecKind.LZMA and self.level < 0:
            raise ValueError("lzma level must not be negative")

    @classmethod
    def lzma(cls, level: int) -> CodecType:
        return cls(CodecKind.LZMA, level)

    @classmethod
    def lz4(cls) -> CodecType:
        return cls(CodecKind.LZ4)

    @classmethod
    def zstd(cls, level: int) -> CodecType:
        return cls(CodecKind.ZSTD, level)

    def __str__(self) -> str:
        name = self.kind.value.lower()
        return name if self.level is None else f"{name}({self.level})"

    def to_json(self) -> Any:
        """Encode as an externally tagged JSON value."""
        if self.level is None:
            return self.kind.value
        return {self.kind.value: self.level}

    @classmethod
    def from_json(cls, value: Any) -> CodecType:
        """Decode an externally tagged JSON value."""
        if isinstance(value, str):
            try:
                kind = CodecKind(value)
            except ValueError:
                raise ValueError(f"unknown codec: {value}") from None
            return cls(kind)
        if isinstance(value, dict) and len(value) == 1:
            ((tag, level),) = value.items()
            try:
                kind = CodecKind(tag)
            except ValueError:
                raise ValueError(f"unknown codec: {tag}") from None
            return cls(kind, level)
        raise ValueError(f"invalid codec value: {value!r}")