"""Server configuration assembled from files and environment variables."""

from __future__ import annotations

import dataclasses
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import InvalidInputError

_ENV_MARKER = "barq__"


@dataclass
class TlsConfig:
    enabled: bool
    cert_path: str
    key_path: str


@dataclass
class AuthConfig:
    enabled: bool
    token: str
    skip_ping: bool


@dataclass
class IndexConfig:
    vector_dim: int
    hnsw_ef_construction: int
    hnsw_m: int
    bm25_k1: float
    bm25_b: float


@dataclass
class IngestConfig:
    chunk_size_tokens: int
    chunk_overlap_tokens: int
    default_storage_mode: str


@dataclass
class ServerEndpointConfig:
    grpc_addr: str
    rest_addr: str
    store_path: str
    max_payload_bytes: int
    tls: TlsConfig
    auth: AuthConfig


_TYPES = {
    "bool": bool, "int": int, "float": float, "str": str,
    "TlsConfig": TlsConfig, "AuthConfig": AuthConfig, "IndexConfig": IndexConfig,
    "IngestConfig": IngestConfig, "ServerEndpointConfig": ServerEndpointConfig,
}


def _scalar(kind: type, value: Any, where: str) -> Any:
    """Convert a config value, accepting the string forms environment variables take."""
    if kind is bool and isinstance(value, str):
        word = value.strip().lower()
        if word in ("1", "true", "on", "yes", "0", "false", "off", "no"):
            return word in ("1", "true", "on", "yes")
    elif kind is str and isinstance(value, (bool, int, float)):
        return str(value).lower() if isinstance(value, bool) else str(value)
    elif kind in (int, float) and isinstance(value, str):
        try:
            value = kind(value.strip())
        except ValueError:
            pass
    ok = isinstance(value, kind) and not (kind is not bool and isinstance(value, bool))
    if kind is float and isinstance(value, int) and not isinstance(value, bool):
        value, ok = float(value), True
    if not ok:
        raise ValueError(f"invalid type for `{where}`: expected {kind.__name__}, got {value!r}")
    if kind is int and value < 0:
        raise ValueError(f"invalid value for `{where}`: expected unsigned integer, got {value}")
    return value


def _build(cls: type, data: Any, where: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"invalid type for `{where or 'config'}`: expected a table")
    kwargs = {}
    for f in dataclasses.fields(cls):
        name = f"{where}.{f.name}" if where else f.name
        if f.name not in data:
            raise ValueError(f"missing field `{name}`")
        kind = _TYPES[f.type] if isinstance(f.type, str) else f.type
        raw = data[f.name]
        kwargs[f.name] = (
            _build(kind, raw, name) if dataclasses.is_dataclass(kind) else _scalar(kind, raw, name)
        )
    return cls(**kwargs)


def _read_toml(path: Path, required: bool) -> dict[str, Any]:
    if not path.is_file():
        if required:
            raise InvalidInputError(f'Config load error: configuration file "{path}" not found')
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise InvalidInputError(f"Config load error: {path}: {exc}") from exc


def _env_source(environ: Mapping[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name, value in environ.items():
        lowered = name.lower()
        if not lowered.startswith(_ENV_MARKER):
            continue
        path = lowered[len(_ENV_MARKER):].split("__")
        if not all(path):
            continue
        node = out
        for part in path[:-1]:
            node = node.setdefault(part, {})
            if not isinstance(node, dict):
                break
        else:
            node[path[-1]] = value
    return out


def _merge(base: dict[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


@dataclass
class ServerConfig:
    """Complete server configuration."""

    server: ServerEndpointConfig
    index: IndexConfig
    ingest: IngestConfig

    @classmethod
    def from_dict(cls, data: Any) -> ServerConfig:
        """Build the configuration from nested mappings, converting scalar values."""
        try:
            return _build(cls, data, "")
        except ValueError as exc:
            raise InvalidInputError(f"Config deserialize error: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def load(
        cls,
        config_dir: str | os.PathLike = "config",
        environ: Mapping[str, str] | None = None,
    ) -> ServerConfig:
        """Load default.toml, then production.toml (required when BARQ_ENV=production), then BARQ__ env vars."""
        env = os.environ if environ is None else environ
        directory = Path(config_dir)
        data = _read_toml(directory / "default.toml", required=True)
        production = env.get("BARQ_ENV", "development") == "production"
        data = _merge(data, _read_toml(directory / "production.toml", required=production))
        return cls.from_dict(_merge(data, _env_source(env)))