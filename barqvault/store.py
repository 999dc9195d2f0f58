"""Persistent storage engine with separate keyspaces for records, payloads and metadata."""

from __future__ import annotations

import json
import os
import sqlite3
import threading
import uuid
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .errors import SerdeError, StorageError
from .record import BarqRecord

__all__ = [
    "CF_RECORDS",
    "CF_PAYLOADS",
    "CF_METADATA",
    "CF_INDEX_META",
    "COLUMN_FAMILIES",
    "BarqStore",
]

CF_RECORDS = "records"
CF_PAYLOADS = "payloads"
CF_METADATA = "metadata"
CF_INDEX_META = "index_meta"

COLUMN_FAMILIES = (CF_RECORDS, CF_PAYLOADS, CF_METADATA, CF_INDEX_META)

_DB_FILENAME = "barq.sqlite3"


def _key(record_id: uuid.UUID | str) -> bytes:
    if not isinstance(record_id, uuid.UUID):
        record_id = uuid.UUID(str(record_id))
    return record_id.bytes


def _table(name: str) -> str:
    if name not in COLUMN_FAMILIES:
        raise KeyError(f"Column family '{name}' not found in BarqStore")
    return name


class BarqStore:
    """A key-value store keyed by record UUID, one keyspace per column family."""

    def __init__(self, connection: sqlite3.Connection, path: Path) -> None:
        self._conn = connection
        self._lock = threading.RLock()
        self.path = path

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> BarqStore:
        """Open, or create, the database directory at ``path`` with all column families."""
        root = Path(path)
        conn: sqlite3.Connection | None = None
        try:
            root.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(
                root / _DB_FILENAME, check_same_thread=False, isolation_level=None
            )
            conn.execute("PRAGMA journal_mode=WAL")
            for name in COLUMN_FAMILIES:
                conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {name} "
                    "(key BLOB PRIMARY KEY, value BLOB NOT NULL) WITHOUT ROWID"
                )
        except (OSError, sqlite3.Error) as exc:
            if conn is not None:
                conn.close()
            raise StorageError(f"Failed to open store at {root}: {exc}") from exc
        return cls(conn, root)

    def close(self) -> None:
        """Release the underlying database handle."""
        with self._lock:
            self._conn.close()

    def __enter__(self) -> BarqStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- low-level keyspace access -------------------------------------

    def _put(self, cf: str, key: bytes, value: bytes, op: str) -> None:
        table = _table(cf)
        with self._lock:
            try:
                self._conn.execute(
                    f"INSERT OR REPLACE INTO {table} (key, value) VALUES (?, ?)",
                    (key, value),
                )
            except sqlite3.Error as exc:
                raise StorageError(f"{op}: {exc}") from exc

    def _fetch_one(self, cf: str, key: bytes, column: str, op: str) -> Any:
        table = _table(cf)
        with self._lock:
            try:
                row = self._conn.execute(
                    f"SELECT {column} FROM {table} WHERE key = ?", (key,)
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(f"{op}: {exc}") from exc
        return None if row is None else row[0]

    def _get(self, cf: str, key: bytes, op: str) -> bytes | None:
        value = self._fetch_one(cf, key, "value", op)
        return None if value is None else bytes(value)

    def _delete(self, cf: str, key: bytes, op: str) -> None:
        table = _table(cf)
        with self._lock:
            try:
                self._conn.execute(f"DELETE FROM {table} WHERE key = ?", (key,))
            except sqlite3.Error as exc:
                raise StorageError(f"{op}: {exc}") from exc

    def _scan(self, cf: str, op: str) -> list[tuple[bytes, bytes]]:
        table = _table(cf)
        with self._lock:
            try:
                rows = self._conn.execute(
                    f"SELECT key, value FROM {table} ORDER BY key"
                ).fetchall()
            except sqlite3.Error as exc:
                raise StorageError(f"{op}: {exc}") from exc
        return [(bytes(k), bytes(v)) for k, v in rows]

    # -- records --------------------------------------------------------

    def put_record(self, record: BarqRecord) -> None:
        """Persist a record without its payload bytes and raw embedding."""
        try:
            value = record.stripped().to_json().encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Serialize record: {exc}") from exc
        self._put(CF_RECORDS, _key(record.id), value, "put_record")

    def get_record(self, record_id: uuid.UUID | str) -> BarqRecord | None:
        """Return the record with this ID, or None."""
        raw = self._get(CF_RECORDS, _key(record_id), "get_record")
        if raw is None:
            return None
        try:
            return BarqRecord.from_json(raw)
        except SerdeError as exc:
            raise StorageError(f"Deserialize record: {exc.message}") from exc

    def delete_record(self, record_id: uuid.UUID | str) -> None:
        """Delete a record and, if present, its payload."""
        key = _key(record_id)
        self._delete(CF_RECORDS, key, "delete_record")
        try:
            self._delete(CF_PAYLOADS, key, "delete_payload")
        except StorageError:
            pass

    def iter_all_records(self) -> Iterator[BarqRecord]:
        """Yield every decodable record in key order."""
        try:
            rows = self._scan(CF_RECORDS, "iter_all_records")
        except StorageError:
            return
        for _, value in rows:
            try:
                record = BarqRecord.from_json(value)
            except SerdeError:
                continue
            yield record

    def record_exists(self, record_id: uuid.UUID | str) -> bool:
        """Tell whether a record with this ID is stored."""
        try:
            return self._get(CF_RECORDS, _key(record_id), "record_exists") is not None
        except StorageError:
            return False

    # -- payloads -------------------------------------------------------

    def put_payload(self, record_id: uuid.UUID | str, data: bytes) -> None:
        """Store compressed payload bytes for a record."""
        self._put(CF_PAYLOADS, _key(record_id), bytes(data), "put_payload")

    def get_payload(self, record_id: uuid.UUID | str) -> bytes | None:
        """Return the payload bytes of a record, or None."""
        return self._get(CF_PAYLOADS, _key(record_id), "get_payload")

    def delete_payload(self, record_id: uuid.UUID | str) -> None:
        """Delete the payload bytes of a record."""
        self._delete(CF_PAYLOADS, _key(record_id), "delete_payload")

    def get_payload_size(self, record_id: uuid.UUID | str) -> int | None:
        """Return the stored payload size in bytes without reading it, or None."""
        size = self._fetch_one(
            CF_PAYLOADS, _key(record_id), "length(value)", "get_payload_size"
        )
        return None if size is None else int(size)

    # -- metadata -------------------------------------------------------

    def put_metadata(self, record_id: uuid.UUID | str, meta: Any) -> None:
        """Store arbitrary JSON metadata for a record."""
        try:
            value = json.dumps(meta, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Serialize metadata: {exc}") from exc
        self._put(CF_METADATA, _key(record_id), value, "put_metadata")

    def get_metadata(self, record_id: uuid.UUID | str) -> Any | None:
        """Return the JSON metadata of a record, or None."""
        raw = self._get(CF_METADATA, _key(record_id), "get_metadata")
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise StorageError(f"Deserialize metadata: {exc}") from exc

    def search_by_metadata_key(self, key: str, value: str) -> list[uuid.UUID]:
        """Full scan for records whose metadata holds the string ``value`` under ``key``."""
        results: list[uuid.UUID] = []
        for raw_key, raw_value in self._scan(CF_METADATA, "scan_metadata iter"):
            if len(raw_key) != 16:
                continue
            try:
                meta = json.loads(raw_value)
            except ValueError:
                continue
            if not isinstance(meta, dict):
                continue
            found = meta.get(key)
            if isinstance(found, str) and found == value:
                results.append(uuid.UUID(bytes=raw_key))
        return results