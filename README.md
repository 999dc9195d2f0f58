# barqvault

barqvault keeps the records of a multimodal retrieval vault. It stores a
record, a compressed payload and JSON metadata for every chunk of ingested
content. It also holds the domain types and request/response shapes these
records travel in, and the server configuration loader. It needs nothing
outside the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Domain types

- `barqvault.modality`
  - `Modality` has the values text, image, audio, video and document.
  - `StorageMode` has the values text_only, hybrid_file and full_raw.
  - `Modality.parse` and `StorageMode.parse` ignore case and raise
    `ValueError` on unknown names.
  - `CodecType` is built with `CodecType.lzma(level)`, `CodecType.lz4()` or
    `CodecType.zstd(level)`. It prints as `lzma(6)`, `lz4` or `zstd(3)`.
    `to_json` / `from_json` encode it as `{"Lzma": 6}` or `"Lz4"`.
- `barqvault.record`: `BarqRecord` is the record kept for each chunk.
  - `to_dict` / `from_dict` and `to_json` / `from_json` convert it to and
    from JSON.
  - `stripped()` returns a copy without the in-memory embedding and payload
    bytes.
- `barqvault.api`: the messages for ingest, search and fetch. These are
  `IngestRequest`, `IngestResponse`, `SearchRequest`, `SearchResult`,
  `SearchResponse`, `FetchRequest` and `FetchResponse`, each with
  `to_dict` / `from_dict`.
- `barqvault.errors`: `BarqError` and its subclasses.
  - The subclasses are `CompressionError`, `StorageError`, `IndexingError`,
    `IngestError`, `RecordNotFoundError`, `InvalidInputError`,
    `ProviderError`, `BarqIOError` and `SerdeError`.
  - `from_exception(exc)` wraps an `OSError` or a `json.JSONDecodeError`
    in the matching vault error.

## Store

`barqvault.store.BarqStore` keeps one SQLite database inside the directory
you give it. Each keyspace (`records`, `payloads`, `metadata`, `index_meta`)
is a table keyed by record UUID.

```python
from barqvault.store import BarqStore
from barqvault.record import BarqRecord

with BarqStore.open("/tmp/vault") as store:
    record = BarqRecord(summary="quarterly report")
    store.put_record(record)
    store.put_payload(record.id, b"compressed bytes")
    store.put_metadata(record.id, {"domain": "finance"})

    assert store.get_record(record.id).summary == "quarterly report"
    assert store.get_payload_size(record.id) == 16
    assert store.search_by_metadata_key("domain", "finance") == [record.id]
```

- `put_record` stores the record without its embedding and payload bytes.
- `delete_record` also removes the record's payload.
- `record_exists` tells whether a record is stored.
- `iter_all_records()` yields every stored record in key order and skips
  any record that cannot be decoded.
- A lookup that finds nothing returns `None`.
- A failure in the database raises `StorageError`.

## Configuration

`barqvault.config.ServerConfig.load(config_dir="config", environ=None)`
builds the configuration in three steps:

1. It reads `default.toml` from the configuration directory. This file
   must exist.
2. It reads `production.toml`, which must exist when `BARQ_ENV=production`.
3. It applies environment variables of the form `BARQ__SECTION__KEY`, for
   example `BARQ__SERVER__GRPC_ADDR` or `BARQ__INDEX__VECTOR_DIM`. String
   values are converted to the field's type.

The result has three sections:

- `server` is a `ServerEndpointConfig` with nested `TlsConfig` and
  `AuthConfig`.
- `index` is an `IndexConfig`.
- `ingest` is an `IngestConfig`.

A missing file, a missing field or a value of the wrong type raises
`InvalidInputError`. `ServerConfig.from_dict` and `to_dict` convert to and
from plain nested mappings.

## Test kit

`barqvault.testkit.fixtures` gives sample payloads:

- `sample_text_bytes`
- `sample_pdf_bytes`
- `sample_png_bytes`
- `sample_wav_bytes`
- `sample_mp4_bytes`

It also has two helpers for temporary files:

- `temp_file(content, extension)` returns a named temporary file, which is
  removed when it is closed.
- `temp_dir_path()` returns a unique path under the temporary directory and
  does not create it.

## What this package does not do

barqvault stores records and describes the messages exchanged about them,
and nothing more. It does not do any of the following:

- serve gRPC or REST requests;
- run an ingest pipeline;
- generate summaries or embeddings;
- compress or decompress payloads;
- keep BM25, vector or metadata indexes, or run hybrid searches.

The `api` messages and the `ServerConfig` fields are there for code that
provides these parts.