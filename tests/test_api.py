import json
import uuid

import pytest

from barqvault.api import (
    FetchRequest,
    FetchResponse,
    IngestRequest,
    IngestResponse,
    SearchRequest,
    SearchResponse,
    SearchResult,
)
from barqvault.errors import SerdeError
from barqvault.modality import Modality, StorageMode


def _ingest_request():
    return IngestRequest(
        summary="unique4 document number",
        embedding=[0.5, 0.25],
        modality=Modality.TEXT,
        storage_mode=StorageMode.HYBRID_FILE,
        filename="doc_4.txt",
        raw_payload=b"unique4 document number 4",
        metadata={"domain": "legal"},
        chunk_index=0,
        total_chunks=1,
        parent_id=uuid.uuid4(),
    )


def test_ingest_request_round_trip_through_json():
    req = _ingest_request()
    text = json.dumps(req.to_dict())
    assert IngestRequest.from_dict(json.loads(text)) == req


def test_ingest_request_wire_values():
    req = _ingest_request()
    data = req.to_dict()
    assert data["modality"] == "text"
    assert data["storage_mode"] == "hybrid_file"
    assert data["raw_payload"] == list(b"unique4 document number 4")
    assert data["parent_id"] == str(req.parent_id)


def test_ingest_request_optional_fields_may_be_missing():
    data = _ingest_request().to_dict()
    for name in ("filename", "raw_payload", "parent_id"):
        del data[name]
    req = IngestRequest.from_dict(data)
    assert req.filename is None
    assert req.raw_payload is None
    assert req.parent_id is None


def test_ingest_request_missing_required_field():
    data = _ingest_request().to_dict()
    del data["metadata"]
    with pytest.raises(SerdeError, match="metadata"):
        IngestRequest.from_dict(data)


def test_ingest_request_bad_storage_mode():
    data = _ingest_request().to_dict()
    data["storage_mode"] = "HybridFile"
    with pytest.raises(SerdeError):
        IngestRequest.from_dict(data)


def test_ingest_response_round_trip():
    resp = IngestResponse(
        id=uuid.uuid4(), success=True, compressed_size=42, compression_ratio=2.0
    )
    decoded = IngestResponse.from_dict(resp.to_dict())
    assert decoded == resp
    assert decoded.error is None


def test_search_request_round_trip():
    req = SearchRequest(
        query_embedding=[0.4, 0.4],
        query_text="memory-efficient language",
        vector_weight=0.0,
        top_k=3,
        modality_filter=Modality.IMAGE,
        metadata_filters={"priority": "high"},
    )
    data = req.to_dict()
    assert data["modality_filter"] == "image"
    assert SearchRequest.from_dict(data) == req


def test_search_request_without_filter():
    req = SearchRequest(
        query_embedding=[], query_text="document", vector_weight=0.9, top_k=5
    )
    data = req.to_dict()
    assert data["modality_filter"] is None
    assert SearchRequest.from_dict(data).modality_filter is None


def test_search_request_top_k_must_be_integer():
    data = SearchRequest(
        query_embedding=[], query_text="q", vector_weight=0.5, top_k=5
    ).to_dict()
    data["top_k"] = "five"
    with pytest.raises(SerdeError):
        SearchRequest.from_dict(data)


def test_search_response_round_trip():
    hits = [
        SearchResult(
            id=uuid.uuid4(),
            summary=f"doc {i}",
            filename=f"doc_{i}.txt",
            modality=Modality.TEXT,
            score=1.0 / (i + 1),
            has_payload=bool(i % 2),
            metadata={"idx": i},
        )
        for i in range(3)
    ]
    resp = SearchResponse(results=hits, total_found=len(hits), took_ms=4)
    decoded = SearchResponse.from_dict(json.loads(json.dumps(resp.to_dict())))
    assert decoded == resp
    assert [hit.id for hit in decoded.results] == [hit.id for hit in hits]


def test_search_response_bad_results():
    with pytest.raises(SerdeError):
        SearchResponse.from_dict({"results": "none", "total_found": 0, "took_ms": 0})


def test_fetch_request_round_trip_and_bad_id():
    req = FetchRequest(id=uuid.uuid4(), decompress=True)
    assert FetchRequest.from_dict(req.to_dict()) == req
    with pytest.raises(SerdeError):
        FetchRequest.from_dict({"id": "not-a-uuid", "decompress": False})


def test_fetch_response_round_trip():
    payload = bytes(range(256))
    resp = FetchResponse(
        id=uuid.uuid4(),
        modality=Modality.AUDIO,
        filename="clip.wav",
        data=payload,
        original_size=len(payload),
        compressed_size=len(payload),
    )
    decoded = FetchResponse.from_dict(resp.to_dict())
    assert decoded == resp
    assert decoded.data == payload


def test_fetch_response_rejects_out_of_range_byte():
    data = FetchResponse(
        id=uuid.uuid4(), modality=Modality.VIDEO, data=b"", original_size=0,
        compressed_size=0,
    ).to_dict()
    data["data"] = [300]
    with pytest.raises(SerdeError):
        FetchResponse.from_dict(data)


def test_non_object_input_rejected():
    with pytest.raises(SerdeError):
        FetchRequest.from_dict([1, 2, 3])