import json

import pytest

from barqvault.modality import CodecKind, CodecType, Modality, StorageMode


@pytest.mark.parametrize(
    "text, expected",
    [
        ("text", Modality.TEXT),
        ("image", Modality.IMAGE),
        ("audio", Modality.AUDIO),
        ("video", Modality.VIDEO),
        ("document", Modality.DOCUMENT),
        ("TEXT", Modality.TEXT),
    ],
)
def test_modality_from_str_valid(text, expected):
    assert Modality.parse(text) == expected


def test_modality_from_str_invalid():
    with pytest.raises(ValueError, match="Unknown modality: unknown"):
        Modality.parse("unknown")


@pytest.mark.parametrize(
    "variant, expected",
    [
        (Modality.TEXT, "text"),
        (Modality.IMAGE, "image"),
        (Modality.AUDIO, "audio"),
        (Modality.VIDEO, "video"),
        (Modality.DOCUMENT, "document"),
    ],
)
def test_modality_round_trip(variant, expected):
    text = str(variant)
    assert text == expected
    assert Modality.parse(text) == variant


@pytest.mark.parametrize(
    "text, expected",
    [
        ("text_only", StorageMode.TEXT_ONLY),
        ("hybrid_file", StorageMode.HYBRID_FILE),
        ("full_raw", StorageMode.FULL_RAW),
    ],
)
def test_storage_mode_from_str_valid(text, expected):
    assert StorageMode.parse(text) == expected
    assert str(expected) == text


def test_storage_mode_invalid():
    with pytest.raises(ValueError, match="Unknown storage mode"):
        StorageMode.parse("HybridFile")


@pytest.mark.parametrize(
    "codec", [CodecType.lzma(6), CodecType.lz4(), CodecType.zstd(3)]
)
def test_codec_type_serialization(codec):
    encoded = json.dumps(codec.to_json())
    decoded = CodecType.from_json(json.loads(encoded))
    assert decoded == codec


@pytest.mark.parametrize(
    "codec, expected",
    [
        (CodecType.lzma(6), "lzma(6)"),
        (CodecType.lz4(), "lz4"),
        (CodecType.zstd(3), "zstd(3)"),
    ],
)
def test_codec_display(codec, expected):
    assert str(codec) == expected


def test_codec_json_shape():
    assert CodecType.lzma(6).to_json() == {"Lzma": 6}
    assert CodecType.lz4().to_json() == "Lz4"
    assert CodecType.zstd(3).kind is CodecKind.ZSTD


@pytest.mark.parametrize("value", ["Brotli", {"Gzip": 3}, 5, {"Lzma": 1, "Lz4": 2}])
def test_codec_from_json_invalid(value):
    with pytest.raises(ValueError):
        CodecType.from_json(value)


def test_codec_level_rules():
    with pytest.raises(ValueError):
        CodecType(CodecKind.LZ4, 3)
    with pytest.raises(ValueError):
        CodecType.lzma(-1)
    assert CodecType.zstd(-5).level == -5