"""Sample payloads in several formats and temporary file helpers."""

from __future__ import annotations

import tempfile
import uuid
from pathlib import Path
from typing import IO

__all__ = [
    "sample_text_bytes",
    "sample_pdf_bytes",
    "sample_png_bytes",
    "sample_wav_bytes",
    "sample_mp4_bytes",
    "temp_file",
    "temp_dir_path",
]


def sample_text_bytes() -> bytes:
    """Return a paragraph of Lorem Ipsum text."""
    return (
        b"Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed do eiusmod "
        b"tempor incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, "
        b"quis nostrud exercitation ullamco laboris nisi ut aliquip ex ea commodo "
        b"consequat. Duis aute irure dolor in reprehenderit in voluptate velit esse "
        b"cillum dolore eu fugiat nulla pariatur. Excepteur sint occaecat cupidatat "
        b"non proident, sunt in culpa qui officia deserunt mollit anim id est laborum."
    )


def sample_pdf_bytes() -> bytes:
    """Return a minimal PDF document with one line of text."""
    return b"".join(
        [
            b"%PDF-1.4\n",
            b"1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\n",
            b"2 0 obj\n<< /Type /Pages /Kids [3 0 R] /Count 1 >>\nendobj\n",
            b"3 0 obj\n<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            b"/Contents 4 0 R >>\nendobj\n",
            b"4 0 obj\n<< /Length 44 >>\nstream\n",
            b"BT /F1 12 Tf 100 700 Td (Hello, PDF Test!) Tj ET\n",
            b"endstream\nendobj\n",
            b"xref\n0 5\n0000000000 65535 f \n0000000009 00000 n \n"
            b"0000000058 00000 n \n0000000115 00000 n \n0000000203 00000 n \n",
            b"trailer\n<< /Size 5 /Root 1 0 R >>\n",
            b"startxref\n297\n%%EOF\n",
        ]
    )


def sample_png_bytes() -> bytes:
    """Return a 1x1 transparent PNG."""
    return bytes(
        [
            0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,
            0x00, 0x00, 0x00, 0x0D, 0x49, 0x48, 0x44, 0x52,
            0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01,
            0x08, 0x06, 0x00, 0x00, 0x00, 0x1F, 0x15, 0xC4,
            0x89, 0x00, 0x00, 0x00, 0x0A, 0x49, 0x44, 0x41,
            0x54, 0x78, 0x9C, 0x63, 0x00, 0x01, 0x00, 0x00,
            0x05, 0x00, 0x01, 0x0D, 0x0A, 0x2D, 0xB4, 0x00,
            0x00, 0x00, 0x00, 0x49, 0x45, 0x4E, 0x44, 0xAE,
            0x42, 0x60, 0x82,
        ]
    )


def sample_wav_bytes() -> bytes:
    """Return a WAV header (PCM, mono, 44100 Hz, 16 bit) with no samples."""
    return b"".join(
        [
            b"RIFF",
            bytes([0x24, 0x00, 0x00, 0x00]),
            b"WAVE",
            b"fmt ",
            bytes([0x10, 0x00, 0x00, 0x00]),
            bytes([0x01, 0x00]),
            bytes([0x01, 0x00]),
            bytes([0x44, 0xAC, 0x00, 0x00]),
            bytes([0x88, 0x58, 0x01, 0x00]),
            bytes([0x02, 0x00]),
            bytes([0x10, 0x00]),
            b"data",
            bytes([0x00, 0x00, 0x00, 0x00]),
        ]
    )


def sample_mp4_bytes() -> bytes:
    """Return an MP4 ``ftyp`` box header."""
    return b"".join(
        [
            bytes([0x00, 0x00, 0x00, 0x18]),
            b"ftyp",
            b"isom",
            bytes([0x00, 0x00, 0x02, 0x00]),
            b"isom",
            b"iso2",
            b"avc1",
            b"mp41",
        ]
    )


def temp_file(content: bytes, extension: str) -> IO[bytes]:
    """Write ``content`` to a temporary file ending in ``.extension``.

    The file is removed when the returned handle is closed.
    """
    handle = tempfile.NamedTemporaryFile(suffix="." + extension)
    try:
        handle.write(content)
        handle.flush()
    except BaseException:
        handle.close()
        raise
    return handle


def temp_dir_path() -> Path:
    """Return a unique, not yet created, path under the temporary directory."""
    return Path(tempfile.gettempdir()) / f"barq_test_{uuid.uuid4()}"