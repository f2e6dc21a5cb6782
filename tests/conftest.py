"""
tests/conftest.py

Shared pytest fixtures available to all test modules.

Fixtures defined here are auto-discovered by pytest — no import needed.
"""

import io
from pathlib import Path
from typing import Callable, List, Tuple

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import app

UploadTuple = Tuple[str, Tuple[str, io.BytesIO, str]]

_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


# ── Filesystem isolation ───────────────────────────────────────────────────────

@pytest.fixture
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the shared settings at a per-test upload directory."""
    directory = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", directory)
    return directory


# ── Core client fixture ────────────────────────────────────────────────────────

@pytest.fixture
def client(upload_dir: Path) -> TestClient:
    """
    A synchronous TestClient wrapping the FastAPI app.

    Function-scoped so every test gets its own upload directory; the
    lifespan (which creates that directory) is entered automatically.
    """
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


# ── Sample file fixtures ───────────────────────────────────────────────────────

@pytest.fixture
def make_upload() -> Callable[..., UploadTuple]:
    """
    Factory for (field_name, (filename, file_obj, content_type)) tuples
    ready for TestClient's `files=` parameter.

    Usage:
        response = client.post("/upload", files=[make_upload("a.pdf"), ...])
    """

    def _make(filename: str, content: bytes | None = None, field: str = "files") -> UploadTuple:
        data = content if content is not None else f"content of {filename}".encode()
        suffix = Path(filename).suffix.lower()
        content_type = _CONTENT_TYPES.get(suffix, "application/octet-stream")
        return (field, (filename, io.BytesIO(data), content_type))

    return _make


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Minimal PDF header bytes; the service never inspects content."""
    return b"%PDF-1.4\n%%EOF"


@pytest.fixture
def sample_jpeg_bytes() -> bytes:
    """JPEG SOI/EOI markers around a few filler bytes."""
    return b"\xff\xd8\xff\xe0" + bytes(range(32)) + b"\xff\xd9"


@pytest.fixture
def valid_uploads(make_upload, sample_pdf_bytes, sample_jpeg_bytes) -> List[UploadTuple]:
    """The canonical happy-path request: a.pdf, b.jpg, c.jpeg."""
    return [
        make_upload("a.pdf", sample_pdf_bytes),
        make_upload("b.jpg", sample_jpeg_bytes),
        make_upload("c.jpeg", sample_jpeg_bytes[::-1]),
    ]
