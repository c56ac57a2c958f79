"""
Test fixtures for media app.

Provides fixtures for:
- An in-memory ObjectStore with failure injection
- A transcoder double
- Temporary files standing in for spooled uploads
- A pipeline config built without reading settings
"""

from __future__ import annotations

import os
import tempfile
from typing import TYPE_CHECKING

import pytest

from media.conf import IngestionConfig
from media.tests.doubles import FakeTranscoder, InMemoryObjectStore
from media.types import FileDescriptor

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def object_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def fake_transcoder(tmp_path) -> FakeTranscoder:
    return FakeTranscoder(str(tmp_path))


@pytest.fixture
def ingestion_config(tmp_path) -> IngestionConfig:
    """Defaults with transcoded outputs written under tmp_path."""
    return IngestionConfig(temp_dir=str(tmp_path))


@pytest.fixture
def make_descriptor(tmp_path) -> Callable[..., FileDescriptor]:
    """
    Factory for FileDescriptors backed by real temporary files.

    Usage:
        picture = make_descriptor("image/jpeg")
        video = make_descriptor("video/quicktime", name="clip.mov")
        huge = make_descriptor("image/png", size_bytes=400 * 1024 * 1024)
    """

    def _make(
        mime_type: str,
        name: str | None = None,
        content: bytes = b"\x00" * 64,
        size_bytes: int | None = None,
    ) -> FileDescriptor:
        fd, path = tempfile.mkstemp(prefix="upload_", dir=tmp_path)
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        return FileDescriptor(
            name=name or os.path.basename(path),
            temporary_path=path,
            mime_type=mime_type,
            size_bytes=len(content) if size_bytes is None else size_bytes,
        )

    return _make
