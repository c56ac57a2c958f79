"""Test fixtures for posts app."""

from __future__ import annotations

import os
import tempfile
from unittest.mock import patch

import pytest

from media.conf import IngestionConfig
from media.tests.doubles import InMemoryObjectStore
from media.types import FileDescriptor
from posts.tests.factories import PICTURE_KEY, VIDEO_KEY


@pytest.fixture
def object_store() -> InMemoryObjectStore:
    store = InMemoryObjectStore()
    store.add(PICTURE_KEY, "image/jpeg", size_bytes=2048)
    store.add(VIDEO_KEY, "video/mp4", size_bytes=4096)
    return store


@pytest.fixture
def ingestion_config(tmp_path) -> IngestionConfig:
    return IngestionConfig(temp_dir=str(tmp_path))


@pytest.fixture
def post_fields() -> dict:
    """Valid camelCase domain fields."""
    return {
        "description": "Nine element yagi on a short boom",
        "band": 144,
        "brand": "Yagi Works",
        "isSelfBuilt": True,
        "metersFromSea": 420,
        "boomLengthCm": 310,
        "numberOfElements": 9,
        "numberOfAntennas": 2,
        "cable": "Ecoflex 10",
    }


class SpooledFiles:
    """Creates FileDescriptors backed by files under one directory."""

    def __init__(self, tmp_dir: str) -> None:
        self.tmp_dir = tmp_dir

    def make(self, mime_types: list[str]) -> list[FileDescriptor]:
        descriptors = []
        for mime_type in mime_types:
            fd, path = tempfile.mkstemp(prefix="upload_", dir=self.tmp_dir)
            with os.fdopen(fd, "wb") as f:
                f.write(b"\x00" * 32)
            descriptors.append(
                FileDescriptor(
                    name=os.path.basename(path),
                    temporary_path=path,
                    mime_type=mime_type,
                    size_bytes=32,
                )
            )
        return descriptors


@pytest.fixture
def fake_files(tmp_path) -> SpooledFiles:
    return SpooledFiles(str(tmp_path))


@pytest.fixture
def wired_store(object_store):
    """Route the view's PostAssemblyService to the in-memory store."""
    from posts.services import PostAssemblyService

    def build(config):
        return PostAssemblyService(config=config, store=object_store)

    with patch("posts.views.PostAssemblyService.from_config", side_effect=build):
        yield object_store
