"""
Data types for the media ingestion pipeline.

Types:
    FileDescriptor: One incoming file spooled to a temporary path
    UploadBatch: The files of one ingestion call plus its count ceilings
    ClassifiedBatch: A batch partitioned into videos and non-videos
    StoredObject: A key written by the orchestrator and its folder
    ObjectMetadata: MIME type and size as reported by the object store
    BatchState: States of the upload orchestrator

Usage:
    from media.types import FileDescriptor, UploadBatch

    batch = UploadBatch(
        files=[FileDescriptor("a.jpg", "/tmp/up1", "image/jpeg", 1024)],
        max_pictures=5,
        max_videos=2,
    )
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

from django.db import models

logger = logging.getLogger(__name__)


def release_path(path: str) -> None:
    """Delete a local temporary file; a missing file is not an error."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(
            "Could not release temporary file",
            extra={"path": path, "error": str(e)},
        )


@dataclass
class FileDescriptor:
    """
    A file that arrived at the pipeline boundary.

    The temporary path is owned by the pipeline once the descriptor is
    handed over; ``release()`` removes it and is safe to call repeatedly.

    Attributes:
        name: Client-supplied file name (for logging only)
        temporary_path: Local path of the spooled upload
        mime_type: MIME type declared by the transport layer
        size_bytes: Size declared by the transport layer
    """

    name: str
    temporary_path: str
    mime_type: str
    size_bytes: int

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith("video/")

    def release(self) -> None:
        """Delete the temporary file if it still exists."""
        release_path(self.temporary_path)


@dataclass
class UploadBatch:
    """Ordered files of one ingestion call with the ceilings in force."""

    files: list[FileDescriptor]
    max_pictures: int
    max_videos: int

    def __len__(self) -> int:
        return len(self.files)


@dataclass
class ClassifiedBatch:
    videos: list[FileDescriptor] = field(default_factory=list)
    non_videos: list[FileDescriptor] = field(default_factory=list)


@dataclass(frozen=True)
class StoredObject:
    """A key successfully written to the object store."""

    key: str
    folder: str


@dataclass(frozen=True)
class ObjectMetadata:
    """
    Metadata the object store reports for a key.

    Authoritative over anything the client declared at upload time.
    """

    key: str
    mime_type: str
    size_bytes: int

    @property
    def is_image(self) -> bool:
        return "image" in self.mime_type

    @property
    def is_video(self) -> bool:
        return "video" in self.mime_type

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "mime_type": self.mime_type,
            "size_bytes": self.size_bytes,
        }


class BatchState(models.TextChoices):
    """
    States of one UploadOrchestrator run.

    State Flow:
        VALIDATING → CLASSIFYING → TRANSCODING → UPLOADING → DONE

    Failure Flow:
        VALIDATING / CLASSIFYING / TRANSCODING → FAILED (nothing written)
        UPLOADING → ROLLING_BACK → FAILED
    """

    VALIDATING = "validating", "Validating"
    CLASSIFYING = "classifying", "Classifying"
    TRANSCODING = "transcoding", "Transcoding"
    UPLOADING = "uploading", "Uploading"
    DONE = "done", "Done"
    ROLLING_BACK = "rolling_back", "Rolling back"
    FAILED = "failed", "Failed"
