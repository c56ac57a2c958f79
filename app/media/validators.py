"""
Admission checks for incoming media batches.

Two independent checks run before any external side effect:

1. AdmissionValidator - per-file MIME allow-list and size ceiling
2. classify_batch - splits a batch into videos and non-videos and enforces
   the per-batch count ceilings

Both raise on the first violation; the orchestrator aborts the whole batch.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from media.exceptions import (
    FileTooLargeError,
    InvalidMimeTypeError,
    TooManyPicturesError,
    TooManyVideosError,
)
from media.types import ClassifiedBatch

if TYPE_CHECKING:
    from collections.abc import Iterable

    from media.types import FileDescriptor, UploadBatch

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

ALLOWED_MIME_TYPES: dict[str, frozenset[str]] = {
    "image": frozenset(
        {
            "image/jpeg",
            "image/png",
            "image/webp",
        }
    ),
    "video": frozenset(
        {
            "video/mp4",
            "video/quicktime",
            "video/x-msvideo",
            "video/x-ms-wmv",
        }
    ),
}

# Per-file ceiling on the upload path (300 MiB)
MAX_UPLOAD_FILE_SIZE = 300 * 1024 * 1024


def all_allowed_mime_types() -> frozenset[str]:
    return frozenset().union(*ALLOWED_MIME_TYPES.values())


# =============================================================================
# Validator Class
# =============================================================================


class AdmissionValidator:
    """
    Validates declared MIME type and size of each incoming file.

    Example:
        validator = AdmissionValidator()
        validator.validate_all(batch.files)  # raises on first bad file
    """

    def __init__(
        self,
        allowed_mime_types: Iterable[str] | None = None,
        max_file_size: int = MAX_UPLOAD_FILE_SIZE,
    ) -> None:
        self._allowed_mime_types = (
            frozenset(allowed_mime_types)
            if allowed_mime_types is not None
            else all_allowed_mime_types()
        )
        self._max_file_size = max_file_size

    def validate(self, descriptor: FileDescriptor) -> None:
        """
        Check one file.

        Raises:
            InvalidMimeTypeError: MIME type is not in the allow-list.
            FileTooLargeError: File is larger than the size ceiling.
        """
        if descriptor.mime_type not in self._allowed_mime_types:
            logger.debug(
                "File MIME type not allowed",
                extra={"file_name": descriptor.name, "mime_type": descriptor.mime_type},
            )
            raise InvalidMimeTypeError(
                f"File type '{descriptor.mime_type}' is not allowed",
                details={"file": descriptor.name},
            )

        if descriptor.size_bytes > self._max_file_size:
            limit_mb = self._max_file_size // (1024 * 1024)
            logger.debug(
                "File size too large",
                extra={"file_name": descriptor.name, "size_bytes": descriptor.size_bytes},
            )
            raise FileTooLargeError(
                f"File size exceeds {limit_mb}MB limit",
                details={"file": descriptor.name},
            )

    def validate_all(self, descriptors: Iterable[FileDescriptor]) -> None:
        for descriptor in descriptors:
            self.validate(descriptor)


# =============================================================================
# Batch Classification
# =============================================================================


def classify_batch(batch: UploadBatch) -> ClassifiedBatch:
    """
    Partition a validated batch by MIME prefix and enforce count ceilings.

    Raises:
        TooManyPicturesError: More non-video files than batch.max_pictures.
        TooManyVideosError: More video files than batch.max_videos.
    """
    classified = ClassifiedBatch()
    for descriptor in batch.files:
        if descriptor.is_video:
            classified.videos.append(descriptor)
        else:
            classified.non_videos.append(descriptor)

    if len(classified.non_videos) > batch.max_pictures:
        raise TooManyPicturesError(
            f"At most {batch.max_pictures} pictures can be uploaded at once",
            details={"count": len(classified.non_videos), "max": batch.max_pictures},
        )
    if len(classified.videos) > batch.max_videos:
        raise TooManyVideosError(
            f"At most {batch.max_videos} videos can be uploaded at once",
            details={"count": len(classified.videos), "max": batch.max_videos},
        )

    return classified
