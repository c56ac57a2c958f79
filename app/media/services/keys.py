"""
Object key generation.

Keys look like ``pics/<owner>/<epoch-ms>-<uuid4 hex>.jpg``. Only this
module builds or reads that layout; everywhere else a key is an opaque
string. Uniqueness comes from the random token, not from checking the
store, so a collision is negligible but not impossible.
"""

from __future__ import annotations

import mimetypes
import time
import uuid

from media.exceptions import InvalidMimeTypeError

PICTURES_FOLDER = "pics"
VIDEOS_FOLDER = "vids"

MIME_TO_EXTENSION: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "video/mp4": ".mp4",
    "video/quicktime": ".mov",
    "video/x-msvideo": ".avi",
    "video/x-ms-wmv": ".wmv",
}


def folder_for_mime_type(mime_type: str) -> str:
    """
    Return the storage folder for a MIME type.

    Raises:
        InvalidMimeTypeError: Neither an image nor a video type.
    """
    if mime_type.startswith("image/"):
        return PICTURES_FOLDER
    if mime_type.startswith("video/"):
        return VIDEOS_FOLDER
    raise InvalidMimeTypeError(f"File type '{mime_type}' is not allowed")


def extension_for_mime_type(mime_type: str) -> str:
    extension = MIME_TO_EXTENSION.get(mime_type) or mimetypes.guess_extension(mime_type)
    if not extension:
        raise InvalidMimeTypeError(f"File type '{mime_type}' is not allowed")
    return extension


def generate_object_key(
    owner_id: object,
    mime_type: str,
    *,
    now_ms: int | None = None,
    token: str | None = None,
) -> str:
    """
    Build a new folder-scoped key for a file owned by ``owner_id``.

    Args:
        owner_id: Identity of the uploading user.
        mime_type: MIME type of the file being stored.
        now_ms: Timestamp override in epoch milliseconds (tests).
        token: Uniqueness token override (tests).

    Returns:
        A key no earlier call has returned for a different owner, time
        or token.
    """
    folder = folder_for_mime_type(mime_type)
    extension = extension_for_mime_type(mime_type)
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    if token is None:
        token = uuid.uuid4().hex
    return f"{folder}/{owner_id}/{now_ms}-{token}{extension}"
