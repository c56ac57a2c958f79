"""
Media pipeline exceptions.

Every failure the ingestion and record-commit paths can report is one of
the codes in MediaErrorCode. Callers branch on the exception class (or on
``error_code``), never on message text.

Exception Hierarchy:
    ValidationError (400)
    └── MediaAdmissionError
        ├── InvalidMimeTypeError - MIME type outside the allow-list
        ├── FileTooLargeError - File above the per-file size ceiling
        ├── TooManyPicturesError - Upload batch has too many pictures
        ├── TooManyVideosError - Upload batch has too many videos
        ├── InvalidPicturesCountError - Post references too many pictures
        ├── InvalidVideosCountError - Post references too many videos
        └── InvalidPostError - Post fields failed domain validation
    NotFoundError
    └── StoredFileNotFoundError - Post references a key missing from the store (400)
    ExternalServiceError (500)
    ├── TranscodeFailedError - FFmpeg could not compress a video
    └── ObjectStoreError - Object store call failed
        └── ObjectNotFoundError - Key absent from the store

Usage:
    from media.exceptions import ObjectStoreError

    try:
        store.put(key, path, mime_type)
    except ObjectStoreError:
        rollback()
        raise
"""

from __future__ import annotations

from enum import Enum

from rest_framework import status

from core.exceptions import ExternalServiceError, NotFoundError, ValidationError


class MediaErrorCode(str, Enum):
    """Closed set of error codes reported by the media pipeline."""

    INVALID_FILE_MIME_TYPE = "INVALID_FILE_MIME_TYPE"
    FILE_SIZE_TOO_LARGE = "FILE_SIZE_TOO_LARGE"
    TOO_MANY_PICTURES = "TOO_MANY_PICTURES"
    TOO_MANY_VIDEOS = "TOO_MANY_VIDEOS"
    TRANSCODE_FAILED = "TRANSCODE_FAILED"
    STORAGE_ERROR = "STORAGE_ERROR"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    INVALID_PICS_NUM = "INVALID_PICS_NUM"
    INVALID_VIDS_NUM = "INVALID_VIDS_NUM"
    INVALID_POST = "INVALID_POST"
    MALFORMED_REQUEST_BODY = "MALFORMED_REQUEST_BODY"
    SERVER_ERROR = "SERVER_ERROR"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Admission Errors (raised before any side effect)
# =============================================================================


class MediaAdmissionError(ValidationError):
    """Base for rejections the client can fix by changing the request."""

    default_error_code = MediaErrorCode.INVALID_POST.value


class InvalidMimeTypeError(MediaAdmissionError):
    default_error_code = MediaErrorCode.INVALID_FILE_MIME_TYPE.value


class FileTooLargeError(MediaAdmissionError):
    default_error_code = MediaErrorCode.FILE_SIZE_TOO_LARGE.value


class TooManyPicturesError(MediaAdmissionError):
    default_error_code = MediaErrorCode.TOO_MANY_PICTURES.value


class TooManyVideosError(MediaAdmissionError):
    default_error_code = MediaErrorCode.TOO_MANY_VIDEOS.value


class InvalidPicturesCountError(MediaAdmissionError):
    default_error_code = MediaErrorCode.INVALID_PICS_NUM.value


class InvalidVideosCountError(MediaAdmissionError):
    default_error_code = MediaErrorCode.INVALID_VIDS_NUM.value


class InvalidPostError(MediaAdmissionError):
    """Raised when post fields fail validation; ``details`` holds field errors."""

    default_error_code = MediaErrorCode.INVALID_POST.value


class MalformedRequestError(MediaAdmissionError):
    default_error_code = MediaErrorCode.MALFORMED_REQUEST_BODY.value


class StoredFileNotFoundError(NotFoundError):
    """
    Raised when a post references a key the store does not have.

    Reported as 400: the request names a file that was never uploaded
    (or was already removed), which is a client error on this path.
    """

    default_error_code = MediaErrorCode.FILE_NOT_FOUND.value
    http_status = status.HTTP_400_BAD_REQUEST


# =============================================================================
# External Service Errors
# =============================================================================


class TranscodeFailedError(ExternalServiceError):
    """Raised when any video in a transcode call cannot be compressed."""

    default_error_code = MediaErrorCode.TRANSCODE_FAILED.value


class ObjectStoreError(ExternalServiceError):
    """Raised when a put, head or delete against the object store fails."""

    default_error_code = MediaErrorCode.STORAGE_ERROR.value


class ObjectNotFoundError(ObjectStoreError):
    """Raised by ObjectStore.get_metadata when the key does not exist."""

    default_error_code = MediaErrorCode.FILE_NOT_FOUND.value
    http_status = status.HTTP_404_NOT_FOUND
