"""
Base module for media processors.

Provides shared exceptions and constants used by the processors.

Exception Hierarchy:
    ProcessingError (base)
    ├── PermanentProcessingError (corrupted input, unsupported codec)
    └── TransientProcessingError (timeout, missing binary, I/O)

Processors raise these internally; the pipeline boundary converts them
into media.exceptions.TranscodeFailedError so callers see one error kind.
"""

from __future__ import annotations


# =============================================================================
# Constants
# =============================================================================

# Default per-video transcode timeout in seconds (30 minutes)
VIDEO_TRANSCODE_TIMEOUT = 1800

# x264 quality/speed trade-off used when settings don't override it
VIDEO_TRANSCODE_CRF = 28
VIDEO_TRANSCODE_PRESET = "veryfast"

# Every transcoded video ends up in this container
TRANSCODED_SUFFIX = ".mp4"
TRANSCODED_MIME_TYPE = "video/mp4"

# Cap on stderr kept in logs
STDERR_LOG_LIMIT = 500


# =============================================================================
# Exceptions
# =============================================================================


class ProcessingError(Exception):
    """
    Base exception for all media processing errors.

    Catching this class will catch all processing-related exceptions.
    """

    pass


class PermanentProcessingError(ProcessingError):
    """
    Error caused by the input itself.

    Raised when processing fails due to:
    - Corrupted or invalid file content
    - Unsupported container or codec
    - Output that is empty or missing after a clean exit

    Resubmitting the same file will fail the same way.
    """

    pass


class TransientProcessingError(ProcessingError):
    """
    Error that may succeed if the batch is resubmitted.

    Raised when processing fails due to:
    - Timeout during processing
    - Temporary I/O errors
    - FFmpeg not installed or not on PATH
    """

    pass
