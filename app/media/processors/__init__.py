"""
Media processors package.

Provides the video compression step of the ingestion pipeline.

Exception Hierarchy:
    ProcessingError (base)
    ├── PermanentProcessingError
    │   └── VideoProcessingError
    └── TransientProcessingError

Usage:
    from media.processors import VideoTranscoder

    outputs = VideoTranscoder(ffmpeg_binary="ffmpeg").transcode(paths)
"""

from media.processors.base import (
    TRANSCODED_MIME_TYPE,
    PermanentProcessingError,
    ProcessingError,
    TransientProcessingError,
)
from media.processors.video import (
    VideoProcessingError,
    VideoTranscoder,
    build_transcode_command,
    transcode_video,
)

__all__ = [
    "ProcessingError",
    "PermanentProcessingError",
    "TransientProcessingError",
    "TRANSCODED_MIME_TYPE",
    "VideoProcessingError",
    "VideoTranscoder",
    "build_transcode_command",
    "transcode_video",
]
