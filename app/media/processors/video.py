"""
Video compression via FFmpeg.

Each input video is re-encoded to H.264/AAC in an MP4 container with the
moov atom at the front (``+faststart``) so stored videos stream without a
full download. FFmpeg runs as a subprocess with a timeout; no lock is held
while it runs, so concurrent requests only compete for CPU.

Functions:
    build_transcode_command: FFmpeg argument list for one file
    transcode_video: Compress one file into a new temporary MP4

Classes:
    VideoTranscoder: All-or-nothing compression of an ordered list of files
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from typing import TYPE_CHECKING

from media.exceptions import TranscodeFailedError
from media.processors.base import (
    STDERR_LOG_LIMIT,
    TRANSCODED_SUFFIX,
    VIDEO_TRANSCODE_CRF,
    VIDEO_TRANSCODE_PRESET,
    VIDEO_TRANSCODE_TIMEOUT,
    PermanentProcessingError,
    ProcessingError,
    TransientProcessingError,
)
from media.types import release_path

if TYPE_CHECKING:
    from collections.abc import Sequence

    from media.conf import IngestionConfig

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class VideoProcessingError(PermanentProcessingError):
    """
    Raised when FFmpeg rejects a video.

    Indicates a corrupted file, an unsupported codec or a missing video
    track. Resubmitting the same file will not help.
    """

    pass


# =============================================================================
# Single File
# =============================================================================


def build_transcode_command(
    ffmpeg_binary: str,
    source_path: str,
    target_path: str,
    crf: int = VIDEO_TRANSCODE_CRF,
    preset: str = VIDEO_TRANSCODE_PRESET,
) -> list[str]:
    return [
        ffmpeg_binary,
        "-y",  # Overwrite the placeholder created by mkstemp
        "-i",
        source_path,
        "-c:v",
        "libx264",
        "-preset",
        preset,
        "-crf",
        str(crf),
        "-pix_fmt",
        "yuv420p",  # Widest player compatibility
        "-c:a",
        "aac",
        "-b:a",
        "128k",
        "-movflags",
        "+faststart",
        target_path,
    ]


def transcode_video(
    source_path: str,
    *,
    ffmpeg_binary: str = "ffmpeg",
    timeout: int = VIDEO_TRANSCODE_TIMEOUT,
    crf: int = VIDEO_TRANSCODE_CRF,
    preset: str = VIDEO_TRANSCODE_PRESET,
    temp_dir: str | None = None,
) -> str:
    """
    Compress one video into a new temporary MP4 file.

    Args:
        source_path: Path of the video to compress. Left untouched.
        ffmpeg_binary: FFmpeg executable.
        timeout: Seconds before FFmpeg is killed.
        crf: x264 constant rate factor (higher is smaller).
        preset: x264 preset.
        temp_dir: Directory for the output file.

    Returns:
        Path of the compressed file. The caller owns it.

    Raises:
        VideoProcessingError: FFmpeg could not decode or encode the file.
        TransientProcessingError: Timeout, missing FFmpeg or I/O failure.
    """
    try:
        fd, target_path = tempfile.mkstemp(
            prefix="transcoded_", suffix=TRANSCODED_SUFFIX, dir=temp_dir
        )
        os.close(fd)
    except OSError as e:
        raise TransientProcessingError(f"Could not create output file: {e}") from e

    cmd = build_transcode_command(ffmpeg_binary, source_path, target_path, crf, preset)

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        release_path(target_path)
        logger.warning(
            "FFmpeg timed out",
            extra={"source": source_path, "timeout": timeout},
        )
        raise TransientProcessingError(f"FFmpeg timed out after {timeout} seconds")
    except FileNotFoundError:
        release_path(target_path)
        logger.error("FFmpeg not found - ensure FFmpeg is installed")
        raise TransientProcessingError("FFmpeg not found - FFmpeg may not be installed")
    except OSError as e:
        release_path(target_path)
        logger.error(
            "I/O error while running FFmpeg",
            extra={"source": source_path, "error": str(e)},
        )
        raise TransientProcessingError(f"I/O error while running FFmpeg: {e}") from e

    if result.returncode != 0:
        release_path(target_path)
        stderr = result.stderr.decode(errors="replace") if result.stderr else ""
        logger.warning(
            "FFmpeg failed to compress video",
            extra={
                "source": source_path,
                "returncode": result.returncode,
                "stderr": stderr[-STDERR_LOG_LIMIT:],
            },
        )
        raise VideoProcessingError(
            f"FFmpeg exited with status {result.returncode}"
        )

    if not os.path.exists(target_path) or os.path.getsize(target_path) == 0:
        release_path(target_path)
        raise VideoProcessingError("FFmpeg produced an empty output file")

    return target_path


# =============================================================================
# Batch
# =============================================================================


class VideoTranscoder:
    """
    Compresses an ordered list of videos, all or nothing.

    Example:
        transcoder = VideoTranscoder.from_config(config)
        outputs = transcoder.transcode(["/tmp/a.mov", "/tmp/b.avi"])
        # outputs[i] is the MP4 made from input i
    """

    def __init__(
        self,
        ffmpeg_binary: str = "ffmpeg",
        timeout: int = VIDEO_TRANSCODE_TIMEOUT,
        crf: int = VIDEO_TRANSCODE_CRF,
        preset: str = VIDEO_TRANSCODE_PRESET,
        temp_dir: str | None = None,
    ) -> None:
        self.ffmpeg_binary = ffmpeg_binary
        self.timeout = timeout
        self.crf = crf
        self.preset = preset
        self.temp_dir = temp_dir

    @classmethod
    def from_config(cls, config: IngestionConfig) -> VideoTranscoder:
        return cls(
            ffmpeg_binary=config.ffmpeg_binary,
            timeout=config.transcode_timeout,
            crf=config.transcode_crf,
            preset=config.transcode_preset,
            temp_dir=config.temp_dir,
        )

    def transcode_one(self, source_path: str) -> str:
        return transcode_video(
            source_path,
            ffmpeg_binary=self.ffmpeg_binary,
            timeout=self.timeout,
            crf=self.crf,
            preset=self.preset,
            temp_dir=self.temp_dir,
        )

    def transcode(self, source_paths: Sequence[str]) -> list[str]:
        """
        Compress every file in order.

        Returns:
            New temporary paths, one per input, in input order.

        Raises:
            TranscodeFailedError: Any single file failed. Outputs already
                produced by this call are deleted first.
        """
        outputs: list[str] = []
        try:
            for source_path in source_paths:
                outputs.append(self.transcode_one(source_path))
        except ProcessingError as e:
            failed_index = len(outputs)
            for output in outputs:
                release_path(output)
            logger.error(
                "Error compressing videos",
                extra={
                    "failed_index": failed_index,
                    "video_count": len(source_paths),
                    "error": str(e),
                },
            )
            raise TranscodeFailedError(
                "Video compression failed",
                details={"failed_index": failed_index},
            ) from e

        logger.info(
            "Compressed videos",
            extra={"video_count": len(outputs)},
        )
        return outputs
