"""
Pipeline configuration snapshot.

Settings are read from django.conf.settings once per process and frozen
into an IngestionConfig, which is then passed explicitly to the
orchestrator, the object store client and the post assembler. Pipeline
code never reads settings directly.

Usage:
    from media.conf import get_ingestion_config

    config = get_ingestion_config()
    orchestrator = UploadOrchestrator.from_config(config)
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from django.conf import settings

from media.validators import MAX_UPLOAD_FILE_SIZE, all_allowed_mime_types


@dataclass(frozen=True)
class IngestionConfig:
    """
    Limits and collaborator settings for media ingestion.

    Attributes:
        allowed_mime_types: MIME types accepted on upload
        max_file_size: Per-file ceiling on the upload path, in bytes
        max_upload_pictures: Non-video files accepted per upload batch
        max_upload_videos: Video files accepted per upload batch
        max_post_pictures: Pictures a committed post may reference
        max_post_videos: Videos a committed post may reference
        bucket_name: Object store bucket
        region_name: Object store region
        endpoint_url: Custom S3 endpoint (MinIO etc.), empty for AWS
        access_key_id: Credentials; empty falls back to the boto3 chain
        secret_access_key: Credentials; empty falls back to the boto3 chain
        ffmpeg_binary: FFmpeg executable name or path
        transcode_timeout: Seconds allowed per video
        transcode_crf: x264 constant rate factor
        transcode_preset: x264 preset
        temp_dir: Directory for transcoded outputs, None for system default
    """

    allowed_mime_types: frozenset[str] = all_allowed_mime_types()
    max_file_size: int = MAX_UPLOAD_FILE_SIZE
    max_upload_pictures: int = 5
    max_upload_videos: int = 2
    max_post_pictures: int = 10
    max_post_videos: int = 2
    bucket_name: str = "posts-media"
    region_name: str = ""
    endpoint_url: str = ""
    access_key_id: str = ""
    secret_access_key: str = ""
    ffmpeg_binary: str = "ffmpeg"
    transcode_timeout: int = 1800
    transcode_crf: int = 28
    transcode_preset: str = "veryfast"
    temp_dir: str | None = None

    @classmethod
    def from_settings(cls) -> IngestionConfig:
        return cls(
            max_file_size=settings.MEDIA_UPLOAD_MAX_FILE_SIZE,
            max_upload_pictures=settings.MEDIA_UPLOAD_MAX_PICTURES,
            max_upload_videos=settings.MEDIA_UPLOAD_MAX_VIDEOS,
            max_post_pictures=settings.POST_MAX_PICTURES,
            max_post_videos=settings.POST_MAX_VIDEOS,
            bucket_name=settings.MEDIA_STORAGE_BUCKET,
            region_name=settings.AWS_S3_REGION_NAME,
            endpoint_url=settings.AWS_S3_ENDPOINT_URL,
            access_key_id=settings.AWS_ACCESS_KEY_ID,
            secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            ffmpeg_binary=settings.FFMPEG_BINARY,
            transcode_timeout=settings.VIDEO_TRANSCODE_TIMEOUT,
            transcode_crf=settings.VIDEO_TRANSCODE_CRF,
            transcode_preset=settings.VIDEO_TRANSCODE_PRESET,
            temp_dir=settings.FILE_UPLOAD_TEMP_DIR or None,
        )


@lru_cache(maxsize=1)
def get_ingestion_config() -> IngestionConfig:
    """Return the process-wide config, built on first use."""
    return IngestionConfig.from_settings()
