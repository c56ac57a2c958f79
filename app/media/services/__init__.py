"""Media services for key generation, object storage and batch ingestion."""

from media.services.keys import (
    PICTURES_FOLDER,
    VIDEOS_FOLDER,
    folder_for_mime_type,
    generate_object_key,
)
from media.services.object_store import ObjectStore, S3ObjectStore, get_object_store
from media.services.upload_orchestrator import UploadOrchestrator

__all__ = [
    "PICTURES_FOLDER",
    "VIDEOS_FOLDER",
    "ObjectStore",
    "S3ObjectStore",
    "UploadOrchestrator",
    "folder_for_mime_type",
    "generate_object_key",
    "get_object_store",
]
