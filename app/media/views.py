"""
API views for post media ingestion.

Provides:
- MediaBatchUploadView: Validate, compress and store a batch of files via POST
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile

from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import BaseApplicationError
from media.conf import get_ingestion_config
from media.exceptions import MediaErrorCode
from media.services.upload_orchestrator import UploadOrchestrator
from media.types import FileDescriptor, release_path

logger = logging.getLogger(__name__)

UPLOAD_FIELD_NAME = "content"


def descriptor_from_upload(uploaded, temp_dir: str | None = None) -> FileDescriptor:
    """
    Build a FileDescriptor for a Django UploadedFile.

    Files spooled by TemporaryFileUploadHandler already live on disk; anything
    held in memory is copied to a new temporary file first.
    """
    if hasattr(uploaded, "temporary_file_path"):
        temporary_path = uploaded.temporary_file_path()
    else:
        fd, temporary_path = tempfile.mkstemp(prefix="upload_", dir=temp_dir)
        try:
            with os.fdopen(fd, "wb") as destination:
                uploaded.seek(0)
                shutil.copyfileobj(uploaded, destination)
        except BaseException:
            release_path(temporary_path)
            raise

    return FileDescriptor(
        name=uploaded.name,
        temporary_path=temporary_path,
        mime_type=uploaded.content_type or "",
        size_bytes=uploaded.size,
    )


def descriptors_from_uploads(uploads, temp_dir: str | None = None) -> list[FileDescriptor]:
    """Describe every upload; copies made before a failure are released."""
    descriptors: list[FileDescriptor] = []
    try:
        for uploaded in uploads:
            descriptors.append(descriptor_from_upload(uploaded, temp_dir))
    except BaseException:
        for descriptor in descriptors:
            descriptor.release()
        raise
    return descriptors


class MediaBatchUploadView(APIView):
    """
    Upload a batch of post pictures and videos.

    POST /api/v1/media/upload/

    Authentication:
        Requires valid JWT token.

    Request:
        Content-Type: multipart/form-data
        - content (repeatable): The files to upload

    Response:
        200 OK: JSON array of stored object keys, in the order received
        204 No Content: No files were sent
        400 Bad Request: Invalid MIME type, oversize file or too many files
        401 Unauthorized: Not authenticated
        500 Internal Server Error: Compression or storage failed; nothing
            from this batch remains stored
            (SERVER_ERROR for anything unexpected)
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        uploads = request.FILES.getlist(UPLOAD_FIELD_NAME)
        if not uploads:
            return Response(status=status.HTTP_204_NO_CONTENT)

        config = get_ingestion_config()

        try:
            orchestrator = UploadOrchestrator.from_config(config)
            descriptors = descriptors_from_uploads(uploads, config.temp_dir)
            stored = orchestrator.ingest(owner_id=request.user.pk, files=descriptors)
        except BaseApplicationError as e:
            return Response(e.to_dict(), status=e.http_status)
        except Exception:
            logger.exception(
                "Error while uploading media batch",
                extra={"user_id": str(request.user.pk), "file_count": len(uploads)},
            )
            return Response(
                {
                    "error": "Internal server error",
                    "error_code": MediaErrorCode.SERVER_ERROR.value,
                },
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response([obj.key for obj in stored], status=status.HTTP_200_OK)
