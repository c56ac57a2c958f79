"""
Upload orchestrator for post media batches.

Runs one ingestion call as a sequential pipeline and keeps the object store
consistent when a later step fails:

    VALIDATING → CLASSIFYING → TRANSCODING → UPLOADING → DONE
                                                 │
                                                 └→ ROLLING_BACK → FAILED

Failures before UPLOADING go straight to FAILED; nothing has been written.
During UPLOADING every key is recorded as soon as its put succeeds, so a
later failure can delete exactly the keys this batch wrote. Rollback is
best-effort: a failed delete is logged and the original upload error is
what the caller sees.

Every temporary file (the spooled uploads and the transcoder's outputs) is
released when the call returns, whatever the outcome.

Usage:
    from media.conf import get_ingestion_config
    from media.services.upload_orchestrator import UploadOrchestrator

    orchestrator = UploadOrchestrator.from_config(get_ingestion_config())
    stored = orchestrator.ingest(owner_id=request.user.pk, files=descriptors)
    keys = [obj.key for obj in stored]
"""

from __future__ import annotations

import os
import uuid
from typing import TYPE_CHECKING

from core.services import BaseService
from media.processors import TRANSCODED_MIME_TYPE, VideoTranscoder
from media.services.keys import folder_for_mime_type, generate_object_key
from media.services.object_store import S3ObjectStore
from media.types import (
    BatchState,
    FileDescriptor,
    StoredObject,
    UploadBatch,
    release_path,
)
from media.validators import AdmissionValidator, classify_batch

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from media.conf import IngestionConfig
    from media.services.object_store import ObjectStore


class UploadOrchestrator(BaseService):
    """
    Validates, compresses and stores one batch of post media.

    An instance handles a single batch at a time; create one per request.

    Attributes:
        state: Current BatchState of the last ``ingest`` call
        written_keys: Keys stored by the current batch, in write order
    """

    def __init__(
        self,
        config: IngestionConfig,
        store: ObjectStore,
        transcoder: VideoTranscoder | None = None,
        validator: AdmissionValidator | None = None,
        key_generator: Callable[[object, str], str] = generate_object_key,
    ) -> None:
        self.config = config
        self.store = store
        self.transcoder = transcoder or VideoTranscoder.from_config(config)
        self.validator = validator or AdmissionValidator(
            allowed_mime_types=config.allowed_mime_types,
            max_file_size=config.max_file_size,
        )
        self.key_generator = key_generator
        self.state: BatchState | None = None
        self.written_keys: list[str] = []
        self.batch_id: str | None = None

    @classmethod
    def from_config(cls, config: IngestionConfig) -> UploadOrchestrator:
        return cls(config=config, store=S3ObjectStore.from_config(config))

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def ingest(
        self,
        owner_id: object,
        files: Sequence[FileDescriptor],
    ) -> list[StoredObject]:
        """
        Run the whole pipeline for one batch.

        Args:
            owner_id: Identity of the uploading user; scopes the keys.
            files: Incoming files in the order received. The orchestrator
                takes ownership of their temporary paths.

        Returns:
            One StoredObject per input file, in input order.

        Raises:
            MediaAdmissionError: Bad MIME type, oversize file or too many
                files. Nothing was written.
            TranscodeFailedError: A video could not be compressed. Nothing
                was written.
            ObjectStoreError: A put failed. Keys written earlier in the
                batch have been deleted (best-effort).
        """
        batch = UploadBatch(
            files=list(files),
            max_pictures=self.config.max_upload_pictures,
            max_videos=self.config.max_upload_videos,
        )
        self.batch_id = uuid.uuid4().hex
        self.written_keys = []
        transcoded_paths: list[str] = []

        logger = self.get_logger()
        logger.info(
            "Ingesting media batch",
            extra={
                "batch_id": self.batch_id,
                "owner_id": str(owner_id),
                "file_count": len(batch),
            },
        )

        if not batch.files:
            self._transition(BatchState.DONE)
            return []

        try:
            self._transition(BatchState.VALIDATING)
            self.validator.validate_all(batch.files)

            self._transition(BatchState.CLASSIFYING)
            classified = classify_batch(batch)

            self._transition(BatchState.TRANSCODING)
            if classified.videos:
                transcoded_paths = self.transcoder.transcode(
                    [descriptor.temporary_path for descriptor in classified.videos]
                )
            uploads = self._plan_uploads(
                batch.files,
                dict(zip((id(video) for video in classified.videos), transcoded_paths)),
            )

            self._transition(BatchState.UPLOADING)
            stored = self._upload_all(owner_id, uploads)

            self._transition(BatchState.DONE)
        except BaseException as e:
            if self.state == BatchState.UPLOADING:
                self._rollback()
            self._transition(BatchState.FAILED)
            logger.warning(
                "Media batch failed",
                extra={
                    "batch_id": self.batch_id,
                    "error": str(e),
                    "rolled_back_keys": len(self.written_keys),
                },
            )
            raise
        finally:
            for descriptor in batch.files:
                descriptor.release()
            for path in transcoded_paths:
                release_path(path)

        logger.info(
            "Uploaded media batch",
            extra={"batch_id": self.batch_id, "keys": [obj.key for obj in stored]},
        )
        return stored

    def _plan_uploads(
        self,
        files: list[FileDescriptor],
        transcoded_by_id: dict[int, str],
    ) -> list[FileDescriptor]:
        """Keep the received order, swapping each video for its MP4 output."""
        uploads: list[FileDescriptor] = []
        for descriptor in files:
            transcoded_path = transcoded_by_id.get(id(descriptor))
            if transcoded_path is None:
                uploads.append(descriptor)
                continue
            uploads.append(
                FileDescriptor(
                    name=os.path.basename(transcoded_path),
                    temporary_path=transcoded_path,
                    mime_type=TRANSCODED_MIME_TYPE,
                    size_bytes=descriptor.size_bytes,
                )
            )
        return uploads

    def _upload_all(
        self,
        owner_id: object,
        uploads: list[FileDescriptor],
    ) -> list[StoredObject]:
        logger = self.get_logger()
        stored: list[StoredObject] = []
        for upload in uploads:
            key = self.key_generator(owner_id, upload.mime_type)
            logger.info(
                "Uploading file",
                extra={"batch_id": self.batch_id, "file_name": upload.name, "key": key},
            )
            self.store.put(key, upload.temporary_path, upload.mime_type)
            self.written_keys.append(key)
            stored.append(StoredObject(key=key, folder=folder_for_mime_type(upload.mime_type)))
        return stored

    def _rollback(self) -> None:
        """Delete every key this batch wrote; never raises."""
        self._transition(BatchState.ROLLING_BACK)
        logger = self.get_logger()
        for key in self.written_keys:
            try:
                self.store.delete(key)
            except Exception as e:
                logger.error(
                    "Rollback delete failed",
                    extra={"batch_id": self.batch_id, "key": key, "error": str(e)},
                )
                continue
            logger.info(
                "Deleted file during rollback",
                extra={"batch_id": self.batch_id, "key": key},
            )

    def _transition(self, state: BatchState) -> None:
        self.state = state
        self.get_logger().debug(
            "Media batch state changed",
            extra={"batch_id": self.batch_id, "state": state.value},
        )
