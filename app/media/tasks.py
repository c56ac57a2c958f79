"""
Celery tasks for stored media.

This module provides async tasks for:
- Removing a deleted post's objects from the object store

Deletion is idempotent, so a retried task simply deletes again whatever is
still there.

Usage:
    from media.tasks import delete_stored_objects

    delete_stored_objects.delay(["pics/1/...jpg", "vids/1/...mp4"])
"""

from __future__ import annotations

import logging

from celery import shared_task

from media.exceptions import ObjectStoreError

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(ObjectStoreError,),
    retry_backoff=True,
    retry_backoff_max=300,
    retry_kwargs={"max_retries": 5},
    acks_late=True,
)
def delete_stored_objects(self, keys: list[str]) -> dict:
    """
    Delete a list of keys from the object store.

    Args:
        keys: Opaque object keys, as stored on a post.

    Returns:
        Dict with the number of keys deleted.

    Raises:
        ObjectStoreError: At least one delete failed; Celery retries the
            whole task.
    """
    from media.conf import get_ingestion_config
    from media.services.object_store import get_object_store

    store = get_object_store(get_ingestion_config())

    failed: list[str] = []
    for key in keys:
        try:
            store.delete(key)
        except ObjectStoreError as e:
            failed.append(key)
            logger.warning(
                "Failed to delete stored object",
                extra={
                    "event_type": "stored_object_delete_error",
                    "key": key,
                    "error": str(e),
                    "attempt": self.request.retries,
                },
            )

    if failed:
        raise ObjectStoreError(
            f"Could not delete {len(failed)} of {len(keys)} objects",
            details={"keys": failed},
        )

    logger.info(
        "Stored objects deleted",
        extra={"event_type": "stored_objects_deleted", "count": len(keys)},
    )
    return {"deleted": len(keys)}
