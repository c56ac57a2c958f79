"""
Post service layer.

This module commits posts from domain fields plus object keys returned by
the media upload endpoint. Classification uses the object store's metadata,
never a type declared by the client, and the count ceilings are checked
again here independently of the upload-time ceilings.

Objects referenced by a rejected request are left in the store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import transaction

from core.services import BaseService
from media.exceptions import (
    InvalidMimeTypeError,
    InvalidPicturesCountError,
    InvalidPostError,
    InvalidVideosCountError,
    ObjectNotFoundError,
    StoredFileNotFoundError,
)
from media.services.object_store import S3ObjectStore
from posts.models import Post
from posts.serializers import PostFieldsSerializer

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from django.contrib.auth.models import AbstractBaseUser

    from media.conf import IngestionConfig
    from media.services.object_store import ObjectStore
    from media.types import ObjectMetadata


class PostAssemblyService(BaseService):
    """
    Verifies stored objects and commits a Post.

    Example:
        service = PostAssemblyService.from_config(get_ingestion_config())
        post = service.create_post(request.user, fields, keys)
    """

    def __init__(self, config: IngestionConfig, store: ObjectStore) -> None:
        self.config = config
        self.store = store

    @classmethod
    def from_config(cls, config: IngestionConfig) -> PostAssemblyService:
        return cls(config=config, store=S3ObjectStore.from_config(config))

    def create_post(
        self,
        owner: AbstractBaseUser,
        fields: Mapping[str, object],
        keys: Sequence[str],
    ) -> Post:
        """
        Commit a post referencing already stored objects.

        Args:
            owner: User the post belongs to.
            fields: camelCase domain fields as received.
            keys: Object keys, in the order the client lists them.

        Returns:
            The saved Post.

        Raises:
            StoredFileNotFoundError: A key does not exist in the store.
            ObjectStoreError: The store could not be queried.
            InvalidMimeTypeError: A stored object is neither image nor video.
            InvalidPicturesCountError: More than the post picture ceiling.
            InvalidVideosCountError: More than the post video ceiling.
            InvalidPostError: Domain fields failed validation.
        """
        logger = self.get_logger()
        logger.debug(
            "Checking stored files for new post",
            extra={"owner_id": str(owner.pk), "key_count": len(keys)},
        )

        pictures, videos = self._classify(self._fetch_metadata(keys))

        if len(pictures) > self.config.max_post_pictures:
            raise InvalidPicturesCountError(
                f"A post can have at most {self.config.max_post_pictures} pictures",
                details={"count": len(pictures), "max": self.config.max_post_pictures},
            )
        if len(videos) > self.config.max_post_videos:
            raise InvalidVideosCountError(
                f"A post can have at most {self.config.max_post_videos} videos",
                details={"count": len(videos), "max": self.config.max_post_videos},
            )

        serializer = PostFieldsSerializer(data=fields)
        if not serializer.is_valid():
            logger.info(
                "Rejected invalid post",
                extra={"owner_id": str(owner.pk), "errors": serializer.errors},
            )
            raise InvalidPostError("Invalid post", details=dict(serializer.errors))

        with self.atomic():
            post = Post.objects.create(
                owner=owner,
                pictures=[meta.to_dict() for meta in pictures],
                videos=[meta.to_dict() for meta in videos],
                **serializer.validated_data,
            )

        logger.info(
            "Post created",
            extra={
                "post_id": str(post.pk),
                "owner_id": str(owner.pk),
                "pictures": len(pictures),
                "videos": len(videos),
            },
        )
        return post

    def _fetch_metadata(self, keys: Sequence[str]) -> list[ObjectMetadata]:
        metas: list[ObjectMetadata] = []
        for key in keys:
            try:
                metas.append(self.store.get_metadata(key))
            except ObjectNotFoundError as e:
                self.get_logger().debug("File not found", extra={"key": key})
                raise StoredFileNotFoundError(
                    "File not found", details={"key": key}
                ) from e
        return metas

    def _classify(
        self, metas: list[ObjectMetadata]
    ) -> tuple[list[ObjectMetadata], list[ObjectMetadata]]:
        pictures: list[ObjectMetadata] = []
        videos: list[ObjectMetadata] = []
        for meta in metas:
            if meta.is_image:
                pictures.append(meta)
            elif meta.is_video:
                videos.append(meta)
            else:
                raise InvalidMimeTypeError(
                    "Stored file is neither a picture nor a video",
                    details={"key": meta.key, "mime_type": meta.mime_type},
                )
        return pictures, videos


class PostModerationService(BaseService):
    """Approval and removal of committed posts."""

    @classmethod
    def approve(cls, post: Post) -> Post:
        if not post.is_approved:
            post.is_approved = True
            post.save(update_fields=["is_approved", "updated_at"])
            cls.get_logger().info("Post approved", extra={"post_id": str(post.pk)})
        return post

    @classmethod
    def delete(cls, post: Post) -> list[str]:
        """
        Delete a post and schedule removal of its stored objects.

        The cleanup task is queued only once the delete has committed.

        Returns:
            The keys handed to the cleanup task.
        """
        from media.tasks import delete_stored_objects

        keys = post.stored_keys
        post_id = str(post.pk)
        with cls.atomic():
            post.delete()
            if keys:
                transaction.on_commit(lambda: delete_stored_objects.delay(keys))

        cls.get_logger().info(
            "Post deleted",
            extra={"post_id": post_id, "stored_keys": len(keys)},
        )
        return keys
