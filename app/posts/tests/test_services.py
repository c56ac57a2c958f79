"""
Tests for post assembly and moderation services.

These tests verify:
- Classification comes from store metadata, not from the key
- Commit-time picture and video ceilings
- Missing keys and unclassifiable objects are rejected
- Domain validation with field errors
- Referenced objects are never deleted on rejection
- Deletion schedules cleanup of stored objects
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from media.exceptions import (
    InvalidMimeTypeError,
    InvalidPicturesCountError,
    InvalidPostError,
    InvalidVideosCountError,
    MediaErrorCode,
    ObjectStoreError,
    StoredFileNotFoundError,
)
from posts.models import Post
from posts.services import PostAssemblyService, PostModerationService
from posts.tests.factories import PICTURE_KEY, VIDEO_KEY, PostFactory


@pytest.fixture
def service(ingestion_config, object_store) -> PostAssemblyService:
    return PostAssemblyService(config=ingestion_config, store=object_store)


@pytest.mark.django_db
class TestCreatePost:
    def test_commits_post_with_store_metadata(self, service, user, post_fields):
        """Scenario E: one picture and one video."""
        post = service.create_post(user, post_fields, [PICTURE_KEY, VIDEO_KEY])

        post.refresh_from_db()
        assert post.owner == user
        assert post.pictures == [
            {"key": PICTURE_KEY, "mime_type": "image/jpeg", "size_bytes": 2048}
        ]
        assert post.videos == [
            {"key": VIDEO_KEY, "mime_type": "video/mp4", "size_bytes": 4096}
        ]
        assert post.band == 144
        assert post.is_self_built is True
        assert post.meters_from_sea == 420
        assert post.number_of_elements == 9
        assert post.is_approved is False

    def test_classification_ignores_key_folder(self, service, object_store, user, post_fields):
        """A key under pics/ that the store reports as video counts as a video."""
        misleading = "pics/1/1-c.jpg"
        object_store.add(misleading, "video/mp4")

        post = service.create_post(user, post_fields, [misleading])

        assert post.pictures == []
        assert [item["key"] for item in post.videos] == [misleading]

    def test_no_files(self, service, user, post_fields):
        post = service.create_post(user, post_fields, [])

        assert post.pictures == []
        assert post.videos == []

    def test_missing_key(self, service, user, post_fields):
        with pytest.raises(StoredFileNotFoundError) as exc_info:
            service.create_post(user, post_fields, [PICTURE_KEY, "pics/1/missing.jpg"])

        assert exc_info.value.error_code == MediaErrorCode.FILE_NOT_FOUND.value
        assert exc_info.value.http_status == 400
        assert Post.objects.count() == 0

    def test_store_failure_propagates(self, service, object_store, user, post_fields):
        object_store.fail_metadata = True

        with pytest.raises(ObjectStoreError) as exc_info:
            service.create_post(user, post_fields, [PICTURE_KEY])

        assert exc_info.value.http_status == 500
        assert Post.objects.count() == 0

    def test_neither_image_nor_video(self, service, object_store, user, post_fields):
        object_store.add("pics/1/1-d.bin", "application/octet-stream")

        with pytest.raises(InvalidMimeTypeError):
            service.create_post(user, post_fields, ["pics/1/1-d.bin"])

    def test_ten_pictures_allowed(self, service, object_store, user, post_fields):
        keys = [f"pics/1/{i}-p.jpg" for i in range(10)]
        for key in keys:
            object_store.add(key, "image/png")

        post = service.create_post(user, post_fields, keys)

        assert len(post.pictures) == 10

    def test_eleven_pictures_rejected(self, service, object_store, user, post_fields):
        keys = [f"pics/1/{i}-p.jpg" for i in range(11)]
        for key in keys:
            object_store.add(key, "image/png")

        with pytest.raises(InvalidPicturesCountError) as exc_info:
            service.create_post(user, post_fields, keys)

        assert exc_info.value.error_code == MediaErrorCode.INVALID_PICS_NUM.value
        assert Post.objects.count() == 0

    def test_three_videos_rejected(self, service, object_store, user, post_fields):
        keys = [f"vids/1/{i}-v.mp4" for i in range(3)]
        for key in keys:
            object_store.add(key, "video/mp4")

        with pytest.raises(InvalidVideosCountError) as exc_info:
            service.create_post(user, post_fields, keys)

        assert exc_info.value.error_code == MediaErrorCode.INVALID_VIDS_NUM.value

    @pytest.mark.parametrize(
        "field,value",
        [
            ("description", ""),
            ("band", 50),
            ("boomLengthCm", "long"),
            ("brand", "x" * 31),
            ("metersFromSea", 10001),
            ("boomLengthCm", -1),
            ("boomLengthCm", 100001),
            ("numberOfElements", 0),
            ("numberOfElements", 301),
            ("numberOfAntennas", 101),
            ("cable", "c" * 101),
        ],
    )
    def test_invalid_fields(self, service, user, post_fields, field, value):
        post_fields[field] = value

        with pytest.raises(InvalidPostError) as exc_info:
            service.create_post(user, post_fields, [PICTURE_KEY])

        assert exc_info.value.error_code == MediaErrorCode.INVALID_POST.value
        assert field in exc_info.value.details
        assert Post.objects.count() == 0

    def test_missing_required_field(self, service, user, post_fields):
        del post_fields["numberOfElements"]

        with pytest.raises(InvalidPostError) as exc_info:
            service.create_post(user, post_fields, [])

        assert "numberOfElements" in exc_info.value.details

    def test_rejection_leaves_objects_in_store(
        self, service, object_store, user, post_fields
    ):
        post_fields["band"] = 7

        with pytest.raises(InvalidPostError):
            service.create_post(user, post_fields, [PICTURE_KEY, VIDEO_KEY])

        assert object_store.deletes == []
        assert PICTURE_KEY in object_store.objects

    def test_ceiling_checked_before_fields(self, service, object_store, user, post_fields):
        keys = [f"vids/1/{i}-v.mp4" for i in range(3)]
        for key in keys:
            object_store.add(key, "video/mp4")
        post_fields["band"] = 7

        with pytest.raises(InvalidVideosCountError):
            service.create_post(user, post_fields, keys)


@pytest.mark.django_db
class TestUploadThenCommit:
    def test_round_trip(self, ingestion_config, object_store, fake_files, user, post_fields):
        """k uploaded files become a post with k items classified by the store."""
        from media.services.upload_orchestrator import UploadOrchestrator
        from media.tests.doubles import FakeTranscoder

        orchestrator = UploadOrchestrator(
            config=ingestion_config,
            store=object_store,
            transcoder=FakeTranscoder(fake_files.tmp_dir),
        )
        files = fake_files.make(["image/jpeg", "video/quicktime", "image/png"])
        stored = orchestrator.ingest(user.pk, files)
        keys = [obj.key for obj in stored]

        post = PostAssemblyService(ingestion_config, object_store).create_post(
            user, post_fields, keys
        )

        assert len(post.pictures) + len(post.videos) == 3
        assert [p["mime_type"] for p in post.pictures] == ["image/jpeg", "image/png"]
        assert [v["mime_type"] for v in post.videos] == ["video/mp4"]


@pytest.mark.django_db
class TestPostModerationService:
    def test_approve(self):
        post = PostFactory()

        PostModerationService.approve(post)

        post.refresh_from_db()
        assert post.is_approved is True

    def test_delete_schedules_cleanup(self, django_capture_on_commit_callbacks):
        post = PostFactory(with_media=True)
        expected_keys = post.stored_keys

        with patch("media.tasks.delete_stored_objects.delay") as mock_delay:
            with django_capture_on_commit_callbacks(execute=True):
                keys = PostModerationService.delete(post)

        assert keys == expected_keys
        assert len(keys) == 2
        mock_delay.assert_called_once_with(expected_keys)
        assert Post.objects.count() == 0

    def test_delete_without_media_schedules_nothing(self, django_capture_on_commit_callbacks):
        post = PostFactory()

        with patch("media.tasks.delete_stored_objects.delay") as mock_delay:
            with django_capture_on_commit_callbacks(execute=True):
                PostModerationService.delete(post)

        mock_delay.assert_not_called()
