"""Tests for object key generation."""

import re

import pytest

from media.exceptions import InvalidMimeTypeError
from media.services.keys import (
    PICTURES_FOLDER,
    VIDEOS_FOLDER,
    extension_for_mime_type,
    folder_for_mime_type,
    generate_object_key,
)

KEY_PATTERN = re.compile(r"^(pics|vids)/[^/]+/\d{13}-[0-9a-f]{32}\.[a-z0-9]+$")


class TestFolderForMimeType:
    def test_images_go_to_pictures(self):
        assert folder_for_mime_type("image/webp") == PICTURES_FOLDER

    def test_videos_go_to_videos(self):
        assert folder_for_mime_type("video/x-ms-wmv") == VIDEOS_FOLDER

    def test_unknown_type_raises(self):
        with pytest.raises(InvalidMimeTypeError):
            folder_for_mime_type("application/pdf")


class TestExtensionForMimeType:
    @pytest.mark.parametrize(
        "mime_type,extension",
        [
            ("image/jpeg", ".jpg"),
            ("image/png", ".png"),
            ("video/mp4", ".mp4"),
            ("video/quicktime", ".mov"),
            ("video/x-msvideo", ".avi"),
        ],
    )
    def test_known_extensions(self, mime_type, extension):
        assert extension_for_mime_type(mime_type) == extension

    def test_unknown_type_raises(self):
        with pytest.raises(InvalidMimeTypeError):
            extension_for_mime_type("application/x-not-a-real-type")


class TestGenerateObjectKey:
    def test_layout_with_fixed_time_and_token(self):
        key = generate_object_key(
            42, "image/jpeg", now_ms=1700000000123, token="a" * 32
        )

        assert key == f"pics/42/1700000000123-{'a' * 32}.jpg"

    def test_video_key(self):
        key = generate_object_key("7", "video/mp4", now_ms=1, token="t")

        assert key == "vids/7/1-t.mp4"

    def test_generated_key_matches_layout(self):
        assert KEY_PATTERN.match(generate_object_key(3, "image/png"))

    def test_keys_are_unique(self):
        keys = {generate_object_key(1, "image/png") for _ in range(200)}

        assert len(keys) == 200

    def test_unknown_type_raises(self):
        with pytest.raises(InvalidMimeTypeError):
            generate_object_key(1, "text/plain")
