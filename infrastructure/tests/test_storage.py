"""
Storage Infrastructure Tests
=============================

Unit tests for the local filesystem storage adapter.
"""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from infrastructure.storage import (
    BYTES_PER_MB,
    LocalFileStorage,
    MediaKind,
    StorageException,
    StorageFactory,
    StorageInterface,
    StorageSettings,
    content_type_for,
    resolve_mime_type,
)
from utils.service_base import ErrorKind


def make_upload(name, size=1024, content_type="image/jpeg"):
    return SimpleUploadedFile(name, b"x" * size, content_type=content_type)


def fake_file(name: str, size: int) -> MagicMock:
    """File-like stand-in for sizes too large to allocate."""
    file = MagicMock()
    file.name = name
    file.size = size
    return file


@pytest.mark.unit
class TestStorageInterface:
    def test_interface_is_abstract(self):
        with pytest.raises(TypeError):
            StorageInterface()


@pytest.mark.unit
class TestBootstrap:
    def test_creates_image_and_video_directories(self, storage_settings):
        LocalFileStorage(storage_settings)

        assert (storage_settings.upload_root / "images").is_dir()
        assert (storage_settings.upload_root / "videos").is_dir()

    def test_existing_directories_are_reused(self, storage_settings):
        LocalFileStorage(storage_settings)
        marker = storage_settings.upload_root / "images" / "keep.jpg"
        marker.write_bytes(b"data")

        LocalFileStorage(storage_settings)

        assert marker.exists()

    def test_uncreatable_directory_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(StorageException):
            LocalFileStorage(StorageSettings(web_root=blocker))

    def test_factory_uses_explicit_settings(self, storage_settings):
        storage = StorageFactory.create(storage_settings)

        assert isinstance(storage, LocalFileStorage)
        assert storage.settings is storage_settings


@pytest.mark.unit
class TestValidate:
    def test_empty_file_is_bad_request(self, storage):
        result = storage.validate(make_upload("empty.jpg", size=0), MediaKind.IMAGE)

        assert not result.ok
        assert result.error.kind is ErrorKind.BAD_REQUEST
        assert result.error_detail == "File is empty"

    def test_missing_file_is_bad_request(self, storage):
        result = storage.validate(None, MediaKind.IMAGE)

        assert result.error.kind is ErrorKind.BAD_REQUEST

    def test_oversized_image_is_bad_request(self, storage):
        result = storage.validate(fake_file("big.jpg", 11 * BYTES_PER_MB), MediaKind.IMAGE)

        assert result.error.kind is ErrorKind.BAD_REQUEST
        assert result.error_detail == "Image size (11.00 MB) exceeds maximum allowed size of 10 MB"

    def test_disallowed_extension_is_unsupported_media_type(self, storage):
        result = storage.validate(make_upload("tool.exe"), MediaKind.IMAGE)

        assert result.error.kind is ErrorKind.UNSUPPORTED_MEDIA_TYPE
        assert result.error.code == 415
        assert "'.exe'" in result.error_detail

    def test_size_is_checked_before_extension(self, storage):
        result = storage.validate(fake_file("huge.exe", 11 * BYTES_PER_MB), MediaKind.IMAGE)

        assert result.error.kind is ErrorKind.BAD_REQUEST

    def test_valid_image(self, storage):
        result = storage.validate(make_upload("photo.jpg"), MediaKind.IMAGE)

        assert result.ok
        assert result.value is True

    def test_image_at_limit_is_accepted(self, storage):
        result = storage.validate(fake_file("edge.png", 10 * BYTES_PER_MB), MediaKind.IMAGE)

        assert result.ok

    def test_extension_match_is_case_insensitive(self, storage):
        assert storage.validate(make_upload("PHOTO.JPG"), MediaKind.IMAGE).ok

    def test_video_limit_applies_to_videos(self, storage):
        assert storage.validate(fake_file("clip.mp4", 50 * BYTES_PER_MB), MediaKind.VIDEO).ok

        result = storage.validate(fake_file("clip.mp4", 150 * BYTES_PER_MB), MediaKind.VIDEO)
        assert result.error_detail == "Video size (150.00 MB) exceeds maximum allowed size of 100 MB"

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("a.jpg", MediaKind.IMAGE),
            ("a.WEBP", MediaKind.IMAGE),
            ("a.mov", MediaKind.VIDEO),
            ("a.pdf", None),
            ("noextension", None),
        ],
    )
    def test_detect_media_kind(self, storage, name, expected):
        assert storage.detect_media_kind(name) is expected


@pytest.mark.unit
class TestUpload:
    def test_upload_image_writes_uuid_named_file(self, storage, storage_settings):
        result = storage.upload(make_upload("photo.JPG", size=2048))

        assert result.ok
        outcome = result.value
        assert outcome.media_kind is MediaKind.IMAGE
        assert outcome.stored_name.endswith(".jpg")
        assert outcome.stored_name != "photo.JPG"
        assert outcome.relative_path == f"uploads/images/{outcome.stored_name}"
        assert outcome.public_url == f"/{outcome.relative_path}"
        assert outcome.size_bytes == 2048
        assert outcome.mime_type == "image/jpeg"
        assert (storage_settings.web_root / outcome.relative_path).read_bytes() == b"x" * 2048

    def test_upload_leaves_no_partial_files(self, storage, storage_settings):
        storage.upload(make_upload("photo.png", content_type="image/png"))

        leftovers = list((storage_settings.upload_root / "images").glob("*.part"))
        assert leftovers == []

    def test_upload_video_goes_to_videos(self, storage):
        result = storage.upload(make_upload("clip.mp4", content_type="video/mp4"))

        assert result.ok
        assert result.value.relative_path.startswith("uploads/videos/")

    def test_two_uploads_get_distinct_names(self, storage):
        first = storage.upload(make_upload("same.jpg")).value
        second = storage.upload(make_upload("same.jpg")).value

        assert first.stored_name != second.stored_name

    def test_unknown_extension_is_rejected(self, storage):
        result = storage.upload(make_upload("notes.txt", content_type="text/plain"))

        assert result.error.kind is ErrorKind.UNSUPPORTED_MEDIA_TYPE
        assert result.error_detail == "Unsupported file type: .txt"

    def test_oversized_upload_is_rejected_without_writing(self, storage, storage_settings):
        result = storage.upload(fake_file("clip.mp4", 150 * BYTES_PER_MB))

        assert result.error.kind is ErrorKind.BAD_REQUEST
        assert list((storage_settings.upload_root / "videos").iterdir()) == []

    def test_write_failure_is_internal_error(self, storage):
        with patch("infrastructure.storage.local_adapter.os.replace", side_effect=OSError("disk full")):
            result = storage.upload(make_upload("photo.jpg"))

        assert result.error.kind is ErrorKind.INTERNAL_SERVER_ERROR
        assert result.error_detail == "Failed to save file to disk"

    def test_unexpected_error_is_contained(self, storage):
        with patch.object(storage, "validate", side_effect=RuntimeError("boom")):
            result = storage.upload(make_upload("photo.jpg"))

        assert result.error.kind is ErrorKind.INTERNAL_SERVER_ERROR
        assert result.error_detail == "Failed to upload file"

    def test_upload_many_reports_each_file(self, storage):
        attempts = storage.upload_many(
            [make_upload("a.jpg"), make_upload("b.exe"), make_upload("c.mp4", content_type="video/mp4")]
        )

        assert [a.original_name for a in attempts] == ["a.jpg", "b.exe", "c.mp4"]
        assert [a.result.ok for a in attempts] == [True, False, True]

    def test_upload_many_of_nothing(self, storage):
        assert storage.upload_many([]) == []


@pytest.mark.unit
class TestPathOperations:
    @pytest.fixture
    def stored(self, storage):
        return storage.upload(make_upload("photo.jpg")).value

    def test_exists(self, storage, stored):
        assert storage.exists(stored.relative_path).value is True
        assert storage.exists(stored.public_url).value is True
        assert storage.exists("uploads/images/missing.jpg").value is False

    @pytest.mark.parametrize(
        "path", ["", "   ", "../secret.txt", "uploads/../../etc/passwd", "uploads", "uploads/images/a\x00b.jpg"]
    )
    def test_exists_is_false_for_empty_or_escaping_paths(self, storage, path):
        result = storage.exists(path)

        assert result.ok
        assert result.value is False

    def test_delete_removes_file(self, storage, storage_settings, stored):
        result = storage.delete(stored.relative_path)

        assert result.ok
        assert not (storage_settings.web_root / stored.relative_path).exists()
        assert storage.exists(stored.relative_path).value is False

    def test_delete_accepts_public_url(self, storage, stored):
        assert storage.delete(stored.public_url).ok

    def test_delete_missing_file_is_not_found(self, storage):
        result = storage.delete("uploads/images/missing.jpg")

        assert result.error.kind is ErrorKind.NOT_FOUND
        assert result.error_detail == "File not found: uploads/images/missing.jpg"
        assert result.value is False

    def test_delete_empty_path_is_bad_request(self, storage):
        result = storage.delete("")

        assert result.error.kind is ErrorKind.BAD_REQUEST
        assert result.error_detail == "File path cannot be empty"

    def test_delete_outside_upload_root_is_rejected(self, storage, storage_settings):
        outside = storage_settings.web_root / "outside.txt"
        outside.write_text("keep me")

        result = storage.delete("uploads/../outside.txt")

        assert result.error.kind is ErrorKind.BAD_REQUEST
        assert result.error_detail == "Invalid file path"
        assert outside.exists()

    def test_delete_path_with_nul_byte_is_rejected(self, storage):
        result = storage.delete("uploads/images/a\x00b.jpg")

        assert result.error.kind is ErrorKind.BAD_REQUEST
        assert result.error_detail == "Invalid file path"
        assert result.value is False

    def test_delete_permission_error_is_forbidden(self, storage, stored):
        with patch.object(Path, "unlink", side_effect=PermissionError("denied")):
            result = storage.delete(stored.relative_path)

        assert result.error.kind is ErrorKind.FORBIDDEN
        assert result.error_detail == "Access denied to delete file"

    def test_delete_io_error_is_internal(self, storage, stored):
        with patch.object(Path, "unlink", side_effect=OSError("busy")):
            result = storage.delete(stored.relative_path)

        assert result.error.kind is ErrorKind.INTERNAL_SERVER_ERROR
        assert result.error_detail == "File is in use or locked"

    def test_delete_many_is_best_effort(self, storage, stored):
        attempts = storage.delete_many([stored.relative_path, "uploads/images/missing.jpg"])

        assert [a.result.ok for a in attempts] == [True, False]
        assert attempts[1].result.error.kind is ErrorKind.NOT_FOUND

    def test_delete_many_reports_unresolvable_paths(self, storage, stored):
        attempts = storage.delete_many(["uploads/images/a\x00b.jpg", stored.relative_path])

        assert [a.result.ok for a in attempts] == [False, True]
        assert attempts[0].result.error_detail == "Invalid file path"

    def test_get_file(self, storage, stored):
        result = storage.get_file(stored.relative_path)

        assert result.ok
        assert result.value.file_name == stored.stored_name
        assert result.value.content_type == "image/jpeg"
        assert result.value.size_bytes == stored.size_bytes
        with result.value.open() as handle:
            assert handle.read() == b"x" * stored.size_bytes

    def test_get_file_missing_and_escaping(self, storage):
        assert storage.get_file("uploads/images/missing.jpg").error.kind is ErrorKind.NOT_FOUND
        assert storage.get_file("../../etc/passwd").error.kind is ErrorKind.BAD_REQUEST
        assert storage.get_file("").error.kind is ErrorKind.BAD_REQUEST

    def test_get_file_path_with_nul_byte_is_rejected(self, storage):
        result = storage.get_file("uploads/images/a\x00b.jpg")

        assert result.error.kind is ErrorKind.BAD_REQUEST
        assert result.error_detail == "Invalid file path"


@pytest.mark.unit
class TestContentTypes:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("a.jpg", "image/jpeg"),
            ("a.JPEG", "image/jpeg"),
            ("a.png", "image/png"),
            ("a.svg", "image/svg+xml"),
            ("a.mov", "video/quicktime"),
            ("a.mkv", "video/x-matroska"),
            ("a.bin", "application/octet-stream"),
            ("README", "application/octet-stream"),
        ],
    )
    def test_content_type_for(self, path, expected):
        assert content_type_for(path) == expected

    def test_resolve_mime_type_prefers_declared_type(self):
        assert resolve_mime_type(make_upload("a.jpg", content_type="image/webp")) == "image/webp"

    def test_resolve_mime_type_falls_back_to_extension(self):
        assert resolve_mime_type(make_upload("a.png", content_type="application/octet-stream")) == "image/png"
        assert resolve_mime_type(SimpleNamespace(name="a.mp4", content_type="")) == "video/mp4"
