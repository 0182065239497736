"""File attachment storage, including the concurrent batch import."""

from __future__ import annotations

from pathlib import Path

import pytest

from studly.core.models import AttachmentKind
from studly.core.services import classify_file


class TestSave:
    """Picked photos are written as ``<uuid>.<ext>``."""

    def test_keeps_suggested_name_and_extension(self, storage):
        attachment = storage.save(b"data", "whiteboard.png")
        assert attachment.kind == AttachmentKind.PHOTO
        assert attachment.original_name == "whiteboard.png"
        assert attachment.stored_file_name.endswith(".png")
        assert storage.resolve_location(attachment).read_bytes() == b"data"

    def test_defaults_to_jpg(self, storage):
        attachment = storage.save(b"data")
        assert attachment.original_name == "Photo.jpg"
        assert attachment.stored_file_name.endswith(".jpg")

    def test_stored_names_are_unique(self, storage):
        assert storage.save(b"a", "x.jpg").stored_file_name != storage.save(b"b", "x.jpg").stored_file_name


class TestImport:
    """External files are copied in and classified."""

    @pytest.mark.parametrize(
        ("name", "kind"),
        [
            ("lecture.mp3", AttachmentKind.AUDIO),
            ("scan.jpeg", AttachmentKind.PHOTO),
            ("notes.pdf", AttachmentKind.FILE),
            ("README", AttachmentKind.FILE),
        ],
    )
    def test_classification(self, name, kind):
        assert classify_file(Path(name)) == kind

    def test_import_copies_file(self, storage, tmp_path):
        source = tmp_path / "syllabus.pdf"
        source.write_bytes(b"%PDF")
        attachment = storage.import_external(source)
        assert attachment.original_name == "syllabus.pdf"
        assert attachment.stored_file_name.endswith(".pdf")
        assert storage.resolve_location(attachment).read_bytes() == b"%PDF"
        assert source.exists()

    def test_import_missing_source_raises(self, storage, tmp_path):
        with pytest.raises(OSError):
            storage.import_external(tmp_path / "missing.txt")


class TestDelete:
    """Deletion is best effort."""

    def test_delete_removes_blob(self, storage, stored_attachment):
        storage.delete(stored_attachment)
        assert not storage.resolve_location(stored_attachment).exists()

    def test_delete_missing_blob_is_silent(self, storage, stored_attachment):
        storage.delete(stored_attachment)
        storage.delete(stored_attachment)


class TestBatchImport:
    """One failing item never aborts its siblings."""

    async def test_import_many_skips_failures(self, storage, tmp_path):
        good = tmp_path / "a.txt"
        good.write_text("a", encoding="utf-8")
        other = tmp_path / "b.wav"
        other.write_bytes(b"RIFF")

        attachments = await storage.import_many([good, tmp_path / "missing.png", other])
        assert [a.original_name for a in attachments] == ["a.txt", "b.wav"]
        assert [a.kind for a in attachments] == [AttachmentKind.FILE, AttachmentKind.AUDIO]

    async def test_save_many(self, storage):
        attachments = await storage.save_many([(b"1", "one.png"), (b"2", None)])
        assert [a.original_name for a in attachments] == ["one.png", "Photo.jpg"]
