# ♥♥─── Attachment Storage ───────────────────────────────────────────────────────
"""Blob storage for task attachments, keyed by stored file name."""

from __future__ import annotations

from uuid import uuid4
from typing import TYPE_CHECKING, Protocol
import shutil
import asyncio
from pathlib import Path
import mimetypes

from studly.core.models import Attachment, AttachmentKind
from studly.custom_logger import log


if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_PHOTO_EXTENSION = "jpg"


# ─── Contract ─────────────────────────────────────────────────────────────────
class AttachmentStorage(Protocol):
    """Stores blobs and hands out :class:`Attachment` references to them."""

    def save(self, blob: bytes, suggested_name: str | None = None) -> Attachment: ...

    def import_external(self, source: Path) -> Attachment: ...

    def delete(self, attachment: Attachment) -> None: ...

    def resolve_location(self, attachment: Attachment) -> Path: ...


def classify_file(path: Path) -> AttachmentKind:
    """Map a file name to photo, audio or generic file by its MIME type."""
    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type is None:
        return AttachmentKind.FILE
    if mime_type.startswith("audio/"):
        return AttachmentKind.AUDIO
    if mime_type.startswith("image/"):
        return AttachmentKind.PHOTO
    return AttachmentKind.FILE


# ─── Filesystem Implementation ────────────────────────────────────────────────
class FileAttachmentStorage:
    """Stores attachment blobs as ``<uuid>.<ext>`` files inside one folder."""

    def __init__(self, folder: Path) -> None:
        self.folder = Path(folder)

    def _ensure_folder(self) -> None:
        self.folder.mkdir(parents=True, exist_ok=True)

    def save(self, blob: bytes, suggested_name: str | None = None) -> Attachment:
        """Write a picked photo.

        :param blob: Encoded image data.
        :param suggested_name: Name offered by the picker; its extension is kept.
        :returns: The photo attachment.
        :raises OSError: If the blob cannot be written.
        """
        self._ensure_folder()
        provided_ext = Path(suggested_name or "").suffix.lstrip(".")
        ext = provided_ext or DEFAULT_PHOTO_EXTENSION
        stored = f"{uuid4()}.{ext}"
        (self.folder / stored).write_bytes(blob)

        name = suggested_name if suggested_name else f"Photo.{ext}"
        log.debug("Stored photo '{}' as {}", name, stored)
        return Attachment(original_name=name, stored_file_name=stored, kind=AttachmentKind.PHOTO)

    def import_external(self, source: Path) -> Attachment:
        """Copy a user-picked file into storage.

        :param source: Location of the file to import.
        :returns: The attachment, classified by file type.
        :raises OSError: If the source cannot be read or copied.
        """
        self._ensure_folder()
        source = Path(source)
        ext = source.suffix
        stored = f"{uuid4()}{ext}"
        destination = self.folder / stored
        destination.unlink(missing_ok=True)
        shutil.copy2(source, destination)

        kind = classify_file(source)
        log.debug("Imported '{}' as {} ({})", source.name, stored, kind)
        return Attachment(original_name=source.name, stored_file_name=stored, kind=kind)

    def delete(self, attachment: Attachment) -> None:
        """Remove the blob; a file that is already gone is not an error."""
        location = self.resolve_location(attachment)
        try:
            location.unlink()
        except FileNotFoundError:
            log.debug("Attachment blob {} already absent", attachment.stored_file_name)
        except OSError as e:
            log.warning("Could not delete attachment blob {}: {}", attachment.stored_file_name, e)
        else:
            log.info("Deleted attachment blob {}", attachment.stored_file_name)

    def resolve_location(self, attachment: Attachment) -> Path:
        return self.folder / attachment.stored_file_name

    # ─── Batch Import ─────────────────────────────────────────────────────────
    async def import_many(self, sources: Iterable[Path]) -> list[Attachment]:
        """Import several files concurrently; a failing item is skipped, the rest continue.

        :param sources: Files picked by the user.
        :returns: The attachments that imported successfully, in input order.
        """
        sources = list(sources)
        results = await asyncio.gather(*(asyncio.to_thread(self.import_external, source) for source in sources), return_exceptions=True)
        return _collect_successes(results, [str(source) for source in sources])

    async def save_many(self, blobs: Iterable[tuple[bytes, str | None]]) -> list[Attachment]:
        """Store several picked photos concurrently with per-item recovery."""
        blobs = list(blobs)
        results = await asyncio.gather(*(asyncio.to_thread(self.save, data, name) for data, name in blobs), return_exceptions=True)
        return _collect_successes(results, [name or "photo" for _, name in blobs])


def _collect_successes(results: list[Attachment | BaseException], names: list[str]) -> list[Attachment]:
    attachments: list[Attachment] = []
    for name, result in zip(names, results, strict=True):
        if isinstance(result, Attachment):
            attachments.append(result)
        elif isinstance(result, Exception):
            log.warning("Skipping attachment '{}': {}", name, result)
        else:
            raise result
    return attachments
