"""
app/services/archive_service.py

Builds the per-request ZIP archive from uploaded files:

    [UploadFile, ...]
      └─ extension check          (per file, inside the loop)
           └─ ZipFile.open(name)  → chunked copy from the upload
                └─ BuiltArchive   (path, entries, size)

Every request writes to its own archive file inside the upload directory,
so concurrent requests never touch each other's output. The service owns
cleanup on failure; on success the caller removes the file via discard()
once the response has been sent.
"""

from __future__ import annotations

import uuid
import zipfile
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional, Sequence

from fastapi import UploadFile

from app.core.config import settings
from app.core.constants import ALLOWED_EXTENSIONS, ARCHIVE_FILE_PREFIX
from app.core.exceptions import ArchiveWriteError, DisallowedFileTypeError
from app.core.logger import get_logger
from app.models.archive_models import BuiltArchive

logger = get_logger(__name__)


def file_extension(filename: str) -> str:
    """Return the lower-cased extension of *filename*, dot included ('' if none)."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    dot = name.rfind(".")
    return name[dot:].lower() if dot != -1 else ""


class ArchiveService:
    """
    Streams uploaded files into a freshly created ZIP archive.

    Design choices:
    - **All or nothing**: the first disallowed or unreadable file aborts the
      whole archive and the partial file is deleted before the error
      propagates.
    - **Late-bound settings**: upload directory and chunk size fall back to
      the shared settings object at call time, so tests can redirect them.
    """

    def __init__(
        self,
        upload_dir: Optional[Path] = None,
        allowed_extensions: Optional[Iterable[str]] = None,
        chunk_size: Optional[int] = None,
    ) -> None:
        self._upload_dir = upload_dir
        self._allowed = frozenset(
            ext.lower() for ext in (allowed_extensions or ALLOWED_EXTENSIONS)
        )
        self._chunk_size = chunk_size

    # ── Public API ─────────────────────────────────────────────────────────────

    @property
    def upload_dir(self) -> Path:
        return Path(self._upload_dir or settings.upload_dir)

    @property
    def chunk_size(self) -> int:
        return self._chunk_size or settings.copy_chunk_size

    def is_allowed(self, filename: str) -> bool:
        """True when the file's extension (case-insensitive) is whitelisted."""
        return file_extension(filename) in self._allowed

    @staticmethod
    def entry_name(filename: str) -> str:
        """Archive entry name for an upload: the client filename without any directory part."""
        return PurePosixPath(filename.replace("\\", "/")).name

    async def build_archive(self, files: Sequence[UploadFile]) -> BuiltArchive:
        """
        Write *files*, in order, into a new archive inside the upload directory.

        Args:
            files: Uploads taken from the multipart form.

        Returns:
            BuiltArchive describing the finished file on disk.

        Raises:
            DisallowedFileTypeError: A file's extension is not whitelisted.
            ArchiveWriteError:       Reading an upload or writing the ZIP failed.
        """
        path = self._new_archive_path()
        archive = BuiltArchive(path=path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(path, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
                for upload in files:
                    filename = upload.filename or ""
                    if not self.is_allowed(filename):
                        raise DisallowedFileTypeError(
                            f"Only PDF and JPEG files are allowed; '{filename}' was rejected."
                        )
                    name = self.entry_name(filename)
                    copied = await self._copy_into(zf, name, upload)
                    archive.entries.append(name)
                    logger.debug("Added '%s' to %s (%d bytes).", name, path.name, copied)
            archive.size = path.stat().st_size

        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
            self.discard(path)
            raise ArchiveWriteError(f"Failed to write archive '{path.name}': {exc}") from exc

        except BaseException:
            self.discard(path)
            raise

        logger.info(
            "Archive %s built — %d file(s), %d bytes.",
            path.name, archive.entry_count, archive.size,
        )
        return archive

    def discard(self, path: Path) -> None:
        """Remove an archive file; a file that is already gone is fine."""
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Could not remove archive '%s': %s", path, exc)
            return
        logger.debug("Removed archive %s.", path.name)

    # ── Internals ──────────────────────────────────────────────────────────────

    def _new_archive_path(self) -> Path:
        return self.upload_dir / f"{ARCHIVE_FILE_PREFIX}{uuid.uuid4().hex}.zip"

    async def _copy_into(self, zf: zipfile.ZipFile, name: str, upload: UploadFile) -> int:
        """Copy one upload into a new entry of *zf*; returns the bytes copied."""
        copied = 0
        await upload.seek(0)
        with zf.open(name, mode="w") as entry:
            while True:
                chunk = await upload.read(self.chunk_size)
                if not chunk:
                    break
                entry.write(chunk)
                copied += len(chunk)
        return copied


# ── Module-level singleton ─────────────────────────────────────────────────────
# Controllers import this instance.  Tests construct ArchiveService directly
# with a temporary upload directory.

archive_service = ArchiveService()
