"""
app/core/constants.py

Application-wide fixed constants.

These are business rules that are part of the system's contract and are
NOT configurable via environment variables.
"""

# ── Allowed file types ─────────────────────────────────────────────────────────

#: Extensions (lower-case, with dot) accepted into the archive.
ALLOWED_EXTENSIONS: frozenset = frozenset({".pdf", ".jpg", ".jpeg"})

# ── Upload form ────────────────────────────────────────────────────────────────

#: Multipart field carrying the uploaded files.
UPLOAD_FIELD_NAME: str = "files"

# ── Archive response ───────────────────────────────────────────────────────────

#: Filename suggested to the client in Content-Disposition.
ARCHIVE_DOWNLOAD_NAME: str = "archive.zip"

#: Content type of the returned archive.
ARCHIVE_MEDIA_TYPE: str = "application/zip"

#: Prefix of the per-request archive files written to the upload directory.
ARCHIVE_FILE_PREFIX: str = "archive-"
