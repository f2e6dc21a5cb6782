"""
app/models/archive_models.py

Data-transfer objects for the archive flow.
The request has no DTO — the upload controller reads the multipart form
directly; the response body is the ZIP file itself.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class BuiltArchive:
    """
    A finished ZIP archive waiting to be sent to the client.

    Attributes:
        path    : On-disk location of the per-request archive file.
        entries : Entry names in the order they were written.
        size    : Size of the archive file in bytes.
    """

    path: Path
    entries: List[str] = field(default_factory=list)
    size: int = 0

    @property
    def entry_count(self) -> int:
        return len(self.entries)
