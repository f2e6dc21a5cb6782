"""
app/core/config.py

Centralised configuration loaded from environment variables.
Use a .env file locally; the defaults match the service's fixed limits.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

#: Directory holding the packaged HTML templates.
PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class Settings(BaseSettings):
    # ── Application ────────────────────────────────────────────────────────────
    app_name: str = "Three-File ZIP Bundler"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: Optional[str] = None   # e.g. "WARNING"; overrides debug

    # ── Server ─────────────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8080

    # ── Paths ──────────────────────────────────────────────────────────────────
    upload_dir: Path = Path("./uploads")
    templates_dir: Path = PACKAGE_TEMPLATES_DIR

    # ── Upload limits ──────────────────────────────────────────────────────────
    max_upload_size: int = 30 * 1024 * 1024   # whole request body, in bytes
    required_file_count: int = 3
    copy_chunk_size: int = 64 * 1024           # bytes per read when archiving

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def max_upload_size_mb(self) -> int:
        """Upload limit rounded down to whole megabytes, for error messages."""
        return self.max_upload_size // (1024 * 1024)


# Single shared instance — import this everywhere.
settings = Settings()
