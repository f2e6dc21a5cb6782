"""
app/core/bootstrap.py

Startup housekeeping run from the application lifespan.
"""

from pathlib import Path
from typing import List

from app.core.config import Settings, settings
from app.core.logger import get_logger

logger = get_logger(__name__)


def ensure_directories(config: Settings = settings) -> List[Path]:
    """
    Create the upload and template directories if they are missing.

    Returns:
        The directories that were checked, in creation order.

    Raises:
        OSError: A directory could not be created; startup must not continue.
    """
    directories = [Path(config.upload_dir), Path(config.templates_dir)]
    for directory in directories:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.critical("Failed to create directory '%s': %s", directory, exc)
            raise
        logger.debug("Directory ready: %s", directory)
    return directories
