"""Locate plugin archives in a release directory."""

import logging
from pathlib import Path

from .exceptions import NoArchivesFoundError

logger = logging.getLogger(__name__)


def find_archives(directory: Path, pattern: str) -> list[Path]:
    """Return archives in ``directory`` matching ``pattern``, sorted by name.

    Only the top level of the directory is scanned.

    Raises:
        NoArchivesFoundError: If nothing matches, or the directory is missing.
    """
    if not directory.is_dir():
        logger.debug(f"Archive directory does not exist: {directory}")
        raise NoArchivesFoundError(directory, pattern)

    archives = sorted(p for p in directory.glob(pattern) if p.is_file())
    if not archives:
        raise NoArchivesFoundError(directory, pattern)

    logger.debug(f"Found {len(archives)} archive(s) in {directory}")
    return archives
