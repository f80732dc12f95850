"""Scoped extraction of plugin archives into the temp area."""

import logging
import shutil
import tempfile
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


def extraction_dir(archive: Path, prefix: str) -> Path:
    """Temp directory an archive is extracted into, named after the archive."""
    return Path(tempfile.gettempdir()) / f"{prefix}{archive.stem}"


@contextmanager
def extracted_archive(archive: Path, prefix: str = "scrubbler_plugin_") -> Iterator[Path]:
    """Extract ``archive`` and yield the directory holding its contents.

    A directory left over from an earlier failed run is wiped first. The
    directory is removed when the block exits, whether or not it raised;
    removal errors are ignored.

    Raises:
        zipfile.BadZipFile: If the archive is not a valid zip file.
        OSError: If the archive cannot be read or extracted.
    """
    target = extraction_dir(archive, prefix)
    if target.exists():
        logger.debug(f"Removing stale extraction directory {target}")
        shutil.rmtree(target)
    target.mkdir(parents=True)

    try:
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(target)
        logger.debug(f"Extracted {archive.name} to {target}")
        yield target
    finally:
        shutil.rmtree(target, ignore_errors=True)
