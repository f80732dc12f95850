"""Manifest generator - core pipeline."""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from .config import GeneratorConfig
from .exceptions import InspectionError
from .extractor import extracted_archive
from .inspector import inspect_archive
from .locator import find_archives
from .models import ManifestEntry

logger = logging.getLogger(__name__)


class ManifestGenerator:
    """Build manifest entries from a directory of plugin archives.

    Pipeline, one archive at a time:
    1. Locate archives matching the configured pattern
    2. Extract each into its own temp directory
    3. Import the main plugin module and read declared metadata
    4. Classify and collect entries in processing order

    An archive without a main plugin module is skipped. Any other failure
    aborts the whole run so that a partial manifest is never produced.
    """

    def __init__(self, base_url: str, config: GeneratorConfig | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.config = config or GeneratorConfig()

    def find_archives(self, zip_dir: Path) -> list[Path]:
        return find_archives(zip_dir, self.config.archive_pattern)

    def inspect(
        self,
        archive: Path,
        on_entry: Callable[[ManifestEntry], Any] | None = None,
    ) -> list[ManifestEntry]:
        """Extract one archive and return its entries.

        The error is logged at DEBUG only; callers report it to the user.

        Raises:
            InspectionError: On any extraction or inspection failure.
        """
        try:
            with extracted_archive(archive, self.config.temp_prefix) as extract_dir:
                return inspect_archive(
                    archive, extract_dir, self.base_url, self.config, on_entry
                )
        except Exception as e:
            logger.debug(f"Failed to inspect {archive}: {e}")
            raise InspectionError(archive, e) from e

    def inspect_all(
        self,
        archives: Iterable[Path],
        on_entry: Callable[[ManifestEntry], Any] | None = None,
    ) -> list[ManifestEntry]:
        """Inspect archives in order and collect their entries.

        Args:
            archives: Archive paths, processed in the given order.
            on_entry: Called with each entry as soon as it is collected.
        """
        entries: list[ManifestEntry] = []
        for archive in archives:
            entries.extend(self.inspect(archive, on_entry))
        return entries

    def generate(self, zip_dir: Path) -> list[ManifestEntry]:
        """Locate and inspect every archive in ``zip_dir``.

        Raises:
            ManifestError: If no archives are found or any archive fails.
        """
        archives = self.find_archives(zip_dir)
        logger.info(f"Found {len(archives)} plugin archives in {zip_dir}")
        return self.inspect_all(archives)

