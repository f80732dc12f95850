"""Exceptions raised while generating a plugin manifest."""

from pathlib import Path


class ManifestError(Exception):
    """Base class for errors that abort manifest generation."""


class NoArchivesFoundError(ManifestError):
    """Raised when the input directory holds no plugin archives."""

    def __init__(self, directory: Path, pattern: str) -> None:
        self.directory = directory
        self.pattern = pattern
        super().__init__(f"No plugin archives matching '{pattern}' found in {directory}")


class MissingMetadataError(ManifestError):
    """Raised when a plugin class carries no @plugin_metadata declaration."""

    def __init__(self, class_name: str) -> None:
        self.class_name = class_name
        super().__init__(f"Plugin {class_name} has no plugin metadata")


class InspectionError(ManifestError):
    """Raised when an archive cannot be extracted or inspected."""

    def __init__(self, archive: Path, cause: Exception) -> None:
        self.archive = archive
        self.cause = cause
        super().__init__(f"Failed to inspect {archive.name}: {cause}")
