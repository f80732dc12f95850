"""Plugin capability markers and the metadata decorator.

Plugin modules shipped in release archives subclass one of the markers below
and declare their human-facing metadata with ``@plugin_metadata``::

    from scrubbler_manifest.abstractions import (
        AccountPlugin,
        Platform,
        plugin_metadata,
    )

    __version__ = "1.4.0+3f2a9c1"

    @plugin_metadata(
        name="Last.fm",
        description="Scrobble to a Last.fm account",
        supported_platforms=Platform.WINDOWS | Platform.LINUX,
    )
    class LastFmPlugin(AccountPlugin):
        ...

The generator never calls into plugin code; it only reads the markers a class
inherits from and the metadata record attached to it.
"""

import enum
from abc import ABC

from pydantic import BaseModel, ConfigDict, Field, field_validator

METADATA_ATTR = "__plugin_metadata__"


class Platform(enum.Flag):
    """Platforms a plugin can declare support for."""

    WINDOWS = enum.auto()
    MACOS = enum.auto()
    LINUX = enum.auto()


_PLATFORM_LABELS = {
    Platform.WINDOWS: "Windows",
    Platform.MACOS: "MacOS",
    Platform.LINUX: "Linux",
}


def format_platforms(platforms: Platform) -> str:
    """Render a platform flag as its labels joined by ", "."""
    return ", ".join(
        label for member, label in _PLATFORM_LABELS.items() if member in platforms
    )


class PluginMetadata(BaseModel):
    """Metadata a plugin class declares about itself."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field(..., min_length=1, description="One-line summary")
    supported_platforms: str = Field(
        ...,
        min_length=1,
        description="Platform labels joined by ', ' (e.g. 'Windows, Linux')",
    )

    @field_validator("supported_platforms", mode="before")
    @classmethod
    def render_platform_flag(cls, value):
        if isinstance(value, Platform):
            return format_platforms(value)
        return value


def plugin_metadata(name: str, description: str, supported_platforms):
    """Class decorator attaching a validated PluginMetadata record.

    Args:
        name: Display name shown in the plugin marketplace.
        description: Short description of what the plugin does.
        supported_platforms: A Platform flag or a ready-made
            ", "-separated string of platform labels.
    """
    metadata = PluginMetadata(
        name=name,
        description=description,
        supported_platforms=supported_platforms,
    )

    def decorate(cls):
        setattr(cls, METADATA_ATTR, metadata)
        return cls

    return decorate


class Plugin(ABC):
    """Base marker every Scrubbler plugin implements."""


class AccountPlugin(Plugin):
    """Plugin that manages a user account on a remote service."""


class ScrobblePlugin(Plugin):
    """Plugin that scrobbles on explicit user action."""


class AutoScrobblePlugin(Plugin):
    """Plugin that scrobbles automatically from a running media player."""
