"""Map plugin classes to marketplace category labels."""

from .abstractions import AccountPlugin, AutoScrobblePlugin, ScrobblePlugin

# Checked in order; the first marker a class inherits from decides its label.
# Add new plugin kinds here.
PLUGIN_TYPES: list[tuple[type, str]] = [
    (AccountPlugin, "Account Plugin"),
    (ScrobblePlugin, "Scrobble Plugin"),
    (AutoScrobblePlugin, "Scrobble Plugin"),
]

FALLBACK_LABEL = "Plugin"


def resolve_plugin_type(
    plugin_cls: type,
    plugin_types: list[tuple[type, str]] | None = None,
) -> str:
    """Return the label of the first marker ``plugin_cls`` subclasses."""
    for marker, label in plugin_types if plugin_types is not None else PLUGIN_TYPES:
        if issubclass(plugin_cls, marker):
            return label
    return FALLBACK_LABEL
