"""Manifest entry model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ManifestEntry(BaseModel):
    """One plugin as published in the release manifest."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(description="Lower-case fully qualified plugin class name")
    name: str
    version: str
    description: str
    icon_uri: str | None = None
    plugin_type: str = Field(description="Category label, e.g. 'Account Plugin'")
    supported_platforms: tuple[str, ...] = ()
    source_uri: str = Field(description="Download URL of the plugin archive")

    def to_manifest_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
