"""JSON output of the plugin manifest."""

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from .models import ManifestEntry

logger = logging.getLogger(__name__)


def render_manifest(entries: Sequence[ManifestEntry]) -> str:
    """Render entries as an indented JSON array, omitting unset fields."""
    data = [entry.to_manifest_dict() for entry in entries]
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_manifest(entries: Sequence[ManifestEntry], path: Path) -> int:
    """Write the manifest to ``path``, creating parent directories.

    Returns:
        Number of entries written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_manifest(entries), encoding="utf-8")
    logger.info(f"Wrote {len(entries)} manifest entries to {path}")
    return len(entries)
