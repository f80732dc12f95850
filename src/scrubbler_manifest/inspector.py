"""Read plugin metadata from an extracted plugin archive.

The main module of an archive is imported in isolation: its directory sits on
``sys.path`` only while the module is being inspected, and every module that
was imported from the extraction directory is evicted from ``sys.modules``
afterwards so that later archives never see stale code.
"""

import importlib.util
import inspect
import logging
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType
from typing import Any
from urllib.parse import quote

from .abstractions import METADATA_ATTR, Plugin, PluginMetadata
from .classifier import resolve_plugin_type
from .config import GeneratorConfig
from .exceptions import MissingMetadataError
from .models import ManifestEntry

logger = logging.getLogger(__name__)

PLATFORM_SEPARATOR = ", "


def find_main_module(directory: Path, pattern: str) -> Path | None:
    """Return the first top-level file in ``directory`` matching ``pattern``."""
    matches = sorted(p for p in directory.glob(pattern) if p.is_file())
    return matches[0] if matches else None


def _is_under(module: ModuleType, root: Path) -> bool:
    location = getattr(module, "__file__", None)
    if not location:
        return False
    try:
        return Path(location).resolve().is_relative_to(root)
    except OSError:
        return False


@contextmanager
def load_plugin_module(path: Path) -> Iterator[ModuleType]:
    """Import the module at ``path`` for the duration of the block.

    Raises:
        ImportError: If no loader can be created for the file.
        Exception: Anything the module raises while executing.
    """
    root = path.parent.resolve()
    root_str = str(root)
    name = path.stem

    sys.path.insert(0, root_str)
    importlib.invalidate_caches()
    try:
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load plugin module from {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        spec.loader.exec_module(module)
        logger.debug(f"Loaded plugin module {name} from {path}")
        yield module
    finally:
        try:
            sys.path.remove(root_str)
        except ValueError:
            pass
        sys.path_importer_cache.pop(root_str, None)
        for mod_name, mod in list(sys.modules.items()):
            if mod_name == name or _is_under(mod, root):
                del sys.modules[mod_name]


def _defined_classes(
    namespace: dict, module_name: str, owner: str | None = None
) -> Iterator[type]:
    for obj in namespace.values():
        if not inspect.isclass(obj) or obj.__module__ != module_name:
            continue
        # Inside a class body only classes defined there count, not references.
        if owner is not None and obj.__qualname__ != f"{owner}.{obj.__name__}":
            continue
        yield obj
        yield from _defined_classes(vars(obj), module_name, obj.__qualname__)


def find_plugin_classes(module: ModuleType) -> list[type]:
    """Concrete Plugin subclasses defined in ``module``, in definition order.

    Classes nested inside other classes are included, each directly after
    the class that encloses it.
    """
    found: list[type] = []
    for obj in _defined_classes(vars(module), module.__name__):
        if obj in found:
            continue
        if issubclass(obj, Plugin) and not inspect.isabstract(obj):
            found.append(obj)
    return found


def read_metadata(plugin_cls: type) -> PluginMetadata:
    """Return the metadata declared on ``plugin_cls``.

    Raises:
        MissingMetadataError: If the class was not decorated.
    """
    metadata = getattr(plugin_cls, METADATA_ATTR, None)
    if not isinstance(metadata, PluginMetadata):
        raise MissingMetadataError(_qualified_name(plugin_cls) or plugin_cls.__name__)
    return metadata


def _qualified_name(plugin_cls: type) -> str | None:
    module = getattr(plugin_cls, "__module__", None)
    qualname = getattr(plugin_cls, "__qualname__", None)
    if not module or not qualname:
        return None
    return f"{module}.{qualname}"


def plugin_id(plugin_cls: type, archive: Path) -> str:
    """Lower-case qualified class name, or the archive stem when unavailable."""
    return (_qualified_name(plugin_cls) or archive.stem).lower()


def normalize_version(raw: object, default: str = "0.0.0") -> str:
    """Strip build metadata ("+sha") from a version, defaulting when unset."""
    if raw is None:
        return default
    version = str(raw).strip()
    if not version:
        return default
    return version.split("+", 1)[0]


def split_platforms(value: str) -> list[str]:
    return value.split(PLATFORM_SEPARATOR)


def build_url(base_url: str, plugins_path: str, file_name: str) -> str:
    """Join the download base URL, plugins segment and a file name."""
    return f"{base_url.rstrip('/')}/{plugins_path.strip('/')}/{quote(file_name)}"


def inspect_archive(
    archive: Path,
    extract_dir: Path,
    base_url: str,
    config: GeneratorConfig | None = None,
    on_entry: Callable[[ManifestEntry], Any] | None = None,
) -> list[ManifestEntry]:
    """Build manifest entries for every plugin class in an extracted archive.

    Args:
        archive: The original archive (used for ids and URLs).
        extract_dir: Directory the archive was extracted into.
        base_url: Download base URL for icon and source links.
        config: Naming conventions; defaults apply when omitted.
        on_entry: Called with each entry as soon as it is built, before the
            next class is inspected.

    Returns:
        Entries in class definition order. Empty when the archive holds no
        main plugin module.

    Raises:
        MissingMetadataError: If a plugin class has no declared metadata.
    """
    config = config or GeneratorConfig()

    module_path = find_main_module(extract_dir, config.module_pattern)
    if module_path is None:
        logger.warning(
            f"Skipping {archive.name}: no {config.module_pattern} found inside"
        )
        return []

    entries: list[ManifestEntry] = []
    with load_plugin_module(module_path) as module:
        version = normalize_version(
            getattr(module, "__version__", None), config.default_version
        )
        for plugin_cls in find_plugin_classes(module):
            metadata = read_metadata(plugin_cls)
            icon_uri = None
            if config.include_icons:
                icon_uri = build_url(base_url, config.plugins_path, f"{archive.stem}.png")

            entry = ManifestEntry(
                id=plugin_id(plugin_cls, archive),
                name=metadata.name,
                version=version,
                description=metadata.description,
                icon_uri=icon_uri,
                plugin_type=resolve_plugin_type(plugin_cls),
                supported_platforms=split_platforms(metadata.supported_platforms),
                source_uri=build_url(base_url, config.plugins_path, archive.name),
            )
            entries.append(entry)
            if on_entry is not None:
                on_entry(entry)
    return entries
