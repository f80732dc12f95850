"""Shared fixtures: plugin archives built on the fly in tmp_path."""

import tempfile
import zipfile
from pathlib import Path

import pytest

LASTFM_PLUGIN = '''
from scrubbler_manifest.abstractions import AccountPlugin, Platform, plugin_metadata

__version__ = "1.4.0+3f2a9c1"


@plugin_metadata(
    name="Last.fm",
    description="Scrobble to a Last.fm account",
    supported_platforms=Platform.WINDOWS | Platform.LINUX,
)
class LastFmPlugin(AccountPlugin):
    pass
'''

MEDIA_PLAYER_PLUGIN = '''
from abc import abstractmethod

from scrubbler_manifest.abstractions import (
    AutoScrobblePlugin,
    ScrobblePlugin,
    plugin_metadata,
)

__version__ = "0.9.2"


class PlayerPluginBase(AutoScrobblePlugin):
    @abstractmethod
    def poll(self):
        ...


@plugin_metadata(
    name="Foobar2000",
    description="Scrobble tracks played in foobar2000",
    supported_platforms="Windows",
)
class FoobarPlugin(PlayerPluginBase):
    def poll(self):
        return None


@plugin_metadata(
    name="Manual",
    description="Scrobble tracks by hand",
    supported_platforms="Windows, MacOS, Linux",
)
class ManualPlugin(ScrobblePlugin):
    pass
'''

UNDECLARED_PLUGIN = '''
from scrubbler_manifest.abstractions import ScrobblePlugin


class UndeclaredPlugin(ScrobblePlugin):
    pass
'''

NESTED_PLUGIN = '''
from scrubbler_manifest.abstractions import (
    AccountPlugin,
    Platform,
    ScrobblePlugin,
    plugin_metadata,
)

__version__ = "2.1.0"


class Services:
    @plugin_metadata(
        name="ListenBrainz",
        description="Submit listens to ListenBrainz",
        supported_platforms=Platform.LINUX,
    )
    class ListenBrainzPlugin(AccountPlugin):
        pass

    Shared = ScrobblePlugin


@plugin_metadata(
    name="Libre.fm",
    description="Scrobble to Libre.fm",
    supported_platforms=Platform.WINDOWS,
)
class LibreFmPlugin(AccountPlugin):
    pass
'''

PARTIALLY_DECLARED_PLUGIN = '''
from scrubbler_manifest.abstractions import (
    AccountPlugin,
    Platform,
    ScrobblePlugin,
    plugin_metadata,
)


@plugin_metadata(
    name="Declared",
    description="Has metadata",
    supported_platforms=Platform.WINDOWS,
)
class DeclaredPlugin(AccountPlugin):
    pass


class ForgottenPlugin(ScrobblePlugin):
    pass
'''


@pytest.fixture(autouse=True)
def isolated_tempdir(tmp_path, monkeypatch):
    """Point tempfile.gettempdir() at a per-test directory."""
    temp_root = tmp_path / "tmp"
    temp_root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(temp_root))
    return temp_root


@pytest.fixture
def zip_dir(tmp_path):
    path = tmp_path / "zips"
    path.mkdir()
    return path


@pytest.fixture
def make_archive(zip_dir):
    """Create a zip in zip_dir from a {member name: text} mapping."""

    def _create(name: str, files: dict[str, str]) -> Path:
        path = zip_dir / name
        with zipfile.ZipFile(path, "w") as zf:
            for member, content in files.items():
                zf.writestr(member, content)
        return path

    return _create


@pytest.fixture
def lastfm_archive(make_archive):
    return make_archive(
        "scrubbler-plugin-lastfm.zip",
        {"scrubbler_plugin_lastfm.py": LASTFM_PLUGIN},
    )


@pytest.fixture
def media_player_archive(make_archive):
    return make_archive(
        "scrubbler-plugin-mediaplayers.zip",
        {
            "scrubbler_plugin_mediaplayers.py": MEDIA_PLAYER_PLUGIN,
            "README.txt": "media player scrobblers",
        },
    )


@pytest.fixture
def undeclared_archive(make_archive):
    return make_archive(
        "scrubbler-plugin-undeclared.zip",
        {"scrubbler_plugin_undeclared.py": UNDECLARED_PLUGIN},
    )


@pytest.fixture
def empty_archive(make_archive):
    """Archive whose contents hold no main plugin module."""
    return make_archive(
        "scrubbler-plugin-assets.zip",
        {"icons/assets.png": "not really a png", "notes.md": "# assets"},
    )


@pytest.fixture
def partially_declared_archive(make_archive):
    """Archive whose second plugin class forgot its metadata."""
    return make_archive(
        "scrubbler-plugin-partial.zip",
        {"scrubbler_plugin_partial.py": PARTIALLY_DECLARED_PLUGIN},
    )
