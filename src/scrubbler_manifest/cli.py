"""scrubbler-manifest CLI - generate the plugin manifest for a release."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from scrubbler_manifest import __version__

from .config import ConfigError, load_config
from .exceptions import ManifestError
from .generator import ManifestGenerator
from .models import ManifestEntry
from .serializer import write_manifest

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)
logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    """Send log records to stderr; debug output only with --verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    logging.getLogger("scrubbler_manifest").setLevel(level)


class _ManifestCommand(click.Command):
    """Command whose usage errors exit with status 1."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _report_entry(entry: ManifestEntry) -> None:
    console.print(
        f"Added {escape(entry.name)} v{entry.version} ({escape(entry.plugin_type)})"
    )


@click.command(cls=_ManifestCommand)
@click.version_option(version=__version__, prog_name="scrubbler-manifest")
@click.argument("zip_dir", type=click.Path(file_okay=False, path_type=Path))
@click.argument("output_json", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("base_download_url")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file overriding naming conventions and output options",
)
@click.option("--no-icons", is_flag=True, help="Leave iconUri out of every entry")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(zip_dir, output_json, base_download_url, config_path, no_icons, verbose):
    """Generate a plugin manifest from a directory of plugin archives.

    Example: scrubbler-manifest ./dist ./site/plugins.json https://example.org/downloads
    """
    _setup_logging(verbose)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    if no_icons:
        config = config.model_copy(update={"include_icons": False})
    logger.debug(f"Generator config: {config.model_dump()}")

    generator = ManifestGenerator(base_download_url, config)
    try:
        archives = generator.find_archives(zip_dir)
        console.print(f"Found {len(archives)} plugin archives in {escape(str(zip_dir))}")
        entries = generator.inspect_all(archives, on_entry=_report_entry)
    except ManifestError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    try:
        count = write_manifest(entries, output_json)
    except OSError as e:
        err_console.print(f"[red]Failed to write {escape(str(output_json))}: {escape(str(e))}[/red]")
        raise SystemExit(1)
    console.print(f"[green]Wrote {count} entries to {escape(str(output_json))}[/green]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
