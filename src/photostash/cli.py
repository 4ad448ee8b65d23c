"""Command line interface for Photostash."""

from __future__ import annotations

import asyncio
import difflib
import logging
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

from photostash.config import ConfigError, ConfigManager, PhotostashConfig
from photostash.console import DetailsViewer, RichNotifier, TableRenderer
from photostash.gallery.collaborators import Confirm
from photostash.gallery.manager import Gallery
from photostash.ingestion import DirectoryScanner

console = Console()

LOGGER = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    """Route log records to stderr through Rich.

    Args:
        level: Name of the minimum level to emit.
    """
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def _load_config() -> PhotostashConfig:
    """Return the effective configuration, surfacing errors as CLI errors.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    try:
        return ConfigManager().load()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _confirm_gate(assume_yes: bool) -> Confirm:
    if assume_yes:
        return lambda message: True
    return lambda message: click.confirm(message, default=False)


def _open_gallery(
    ctx: click.Context,
    *,
    confirm: Confirm | None = None,
    with_viewer: bool = False,
) -> tuple[Gallery, TableRenderer]:
    """Load configuration, set up logging, and open the configured gallery.

    Args:
        ctx: Click context carrying the global options.
        confirm: Confirmation gate for destructive commands.
        with_viewer: Whether selected photos are printed as a details table.

    Returns:
        tuple[Gallery, TableRenderer]: Open gallery and its renderer.
    """
    options = ctx.find_root().obj or {}
    config = _load_config()
    _configure_logging("DEBUG" if options.get("verbose") else config.logging.level)

    quiet = bool(options.get("quiet")) or config.cli.quiet_default
    renderer = TableRenderer(console)
    gallery = Gallery.from_config(
        config,
        RichNotifier(console, quiet=quiet),
        renderer=renderer,
        confirm=confirm,
        viewer=DetailsViewer(console) if with_viewer else None,
    )
    gallery.collection.refresh()
    return gallery, renderer


def _select_or_fail(gallery: Gallery, index: int) -> None:
    if gallery.selection.select(index) is None:
        raise click.ClickException(
            f"No photo at index {index}; the gallery holds {len(gallery.collection)} photo(s)."
        )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="photostash")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option("--quiet", is_flag=True, help="Suppress success notifications.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """Photostash keeps a local gallery of your photos.

    Returns:
        None: This function is invoked for its side effects.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("-r", "--recursive", is_flag=True, help="Include files in subdirectories.")
@click.option("--include-hidden", is_flag=True, help="Include hidden files in directories.")
@click.pass_context
def add(ctx: click.Context, paths: tuple[Path, ...], recursive: bool, include_hidden: bool) -> None:
    """Add image files (or the images inside directories) to the gallery.

    Args:
        ctx: Click context.
        paths: Files or directories to ingest.
        recursive: Whether to descend into subdirectories.
        include_hidden: Whether hidden files inside directories are considered.
    """
    gallery, _ = _open_gallery(ctx)
    scanner = DirectoryScanner(recursive=recursive, include_hidden=include_hidden)
    descriptors = list(scanner.scan(paths))
    LOGGER.debug("Discovered %d candidate file(s).", len(descriptors))

    outcome = asyncio.run(gallery.ingest(descriptors))
    if not outcome.succeeded:
        ctx.exit(1)


@cli.command("list")
@click.option("--json", "json_output", is_flag=True, help="Emit photo metadata as JSON.")
@click.pass_context
def list_photos(ctx: click.Context, json_output: bool) -> None:
    """List the photos in the gallery, most recent first.

    Args:
        ctx: Click context.
        json_output: Emit JSON without image payloads instead of a table.
    """
    gallery, renderer = _open_gallery(ctx)
    if json_output:
        payload = [
            {key: value for key, value in record.to_payload().items() if key != "data"}
            for record in gallery.collection
        ]
        console.print_json(data=payload)
        return
    renderer.print_table()


@cli.command()
@click.argument("index", type=int)
@click.pass_context
def show(ctx: click.Context, index: int) -> None:
    """Show the details of the photo at INDEX.

    Args:
        ctx: Click context.
        index: Position of the photo in the gallery listing.
    """
    gallery, _ = _open_gallery(ctx, with_viewer=True)
    _select_or_fail(gallery, index)


@cli.command()
@click.argument("index", type=int)
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory receiving the image file.",
)
@click.pass_context
def download(ctx: click.Context, index: int, output: Path) -> None:
    """Save the original image of the photo at INDEX.

    Args:
        ctx: Click context.
        index: Position of the photo in the gallery listing.
        output: Destination directory.
    """
    gallery, _ = _open_gallery(ctx)
    _select_or_fail(gallery, index)
    photo = gallery.selection.download()
    if photo is None:
        ctx.exit(1)
    output.mkdir(parents=True, exist_ok=True)
    target = output / Path(photo.filename).name
    target.write_bytes(photo.content)
    console.print(f"Saved {target}")


@cli.command()
@click.argument("index", type=int, required=False)
@click.option("--id", "photo_id", type=str, help="Delete the photo with this id instead.")
@click.option("-y", "--yes", "assume_yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, index: int | None, photo_id: str | None, assume_yes: bool) -> None:
    """Delete the photo at INDEX (or with --id) after confirmation.

    Args:
        ctx: Click context.
        index: Position of the photo in the gallery listing.
        photo_id: Identifier of the photo to delete.
        assume_yes: Skip the confirmation prompt.
    """
    if (index is None) == (photo_id is None):
        raise click.UsageError("Pass either INDEX or --id.")

    gallery, _ = _open_gallery(ctx, confirm=_confirm_gate(assume_yes))
    target = index if photo_id is None else gallery.collection.index_of(photo_id)
    if target is None:
        raise click.ClickException(f"No photo with id {photo_id}.")
    _select_or_fail(gallery, target)

    if gallery.collection.delete_selected(gallery.selection) is None:
        console.print("[yellow]Nothing deleted.[/yellow]")


@cli.command()
@click.option("-y", "--yes", "assume_yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def clear(ctx: click.Context, assume_yes: bool) -> None:
    """Delete every photo in the gallery.

    Args:
        ctx: Click context.
        assume_yes: Skip the confirmation prompt.
    """
    gallery, _ = _open_gallery(ctx, confirm=_confirm_gate(assume_yes))
    if not gallery.collection.clear_all():
        console.print("[yellow]Clear cancelled.[/yellow]")


@cli.command()
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory receiving the backup file.",
)
@click.pass_context
def export(ctx: click.Context, output: Path) -> None:
    """Write a JSON backup of the whole gallery.

    Args:
        ctx: Click context.
        output: Destination directory.
    """
    gallery, _ = _open_gallery(ctx)
    artifact = gallery.collection.export()
    output.mkdir(parents=True, exist_ok=True)
    target = output / artifact.filename
    target.write_text(artifact.content, encoding="utf-8")
    console.print(f"Wrote {target}")


@cli.command()
@click.option("--json", "json_output", is_flag=True, help="Emit statistics as JSON.")
@click.pass_context
def stats(ctx: click.Context, json_output: bool) -> None:
    """Show the number of photos and the size of the stored collection.

    Args:
        ctx: Click context.
        json_output: Emit JSON instead of text.
    """
    gallery, _ = _open_gallery(ctx)
    payload: dict[str, Any] = {
        "count": len(gallery.collection),
        "storage_bytes": gallery.store.size_bytes(),
    }
    if json_output:
        console.print_json(data=payload)
        return
    console.print(f"{payload['count']} photo(s), {payload['storage_bytes']} bytes stored.")


@cli.group()
def config() -> None:
    """Manage Photostash configuration.

    Returns:
        None: This function is invoked for its side effects.
    """


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Args:
        no_env: If True, ignore environment-derived overrides.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path such as ``storage.max_bytes``.
        value: YAML-literal value to write.

    Raises:
        click.ClickException: If parsing or validation fails.
    """
    manager = ConfigManager()
    try:
        parsed_value = yaml.safe_load(value)
        manager.ensure_exists()
        before = manager.read_text().splitlines()
        manager.update(key, parsed_value)
    except (ConfigError, yaml.YAMLError) as exc:
        raise click.ClickException(f"Unable to update configuration: {exc}") from exc

    after = manager.read_text().splitlines()
    diff = difflib.unified_diff(
        before, after, fromfile="config.yaml (before)", tofile="config.yaml (after)", lineterm=""
    )
    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {key}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point.

    Returns:
        None: This function is invoked for its side effects.
    """
    cli()


if __name__ == "__main__":
    main()
