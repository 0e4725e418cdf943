"""CLI entry point for missionrec."""

import logging
import shutil
from pathlib import Path

import click

from missionrec import __version__
from missionrec.config import MissionRecConfig
from missionrec.paths import (
    ensure_dirs,
    get_archives_dir,
    get_config_path,
    get_data_dir,
    get_records_dir,
    get_temp_root,
)


def _load_config():
    """Load config from the resolved data directory. Returns (cfg, data_dir)."""
    cfg = MissionRecConfig.load(get_config_path(get_data_dir()))
    data_dir = get_data_dir(cfg.storage.data_dir)
    if data_dir != get_data_dir():
        cfg = MissionRecConfig.load(get_config_path(data_dir))
    return cfg, data_dir


def _pack(source, destination, compresslevel):
    """Finalize an existing directory into an archive. Returns the FinalizeResult."""
    from missionrec.errors import MissionRecordError
    from missionrec.session import RecordingSession
    from missionrec.spec import RecordingSpec

    spec = RecordingSpec(is_recording=True, temp_dir=Path(source), destination=Path(destination))
    session = RecordingSession(spec, compresslevel=compresslevel)
    try:
        return session.finalize()
    except MissionRecordError as e:
        raise click.ClickException(str(e))


def _report(result, destination):
    if result.skipped:
        click.echo(f"Skipped {len(result.skipped)} unreadable file(s):")
        for path in result.skipped:
            click.echo(f"  {path}")
    if result.archive_path is not None:
        click.echo(f"Archived {len(result.archived)} file(s) to {result.archive_path}")
    elif result.archived:
        raise click.ClickException(f"Unable to write recording to {destination}")
    else:
        click.echo("Nothing to archive.")


@click.group()
@click.version_option(version=__version__, prog_name="missionrec")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose):
    """Package mission recordings into compressed archives."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


@main.command()
@click.argument("source", type=click.Path(exists=True, file_okay=False))
@click.argument("destination", type=click.Path(dir_okay=False))
def pack(source, destination):
    """Archive SOURCE into DESTINATION (.tar.gz) and remove SOURCE.

    Use this to recover a session directory left behind by a process that
    exited before finalizing.
    """
    dest = Path(destination)
    if dest.resolve().is_relative_to(Path(source).resolve()):
        raise click.ClickException(
            f"Destination {dest} is inside {source}, which is removed after packing."
        )
    cfg, _ = _load_config()
    dest.parent.mkdir(parents=True, exist_ok=True)
    result = _pack(source, dest, cfg.recording.compress_level)
    _report(result, dest)


@main.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False))
def contents(archive):
    """List the files stored in a recording ARCHIVE."""
    from missionrec.archive import list_archive
    from missionrec.errors import ArchiveReadError

    try:
        names = list_archive(Path(archive))
    except ArchiveReadError as e:
        raise click.ClickException(str(e))

    if not names:
        click.echo("Archive is empty.")
        return
    for name in names:
        click.echo(name)


@main.command()
@click.option("--recover", is_flag=True, help="Archive each leftover session into the archives directory.")
@click.option("--clean", is_flag=True, help="Delete leftover session directories.")
def orphans(recover, clean):
    """List session temp directories that were never finalized."""
    if recover and clean:
        raise click.ClickException("--recover and --clean are mutually exclusive.")

    cfg, data_dir = _load_config()
    records_dir = get_records_dir(get_temp_root(data_dir, cfg.storage.temp_root))
    leftovers = sorted(p for p in records_dir.glob("*") if p.is_dir()) if records_dir.exists() else []
    if not leftovers:
        click.echo("No leftover sessions found.")
        return

    if recover:
        ensure_dirs(data_dir)
        archives_dir = get_archives_dir(data_dir)
        for path in leftovers:
            dest = archives_dir / f"{path.name}.tar.gz"
            click.echo(f"Recovering {path.name}...")
            _report(_pack(path, dest, cfg.recording.compress_level), dest)
        return

    for path in leftovers:
        if clean:
            shutil.rmtree(path, ignore_errors=True)
            click.echo(f"Removed {path}")
        else:
            click.echo(str(path))


@main.command()
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--list", "list_all", is_flag=True, help="Show all configuration values.")
def config(key, value, list_all):
    """View or set configuration."""
    cfg, data_dir = _load_config()
    config_path = get_config_path(data_dir)

    if list_all or (key is None and value is None):
        for section_name, section_dict in cfg._to_dict().items():
            for k, v in section_dict.items():
                click.echo(f"{section_name}.{k} = {v!r}")
        return

    if value is None:
        try:
            click.echo(cfg.get(key))
        except KeyError as e:
            raise click.ClickException(str(e))
        return

    try:
        cfg.set(key, value)
    except (KeyError, ValueError) as e:
        raise click.ClickException(str(e))
    cfg.save(config_path)
    click.echo(f"Set {key} = {cfg.get(key)!r}")
