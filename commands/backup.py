"""
Backup command for WLED Backup CLI.

Discovers WLED controllers via mDNS and saves their configuration and presets.
"""

import sys
from pathlib import Path

import click

from core import __version__
from core.backup import backup_all
from core.config import (
    DEFAULT_IDENTITY,
    DEFAULT_OUT_DIR,
    DEFAULT_SEARCH_SECS,
    DEFAULT_WORKERS,
)
from core.discovery import discover_devices
from core.errors import DiscoveryError
from core.logger import setup_logger
from models.types import IdentityPolicy

CONTEXT_SETTINGS = {'help_option_names': ['-h', '--help']}


@click.command(name='wled-backup', context_settings=CONTEXT_SETTINGS)
@click.option('--out-dir', '-o', type=click.Path(file_okay=False, path_type=Path),
              default=DEFAULT_OUT_DIR, show_default=True, envvar='WLED_BACKUP_OUT_DIR',
              help='Directory to save backups in')
@click.option('--search-secs', '-s', type=click.IntRange(min=0),
              default=DEFAULT_SEARCH_SECS, show_default=True, envvar='WLED_BACKUP_SEARCH_SECS',
              help='Stop searching after this many seconds without a new announcement')
@click.option('--identity', type=click.Choice([p.value for p in IdentityPolicy]),
              default=DEFAULT_IDENTITY, show_default=True, envvar='WLED_BACKUP_IDENTITY',
              help="Name backups from cfg.json id.name ('config') or the mDNS host name ('hostname')")
@click.option('--workers', '-w', type=click.IntRange(min=1),
              default=DEFAULT_WORKERS, show_default=True, envvar='WLED_BACKUP_WORKERS',
              help='Number of devices to back up concurrently')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), default=None,
              envvar='WLED_BACKUP_TIMEOUT',
              help='Per-request HTTP timeout in seconds (default: wait indefinitely)')
@click.option('--verbose', '-v', is_flag=True, help='Log diagnostics to stderr')
@click.version_option(__version__, '--version')
def backup_command(out_dir: Path, search_secs: int, identity: str, workers: int,
                   timeout: float | None, verbose: bool):
    """Backup WLED presets from discovered devices.

    Searches the local network for WLED controllers, then saves each one's
    cfg.json and presets.json into the output directory. Exits with status 1
    if any device could not be backed up.

    \b
    Examples:
      uv run python wled_backup.py                         # Back up into the current directory
      uv run python wled_backup.py -o backups -s 10        # Search for 10 seconds
      uv run python wled_backup.py --identity hostname     # Name files after mDNS host names
    """
    log = setup_logger(debug=verbose)

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise click.ClickException(f"Failed to create output directory {out_dir}: {e}") from e

    click.echo(f"Saving backups to {str(out_dir)!r}, searching for {search_secs} seconds...")

    try:
        devices = discover_devices(search_secs)
    except DiscoveryError as e:
        log.error(str(e))
        raise click.ClickException(str(e)) from e

    if not devices:
        click.secho("⚠ No WLED devices found", fg='yellow')
        return

    result = backup_all(devices, out_dir, IdentityPolicy(identity),
                        workers=workers, timeout=timeout)

    if not result.ok:
        click.secho(f"✗ {len(result.failures)} of {len(result.outcomes)} backups failed:",
                    fg='red', bold=True, err=True)
        for outcome in result.failures:
            click.echo(f"  • {outcome.record.hostname}: {outcome.error}", err=True)
        sys.exit(1)

    click.echo("Finished")
