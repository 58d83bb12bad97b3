"""Backup of discovered WLED controllers.

Each device is backed up independently: a failure is recorded against that
device and the run carries on with the next one. Nothing is written for a
device until its name is known, files already written stay on disk if a later
step fails.
"""

import json
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import click

from core.client import WledClient
from core.config import CFG_RESOURCE, DEFAULT_WORKERS, PRESETS_RESOURCE
from core.errors import BackupError, ConfigError, StorageError
from core.identity import resolve_identity
from core.logger import log
from models.types import BackupOutcome, BatchResult, DeviceRecord, IdentityPolicy


def write_backup(path: Path, body: bytes):
    """Write a fetched body to disk, replacing any previous file."""
    try:
        with open(path, 'wb') as f:
            f.write(body)
    except (OSError, ValueError) as e:
        raise StorageError(f"Failed to write {path}: {e}") from e


def _save(outcome: BackupOutcome, out_dir: Path, file_name: str, body: bytes):
    path = out_dir / file_name
    write_backup(path, body)
    outcome.saved.append(path)
    click.echo(f"  saved: {file_name}")


def _backup_by_config(client: WledClient, outcome: BackupOutcome, out_dir: Path):
    cfg_body = client.get(CFG_RESOURCE)
    try:
        cfg = json.loads(cfg_body)
    except (ValueError, RecursionError) as e:
        raise ConfigError(f"Invalid cfg.json: {e}") from e

    outcome.target = resolve_identity(outcome.record, IdentityPolicy.CONFIG, cfg)
    stem = outcome.target.identifier
    click.echo(f"  host name: {stem}")

    _save(outcome, out_dir, f"{stem}_cfg.json", cfg_body)
    _save(outcome, out_dir, f"{stem}_presets.json", client.get(PRESETS_RESOURCE))


def _backup_by_hostname(client: WledClient, outcome: BackupOutcome, out_dir: Path):
    outcome.target = resolve_identity(outcome.record, IdentityPolicy.HOSTNAME)
    stem = outcome.target.identifier
    click.echo(f"  host name: {stem}")

    _save(outcome, out_dir, f"{stem}.json", client.get(PRESETS_RESOURCE))


def backup_device(record: DeviceRecord, out_dir: Path,
                  policy: IdentityPolicy = IdentityPolicy.CONFIG,
                  timeout: float | None = None) -> BackupOutcome | None:
    """Back up one device.

    Args:
        record: Device to back up
        out_dir: Existing directory to write into
        policy: How to name the backup files
        timeout: Per-request HTTP timeout in seconds

    Returns:
        BackupOutcome, or None if the device advertised no address
    """
    if not record.addresses:
        log.debug(f"Skipping {record.hostname}: no address advertised")
        return None

    out_dir = Path(out_dir)
    client = WledClient(record.addresses[0], record.port, timeout=timeout)
    outcome = BackupOutcome(record)
    start_time = time.time()

    click.echo(f"Backing up {record.hostname}")

    try:
        if policy is IdentityPolicy.CONFIG:
            _backup_by_config(client, outcome, out_dir)
        else:
            _backup_by_hostname(client, outcome, out_dir)
    except BackupError as e:
        outcome.error = e
        log.error(f"Backup of {record.hostname} ({client.base_url}) failed: {e}")
        click.secho(f"  FAILED: {e}", fg='red')
        return outcome

    log.debug(f"Backed up {record.hostname} in {time.time() - start_time:.2f}s")
    click.secho("  SUCCESS", fg='green')
    return outcome


def backup_all(records: list[DeviceRecord], out_dir: Path,
               policy: IdentityPolicy = IdentityPolicy.CONFIG,
               workers: int = DEFAULT_WORKERS,
               timeout: float | None = None) -> BatchResult:
    """Back up every device and aggregate the outcomes.

    Every device is attempted regardless of earlier failures. With
    `workers > 1` devices run concurrently and progress lines may interleave;
    outcomes are only ever merged on the calling thread.
    """
    result = BatchResult()

    if workers <= 1:
        for record in records:
            outcome = backup_device(record, out_dir, policy, timeout)
            if outcome is not None:
                result.add(outcome)
        return result

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(backup_device, record, out_dir, policy, timeout)
            for record in records
        ]
        for future in as_completed(futures):
            outcome = future.result()
            if outcome is not None:
                result.add(outcome)

    return result
