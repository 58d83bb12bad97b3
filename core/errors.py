"""Error types for WLED Backup.

DiscoveryError is fatal to a run. Every BackupError is scoped to one device:
the orchestrator records it against that device and moves on.
"""


class WledBackupError(Exception):
    """Base class for all WLED Backup errors."""


class DiscoveryError(WledBackupError):
    """mDNS subsystem could not be started or the browse could not be opened."""


class BackupError(WledBackupError):
    """Backup of a single device failed."""


class TransportError(BackupError):
    """Connection refused, timed out, or the host could not be resolved."""


class HttpStatusError(BackupError):
    """Device answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"HTTP {status_code} from {url}")
        self.url = url
        self.status_code = status_code


class ConfigError(BackupError):
    """cfg.json could not be parsed."""


class IdentityError(BackupError):
    """No usable name could be derived for the device."""


class StorageError(BackupError):
    """A backup file could not be created or written."""
