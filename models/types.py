"""Type definitions for WLED Backup.

Devices found on the network, the identity used to name their backup files,
and the per-device and per-run results of a backup.
"""

from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from pathlib import Path

from core.errors import BackupError


class IdentityPolicy(str, Enum):
    """How a device's backup filename stem is derived."""
    CONFIG = 'config'      # id.name from the device's own cfg.json
    HOSTNAME = 'hostname'  # advertised mDNS host name, domain stripped


@dataclass(frozen=True)
class DeviceRecord:
    """A WLED controller resolved via mDNS.

    Attributes:
        name: Full advertised service name (e.g. 'wled-desk._wled._tcp.local.')
        hostname: Advertised host name (e.g. 'wled-desk.local.'), used for deduplication
        addresses: Advertised addresses, the first one is used for backup
        port: HTTP port
    """
    name: str
    hostname: str
    addresses: tuple[IPv4Address | IPv6Address, ...]
    port: int


@dataclass(frozen=True)
class BackupTarget:
    """Resolved filename stem for a device."""
    identifier: str
    policy: IdentityPolicy


@dataclass
class BackupOutcome:
    """Result of backing up a single device.

    `target` is None when the device failed before its identity was known.
    `saved` lists files written, which may be non-empty for a failed device.
    """
    record: DeviceRecord
    target: BackupTarget | None = None
    error: BackupError | None = None
    saved: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Aggregate of every device outcome in a run."""
    outcomes: list[BackupOutcome] = field(default_factory=list)

    def add(self, outcome: BackupOutcome):
        self.outcomes.append(outcome)

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def failures(self) -> list[BackupOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]
