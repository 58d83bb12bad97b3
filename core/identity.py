"""Backup filename stems for discovered devices.

Two policies are supported:
- config: the `id.name` field of the device's own cfg.json (what the user
  named the controller in the WLED UI)
- hostname: the advertised mDNS host name with its domain suffix removed
"""

from core.config import DEFAULT_STEM
from core.errors import IdentityError
from models.types import BackupTarget, DeviceRecord, IdentityPolicy


def hostname_from_cfg(cfg) -> str:
    """Extract the device name from a parsed cfg.json document.

    The value is returned as-is; surrounding whitespace is kept as long as
    something other than whitespace is present.

    Raises:
        IdentityError: If `id` or `id.name` is missing, not a string, or blank
    """
    if not isinstance(cfg, dict) or 'id' not in cfg:
        raise IdentityError("Missing 'id' field in cfg.json")

    device_id = cfg['id']
    if not isinstance(device_id, dict) or 'name' not in device_id:
        raise IdentityError("Missing 'name' field in cfg.json")

    name = device_id['name']
    if not isinstance(name, str):
        raise IdentityError("Expected 'name' to be a string in cfg.json")

    if not name.strip():
        raise IdentityError("Hostname is empty or contains only whitespace")

    return name


def hostname_from_advertised(hostname: str) -> str:
    """Strip the domain from an mDNS host name.

    'wled-desk.local.' -> 'wled-desk'. Falls back to 'wled' when nothing
    precedes the first dot.
    """
    return hostname.split('.', 1)[0] or DEFAULT_STEM


def resolve_identity(record: DeviceRecord, policy: IdentityPolicy, cfg=None) -> BackupTarget:
    """Resolve the backup target for a device under the given policy.

    Args:
        record: Discovered device
        policy: Naming policy for this run
        cfg: Parsed cfg.json, required for the config policy

    Returns:
        BackupTarget with a non-empty identifier
    """
    if policy is IdentityPolicy.CONFIG:
        if cfg is None:
            raise IdentityError(f"cfg.json is required to name {record.hostname}")
        return BackupTarget(hostname_from_cfg(cfg), policy)

    return BackupTarget(hostname_from_advertised(record.hostname), policy)
