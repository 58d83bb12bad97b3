"""Core functionality for WLED backup.

This package contains:
- discovery: mDNS browsing and device deduplication
- identity: backup filename stems
- client: HTTP access to a device
- backup: per-device backup and batch aggregation
- config: constants and defaults
- errors: error hierarchy
- logger: diagnostics logging
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version('wled-backup')
except PackageNotFoundError:
    # Running from a source checkout that was never installed
    __version__ = '0+unknown'
