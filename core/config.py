"""Configuration constants.

This module holds:
- mDNS service type and resolve timing
- Device resource paths and backup file naming
- CLI defaults (each can also be set through a WLED_BACKUP_* environment variable)
"""

import os

# mDNS
SERVICE_TYPE = '_wled._tcp.local.'
RESOLVE_TIMEOUT_MS = 3000  # Per-service wait for SRV/A records

# Device resources
CFG_RESOURCE = '/cfg.json'
PRESETS_RESOURCE = '/presets.json'

# Stem used when an advertised host name has nothing before its first dot
DEFAULT_STEM = 'wled'

# CLI defaults
DEFAULT_OUT_DIR = '.'
DEFAULT_SEARCH_SECS = 4
DEFAULT_IDENTITY = 'config'
DEFAULT_WORKERS = 1

# Optional log file, in addition to stderr
LOG_FILE = os.getenv('WLED_BACKUP_LOG_FILE')
