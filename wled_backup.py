#!/usr/bin/env python3
"""WLED Backup - save configuration and presets from every WLED on the LAN.

Usage:
    uv run python wled_backup.py [OPTIONS]
"""

from commands.backup import backup_command


def main():
    backup_command()


if __name__ == '__main__':
    main()
