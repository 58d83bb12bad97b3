"""Builders shared by the test modules."""

import json
from ipaddress import ip_address

from models.types import DeviceRecord


def cfg_body(name) -> bytes:
    return json.dumps({"id": {"name": name}}).encode()


def make_record(hostname, port, addresses=("127.0.0.1",)) -> DeviceRecord:
    return DeviceRecord(
        name=f"{hostname.split('.')[0]}._wled._tcp.local.",
        hostname=hostname,
        addresses=tuple(ip_address(a) for a in addresses),
        port=port,
    )
