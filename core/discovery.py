"""mDNS discovery of WLED controllers.

Browses for `_wled._tcp.local.` and collects resolved services until the
network has been quiet for the search window. Devices often answer more than
once (several interfaces, repeated announcements), so results are keyed on
the advertised host name.
"""

import queue
from dataclasses import dataclass
from enum import Enum
from ipaddress import IPv4Address, IPv6Address, ip_address

import click
import zeroconf
from zeroconf import ServiceBrowser, ServiceStateChange, Zeroconf

from core.config import RESOLVE_TIMEOUT_MS, SERVICE_TYPE
from core.errors import DiscoveryError
from core.logger import log
from models.types import DeviceRecord


class EventKind(Enum):
    RESOLVED = 'resolved'
    UNRESOLVED = 'unresolved'
    REMOVED = 'removed'


@dataclass(frozen=True)
class DiscoveryEvent:
    """One browse event. Only RESOLVED events carry host, addresses and port."""
    kind: EventKind
    name: str
    hostname: str = ''
    addresses: tuple[IPv4Address | IPv6Address, ...] = ()
    port: int = 0


class ZeroconfBrowser:
    """Scoped mDNS browse session.

    Owns the Zeroconf instance and its ServiceBrowser; both are released on
    exit. Zeroconf delivers state changes on its own thread, they are queued
    here and resolved on the caller's thread by `recv`.

    Usage:
        with ZeroconfBrowser() as browser:
            event = browser.recv(timeout=4)
    """

    def __init__(self, service_type: str = SERVICE_TYPE, resolve_timeout_ms: int = RESOLVE_TIMEOUT_MS):
        self.service_type = service_type
        self.resolve_timeout_ms = resolve_timeout_ms
        self._events = queue.Queue()
        self._zeroconf = None
        self._browser = None

    def __enter__(self):
        try:
            self._zeroconf = Zeroconf()
            self._browser = ServiceBrowser(
                self._zeroconf, self.service_type, handlers=[self._on_state_change]
            )
        except (OSError, zeroconf.Error) as e:
            self.close()
            raise DiscoveryError(f"Failed to browse for {self.service_type}: {e}") from e

        log.debug(f"Browsing for {self.service_type}")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        if self._browser is not None:
            self._browser.cancel()
            self._browser = None
        if self._zeroconf is not None:
            self._zeroconf.close()
            self._zeroconf = None

    def _on_state_change(self, zeroconf, service_type, name, state_change):
        self._events.put((state_change, service_type, name))

    def recv(self, timeout: float) -> DiscoveryEvent:
        """Wait up to `timeout` seconds for the next event.

        Raises:
            queue.Empty: Nothing arrived in time
        """
        state_change, service_type, name = self._events.get(timeout=timeout)

        if state_change is ServiceStateChange.Removed:
            return DiscoveryEvent(EventKind.REMOVED, name)

        info = self._zeroconf.get_service_info(service_type, name, timeout=self.resolve_timeout_ms)
        if info is None or not info.server:
            log.debug(f"Could not resolve {name}")
            return DiscoveryEvent(EventKind.UNRESOLVED, name)

        return DiscoveryEvent(
            EventKind.RESOLVED,
            name,
            hostname=info.server,
            addresses=tuple(ip_address(a) for a in info.parsed_addresses()),
            port=info.port,
        )


def collect_devices(subscription, time_budget: float) -> list[DeviceRecord]:
    """Consume discovery events until none arrives within `time_budget`.

    The wait restarts after every event. A host name seen again replaces the
    earlier record; only the first sighting is announced.

    Args:
        subscription: Object with `recv(timeout)` raising queue.Empty on timeout
        time_budget: Seconds of silence that end the search

    Returns:
        Deduplicated device records, in no particular order
    """
    devices: dict[str, DeviceRecord] = {}

    while True:
        try:
            event = subscription.recv(timeout=time_budget)
        except queue.Empty:
            break

        if event.kind is not EventKind.RESOLVED:
            log.debug(f"Ignoring {event.kind.value} event for {event.name}")
            continue

        if event.hostname not in devices:
            click.echo(f"Discovered: {event.name}")

        devices[event.hostname] = DeviceRecord(
            name=event.name,
            hostname=event.hostname,
            addresses=event.addresses,
            port=event.port,
        )

    return list(devices.values())


def discover_devices(time_budget: float, service_type: str = SERVICE_TYPE) -> list[DeviceRecord]:
    """Browse the local network for WLED controllers.

    Raises:
        DiscoveryError: mDNS could not be started
    """
    with ZeroconfBrowser(service_type) as browser:
        return collect_devices(browser, time_budget)
