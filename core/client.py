"""HTTP access to a single WLED controller.

WLED serves its JSON documents unauthenticated over plain HTTP, so a GET on
the device's advertised address and port is all that is needed.
"""

from ipaddress import IPv4Address, IPv6Address

import requests

from core.errors import HttpStatusError, TransportError
from core.logger import log


class WledClient:
    """Fetch raw resources from one device.

    Args:
        address: Device IP address
        port: Device HTTP port
        timeout: Per-request timeout in seconds (None waits indefinitely)
    """

    def __init__(self, address: IPv4Address | IPv6Address, port: int, timeout: float | None = None):
        self.address = address
        self.port = port
        self.timeout = timeout

    @property
    def base_url(self) -> str:
        host = f"[{self.address}]" if self.address.version == 6 else str(self.address)
        return f"http://{host}:{self.port}"

    def url_for(self, resource: str) -> str:
        return f"{self.base_url}{resource}"

    def get(self, resource: str) -> bytes:
        """GET a resource and return the body exactly as served.

        Raises:
            HttpStatusError: Device answered with a non-2xx status
            TransportError: Request never completed
        """
        url = self.url_for(resource)
        log.debug(f"GET {url}")

        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(url, response.status_code)

        log.debug(f"GET {url} -> {response.status_code} ({len(response.content)} bytes)")
        return response.content
