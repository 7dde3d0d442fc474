"""Address acquirer that runs an installed DHCP client."""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from vlanprov._util import _require_interface_name, _run_checked
from vlanprov.base.acquirer import BaseAddressAcquirer
from vlanprov.dhcp.base import BaseDhcpClient
from vlanprov.dhcp.registry import AUTO, DEFAULT_PRIORITY, Found, get_client, list_clients, probe_client
from vlanprov.exceptions import UnavailableCapabilityError, UnsupportedCombinationError, UsageError
from vlanprov.models import AddressFamily


class DhcpAddressAcquirer(BaseAddressAcquirer):
    """Lease addresses through dhclient, dhcpcd or udhcpc.

    Args:
        preferred: ``auto`` or a registered client name. A named client is
            never substituted by another one.
        priority: Probe order used when ``preferred`` is ``auto``.

    Raises:
        UsageError: If ``preferred`` or a ``priority`` entry names no
            registered client.
    """

    def __init__(self, preferred: str = AUTO, priority: Sequence[str] = DEFAULT_PRIORITY):
        known = list_clients()
        names = [n.lower() for n in priority]
        if preferred.lower() != AUTO:
            names.append(preferred.lower())
        for name in names:
            if name not in known:
                raise UsageError(f"Unknown DHCP client: {name} (choose from {AUTO}, {', '.join(known)})")
        self.preferred = preferred
        self.priority = tuple(priority)

    def _resolve(self, family: AddressFamily) -> BaseDhcpClient:
        result = probe_client(self.preferred, self.priority)
        if not isinstance(result, Found):
            if self.preferred.lower() == AUTO:
                names = ", ".join(self.priority)
                raise UnavailableCapabilityError(
                    f"No DHCP client found (install one of {names}, or specify --dhcp-client)"
                )
            raise UnavailableCapabilityError(f"Requested DHCP client {self.preferred} is not installed")

        client = result.client
        if not client.supports(family):
            alternatives = [n for n in self.priority if n != client.name and get_client(n).supports(family)]
            hint = f"; use {' or '.join(alternatives)}" if alternatives else ""
            raise UnsupportedCombinationError(f"{client.name} does not support DHCP{family.value}{hint}")
        return client

    def select_client(self, family: AddressFamily) -> str:
        return self._resolve(family).name

    def acquire(self, device: str, family: AddressFamily) -> str:
        client = self._resolve(family)
        cmd = client.command(_require_interface_name(device), family)
        logger.info(f"Requesting DHCP ({family.value}) lease on {device} via {client.name}")
        # No timeout: the client's own lease negotiation bounds the call.
        _run_checked(cmd)
        return client.name
