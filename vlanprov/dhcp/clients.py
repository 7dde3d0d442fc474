"""Concrete DHCP client command builders."""

from __future__ import annotations

from vlanprov.dhcp.base import BaseDhcpClient
from vlanprov.dhcp.registry import register_client
from vlanprov.exceptions import UnsupportedCombinationError
from vlanprov.models import AddressFamily


@register_client("dhclient")
class Dhclient(BaseDhcpClient):
    """ISC dhclient, one-shot mode."""

    binary = "dhclient"

    def command(self, device: str, family: AddressFamily) -> list[str]:
        if family == AddressFamily.V6:
            return [self.binary, "-6", "-1", "-v", device]
        return [self.binary, "-1", "-v", device]


@register_client("dhcpcd")
class Dhcpcd(BaseDhcpClient):
    """dhcpcd, waiting for the lease before returning."""

    binary = "dhcpcd"

    def command(self, device: str, family: AddressFamily) -> list[str]:
        flag = "-6" if family == AddressFamily.V6 else "-4"
        return [self.binary, flag, "-w", device]


@register_client("udhcpc")
class Udhcpc(BaseDhcpClient):
    """BusyBox udhcpc; IPv4 only."""

    binary = "udhcpc"
    families = frozenset({AddressFamily.V4})

    def command(self, device: str, family: AddressFamily) -> list[str]:
        if family != AddressFamily.V4:
            raise UnsupportedCombinationError(f"udhcpc does not support DHCPv6 on {device}")
        return [self.binary, "-q", "-i", device]
