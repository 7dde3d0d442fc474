"""DHCP client discovery and address acquisition.

Importing this package triggers client registration via @register_client.
"""

import vlanprov.dhcp.clients  # noqa: F401
from vlanprov.dhcp.acquirer import DhcpAddressAcquirer
from vlanprov.dhcp.base import BaseDhcpClient
from vlanprov.dhcp.registry import (
    AUTO,
    DEFAULT_PRIORITY,
    Found,
    NotFound,
    get_client,
    list_clients,
    probe_client,
    register_client,
)

__all__ = [
    "AUTO",
    "DEFAULT_PRIORITY",
    "BaseDhcpClient",
    "DhcpAddressAcquirer",
    "Found",
    "NotFound",
    "get_client",
    "list_clients",
    "probe_client",
    "register_client",
]
