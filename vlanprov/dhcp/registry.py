"""DHCP client registry and ranked discovery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from loguru import logger

from vlanprov.dhcp.base import BaseDhcpClient

AUTO = "auto"

DEFAULT_PRIORITY: tuple[str, ...] = ("dhclient", "dhcpcd", "udhcpc")

_CLIENT_REGISTRY: dict[str, type[BaseDhcpClient]] = {}


@dataclass(frozen=True)
class Found:
    """A usable client was located."""

    client: BaseDhcpClient


@dataclass(frozen=True)
class NotFound:
    """None of the probed clients is installed."""

    probed: tuple[str, ...] = ()


ProbeResult = Found | NotFound


def register_client(name: str) -> Callable[[type[BaseDhcpClient]], type[BaseDhcpClient]]:
    """Decorator to register a DHCP client class.

    Usage::

        @register_client("dhclient")
        class Dhclient(BaseDhcpClient):
            ...
    """

    def decorator(cls: type[BaseDhcpClient]) -> type[BaseDhcpClient]:
        cls.name = name.lower()
        _CLIENT_REGISTRY[name.lower()] = cls
        return cls

    return decorator


def get_client(name: str) -> BaseDhcpClient:
    """Instantiate a registered client by name.

    Raises:
        ValueError: If the client is not registered.
    """
    name_lower = name.lower()
    if name_lower not in _CLIENT_REGISTRY:
        available = ", ".join(sorted(_CLIENT_REGISTRY.keys()))
        raise ValueError(f"Unknown DHCP client '{name}'. Available: {available}")
    return _CLIENT_REGISTRY[name_lower]()


def list_clients() -> list[str]:
    """Return a sorted list of registered client names."""
    return sorted(_CLIENT_REGISTRY.keys())


def probe_client(preferred: str = AUTO, priority: Sequence[str] = DEFAULT_PRIORITY) -> ProbeResult:
    """Locate an installed DHCP client.

    With ``preferred`` set to ``auto`` the clients in ``priority`` are probed
    in order and the first installed one wins. Otherwise only ``preferred``
    is probed.
    """
    candidates = tuple(priority) if preferred.lower() == AUTO else (preferred.lower(),)

    for name in candidates:
        client = get_client(name)
        if client.is_installed():
            logger.debug(f"DHCP client probe: using {name}")
            return Found(client)
        logger.debug(f"DHCP client probe: {name} not installed")

    return NotFound(probed=candidates)
