"""Abstract base class for link and address management."""

from __future__ import annotations

from abc import ABC, abstractmethod

from vlanprov.models import AddressFamily, AdminState


class BaseLinkManager(ABC):
    """Abstract base class for link management on the local host.

    Read methods must not mutate state; they are called in dry-run mode too.
    """

    @abstractmethod
    def load_vlan_module(self) -> None:
        """Load 802.1Q kernel support; failures are ignored."""

    @abstractmethod
    def list_vlan_devices(self, parent: str) -> list[str]:
        """List VLAN device names prefixed ``<parent>.``, in kernel order.

        Raises:
            ExternalOperationError: If the link table cannot be read.
        """

    @abstractmethod
    def set_up(self, device: str) -> None:
        """Bring a device administratively up."""

    @abstractmethod
    def set_down(self, device: str) -> None:
        """Bring a device administratively down."""

    @abstractmethod
    def add_vlan(self, parent: str, name: str, vlan_id: int) -> None:
        """Create a VLAN sub-device ``name`` on ``parent`` tagged ``vlan_id``."""

    @abstractmethod
    def delete(self, device: str) -> None:
        """Delete a device."""

    @abstractmethod
    def add_address(self, device: str, cidr: str) -> None:
        """Add an address in CIDR notation to a device."""

    @abstractmethod
    def get_vlan_id(self, device: str) -> int | None:
        """Return the kernel-reported 802.1Q tag of a device."""

    @abstractmethod
    def get_admin_state(self, device: str) -> AdminState:
        """Return the administrative state of a device."""

    @abstractmethod
    def get_addresses(self, device: str, family: AddressFamily) -> list[str]:
        """Return the CIDR addresses of one family bound to a device."""
