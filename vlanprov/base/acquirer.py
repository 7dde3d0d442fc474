"""Abstract base class for dynamic address acquisition."""

from __future__ import annotations

from abc import ABC, abstractmethod

from vlanprov.models import AddressFamily


class BaseAddressAcquirer(ABC):
    """Abstract base class for DHCP address acquisition."""

    @abstractmethod
    def select_client(self, family: AddressFamily) -> str:
        """Pick the DHCP client that would serve ``family`` without running it.

        Raises:
            UnavailableCapabilityError: No suitable client is installed.
            UnsupportedCombinationError: The client cannot serve ``family``.
        """

    @abstractmethod
    def acquire(self, device: str, family: AddressFamily) -> str:
        """Lease an address for ``device`` and return the client name used."""
