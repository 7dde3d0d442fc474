"""Abstract base DHCP client."""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod

from vlanprov.models import AddressFamily


class BaseDhcpClient(ABC):
    """A DHCP client binary and the command lines it accepts."""

    name: str = ""
    binary: str = ""
    families: frozenset[AddressFamily] = frozenset({AddressFamily.V4, AddressFamily.V6})

    def is_installed(self) -> bool:
        """Check whether the client binary is on PATH."""
        return shutil.which(self.binary) is not None

    def supports(self, family: AddressFamily) -> bool:
        return family in self.families

    @abstractmethod
    def command(self, device: str, family: AddressFamily) -> list[str]:
        """Build the one-shot lease command for ``device`` and ``family``."""
