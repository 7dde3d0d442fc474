"""Exception hierarchy for VLAN provisioning."""


class VlanProvError(Exception):
    """Base exception for all VLAN provisioning errors."""


class UsageError(VlanProvError):
    """Invalid or conflicting command-line options."""


class InputError(VlanProvError):
    """Definition file missing or unreadable."""


class InvalidInputError(VlanProvError):
    """Malformed VLAN id, prefix length or definition line."""


class UnavailableCapabilityError(VlanProvError):
    """A required capability is missing (no DHCP client, not root)."""


class UnsupportedCombinationError(VlanProvError):
    """The selected DHCP client cannot serve the requested address family."""


class ExternalOperationError(VlanProvError):
    """An iproute2 or DHCP client command was rejected."""

    def __init__(self, message: str, command: list[str] | None = None, returncode: int | None = None):
        self.command = command or []
        self.returncode = returncode
        super().__init__(message)
