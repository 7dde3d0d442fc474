"""Pydantic models and enums for VLAN provisioning."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

VLAN_ID_MIN = 1
VLAN_ID_MAX = 4094


class AddressFamily(str, Enum):
    V4 = "v4"
    V6 = "v6"


class AdminState(str, Enum):
    UP = "up"
    DOWN = "down"
    UNKNOWN = "unknown"


class ActionKind(str, Enum):
    REMOVE = "remove"
    CREATE = "create"
    ADDRESS = "address"
    DHCP = "dhcp"


class StaticAddress(BaseModel):
    """Address with prefix length, e.g. ``10.11.9.10/24``."""

    kind: Literal["static"] = "static"
    cidr: str


class DhcpLease(BaseModel):
    """Address delegated to a DHCP client."""

    kind: Literal["dhcp"] = "dhcp"
    family: AddressFamily = AddressFamily.V4


class VlanEntry(BaseModel):
    """One line of the VLAN definition file."""

    vlan_id: int = Field(ge=VLAN_ID_MIN, le=VLAN_ID_MAX)
    address: Union[StaticAddress, DhcpLease] = Field(discriminator="kind")
    line_number: int = 0

    def subinterface(self, parent: str) -> str:
        return subinterface_name(parent, self.vlan_id)


class LiveVlanDevice(BaseModel):
    """Observed state of a VLAN subinterface."""

    name: str
    vlan_id: Optional[int] = None
    admin_state: AdminState = AdminState.UNKNOWN
    ipv4_addresses: list[str] = Field(default_factory=list)
    ipv6_addresses: list[str] = Field(default_factory=list)


class Action(BaseModel):
    """A single step of a reconciliation pass."""

    kind: ActionKind
    device: str
    vlan_id: Optional[int] = None
    family: Optional[AddressFamily] = None
    detail: str = ""  # CIDR for address actions, client name for dhcp

    def describe(self) -> str:
        if self.kind == ActionKind.REMOVE:
            return f"Removed {self.device}"
        if self.kind == ActionKind.CREATE:
            return f"Created {self.device} (VLAN {self.vlan_id})"
        if self.kind == ActionKind.ADDRESS:
            return f"  + Address {self.detail} on {self.device}"
        family = self.family.value if self.family else "?"
        return f"  + DHCP ({family}) requested on {self.device} via {self.detail}"


class ApplyReport(BaseModel):
    """Ordered action log of one reconciliation or reset pass."""

    parent: str
    dry_run: bool = False
    actions: list[Action] = Field(default_factory=list)

    @property
    def created(self) -> list[str]:
        return [a.device for a in self.actions if a.kind == ActionKind.CREATE]

    @property
    def removed(self) -> list[str]:
        return [a.device for a in self.actions if a.kind == ActionKind.REMOVE]

    def descriptions(self) -> list[str]:
        return [a.describe() for a in self.actions]


def subinterface_name(parent: str, vlan_id: int) -> str:
    """Return the conventional ``<parent>.<vlan_id>`` device name."""
    return f"{parent}.{vlan_id}"
