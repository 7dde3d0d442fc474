"""Shared fixtures for the vlanprov test suite."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from loguru import logger

from vlanprov.base.acquirer import BaseAddressAcquirer
from vlanprov.base.link import BaseLinkManager
from vlanprov.exceptions import ExternalOperationError, UnsupportedCombinationError
from vlanprov.models import AddressFamily, AdminState

# ── in-memory capabilities ────────────────────────────────────────────


@dataclass
class FakeDevice:
    parent: str
    vlan_id: int
    up: bool = False
    addresses: list[str] = field(default_factory=list)


class FakeLinkManager(BaseLinkManager):
    """Link table held in memory; records every call in ``calls``."""

    def __init__(self, parents: tuple[str, ...] = ("eth0",)) -> None:
        self.parents = {p: False for p in parents}
        self.devices: dict[str, FakeDevice] = {}
        self.calls: list[tuple] = []
        self.module_loaded = False
        self.list_error: Exception | None = None

    # helpers
    def seed(self, name: str, vlan_id: int, parent: str = "eth0", up: bool = True, addresses=()) -> None:
        self.devices[name] = FakeDevice(parent=parent, vlan_id=vlan_id, up=up, addresses=list(addresses))

    def snapshot(self) -> dict[str, tuple[int, bool, tuple[str, ...]]]:
        return {n: (d.vlan_id, d.up, tuple(d.addresses)) for n, d in self.devices.items()}

    def mutations(self) -> list[tuple]:
        return [c for c in self.calls if c[0] not in ("list_vlan_devices", "get_vlan_id", "get_admin_state", "get_addresses")]

    # BaseLinkManager
    def load_vlan_module(self) -> None:
        self.calls.append(("load_vlan_module",))
        self.module_loaded = True

    def list_vlan_devices(self, parent: str) -> list[str]:
        self.calls.append(("list_vlan_devices", parent))
        if self.list_error is not None:
            raise self.list_error
        return [n for n in self.devices if n.startswith(f"{parent}.")]

    def set_up(self, device: str) -> None:
        self.calls.append(("set_up", device))
        if device in self.parents:
            self.parents[device] = True
        elif device in self.devices:
            self.devices[device].up = True
        else:
            raise ExternalOperationError(f"Cannot find device {device}")

    def set_down(self, device: str) -> None:
        self.calls.append(("set_down", device))
        if device not in self.devices:
            raise ExternalOperationError(f"Cannot find device {device}")
        self.devices[device].up = False

    def add_vlan(self, parent: str, name: str, vlan_id: int) -> None:
        self.calls.append(("add_vlan", parent, name, vlan_id))
        if name in self.devices:
            raise ExternalOperationError(f"RTNETLINK answers: File exists ({name})")
        self.devices[name] = FakeDevice(parent=parent, vlan_id=vlan_id)

    def delete(self, device: str) -> None:
        self.calls.append(("delete", device))
        if self.devices.pop(device, None) is None:
            raise ExternalOperationError(f"Cannot find device {device}")

    def add_address(self, device: str, cidr: str) -> None:
        self.calls.append(("add_address", device, cidr))
        if device not in self.devices:
            raise ExternalOperationError(f"Cannot find device {device}")
        if cidr in self.devices[device].addresses:
            raise ExternalOperationError("RTNETLINK answers: File exists")
        self.devices[device].addresses.append(cidr)

    def get_vlan_id(self, device: str) -> int | None:
        self.calls.append(("get_vlan_id", device))
        d = self.devices.get(device)
        return d.vlan_id if d else None

    def get_admin_state(self, device: str) -> AdminState:
        self.calls.append(("get_admin_state", device))
        d = self.devices.get(device)
        if d is None:
            return AdminState.UNKNOWN
        return AdminState.UP if d.up else AdminState.DOWN

    def get_addresses(self, device: str, family: AddressFamily) -> list[str]:
        self.calls.append(("get_addresses", device, family))
        d = self.devices.get(device)
        if d is None:
            return []
        is_v6 = family == AddressFamily.V6
        return [a for a in d.addresses if (":" in a) == is_v6]


class FakeAcquirer(BaseAddressAcquirer):
    """Leases fixed addresses through a named fake client."""

    def __init__(self, links: FakeLinkManager, client: str = "dhclient", families=(AddressFamily.V4, AddressFamily.V6)):
        self.links = links
        self.client = client
        self.families = set(families)
        self.acquired: list[tuple[str, AddressFamily]] = []
        self.selected: list[AddressFamily] = []

    def select_client(self, family: AddressFamily) -> str:
        self.selected.append(family)
        if family not in self.families:
            raise UnsupportedCombinationError(f"{self.client} does not support DHCP{family.value}")
        return self.client

    def acquire(self, device: str, family: AddressFamily) -> str:
        client = self.select_client(family)
        lease = "10.200.0.10/24" if family == AddressFamily.V4 else "2001:db8::10/64"
        self.links.add_address(device, lease)
        self.acquired.append((device, family))
        return client


@pytest.fixture()
def fake_links():
    """In-memory link table with a single parent ``eth0``."""
    return FakeLinkManager()


@pytest.fixture()
def fake_acquirer(fake_links):
    """Fake DHCP acquirer supporting both families."""
    return FakeAcquirer(fake_links)


@pytest.fixture()
def vlan_file(tmp_path):
    """Factory fixture writing a definition file and returning its path."""

    def _make(content: str, name: str = "vlans.conf"):
        path = tmp_path / name
        path.write_text(content)
        return path

    return _make


@pytest.fixture()
def make_acquirer(fake_links):
    """Factory fixture for a fake acquirer with a chosen client and families."""

    def _make(client: str = "dhclient", families=(AddressFamily.V4, AddressFamily.V6)):
        return FakeAcquirer(fake_links, client=client, families=families)

    return _make


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Clear CLI environment defaults and drop loguru sinks added by main()."""
    for var in ("INTERFACE", "VLAN_FILE", "DHCP_CLIENT"):
        monkeypatch.delenv(var, raising=False)
    yield
    logger.remove()
    logger.disable("vlanprov")
