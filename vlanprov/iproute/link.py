"""Link manager that drives iproute2 (``ip``) through subprocess."""

from __future__ import annotations

import re

from loguru import logger

from vlanprov._util import _require_interface_name, _run_checked, _run_cmd
from vlanprov.base.link import BaseLinkManager
from vlanprov.models import AddressFamily, AdminState

# 5: eth0.90@eth0: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 ...
_LINK_LINE = re.compile(r"^\d+:\s+([^:\s@]+)(?:@[^:\s]+)?:\s+<([^>]*)>")
_VLAN_ID = re.compile(r"\bvlan (?:protocol \S+ )?id (\d+)")


class IPRouteLinkManager(BaseLinkManager):
    """Link manager for the local host using ``ip`` and ``modprobe``."""

    def __init__(self, ip_binary: str = "ip", timeout: int = 30):
        self.ip_binary = ip_binary
        self.timeout = timeout

    def _ip(self, *args: str) -> list[str]:
        return [self.ip_binary, *args]

    def load_vlan_module(self) -> None:
        out = _run_cmd(["modprobe", "8021q"], timeout=self.timeout)
        logger.debug(f"modprobe 8021q: {out.strip() or 'ok'}")

    def list_vlan_devices(self, parent: str) -> list[str]:
        prefix = f"{_require_interface_name(parent)}."
        # A failed listing must not look like an empty parent
        output = _run_checked(self._ip("-o", "-d", "link", "show", "type", "vlan"), timeout=self.timeout)

        devices: list[str] = []
        for line in output.splitlines():
            m = _LINK_LINE.match(line)
            if m and m.group(1).startswith(prefix):
                devices.append(m.group(1))
        return devices

    def set_up(self, device: str) -> None:
        _run_checked(self._ip("link", "set", "dev", _require_interface_name(device), "up"), timeout=self.timeout)

    def set_down(self, device: str) -> None:
        _run_checked(self._ip("link", "set", "dev", _require_interface_name(device), "down"), timeout=self.timeout)

    def add_vlan(self, parent: str, name: str, vlan_id: int) -> None:
        _run_checked(
            self._ip(
                "link",
                "add",
                "link",
                _require_interface_name(parent),
                "name",
                _require_interface_name(name),
                "type",
                "vlan",
                "id",
                str(vlan_id),
            ),
            timeout=self.timeout,
        )

    def delete(self, device: str) -> None:
        _run_checked(self._ip("link", "delete", "dev", _require_interface_name(device)), timeout=self.timeout)

    def add_address(self, device: str, cidr: str) -> None:
        _run_checked(self._ip("addr", "add", cidr, "dev", _require_interface_name(device)), timeout=self.timeout)

    def get_vlan_id(self, device: str) -> int | None:
        output = _run_cmd(self._ip("-o", "-d", "link", "show", "dev", _require_interface_name(device)), timeout=self.timeout)
        m = _VLAN_ID.search(output)
        return int(m.group(1)) if m else None

    def get_admin_state(self, device: str) -> AdminState:
        output = _run_cmd(self._ip("-o", "link", "show", "dev", _require_interface_name(device)), timeout=self.timeout)
        m = _LINK_LINE.match(output)
        if not m:
            return AdminState.UNKNOWN
        flags = m.group(2).split(",")
        return AdminState.UP if "UP" in flags else AdminState.DOWN

    def get_addresses(self, device: str, family: AddressFamily) -> list[str]:
        flag = "-4" if family == AddressFamily.V4 else "-6"
        output = _run_cmd(
            self._ip("-o", flag, "addr", "show", "dev", _require_interface_name(device)), timeout=self.timeout
        )

        addresses: list[str] = []
        for line in output.splitlines():
            fields = line.split()
            # 7: eth0.90    inet 10.11.9.10/24 brd 10.11.9.255 scope global eth0.90 ...
            if len(fields) >= 4 and fields[2] in ("inet", "inet6"):
                addresses.append(fields[3])
        return addresses
