"""Read-only view of the live VLAN subinterfaces of a parent device."""

from __future__ import annotations

import re

from loguru import logger

from vlanprov.base.link import BaseLinkManager
from vlanprov.models import AddressFamily, LiveVlanDevice


class Inspector:
    """Collect id, admin state and addresses of live VLAN devices."""

    def __init__(self, link_manager: BaseLinkManager) -> None:
        self.links = link_manager

    def _resolve_vlan_id(self, parent: str, device: str) -> int | None:
        suffix = device[len(parent) + 1 :]
        if re.fullmatch(r"[0-9]+", suffix):
            return int(suffix)
        # Non-conventional name: ask the kernel for the tag
        return self.links.get_vlan_id(device)

    def list(self, parent: str) -> list[LiveVlanDevice]:
        """Return one view per live VLAN device of ``parent``; empty when none exist."""
        devices: list[LiveVlanDevice] = []
        for name in self.links.list_vlan_devices(parent):
            devices.append(
                LiveVlanDevice(
                    name=name,
                    vlan_id=self._resolve_vlan_id(parent, name),
                    admin_state=self.links.get_admin_state(name),
                    ipv4_addresses=self.links.get_addresses(name, AddressFamily.V4),
                    ipv6_addresses=self.links.get_addresses(name, AddressFamily.V6),
                )
            )
        logger.debug(f"Found {len(devices)} VLAN subinterface(s) on {parent}")
        return devices
