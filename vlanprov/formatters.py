"""Text, table and JSON renderers for the live VLAN view."""

from __future__ import annotations

import json

from tabulate import tabulate

from vlanprov.models import LiveVlanDevice

FORMATS = ("text", "table", "json")


def _join(addresses: list[str]) -> str:
    return ",".join(addresses) or "-"


def _vid(device: LiveVlanDevice) -> str:
    return str(device.vlan_id) if device.vlan_id is not None else "?"


class TerminalFormatter:
    """Format live VLAN devices for show mode."""

    def __init__(self, parent: str, devices: list[LiveVlanDevice]) -> None:
        self.parent = parent
        self.devices = devices

    def empty_line(self) -> str:
        return f"No VLAN subinterfaces on {self.parent}"

    def format_text(self) -> str:
        """One line per device, or a single "none found" line."""
        if not self.devices:
            return self.empty_line()
        lines: list[str] = []
        for d in self.devices:
            lines.append(
                f"{d.name:<16} vid={_vid(d):<5} state={d.admin_state.value:<7} "
                f"IPv4={_join(d.ipv4_addresses)} IPv6={_join(d.ipv6_addresses)}"
            )
        return "\n".join(lines)

    def format_table(self) -> str:
        if not self.devices:
            return self.empty_line()
        rows = [
            [d.name, _vid(d), d.admin_state.value, _join(d.ipv4_addresses), _join(d.ipv6_addresses)]
            for d in self.devices
        ]
        return tabulate(rows, headers=["Device", "VLAN", "State", "IPv4", "IPv6"], tablefmt="simple")

    def format_json(self) -> str:
        payload = {
            "parent": self.parent,
            "devices": [d.model_dump(mode="json") for d in self.devices],
        }
        return json.dumps(payload, indent=2)

    def format(self, style: str = "text") -> str:
        if style == "table":
            return self.format_table()
        if style == "json":
            return self.format_json()
        return self.format_text()
