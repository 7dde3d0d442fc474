"""Parser for the line-oriented VLAN definition format.

Each non-empty line declares one address for one VLAN::

    90 10.11.9.10/24      # static, CIDR form
    120 192.168.50.2 24   # static, address and prefix length
    200 dhcp              # DHCPv4 lease
    201 dhcp6             # DHCPv6 lease

Everything from the first ``#`` onward is a comment.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator

from loguru import logger

from vlanprov.exceptions import InputError, InvalidInputError
from vlanprov.models import VLAN_ID_MAX, VLAN_ID_MIN, AddressFamily, DhcpLease, StaticAddress, VlanEntry

_NUMERIC = re.compile(r"^[0-9]+$")

PREFIX_MIN = 0
PREFIX_MAX = 32

_DHCP_KEYWORDS = {
    "dhcp": AddressFamily.V4,
    "dhcp6": AddressFamily.V6,
}


def _parse_vlan_id(token: str) -> int:
    if not _NUMERIC.match(token):
        raise InvalidInputError(f"Invalid VLAN id: {token}")
    vlan_id = int(token)
    if not VLAN_ID_MIN <= vlan_id <= VLAN_ID_MAX:
        raise InvalidInputError(f"VLAN id out of range: {token}")
    return vlan_id


def _parse_address(vlan_id: int, second: str, third: str | None) -> StaticAddress | DhcpLease:
    family = _DHCP_KEYWORDS.get(second.lower())
    if family is not None:
        return DhcpLease(family=family)

    if "/" in second:
        return StaticAddress(cidr=second)

    if not third:
        raise InvalidInputError(f"Missing prefix length for VLAN {vlan_id}")
    if not _NUMERIC.match(third):
        raise InvalidInputError(f"Invalid prefix length: {third}")
    if not PREFIX_MIN <= int(third) <= PREFIX_MAX:
        raise InvalidInputError(f"Prefix length out of range: {third}")
    return StaticAddress(cidr=f"{second}/{third}")


def parse_line(line: str, line_number: int = 0) -> VlanEntry | None:
    """Parse a single definition line; returns None for blank and comment lines."""
    content = line.split("#", 1)[0].strip()
    if not content:
        return None

    tokens = content.split()
    vlan_id = _parse_vlan_id(tokens[0])
    if len(tokens) < 2:
        raise InvalidInputError(f"Missing address for VLAN {vlan_id}")
    third = tokens[2] if len(tokens) > 2 else None

    return VlanEntry(
        vlan_id=vlan_id,
        address=_parse_address(vlan_id, tokens[1], third),
        line_number=line_number,
    )


def parse_lines(lines: Iterable[str]) -> Iterator[VlanEntry]:
    """Lazily parse definition lines in order.

    Raises:
        InvalidInputError: On the first malformed line; nothing after it is read.
    """
    for number, line in enumerate(lines, start=1):
        entry = parse_line(line, number)
        if entry is not None:
            yield entry


def parse_file(path: str | Path) -> list[VlanEntry]:
    """Read and parse a complete definition file.

    Raises:
        InputError: If the file does not exist or cannot be read.
        InvalidInputError: If any line is malformed.
    """
    path = Path(path)
    try:
        text = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read {path}: {e}") from e

    entries = list(parse_lines(text.splitlines()))
    logger.debug(f"Parsed {len(entries)} VLAN entries from {path}")
    return entries
