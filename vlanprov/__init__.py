"""Declarative 802.1Q VLAN subinterface provisioning.

Converges the VLAN subinterfaces of a parent network device onto a
line-oriented definition file, using iproute2 for link management and an
installed DHCP client for dynamic addresses.
"""

__version__ = "0.0.1"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink with a convenient format and filter."""
    os.environ["LOGURU_LEVEL"] = os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})


from vlanprov.exceptions import (  # noqa: E402
    ExternalOperationError,
    InputError,
    InvalidInputError,
    UnavailableCapabilityError,
    UnsupportedCombinationError,
    UsageError,
    VlanProvError,
)
from vlanprov.inspector import Inspector  # noqa: E402
from vlanprov.models import (  # noqa: E402
    Action,
    ActionKind,
    AddressFamily,
    AdminState,
    ApplyReport,
    DhcpLease,
    LiveVlanDevice,
    StaticAddress,
    VlanEntry,
)
from vlanprov.parser import parse_file, parse_lines  # noqa: E402
from vlanprov.reconciler import Reconciler  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "parse_file",
    "parse_lines",
    "Reconciler",
    "Inspector",
    "Action",
    "ActionKind",
    "AddressFamily",
    "AdminState",
    "ApplyReport",
    "DhcpLease",
    "LiveVlanDevice",
    "StaticAddress",
    "VlanEntry",
    "VlanProvError",
    "UsageError",
    "InputError",
    "InvalidInputError",
    "UnavailableCapabilityError",
    "UnsupportedCombinationError",
    "ExternalOperationError",
]
