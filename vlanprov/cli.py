"""CLI entry point for VLAN subinterface provisioning.

Modes:
  apply       (default) converge INTERFACE onto the definition file
  reset-only  remove every VLAN subinterface of INTERFACE
  show        print the live VLAN subinterfaces of INTERFACE

Examples:
  vlanprov -i eth0 -f vlans.conf
  vlanprov -i eth0 -f vlans.conf --dry-run
  vlanprov -i eth0 --reset-only
  vlanprov -i eth0 --show --format table
"""

from __future__ import annotations

import argparse
import os
import sys

from loguru import logger

from vlanprov import configure_logging, glogger
from vlanprov.base.acquirer import BaseAddressAcquirer
from vlanprov.base.link import BaseLinkManager
from vlanprov.dhcp import AUTO, DhcpAddressAcquirer, list_clients
from vlanprov.exceptions import UnavailableCapabilityError, UsageError, VlanProvError
from vlanprov.formatters import FORMATS, TerminalFormatter
from vlanprov.inspector import Inspector
from vlanprov.iproute import IPRouteLinkManager
from vlanprov.models import Action
from vlanprov.parser import parse_file
from vlanprov.reconciler import Reconciler

DEFAULT_INTERFACE = "eth0"

FILE_FORMAT_HELP = """\
Definition file format (one entry per line; '#' starts a comment):
  <vlan_id> <ip/cidr>
  <vlan_id> <ip> <prefixlen>
  <vlan_id> dhcp
  <vlan_id> dhcp6
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; defaults come from INTERFACE, VLAN_FILE and DHCP_CLIENT."""
    parser = argparse.ArgumentParser(
        prog="vlanprov",
        description="Create, address and remove 802.1Q VLAN subinterfaces from a definition file",
        epilog=FILE_FORMAT_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-i",
        "--interface",
        default=os.getenv("INTERFACE", DEFAULT_INTERFACE),
        help=f"Parent NIC (default: $INTERFACE or {DEFAULT_INTERFACE})",
    )
    parser.add_argument(
        "-f",
        "--file",
        default=os.getenv("VLAN_FILE") or None,
        help="Path to VLAN definition file (default: $VLAN_FILE)",
    )
    parser.add_argument(
        "-r",
        "--reset-only",
        action="store_true",
        help="Remove all VLAN subinterfaces on INTERFACE and exit",
    )
    parser.add_argument(
        "-s",
        "--show",
        action="store_true",
        help="Display current VLAN subinterfaces on INTERFACE and exit",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Print actions without applying changes",
    )
    parser.add_argument(
        "--dhcp-client",
        choices=[AUTO, *list_clients()],
        default=os.getenv("DHCP_CLIENT", AUTO).lower(),
        help="Override DHCP client (default: $DHCP_CLIENT or auto)",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default="text",
        help="Output format for --show (default: text)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def validate_options(args: argparse.Namespace) -> None:
    """Reject option combinations before anything touches the system."""
    if args.reset_only and args.show:
        raise UsageError("Options -r/--reset-only and -s/--show are mutually exclusive")
    if not args.reset_only and not args.show and not args.file:
        raise UsageError("VLAN file required (-f)")
    if args.dhcp_client not in (AUTO, *list_clients()):
        raise UsageError(f"Unknown DHCP client: {args.dhcp_client} (choose from {AUTO}, {', '.join(list_clients())})")


def require_root() -> None:
    if os.geteuid() != 0:
        raise UnavailableCapabilityError("Run as root (e.g., sudo vlanprov ...)")


def _print_action(dry_run: bool):
    def _report(action: Action) -> None:
        print(f"{'[dry-run] ' if dry_run else ''}{action.describe()}")

    return _report


def cmd_show(links: BaseLinkManager, args: argparse.Namespace) -> None:
    """Print the live VLAN subinterfaces of the parent."""
    devices = Inspector(links).list(args.interface)
    print(TerminalFormatter(args.interface, devices).format(args.format))


def cmd_reset(links: BaseLinkManager, acquirer: BaseAddressAcquirer, args: argparse.Namespace) -> None:
    """Remove every VLAN subinterface of the parent."""
    Reconciler(links, acquirer).reset(args.interface, dry_run=args.dry_run, reporter=_print_action(args.dry_run))


def cmd_apply(links: BaseLinkManager, acquirer: BaseAddressAcquirer, args: argparse.Namespace) -> None:
    """Converge the parent onto the definition file."""
    # Parse everything first so a malformed line fails before any mutation
    entries = parse_file(args.file)
    Reconciler(links, acquirer).apply(
        args.interface, entries, dry_run=args.dry_run, reporter=_print_action(args.dry_run)
    )
    print("Done.")


def run(
    args: argparse.Namespace,
    links: BaseLinkManager | None = None,
    acquirer: BaseAddressAcquirer | None = None,
) -> None:
    """Dispatch a parsed command line. Raises VlanProvError on failure."""
    validate_options(args)

    links = links or IPRouteLinkManager()
    if args.show:
        cmd_show(links, args)
        return

    if not args.dry_run:
        require_root()

    acquirer = acquirer or DhcpAddressAcquirer(preferred=args.dhcp_client)
    if args.reset_only:
        cmd_reset(links, acquirer, args)
    else:
        cmd_apply(links, acquirer, args)


def main(args: list[str] | None = None) -> None:
    """Main entry point for the vlanprov CLI."""
    parsed = build_parser().parse_args(args)

    configure_logging()
    glogger.enable("vlanprov")
    if not parsed.verbose:
        logger.remove()
        logger.add(sys.stderr, level="INFO")

    try:
        run(parsed)
    except VlanProvError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
