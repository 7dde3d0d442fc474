"""``python -m vlanprov`` entry point.

Examples:
  python -m vlanprov -i eth0 -f vlans.conf --dry-run
  python -m vlanprov -i eth0 --show
"""

from __future__ import annotations

import os

from tabulate import tabulate

from vlanprov import __version__, configure_logging
from vlanprov import glogger


def _print_startup_banner() -> None:
    startup_rows = [
        ["version", __version__],
    ]

    for var in ("INTERFACE", "VLAN_FILE", "DHCP_CLIENT"):
        val = os.environ.get(var)
        if val:
            startup_rows.append([var, val])

    table_str = tabulate(startup_rows, tablefmt="mixed_grid")
    lines = table_str.split("\n")
    table_width = len(lines[0])
    title = "vlanprov starting up"
    title_border = "┍" + "━" * (table_width - 2) + "┑"
    title_row = "│ " + title.center(table_width - 4) + " │"
    separator = lines[0].replace("┍", "┝").replace("┑", "┥").replace("┯", "┿")

    glogger.opt(raw=True).debug(
        "\n{}\n", title_border + "\n" + title_row + "\n" + separator + "\n" + "\n".join(lines[1:])
    )


def main() -> None:
    """Print the startup banner at debug level, then hand over to the CLI."""
    configure_logging()
    glogger.enable("vlanprov")
    _print_startup_banner()

    from vlanprov.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
