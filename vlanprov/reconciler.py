"""Converge the VLAN subinterfaces of a parent device onto a definition.

The definition is the sole source of truth for the parent's VLAN set: every
existing ``<parent>.*`` VLAN device is removed before the declared ones are
created. Failures abort the pass and nothing already applied is rolled back,
so a failed run can leave only part of the declared set in place.
"""

from __future__ import annotations

from typing import Callable, Iterable

from loguru import logger

from vlanprov.base.acquirer import BaseAddressAcquirer
from vlanprov.base.link import BaseLinkManager
from vlanprov.models import Action, ActionKind, ApplyReport, DhcpLease, StaticAddress, VlanEntry

Reporter = Callable[[Action], None]


class Reconciler:
    """Apply VLAN definitions through a link manager and an address acquirer.

    In dry-run mode only read-only capability calls are made (listing devices,
    selecting a DHCP client); the returned report lists the same actions a
    real run would perform against the same live state.
    """

    def __init__(self, link_manager: BaseLinkManager, acquirer: BaseAddressAcquirer) -> None:
        self.links = link_manager
        self.acquirer = acquirer

    def _record(self, report: ApplyReport, action: Action, reporter: Reporter | None) -> None:
        report.actions.append(action)
        logger.debug(f"{'[dry-run] ' if report.dry_run else ''}{action.describe().strip()}")
        if reporter is not None:
            reporter(action)

    def _teardown(self, report: ApplyReport, reporter: Reporter | None) -> None:
        for device in self.links.list_vlan_devices(report.parent):
            if not report.dry_run:
                self.links.set_down(device)
                self.links.delete(device)
            self._record(report, Action(kind=ActionKind.REMOVE, device=device), reporter)

    def reset(self, parent: str, dry_run: bool = False, reporter: Reporter | None = None) -> ApplyReport:
        """Remove every VLAN subinterface of ``parent``."""
        report = ApplyReport(parent=parent, dry_run=dry_run)
        self._teardown(report, reporter)
        logger.info(f"Reset {parent}: {len(report.removed)} VLAN subinterface(s) removed")
        return report

    def apply(
        self,
        parent: str,
        entries: Iterable[VlanEntry],
        dry_run: bool = False,
        reporter: Reporter | None = None,
    ) -> ApplyReport:
        """Converge the VLAN subinterfaces of ``parent`` onto ``entries``.

        Args:
            parent: Parent device name, e.g. ``eth0``.
            entries: Definitions in file order. May be a lazy iterator; it is
                consumed after the teardown.
            dry_run: Describe the actions without mutating anything.
            reporter: Called with each action as soon as it is done.

        Returns:
            The ordered action log.

        Raises:
            VlanProvError: Any failure; earlier actions stay applied.
        """
        report = ApplyReport(parent=parent, dry_run=dry_run)

        if not dry_run:
            self.links.load_vlan_module()
            self.links.set_up(parent)

        self._teardown(report, reporter)

        created: set[str] = set()
        for entry in entries:
            subif = entry.subinterface(parent)

            if subif not in created:
                if not dry_run:
                    self.links.add_vlan(parent, subif, entry.vlan_id)
                    self.links.set_up(subif)
                created.add(subif)
                self._record(report, Action(kind=ActionKind.CREATE, device=subif, vlan_id=entry.vlan_id), reporter)

            address = entry.address
            if isinstance(address, StaticAddress):
                if not dry_run:
                    self.links.add_address(subif, address.cidr)
                action = Action(kind=ActionKind.ADDRESS, device=subif, vlan_id=entry.vlan_id, detail=address.cidr)
            elif isinstance(address, DhcpLease):
                if dry_run:
                    client = self.acquirer.select_client(address.family)
                else:
                    client = self.acquirer.acquire(subif, address.family)
                action = Action(
                    kind=ActionKind.DHCP,
                    device=subif,
                    vlan_id=entry.vlan_id,
                    family=address.family,
                    detail=client,
                )
            else:  # pragma: no cover
                raise TypeError(f"Unknown address: {address!r}")
            self._record(report, action, reporter)

        logger.info(
            f"Applied {parent}: {len(report.removed)} removed, {len(report.created)} created, "
            f"{len(report.actions)} action(s){' (dry-run)' if dry_run else ''}"
        )
        return report
