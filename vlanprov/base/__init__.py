"""Abstract capability interfaces consumed by the reconciler and inspector."""

from vlanprov.base.acquirer import BaseAddressAcquirer
from vlanprov.base.link import BaseLinkManager

__all__ = [
    "BaseLinkManager",
    "BaseAddressAcquirer",
]
