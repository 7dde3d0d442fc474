"""iproute2-backed link management."""

from vlanprov.iproute.link import IPRouteLinkManager

__all__ = ["IPRouteLinkManager"]
