"""Decoding of identifying data embedded in WAPI object references.

The appliance encodes location information in the reference text itself:

    networkview/ZG5zLm5ldHdvcmtfdmlldyQyMw:global_view/false
    network/ZG5zLm5ldHdvcmskODkuMC4wLjAvMjQvMjU:89.0.0.0/24/global_view
    fixedaddress/ZG5zLmJpbmRfY25h:12.0.10.1/external

Reading it back client-side saves a round trip after operations that only
return a reference, such as next-available allocations. References are only
ever parsed here, never built. A reference of an unexpected shape is a normal
outcome: the decoders return None (or "") and never raise.
"""

import re

from ..models.objects import Network, NetworkView

_NETWORK_VIEW_REF = re.compile(r"networkview/\w+:([^/]+)/\w+")
# View names may contain slashes, so the view group runs to the end
_NETWORK_REF = re.compile(r"network/\w+:(\d+\.\d+\.\d+\.\d+/\d+)/(.+)")
_FIXED_ADDRESS_REF = re.compile(r"fixedaddress/\w+:(\d+\.\d+\.\d+\.\d+)/.+")


def network_view_from_ref(ref: str | None) -> NetworkView | None:
    """Return the network view named in ref, or None if ref does not match."""
    match = _NETWORK_VIEW_REF.search(ref or "")
    if match is None:
        return None
    return NetworkView(ref=ref, name=match.group(1))


def network_from_ref(ref: str | None) -> Network | None:
    """Return the network (view and CIDR) named in ref, or None if ref does not match."""
    match = _NETWORK_REF.search(ref or "")
    if match is None:
        return None
    return Network(ref=ref, cidr=match.group(1), network_view=match.group(2))


def ip_address_from_ref(ref: str | None) -> str:
    """Return the IPv4 address of a fixed address reference, or "" if ref does not match."""
    match = _FIXED_ADDRESS_REF.search(ref or "")
    if match is None:
        return ""
    return match.group(1)
