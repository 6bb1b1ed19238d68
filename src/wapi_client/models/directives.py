"""Next-available allocation requests.

WAPI accepts a function call in place of a literal address or network, for
example ``func:nextavailableip:10.0.0.0/24,default``. The client models these
as small tagged values and only renders the textual form when a model is
serialized for the wire.
"""

from pydantic import BaseModel, ConfigDict, Field, model_serializer


class NextAvailableIP(BaseModel):
    """Ask the appliance for the next free address in a network."""

    model_config = ConfigDict(frozen=True)

    cidr: str
    network_view: str

    def render(self) -> str:
        return f"func:nextavailableip:{self.cidr},{self.network_view}"

    @model_serializer
    def serialize_directive(self) -> str:
        return self.render()


class NextAvailableNetwork(BaseModel):
    """Ask the appliance for the next free subnet of a size inside a container."""

    model_config = ConfigDict(frozen=True)

    cidr: str
    network_view: str
    prefix_length: int = Field(..., ge=0, le=32)

    def render(self) -> str:
        return f"func:nextavailablenetwork:{self.cidr},{self.network_view},{self.prefix_length}"

    @model_serializer
    def serialize_directive(self) -> str:
        return self.render()


def ip_or_next_available(ip_address: str, cidr: str, network_view: str) -> str | NextAvailableIP:
    """Return the literal address, or a next-available request when it is empty."""
    if ip_address:
        return ip_address
    return NextAvailableIP(cidr=cidr, network_view=network_view)
