"""Pydantic models for WAPI objects.

Every remote object is addressed by an opaque reference (``_ref``) assigned by
the appliance. The models describe, per object type:

- ``object_type``: WAPI object path (``network``, ``record:host``, ...)
- ``search_fields``: fields used as filters when a template is searched.
  Fields left as None or "" do not filter.
- ``default_return_fields``: fields requested on reads. A template can narrow
  them with ``with_return_fields()``.

Usage:
    template = Network(network_view="default", cidr="10.0.0.0/24")
    params = template.search_params()     # {"network_view": "default", "network": "10.0.0.0/24"}
    payload = template.to_wapi()          # JSON body for create/update
    network = Network.from_wapi(response) # parse a WAPI reply
"""

from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from .directives import NextAvailableIP, NextAvailableNetwork
from .ea import ea_from_wapi, ea_search_params, ea_to_wapi, is_wapi_ea


def _prune(value: Any) -> Any:
    """Drop empty-string values from nested payload dicts."""
    if isinstance(value, dict):
        return {k: _prune(v) for k, v in value.items() if v != ""}
    if isinstance(value, list):
        return [_prune(item) for item in value]
    return value


class WAPIObject(BaseModel):
    """Base model for every referenceable WAPI object."""

    object_type: ClassVar[str] = ""
    search_fields: ClassVar[tuple[str, ...]] = ()
    default_return_fields: ClassVar[tuple[str, ...]] = ()

    ref: str | None = Field(default=None, alias="_ref", description="Object reference")

    model_config = ConfigDict(populate_by_name=True)

    _return_fields: list[str] | None = PrivateAttr(default=None)
    _extra_search: dict[str, str] = PrivateAttr(default_factory=dict)

    @classmethod
    def from_wapi(cls, data: dict[str, Any]) -> "WAPIObject":
        """Build a model from a WAPI reply."""
        return cls.model_validate(data)

    def to_wapi(self, *, keep_empty_ea: bool = False) -> dict[str, Any]:
        """
        Build the JSON body sent on create or update.

        The reference is never sent. Unset fields are omitted, and so is an
        empty EA mapping unless keep_empty_ea is set.
        """
        data = self.model_dump(
            mode="json", by_alias=True, exclude_none=True, exclude={"ref", "ea"}
        )
        data = _prune(data)
        ea = getattr(self, "ea", None)
        if ea or (keep_empty_ea and ea is not None):
            data["extattrs"] = ea_to_wapi(ea)
        return data

    def with_return_fields(self, *fields: str) -> "WAPIObject":
        """Restrict the fields the appliance returns for this template."""
        self._return_fields = list(fields)
        return self

    def with_search_param(self, name: str, value: str) -> "WAPIObject":
        """Add a raw WAPI search filter not covered by search_fields."""
        if value:
            self._extra_search[name] = value
        return self

    def requested_return_fields(self) -> list[str]:
        if self._return_fields is not None:
            return list(self._return_fields)
        return list(self.default_return_fields)

    def search_params(self) -> dict[str, str]:
        """Build WAPI search filters from the non-empty search fields."""
        params: dict[str, str] = {}
        fields = type(self).model_fields
        for name in self.search_fields:
            value = getattr(self, name)
            if value is None or value == "":
                continue
            params[fields[name].alias or name] = str(value)
        params.update(self._extra_search)
        return params


class EABearingObject(WAPIObject):
    """WAPI object that carries extensible attributes."""

    ea: dict[str, Any] | None = Field(default=None, alias="extattrs")

    _ea_search: dict[str, Any] = PrivateAttr(default_factory=dict)

    @field_validator("ea", mode="before")
    @classmethod
    def decode_extattrs(cls, value: Any) -> Any:
        if is_wapi_ea(value):
            return ea_from_wapi(value)
        return value

    def with_ea_search(self, ea: dict[str, Any] | None) -> "EABearingObject":
        """Filter searches on extensible attribute values."""
        self._ea_search = dict(ea or {})
        return self

    def search_params(self) -> dict[str, str]:
        params = super().search_params()
        params.update(ea_search_params(self._ea_search))
        return params


# -----------------------------------------------------------------------------
# IPAM
# -----------------------------------------------------------------------------


class NetworkView(EABearingObject):
    """Namespace for networks and addresses."""

    object_type: ClassVar[str] = "networkview"
    search_fields: ClassVar[tuple[str, ...]] = ("name",)
    default_return_fields: ClassVar[tuple[str, ...]] = ("name", "extattrs")

    name: str | None = None


class Network(EABearingObject):
    """IPv4 network inside a network view."""

    object_type: ClassVar[str] = "network"
    search_fields: ClassVar[tuple[str, ...]] = ("network_view", "cidr")
    default_return_fields: ClassVar[tuple[str, ...]] = ("network_view", "network", "extattrs")

    network_view: str | None = None
    cidr: str | NextAvailableNetwork | None = Field(default=None, alias="network")


class NetworkContainer(Network):
    """Parent container from which networks are carved."""

    object_type: ClassVar[str] = "networkcontainer"


class FixedAddress(EABearingObject):
    """Static IP-to-MAC reservation."""

    object_type: ClassVar[str] = "fixedaddress"
    search_fields: ClassVar[tuple[str, ...]] = ("network_view", "cidr", "ip_address", "mac")
    default_return_fields: ClassVar[tuple[str, ...]] = (
        "network_view",
        "network",
        "ipv4addr",
        "mac",
        "name",
        "match_client",
        "extattrs",
    )

    network_view: str | None = None
    cidr: str | None = Field(default=None, alias="network")
    ip_address: str | NextAvailableIP | None = Field(default=None, alias="ipv4addr")
    mac: str | None = None
    name: str | None = None
    match_client: str | None = None


class EADefinition(WAPIObject):
    """Schema of an extensible attribute."""

    object_type: ClassVar[str] = "extensibleattributedef"
    search_fields: ClassVar[tuple[str, ...]] = ("name",)
    default_return_fields: ClassVar[tuple[str, ...]] = (
        "name",
        "type",
        "comment",
        "flags",
        "list_values",
        "allowed_object_types",
    )

    name: str | None = None
    type: str | None = None
    comment: str | None = None
    flags: str | None = None
    list_values: list[dict[str, Any]] | None = None
    allowed_object_types: list[str] | None = None


# -----------------------------------------------------------------------------
# DNS
# -----------------------------------------------------------------------------


class HostRecordIPv4Addr(BaseModel):
    """One address binding of a host record."""

    ref: str | None = Field(default=None, alias="_ref")
    ip_address: str | NextAvailableIP | None = Field(default=None, alias="ipv4addr")
    mac: str | None = None
    configure_for_dhcp: bool | None = None

    model_config = ConfigDict(populate_by_name=True)


class HostRecord(EABearingObject):
    """Host record with one or more IPv4 bindings."""

    object_type: ClassVar[str] = "record:host"
    search_fields: ClassVar[tuple[str, ...]] = ("name", "view", "network_view")
    default_return_fields: ClassVar[tuple[str, ...]] = (
        "name",
        "view",
        "network_view",
        "configure_for_dns",
        "ipv4addrs",
        "extattrs",
    )

    name: str | None = None
    view: str | None = None
    network_view: str | None = None
    enable_dns: bool | None = Field(default=None, alias="configure_for_dns")
    ipv4addrs: list[HostRecordIPv4Addr] | None = None


class RecordA(EABearingObject):
    """DNS A record."""

    object_type: ClassVar[str] = "record:a"
    search_fields: ClassVar[tuple[str, ...]] = ("view", "name", "ip_address")
    default_return_fields: ClassVar[tuple[str, ...]] = (
        "view",
        "name",
        "ipv4addr",
        "zone",
        "extattrs",
    )

    view: str | None = None
    name: str | None = None
    ip_address: str | NextAvailableIP | None = Field(default=None, alias="ipv4addr")
    zone: str | None = None


class RecordPTR(EABearingObject):
    """DNS PTR record."""

    object_type: ClassVar[str] = "record:ptr"
    search_fields: ClassVar[tuple[str, ...]] = ("view", "ptrdname", "ip_address")
    default_return_fields: ClassVar[tuple[str, ...]] = (
        "view",
        "ptrdname",
        "ipv4addr",
        "zone",
        "extattrs",
    )

    view: str | None = None
    ptrdname: str | None = None
    ip_address: str | NextAvailableIP | None = Field(default=None, alias="ipv4addr")
    zone: str | None = None


class RecordCNAME(WAPIObject):
    """DNS alias. Aliases carry no extensible attributes in this client."""

    object_type: ClassVar[str] = "record:cname"
    search_fields: ClassVar[tuple[str, ...]] = ("view", "name", "canonical")
    default_return_fields: ClassVar[tuple[str, ...]] = ("view", "name", "canonical", "zone")

    view: str | None = None
    name: str | None = None
    canonical: str | None = None
    zone: str | None = None


# -----------------------------------------------------------------------------
# Grid inventory (read-only)
# -----------------------------------------------------------------------------


class InventoryObject(WAPIObject):
    """Read-only grid object. Unknown fields are kept as extras."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Member(InventoryObject):
    object_type: ClassVar[str] = "member"
    default_return_fields: ClassVar[tuple[str, ...]] = (
        "host_name",
        "config_addr_type",
        "platform",
        "service_type_configuration",
        "node_info",
        "vip_setting",
    )

    host_name: str | None = None
    config_addr_type: str | None = None
    platform: str | None = None
    service_type_configuration: str | None = None
    node_info: list[dict[str, Any]] | None = None
    vip_setting: dict[str, Any] | None = None


class License(InventoryObject):
    object_type: ClassVar[str] = "member:license"
    default_return_fields: ClassVar[tuple[str, ...]] = (
        "expiration_status",
        "expiry_date",
        "key",
        "limit",
        "type",
    )

    expiration_status: str | None = None
    expiry_date: int | None = None
    key: str | None = None
    limit: str | int | None = None
    type: str | None = None


class GridLicense(License):
    object_type: ClassVar[str] = "license:gridwide"
    default_return_fields: ClassVar[tuple[str, ...]] = (
        "expiration_status",
        "expiry_date",
        "key",
        "limit",
        "limit_context",
        "type",
    )

    limit_context: str | None = None


class Grid(InventoryObject):
    object_type: ClassVar[str] = "grid"
    default_return_fields: ClassVar[tuple[str, ...]] = ("name", "ntp_setting")

    name: str | None = None
    ntp_setting: dict[str, Any] | None = None


class CapacityReport(InventoryObject):
    object_type: ClassVar[str] = "capacityreport"
    search_fields: ClassVar[tuple[str, ...]] = ("name",)
    default_return_fields: ClassVar[tuple[str, ...]] = (
        "name",
        "hardware_type",
        "max_capacity",
        "object_counts",
        "percent_used",
        "role",
        "total_objects",
    )

    name: str | None = None
    hardware_type: str | None = None
    max_capacity: int | None = None
    object_counts: list[dict[str, Any]] | None = None
    percent_used: int | None = None
    role: str | None = None
    total_objects: int | None = None


class UpgradeStatus(InventoryObject):
    object_type: ClassVar[str] = "upgradestatus"
    search_fields: ClassVar[tuple[str, ...]] = ("type",)
    default_return_fields: ClassVar[tuple[str, ...]] = (
        "type",
        "subelements_status",
        "upgrade_group",
        "upgrade_state",
    )

    type: str | None = None
    subelements_status: list[dict[str, Any]] | None = None
    upgrade_group: str | None = None
    upgrade_state: str | None = None


# -----------------------------------------------------------------------------
# Batched requests
# -----------------------------------------------------------------------------


class MultiRequestItem(BaseModel):
    """One entry of a WAPI ``request`` object body."""

    method: Literal["GET", "POST", "PUT", "DELETE"]
    object: str
    data: dict[str, Any] | None = None
    args: dict[str, Any] | None = None

    @classmethod
    def create(cls, obj: WAPIObject) -> "MultiRequestItem":
        """Build a POST entry that creates obj."""
        return cls(method="POST", object=obj.object_type, data=obj.to_wapi())

    def to_wapi(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
