"""Data models for the WAPI client."""

from .directives import NextAvailableIP, NextAvailableNetwork, ip_or_next_available
from .ea import ea_from_wapi, ea_search_params, ea_to_wapi
from .objects import (
    CapacityReport,
    EABearingObject,
    EADefinition,
    FixedAddress,
    Grid,
    GridLicense,
    HostRecord,
    HostRecordIPv4Addr,
    License,
    Member,
    MultiRequestItem,
    Network,
    NetworkContainer,
    NetworkView,
    RecordA,
    RecordCNAME,
    RecordPTR,
    UpgradeStatus,
    WAPIObject,
)

__all__ = [
    # Base
    "WAPIObject",
    "EABearingObject",
    # IPAM
    "NetworkView",
    "Network",
    "NetworkContainer",
    "FixedAddress",
    "EADefinition",
    # DNS
    "HostRecord",
    "HostRecordIPv4Addr",
    "RecordA",
    "RecordPTR",
    "RecordCNAME",
    # Grid inventory
    "Member",
    "License",
    "GridLicense",
    "Grid",
    "CapacityReport",
    "UpgradeStatus",
    # Batch
    "MultiRequestItem",
    # Allocation requests
    "NextAvailableIP",
    "NextAvailableNetwork",
    "ip_or_next_available",
    # Extensible attributes
    "ea_to_wapi",
    "ea_from_wapi",
    "ea_search_params",
]
