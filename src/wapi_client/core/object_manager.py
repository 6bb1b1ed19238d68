"""Object manager: domain operations on top of the WAPI connector.

Every operation maps to one of four shapes:

- Create: build the object (identity EAs from EABuilder, next-available
  requests where the appliance assigns a value), create it, store the reference.
- Read: search with a template and return the first match, or None. A search
  with no match is not an error.
- Read by reference: populate a template from its reference.
- Update / Delete: keyed by reference.

Composite workflows run their steps strictly in sequence and stop at the first
error:

- create_default_network_views: read-then-create for each view (not atomic)
- update_network_view_ea: read EAs, merge additions and removals, write back
- release_ip: look up the fixed address, delete it if present
- delete_network: delete only if the reference names the expected view
- create_host_record: create, then re-read to pick up the assigned address

Connector errors are never wrapped; they reach the caller unchanged.
"""

from typing import Any, TypeVar

import structlog

from ..config import CloudIdentity
from ..constants import EA_NETWORK_NAME, MAC_ADDRESS_ZERO
from ..models.directives import NextAvailableNetwork, ip_or_next_available
from ..models.objects import (
    CapacityReport,
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
from ..observability.logger import LogContext
from ..utils.exceptions import ValidationError
from ..validation.match_client import validate_match_client
from ..wapi.connector import WAPIConnector
from .ea_builder import EABuilder
from .refcodec import ip_address_from_ref, network_from_ref

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=WAPIObject)


class ObjectManager:
    """
    Typed facade over the WAPI object store.

    Holds no state besides the connector and the read-only cloud identity,
    so one instance can be shared by concurrent callers. Nothing is cached.
    """

    def __init__(self, connector: WAPIConnector, identity: CloudIdentity | None = None) -> None:
        """
        Initialize the object manager.

        Args:
            connector: Connector performing the remote calls
            identity: Cloud identity stamped on created objects. Defaults to
                local management, which attaches no identity attributes.
        """
        self.connector = connector
        self.identity = identity or CloudIdentity()
        self.ea_builder = EABuilder(self.identity)

    @classmethod
    def for_cloud(
        cls,
        connector: WAPIConnector,
        cmp_type: str,
        tenant_id: str,
        omit_cloud_attrs: bool = True,
    ) -> "ObjectManager":
        """Object manager acting for a cloud platform tenant."""
        identity = CloudIdentity(
            cmp_type=cmp_type, tenant_id=tenant_id, omit_cloud_attrs=omit_cloud_attrs
        )
        return cls(connector, identity)

    @classmethod
    def local(cls, connector: WAPIConnector) -> "ObjectManager":
        """Object manager for local management, without identity attributes."""
        return cls(connector, CloudIdentity())

    # -------------------------------------------------------------------------
    # Generic operations
    # -------------------------------------------------------------------------

    async def _create(self, obj: T) -> T:
        obj.ref = await self.connector.create_object(obj)
        logger.debug("Created object", object_type=obj.object_type, ref=obj.ref)
        return obj

    async def _find_one(self, template: T) -> T | None:
        results = await self.connector.search_objects(template)
        if not results:
            logger.debug(
                "No object found",
                object_type=template.object_type,
                filters=template.search_params(),
            )
            return None
        return results[0]

    async def _get_by_ref(self, template: T, ref: str) -> T:
        obj = await self.connector.get_object(template, ref)
        if obj.ref is None:
            obj.ref = ref
        return obj

    async def _delete(self, ref: str) -> str:
        return await self.connector.delete_object(ref)

    # -------------------------------------------------------------------------
    # Network views
    # -------------------------------------------------------------------------

    async def create_network_view(self, name: str) -> NetworkView:
        """Create a network view."""
        return await self._create(NetworkView(name=name, ea=self.ea_builder.basic_ea(False)))

    async def get_network_view(self, name: str) -> NetworkView | None:
        """Return the network view with this name, or None."""
        return await self._find_one(NetworkView(name=name))

    async def _ensure_network_view(self, name: str) -> str:
        network_view = await self.get_network_view(name)
        if network_view is None:
            network_view = await self.create_network_view(name)
            logger.info("Created network view", name=name, ref=network_view.ref)
        else:
            logger.info("Network view already exists", name=name, ref=network_view.ref)
        return network_view.ref or ""

    async def create_default_network_views(
        self, global_view: str, local_view: str
    ) -> tuple[str, str]:
        """
        Make sure both default network views exist and return their references.

        Each view is looked up first and created only when missing. The
        sequence is not atomic: concurrent callers can both create a view.
        """
        with LogContext(workflow="create_default_network_views"):
            global_ref = await self._ensure_network_view(global_view)
            local_ref = await self._ensure_network_view(local_view)
        return global_ref, local_ref

    async def update_network_view_ea(
        self,
        ref: str,
        add_ea: dict[str, Any] | None = None,
        remove_ea: dict[str, Any] | None = None,
    ) -> str:
        """
        Patch the extensible attributes of a network view.

        The current attributes are read, add_ea is applied (overwriting on
        collision), then every key of remove_ea is dropped if present. The
        merged set is written back in one update, replacing the old one.

        Returns:
            Reference returned by the update
        """
        with LogContext(workflow="update_network_view_ea", ref=ref):
            current = await self._get_by_ref(NetworkView().with_return_fields("extattrs"), ref)

            merged = dict(current.ea or {})
            merged.update(add_ea or {})
            for name in remove_ea or {}:
                merged.pop(name, None)

            logger.debug("Writing merged network view EAs", ea=sorted(merged))
            return await self.connector.update_object(
                NetworkView(ea=merged), ref, keep_empty_ea=True
            )

    # -------------------------------------------------------------------------
    # Networks
    # -------------------------------------------------------------------------

    def _network_ea(self, name: str) -> dict[str, Any]:
        ea = self.ea_builder.basic_ea(True)
        if name:
            ea[EA_NETWORK_NAME] = name
        return ea

    async def create_network(self, network_view: str, cidr: str, name: str = "") -> Network:
        """Create a network, tagged with "Network Name" when name is given."""
        network = Network(network_view=network_view, cidr=cidr, ea=self._network_ea(name))
        return await self._create(network)

    async def create_network_container(self, network_view: str, cidr: str) -> NetworkContainer:
        container = NetworkContainer(
            network_view=network_view, cidr=cidr, ea=self.ea_builder.basic_ea(True)
        )
        return await self._create(container)

    async def get_network(
        self, network_view: str, cidr: str = "", ea: dict[str, Any] | None = None
    ) -> Network | None:
        """Return the first network in the view matching cidr and the EA filter, or None."""
        template = Network(network_view=network_view, cidr=cidr or None)
        template.with_ea_search(ea)
        return await self._find_one(template)

    async def get_network_by_ref(self, ref: str) -> Network:
        return await self._get_by_ref(Network(), ref)

    async def get_network_container(self, network_view: str, cidr: str) -> NetworkContainer | None:
        return await self._find_one(NetworkContainer(network_view=network_view, cidr=cidr))

    async def allocate_network(
        self, network_view: str, cidr: str, prefix_length: int, name: str = ""
    ) -> Network | None:
        """
        Carve the next free network of prefix_length out of cidr.

        The create call only reliably returns a reference, so the network's
        view and CIDR are decoded from it. Returns None when the reference is
        empty or cannot be decoded.
        """
        request = Network(
            network_view=network_view,
            cidr=NextAvailableNetwork(
                cidr=cidr, network_view=network_view, prefix_length=prefix_length
            ),
            ea=self._network_ea(name),
        )
        ref = await self.connector.create_object(request)
        if not ref:
            return None
        network = network_from_ref(ref)
        if network is None:
            logger.warning("Could not decode allocated network reference", ref=ref)
        return network

    async def delete_network(self, ref: str, network_view: str) -> str:
        """
        Delete a network only if its reference names the expected view.

        Returns:
            The deleted reference, or "" when the reference does not decode to
            a network in network_view (nothing is deleted).
        """
        network = network_from_ref(ref)
        if network is None:
            logger.warning(
                "Skipping network delete, reference is not a network reference",
                ref=ref,
                expected_view=network_view,
            )
            return ""
        if network.network_view != network_view:
            logger.warning(
                "Skipping network delete, view mismatch",
                ref=ref,
                expected_view=network_view,
                actual_view=network.network_view,
            )
            return ""
        return await self._delete(ref)

    # -------------------------------------------------------------------------
    # Fixed addresses
    # -------------------------------------------------------------------------

    async def allocate_ip(
        self,
        network_view: str,
        cidr: str,
        ip_address: str = "",
        mac_address: str = "",
        name: str = "",
        vm_id: str = "",
        vm_name: str = "",
    ) -> FixedAddress:
        """
        Reserve an address in cidr.

        Without ip_address the appliance picks the next free one. The address
        actually assigned is decoded from the returned reference.
        """
        fixed_address = FixedAddress(
            network_view=network_view,
            cidr=cidr,
            ip_address=ip_or_next_available(ip_address, cidr, network_view),
            mac=mac_address or MAC_ADDRESS_ZERO,
            name=name,
            ea=self.ea_builder.basic_vm_ea(True, vm_id, vm_name),
        )
        await self._create(fixed_address)
        fixed_address.ip_address = ip_address_from_ref(fixed_address.ref)
        return fixed_address

    async def get_fixed_address(
        self, network_view: str, cidr: str, ip_address: str, mac_address: str = ""
    ) -> FixedAddress | None:
        template = FixedAddress(
            network_view=network_view, cidr=cidr, ip_address=ip_address, mac=mac_address
        )
        return await self._find_one(template)

    async def get_fixed_address_by_ref(self, ref: str) -> FixedAddress:
        return await self._get_by_ref(FixedAddress(), ref)

    async def update_fixed_address(
        self,
        ref: str,
        match_client: str = "",
        mac_address: str = "",
        vm_id: str = "",
        vm_name: str = "",
    ) -> FixedAddress:
        """
        Update MAC, match_client and VM attributes of a fixed address.

        The identity EAs are replaced, not merged.

        Raises:
            MatchClientValidationError: If match_client is set but unknown.
                Nothing is sent to the appliance in that case.
        """
        if match_client:
            validate_match_client(match_client)

        update = FixedAddress(
            mac=mac_address or None,
            match_client=match_client or None,
            ea=self.ea_builder.basic_vm_ea(True, vm_id, vm_name),
        )
        update.ref = await self.connector.update_object(update, ref)
        return update

    async def delete_fixed_address(self, ref: str) -> str:
        return await self._delete(ref)

    async def release_ip(
        self, network_view: str, cidr: str, ip_address: str, mac_address: str = ""
    ) -> str:
        """
        Delete the fixed address matching the filters.

        Returns:
            The deleted reference, or "" if no such fixed address exists.
        """
        with LogContext(workflow="release_ip", network_view=network_view, ip_address=ip_address):
            fixed_address = await self.get_fixed_address(
                network_view, cidr, ip_address, mac_address
            )
            if fixed_address is None:
                logger.info("No fixed address to release")
                return ""
            return await self._delete(fixed_address.ref or "")

    # -------------------------------------------------------------------------
    # Extensible attribute definitions
    # -------------------------------------------------------------------------

    async def get_ea_definition(self, name: str) -> EADefinition | None:
        return await self._find_one(EADefinition(name=name))

    async def create_ea_definition(self, ea_definition: EADefinition) -> EADefinition:
        return await self._create(ea_definition.model_copy())

    # -------------------------------------------------------------------------
    # Host records
    # -------------------------------------------------------------------------

    async def create_host_record(
        self,
        enable_dns: bool,
        name: str,
        network_view: str,
        dns_view: str,
        cidr: str,
        ip_address: str = "",
        mac_address: str = "",
        vm_id: str = "",
        vm_name: str = "",
    ) -> HostRecord:
        """
        Create a host record with a single IPv4 binding.

        The record is read back by reference before it is returned so the
        address assigned by the appliance is populated.
        """
        binding = HostRecordIPv4Addr(
            ip_address=ip_or_next_available(ip_address, cidr, network_view),
            mac=mac_address,
        )
        host = HostRecord(
            name=name,
            enable_dns=enable_dns,
            network_view=network_view,
            view=dns_view,
            ipv4addrs=[binding],
            ea=self.ea_builder.basic_vm_ea(True, vm_id, vm_name),
        )
        ref = await self.connector.create_object(host)
        return await self._get_by_ref(HostRecord(), ref)

    async def get_host_record_by_ref(self, ref: str) -> HostRecord:
        return await self._get_by_ref(HostRecord(), ref)

    async def get_host_record(
        self, name: str, network_view: str = "", ip_address: str = ""
    ) -> HostRecord | None:
        template = HostRecord(name=name, network_view=network_view)
        template.with_search_param("ipv4addr", ip_address)
        return await self._find_one(template)

    async def get_ip_address_from_host_record(self, host: HostRecord) -> str:
        """Re-read host and return the address of its first binding ("" if none)."""
        current = await self._get_by_ref(HostRecord(), host.ref or "")
        if not current.ipv4addrs:
            return ""
        return str(current.ipv4addrs[0].ip_address or "")

    async def update_host_record(
        self,
        ref: str,
        ip_address: str,
        mac_address: str,
        vm_id: str = "",
        vm_name: str = "",
    ) -> str:
        """Replace the host's address binding and identity EAs. Returns the new reference."""
        update = HostRecord(
            ipv4addrs=[HostRecordIPv4Addr(ip_address=ip_address, mac=mac_address)],
            ea=self.ea_builder.basic_vm_ea(True, vm_id, vm_name),
        )
        return await self.connector.update_object(update, ref)

    async def delete_host_record(self, ref: str) -> str:
        return await self._delete(ref)

    # -------------------------------------------------------------------------
    # A / PTR / CNAME records
    # -------------------------------------------------------------------------

    async def create_a_record(
        self,
        network_view: str,
        dns_view: str,
        name: str,
        cidr: str,
        ip_address: str = "",
        vm_id: str = "",
        vm_name: str = "",
    ) -> RecordA:
        record = RecordA(
            view=dns_view,
            name=name,
            ip_address=ip_or_next_available(ip_address, cidr, network_view),
            ea=self.ea_builder.basic_vm_ea(True, vm_id, vm_name),
        )
        return await self._create(record)

    async def get_a_record_by_ref(self, ref: str) -> RecordA:
        return await self._get_by_ref(RecordA(), ref)

    async def delete_a_record(self, ref: str) -> str:
        return await self._delete(ref)

    async def create_ptr_record(
        self,
        network_view: str,
        dns_view: str,
        ptrdname: str,
        cidr: str,
        ip_address: str = "",
        vm_id: str = "",
        vm_name: str = "",
    ) -> RecordPTR:
        record = RecordPTR(
            view=dns_view,
            ptrdname=ptrdname,
            ip_address=ip_or_next_available(ip_address, cidr, network_view),
            ea=self.ea_builder.basic_vm_ea(True, vm_id, vm_name),
        )
        return await self._create(record)

    async def get_ptr_record_by_ref(self, ref: str) -> RecordPTR:
        return await self._get_by_ref(RecordPTR(), ref)

    async def delete_ptr_record(self, ref: str) -> str:
        return await self._delete(ref)

    async def create_cname_record(self, canonical: str, name: str, dns_view: str) -> RecordCNAME:
        return await self._create(RecordCNAME(view=dns_view, name=name, canonical=canonical))

    async def get_cname_record_by_ref(self, ref: str) -> RecordCNAME:
        return await self._get_by_ref(RecordCNAME(), ref)

    async def delete_cname_record(self, ref: str) -> str:
        return await self._delete(ref)

    # -------------------------------------------------------------------------
    # Batched requests
    # -------------------------------------------------------------------------

    async def create_multi_object(self, items: list[MultiRequestItem]) -> list[dict[str, Any]]:
        """Send several requests in a single call; returns one result per item."""
        return await self.connector.create_multi_object(items)

    # -------------------------------------------------------------------------
    # Grid inventory
    # -------------------------------------------------------------------------

    async def get_upgrade_status(self, status_type: str) -> list[UpgradeStatus]:
        """
        Return grid upgrade status entries of status_type.

        Raises:
            ValidationError: If status_type is empty
        """
        if not status_type:
            raise ValidationError("Status type can not be empty", field="status_type")
        return await self.connector.search_objects(UpgradeStatus(type=status_type))

    async def get_all_members(self) -> list[Member]:
        return await self.connector.search_objects(Member())

    async def get_capacity_report(self, name: str = "") -> list[CapacityReport]:
        return await self.connector.search_objects(CapacityReport(name=name))

    async def get_license(self) -> list[License]:
        """Return member licenses."""
        return await self.connector.search_objects(License())

    async def get_grid_license(self) -> list[GridLicense]:
        """Return grid-wide licenses."""
        return await self.connector.search_objects(GridLicense())

    async def get_grid_info(self) -> list[Grid]:
        return await self.connector.search_objects(Grid())
