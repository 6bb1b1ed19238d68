"""Identity attributes attached to objects created on behalf of a cloud platform."""

from typing import Any

from ..config import CloudIdentity
from ..constants import EA_CLOUD_API_OWNED, EA_CMP_TYPE, EA_TENANT_ID, EA_VM_ID, EA_VM_NAME


class EABuilder:
    """
    Build the extensible attribute set for new and updated objects.

    The result depends only on the (immutable) identity and the arguments.
    When the identity omits cloud attributes every method returns an empty
    mapping, whatever the arguments.
    """

    def __init__(self, identity: CloudIdentity) -> None:
        self.identity = identity

    def basic_ea(self, cloud_api_owned: bool) -> dict[str, Any]:
        """Return a fresh mapping with the reserved identity attributes."""
        if self.identity.omit_cloud_attrs:
            return {}
        return {
            EA_CLOUD_API_OWNED: cloud_api_owned,
            EA_CMP_TYPE: self.identity.cmp_type,
            EA_TENANT_ID: self.identity.tenant_id,
        }

    def basic_vm_ea(self, cloud_api_owned: bool, vm_id: str = "", vm_name: str = "") -> dict[str, Any]:
        """
        Return basic_ea() plus the virtual machine attributes that are known.

        Empty vm_id/vm_name are left out of the mapping rather than stored as "".
        """
        ea = self.basic_ea(cloud_api_owned)
        if self.identity.omit_cloud_attrs:
            return ea
        if vm_id:
            ea[EA_VM_ID] = vm_id
        if vm_name:
            ea[EA_VM_NAME] = vm_name
        return ea
