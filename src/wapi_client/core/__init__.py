"""Core logic: EA builder, reference codec and the object manager."""

from .ea_builder import EABuilder
from .object_manager import ObjectManager
from .refcodec import ip_address_from_ref, network_from_ref, network_view_from_ref

__all__ = [
    "EABuilder",
    "ObjectManager",
    "network_view_from_ref",
    "network_from_ref",
    "ip_address_from_ref",
]
