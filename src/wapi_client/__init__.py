"""WAPI client - typed object manager for the Infoblox WAPI REST API."""

from .config import ClientConfig, CloudIdentity, WAPIConfig, load_config
from .core import ObjectManager
from .wapi import WAPIConnector

__version__ = "0.1.0"
__all__ = [
    "ObjectManager",
    "WAPIConnector",
    "ClientConfig",
    "CloudIdentity",
    "WAPIConfig",
    "load_config",
]
