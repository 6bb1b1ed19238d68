"""HTTP connector for the WAPI object API."""

from .connector import WAPIConnector
from .response_models import ErrorResponse

__all__ = ["WAPIConnector", "ErrorResponse"]
