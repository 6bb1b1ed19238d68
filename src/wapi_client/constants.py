"""Named constants for the WAPI client."""

# -----------------------------------------------------------------------------
# Extensible Attributes
# -----------------------------------------------------------------------------

# Identity attributes injected by the client itself, never by callers
EA_CLOUD_API_OWNED: str = "Cloud API Owned"
EA_CMP_TYPE: str = "CMP Type"
EA_TENANT_ID: str = "Tenant ID"

# Virtual machine affinity attributes, only set when a value is known
EA_VM_ID: str = "VM ID"
EA_VM_NAME: str = "VM Name"

# Display name attached to networks created with a name
EA_NETWORK_NAME: str = "Network Name"

# -----------------------------------------------------------------------------
# Fixed Addresses
# -----------------------------------------------------------------------------

# MAC used for reservations created without a known MAC
MAC_ADDRESS_ZERO: str = "00:00:00:00:00:00"

# Accepted match_client classifications for fixed addresses
MATCH_CLIENT_VALUES: frozenset[str] = frozenset(
    {"MAC_ADDRESS", "CLIENT_ID", "RESERVED", "CIRCUIT_ID", "REMOTE_ID"}
)

# -----------------------------------------------------------------------------
# Connector
# -----------------------------------------------------------------------------

DEFAULT_WAPI_VERSION: str = "2.5"

# Object used for batched requests
MULTI_REQUEST_OBJECT: str = "request"

# Rate limit handling
MAX_RATE_LIMIT_RETRIES: int = 3
DEFAULT_RETRY_AFTER_SECONDS: int = 5

# Truncation length for server error details in exception messages
MAX_ERROR_DETAIL_LENGTH: int = 200
