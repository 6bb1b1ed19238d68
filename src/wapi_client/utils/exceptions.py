"""Custom exceptions for the WAPI client.

Exception Hierarchy:
-------------------
WAPIClientError (base)
├── ValidationError
│   └── MatchClientValidationError  # Unknown match_client value on a fixed address
├── ResourceNotFoundError           # GET/PUT/DELETE on a reference that no longer exists (404)
└── WAPIAPIError (base for API errors)
    ├── ResourceAlreadyExistsError  # HTTP 409 / duplicate object
    ├── WAPIRateLimitError          # HTTP 429 Too Many Requests
    └── WAPIAuthenticationError     # HTTP 401 Unauthorized

Usage Guidelines:
----------------
1. The object manager never wraps connector errors. Whatever the connector
   raises reaches the caller unchanged.

2. Searches that match nothing are not errors: singular reads return None.

3. ValidationError is raised locally, before any request is sent.

4. httpx transport errors are retried by the connector and then surface as
   WAPIAPIError with the original exception chained.
"""


class WAPIClientError(Exception):
    """Base exception for all WAPI client errors."""

    pass


class ValidationError(WAPIClientError):
    """Raised when a request is rejected locally before reaching the appliance."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """
        Initialize ValidationError.

        Args:
            message: Error message.
            field: Optional name of the offending field.
        """
        super().__init__(message)
        self.field = field


class MatchClientValidationError(ValidationError):
    """Raised when a fixed address update carries an unknown match_client value."""

    def __init__(self, value: str) -> None:
        super().__init__(f"wrong value for match_client passed: {value!r}", field="match_client")
        self.value = value


class ResourceNotFoundError(WAPIClientError):
    """Raised when the appliance answers 404 for a reference or object type."""

    def __init__(self, resource: str, message: str = "") -> None:
        """
        Initialize ResourceNotFoundError.

        Args:
            resource: Reference or object path that was requested.
            message: Server message, if any.
        """
        text = f"Resource not found: {resource}"
        if message:
            text += f" ({message})"
        super().__init__(text)
        self.resource = resource


class WAPIAPIError(WAPIClientError):
    """Base exception for WAPI API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """
        Initialize WAPIAPIError.

        Args:
            message: Error message.
            status_code: Optional HTTP status code.
        """
        super().__init__(message)
        self.status_code = status_code


class ResourceAlreadyExistsError(WAPIAPIError):
    """Raised when the appliance rejects a create as a duplicate (409 Conflict)."""

    def __init__(self, message: str, object_type: str | None = None) -> None:
        super().__init__(message, status_code=409)
        self.object_type = object_type


class WAPIRateLimitError(WAPIAPIError):
    """Raised when the appliance keeps answering 429 after the allowed waits."""

    def __init__(self, retry_after: int) -> None:
        super().__init__(f"Rate limit exceeded, retry after {retry_after}s", status_code=429)
        self.retry_after = retry_after


class WAPIAuthenticationError(WAPIAPIError):
    """Raised when the appliance rejects the configured credentials."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, status_code=401)
