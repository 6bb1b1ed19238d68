"""WAPI REST connector.

Performs the actual HTTP calls behind the object manager.

Architecture Overview:
---------------------
- Async HTTP communication via httpx
- HTTP basic authentication on every request
- Automatic retry with exponential backoff for transport failures
- Rate limit handling honouring Retry-After
- Model <-> JSON conversion at this boundary only

Object Addressing:
-----------------
- POST {object_type}            create, returns the new reference
- GET  {object_type}?filters    search, returns a list (possibly empty)
- GET  {reference}              read one object
- PUT  {reference}              update, returns the (possibly new) reference
- DELETE {reference}            delete, returns the deleted reference
- POST request                  batched requests

Search filters come from the template's non-empty search fields, EA filters
are sent as ``*<name>=<value>`` and the projection as ``_return_fields``.
"""

import asyncio
import time
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import WAPIConfig
from ..constants import DEFAULT_RETRY_AFTER_SECONDS, MAX_RATE_LIMIT_RETRIES, MULTI_REQUEST_OBJECT
from ..models.objects import MultiRequestItem, WAPIObject
from ..observability.metrics import get_global_collector
from ..utils.exceptions import (
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    WAPIAPIError,
    WAPIAuthenticationError,
    WAPIRateLimitError,
)
from .response_models import ErrorResponse

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=WAPIObject)


class WAPIConnector:
    """
    Connector to the appliance object API.

    Features:
    - Generic create/get/search/update/delete keyed by object references
    - Automatic retries with exponential backoff
    - Rate limit handling
    - Connection pooling via httpx.AsyncClient
    """

    def __init__(self, config: WAPIConfig):
        """
        Initialize the connector.

        Args:
            config: Connection details
        """
        self.config = config
        self.base_url = config.base_url

        # HTTP client management
        self._client: httpx.AsyncClient | None = None  # Lazy-loaded

        self.collector = get_global_collector()

    async def __aenter__(self) -> "WAPIConnector":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client with lazy initialization."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                auth=httpx.BasicAuth(self.config.username, self.config.password),
                verify=self.config.verify_ssl,
                timeout=self.config.timeout,
                limits=httpx.Limits(
                    max_connections=self.config.max_connections,
                    max_keepalive_connections=self.config.max_keepalive,
                ),
            )
        return self._client

    @retry(
        retry=retry_if_exception_type((httpx.NetworkError, httpx.TimeoutException)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _send(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None,
        json: Any,
    ) -> httpx.Response:
        return await self.client.request(method, url, params=params, json=json)

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """
        Make an authenticated request to the object API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Object type or reference, relative to the base URL
            params: Query parameters
            json: JSON body

        Returns:
            Parsed JSON response

        Raises:
            WAPIAPIError: For general API errors
            WAPIAuthenticationError: For 401 Unauthorized
            WAPIRateLimitError: For 429 Too Many Requests (after max retries)
            ResourceNotFoundError: For 404 Not Found
            ResourceAlreadyExistsError: For duplicate objects
        """
        url = f"{self.base_url}{path.lstrip('/')}"
        logger.debug("WAPI request", method=method, path=path, params=params)

        rate_limit_retries = 0
        while True:
            start_time = time.monotonic()
            try:
                response = await self._send(method, url, params, json)
            except httpx.HTTPError as e:
                self.collector.count_request(method, "transport_error")
                raise WAPIAPIError(f"HTTP request failed: {e}") from e

            self.collector.record_latency(method, (time.monotonic() - start_time) * 1000)
            self.collector.count_request(method, response.status_code)

            if response.status_code != 429:
                break

            retry_after = int(response.headers.get("Retry-After", DEFAULT_RETRY_AFTER_SECONDS))
            if rate_limit_retries >= MAX_RATE_LIMIT_RETRIES:
                logger.error("Rate limit retries exhausted", retries=rate_limit_retries, path=path)
                raise WAPIRateLimitError(retry_after)

            rate_limit_retries += 1
            logger.warning(
                "Rate limited, waiting before retry",
                retry_after=retry_after,
                attempt=rate_limit_retries,
                max_retries=MAX_RATE_LIMIT_RETRIES,
                path=path,
            )
            await asyncio.sleep(retry_after)

        if response.is_error:
            self._raise_for_error(response, path)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _raise_for_error(self, response: httpx.Response, path: str) -> None:
        message = response.text
        error_response: ErrorResponse | None = None
        if response.headers.get("content-type", "").startswith("application/json"):
            try:
                error_response = ErrorResponse.model_validate(response.json())
                message = error_response.get_full_message()
            except (ValidationError, ValueError):
                # Keep raw text if the body is not a WAPI error document
                pass

        if response.status_code == 401:
            logger.error("Authentication failed", path=path)
            raise WAPIAuthenticationError(message)
        if response.status_code == 404:
            raise ResourceNotFoundError(path, message)
        if response.status_code == 409 or (error_response and error_response.is_duplicate()):
            raise ResourceAlreadyExistsError(
                f"Resource already exists: {message}", object_type=path.split("/")[0]
            )
        raise WAPIAPIError(
            f"API Error {response.status_code}: {message}", status_code=response.status_code
        )

    @staticmethod
    def _return_fields_param(obj: WAPIObject) -> dict[str, str]:
        fields = obj.requested_return_fields()
        return {"_return_fields": ",".join(fields)} if fields else {}

    @staticmethod
    def _extract_ref(result: Any) -> str:
        if isinstance(result, dict):
            return result.get("_ref", "")
        return result or ""

    # -------------------------------------------------------------------------
    # Object operations
    # -------------------------------------------------------------------------

    async def create_object(self, obj: WAPIObject) -> str:
        """Create obj and return its new reference."""
        result = await self.request("POST", obj.object_type, json=obj.to_wapi())
        ref = self._extract_ref(result)
        logger.debug("Created object", object_type=obj.object_type, ref=ref)
        return ref

    async def get_object(self, obj: T, ref: str) -> T:
        """Read the object at ref, parsed as the template's type."""
        result = await self.request("GET", ref, params=self._return_fields_param(obj))
        return type(obj).from_wapi(result)

    async def search_objects(self, obj: T) -> list[T]:
        """Search objects matching the template. No match is an empty list."""
        params = obj.search_params()
        params.update(self._return_fields_param(obj))
        result = await self.request("GET", obj.object_type, params=params)
        return [type(obj).from_wapi(item) for item in result or []]

    async def update_object(self, obj: WAPIObject, ref: str, keep_empty_ea: bool = False) -> str:
        """Update the object at ref with obj's set fields and return the new reference."""
        result = await self.request("PUT", ref, json=obj.to_wapi(keep_empty_ea=keep_empty_ea))
        return self._extract_ref(result)

    async def delete_object(self, ref: str) -> str:
        """Delete the object at ref and return the deleted reference."""
        result = await self.request("DELETE", ref)
        return self._extract_ref(result)

    async def create_multi_object(self, items: list[MultiRequestItem]) -> list[dict[str, Any]]:
        """Send several requests in one call to the request object."""
        result = await self.request(
            "POST", MULTI_REQUEST_OBJECT, json=[item.to_wapi() for item in items]
        )
        return result or []
