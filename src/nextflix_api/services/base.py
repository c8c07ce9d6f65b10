"""Base HTTP client and error taxonomy for upstream movie APIs."""

import logging
from abc import ABC, abstractmethod
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class APIError(Exception):
    """Base exception for API errors.

    Carries the HTTP status the error maps to and a machine-readable code
    that ends up in the error envelope.
    """

    default_error_code = "UPSTREAM_API_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code or self.default_error_code


class InvalidParameterError(APIError):
    """Raised when a request parameter is malformed for the active provider."""

    default_error_code = "VALIDATION_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


class RateLimitError(APIError):
    """Raised when a rate limit is exceeded."""

    default_error_code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int | None = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class NotFoundError(APIError):
    """Raised when a resource is not found."""

    default_error_code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found", error_code: str | None = None):
        super().__init__(message, status_code=404, error_code=error_code)


class UpstreamUnavailableError(APIError):
    """Raised when the upstream API cannot be reached or times out."""

    default_error_code = "UPSTREAM_UNAVAILABLE"


class BaseAPIClient(ABC):
    """Abstract base class for external API clients.

    Provides common functionality for HTTP requests and error
    classification. Subclasses supply authentication via
    ``default_headers`` and ``default_params``.
    """

    error_code = "UPSTREAM_API_ERROR"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the base API client.

        Args:
            base_url: The base URL for the API.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def default_headers(self) -> dict[str, str]:
        """Return default headers for API requests."""
        ...

    @property
    def default_params(self) -> dict[str, Any]:
        """Return query parameters added to every request."""
        return {}

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.default_headers,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.).
            endpoint: API endpoint path.
            params: Query parameters.
            headers: Additional headers to include.

        Returns:
            JSON response as a dictionary.

        Raises:
            NotFoundError: If the resource is not found (404).
            RateLimitError: If rate limit is exceeded (429).
            UpstreamUnavailableError: On timeouts and transport failures.
            APIError: For other HTTP errors.
        """
        client = await self._get_client()
        url = f"{endpoint.lstrip('/')}"

        request_params = dict(self.default_params)
        if params:
            request_params.update(params)

        request_headers = dict(self.default_headers)
        if headers:
            request_headers.update(headers)

        try:
            response = await client.request(
                method=method,
                url=url,
                params=request_params,
                headers=request_headers,
            )
        except httpx.TimeoutException as e:
            logger.warning("Upstream request to %s timed out after %ss", endpoint, self.timeout)
            raise UpstreamUnavailableError(
                f"Upstream request timed out: {e}",
                status_code=504,
                error_code="UPSTREAM_TIMEOUT",
            ) from e
        except httpx.RequestError as e:
            logger.warning("Upstream request to %s failed: %s", endpoint, e)
            raise UpstreamUnavailableError(f"Upstream request failed: {e}", status_code=502) from e

        return self._handle_response(response)

    def _error_message(self, response: httpx.Response) -> str | None:
        """Extract the upstream's own error message from a failed response."""
        return None

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        """Handle the HTTP response.

        Args:
            response: The HTTP response object.

        Returns:
            JSON response as a dictionary.

        Raises:
            NotFoundError: If the resource is not found (404).
            RateLimitError: If rate limit is exceeded (429).
            APIError: For other HTTP errors.
        """
        if response.status_code == 404:
            raise NotFoundError(self._error_message(response) or "Resource not found")

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                "Upstream rate limit exceeded",
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        if response.status_code >= 400:
            message = self._error_message(response) or response.text or "Upstream error"
            raise APIError(
                f"API error: {message}",
                status_code=response.status_code,
                error_code=self.error_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise APIError(
                f"Invalid JSON response: {e}",
                status_code=502,
                error_code="INVALID_UPSTREAM_RESPONSE",
            ) from e

        if not isinstance(data, dict):
            raise APIError(
                "Invalid JSON response: expected an object",
                status_code=502,
                error_code="INVALID_UPSTREAM_RESPONSE",
            )
        return data

    def _parse(self, model: type[ModelT], data: dict[str, Any]) -> ModelT:
        """Validate a raw payload, reporting malformed bodies as upstream errors."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning("Malformed %s payload: %s", model.__name__, e)
            raise APIError(
                f"Invalid upstream response: {e.error_count()} field error(s) in {model.__name__}",
                status_code=502,
                error_code="INVALID_UPSTREAM_RESPONSE",
            ) from e

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Make a GET request to the API."""
        return await self._request("GET", endpoint, params=params, headers=headers)

    async def __aenter__(self) -> "BaseAPIClient":
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
