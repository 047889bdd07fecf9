"""HTTP error handling utilities."""

import logging
from typing import Any, Optional, Type

import httpx

logger = logging.getLogger(__name__)


async def safe_http_request(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    error_class: Type[Exception],
    transport_error_class: Optional[Type[Exception]] = None,
    **kwargs: Any,
) -> httpx.Response:
    """
    Make HTTP request with consistent error handling.

    Args:
        client: httpx.AsyncClient instance
        method: HTTP method (GET, POST, etc.)
        path: Request path
        error_class: Exception class raised for non-2xx responses. Must accept
            ``status_code`` and ``body`` keyword arguments.
        transport_error_class: Exception class raised when no response was
            received (connection failure, timeout). Defaults to error_class.
        **kwargs: Additional arguments for request

    Returns:
        Response object

    Raises:
        error_class: On non-success HTTP status
        transport_error_class: On connection errors and timeouts
    """
    transport_error_class = transport_error_class or error_class
    try:
        response = await client.request(method, path, **kwargs)
        response.raise_for_status()
        return response
    except httpx.ConnectError as e:
        logger.error(f"Connection failed to {client.base_url}{path}: {e}")
        raise transport_error_class(f"Connection failed: {e}") from e
    except httpx.TimeoutException as e:
        logger.error(f"Request timeout for {client.base_url}{path}: {e}")
        raise transport_error_class(f"Request timeout: {e}") from e
    except httpx.HTTPStatusError as e:
        logger.error(f"HTTP {e.response.status_code} error for {client.base_url}{path}")
        raise error_class(
            f"HTTP {e.response.status_code}: {e.response.text}",
            status_code=e.response.status_code,
            body=e.response.text,
        ) from e
    except httpx.HTTPError as e:
        logger.error(f"Unexpected error for {client.base_url}{path}: {e}")
        raise transport_error_class(f"Request failed: {e}") from e
