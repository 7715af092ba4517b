"""
Upstream employee service client configuration.
Uses httpx for the outbound JSON API calls.
"""

import logging
import os
from typing import Optional

import httpx
from dotenv import load_dotenv

from app.exceptions import RateLimitExceededError

load_dotenv()

logger = logging.getLogger(__name__)

EMPLOYEE_SERVICE_BASE_URL = os.getenv(
    "EMPLOYEE_SERVICE_BASE_URL", "http://localhost:8112/api/v1/employee"
)
EMPLOYEE_SERVICE_TIMEOUT_SECONDS = float(os.getenv("EMPLOYEE_SERVICE_TIMEOUT_SECONDS", "10"))

if EMPLOYEE_SERVICE_TIMEOUT_SECONDS <= 0:
    raise ValueError("EMPLOYEE_SERVICE_TIMEOUT_SECONDS must be greater than 0")


async def _raise_on_rate_limit(response: httpx.Response) -> None:
    """
    Response hook: turn an upstream 429 into RateLimitExceededError.

    Runs before the caller sees the response, so every service call gets the
    same classification without checking the status itself.
    """
    if response.status_code != 429:
        return

    logger.warning(
        "Received 429 Too Many Requests from external service at %s",
        response.request.url,
    )
    await response.aread()
    body = response.text or "Rate limit exceeded"
    logger.debug("Body of 429 response: %s", body)
    raise RateLimitExceededError(
        f"External service rate limit (429) encountered: {body}"
    )


def build_employee_http_client(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the AsyncClient used for every call to the upstream service.

    Args:
        base_url: Upstream base URL (defaults to EMPLOYEE_SERVICE_BASE_URL)
        timeout: Per-request timeout in seconds (defaults to
                 EMPLOYEE_SERVICE_TIMEOUT_SECONDS)
        transport: Optional transport override; tests pass an
                   httpx.MockTransport here

    Returns:
        A configured httpx.AsyncClient with the 429 hook installed.
    """
    resolved_url = base_url or EMPLOYEE_SERVICE_BASE_URL
    logger.info("Initializing employee HTTP client with base URL: %s", resolved_url)
    return httpx.AsyncClient(
        base_url=resolved_url,
        timeout=httpx.Timeout(timeout or EMPLOYEE_SERVICE_TIMEOUT_SECONDS),
        headers={
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
        event_hooks={"response": [_raise_on_rate_limit]},
        transport=transport,
    )


# Shared client for the whole process; closed on application shutdown
employee_http_client: httpx.AsyncClient = build_employee_http_client()
