"""
Employee service: calls the upstream employee API and maps its payloads.

Every function performs a single round trip through the shared
``employee_http_client`` and awaits it before returning. Aggregate queries
(search, highest salary, top earners) fetch the full list and compute the
result in memory via app.services.employee_stats.

Error contract:
  - RateLimitExceededError (raised by the client's 429 hook) propagates as-is.
  - Any other transport/status/payload failure becomes UpstreamServiceError.
"""

import logging
from typing import List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from app.exceptions import RateLimitExceededError, UpstreamServiceError
from app.models.employee import (
    CreateEmployeeRequest,
    DeleteEmployeeRequest,
    Employee,
    UpstreamDeleteResponse,
    UpstreamEmployee,
    UpstreamEmployeeListResponse,
    UpstreamEmployeeResponse,
)
from app.services.employee_stats import filter_by_name, highest_salary, top_earning_names
from app.upstream import employee_http_client

logger = logging.getLogger(__name__)

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)


def _collection_url() -> str:
    # httpx appends "/" to base_url; the upstream collection route has none
    return str(employee_http_client.base_url).rstrip("/")


def _member_path(employee_id: str) -> str:
    """
    Upstream path for one employee, with the id as a single escaped segment.

    Route params arrive decoded, so "?", "#" and "/" must be re-escaped. quote()
    leaves dots alone and httpx collapses "." and ".." segments, so those two
    ids get their dots escaped as well.
    """
    segment = quote(employee_id, safe="")
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return f"/{segment}"


def _to_employee(record: UpstreamEmployee) -> Employee:
    logger.debug("Mapping UpstreamEmployee(id=%r) to Employee", record.id)
    return Employee(
        id=record.id,
        name=record.employee_name,
        salary=record.employee_salary,
        age=record.employee_age,
        title=record.employee_title,
        email=record.employee_email,
    )


async def _call_upstream(
    operation: str,
    method: str,
    url: str,
    envelope: Type[EnvelopeT],
    json: Optional[dict] = None,
    not_found_ok: bool = False,
) -> Optional[EnvelopeT]:
    """
    Send one request upstream and parse the ``{data, status}`` envelope.

    Args:
        operation: Name used in log lines and error messages
        method: HTTP method
        url: Absolute URL or path relative to the client's base URL
        envelope: Pydantic model describing the expected envelope
        json: Optional JSON body
        not_found_ok: When True, an upstream 404 returns None instead of failing

    Returns:
        The parsed envelope, or None for a tolerated 404. An empty response
        body parses as an envelope with ``data`` unset.

    Raises:
        RateLimitExceededError: upstream answered 429
        UpstreamServiceError: any other failure
    """
    try:
        response = await employee_http_client.request(method, url, json=json)
        if not_found_ok and response.status_code == 404:
            return None
        response.raise_for_status()
        payload = response.json() if response.content else {}
        return envelope.model_validate(payload)
    except RateLimitExceededError:
        logger.error("Rate limit exceeded in %s", operation)
        raise
    except (httpx.HTTPError, ValueError) as e:
        # ValueError covers bad JSON and pydantic ValidationError
        logger.error("Unexpected error in %s: %s", operation, e, exc_info=True)
        raise UpstreamServiceError(f"{operation} failed: {e}") from e


async def get_all_employees() -> List[Employee]:
    logger.info("Entering get_all_employees()")
    result = await _call_upstream(
        "get_all_employees", "GET", _collection_url(), UpstreamEmployeeListResponse
    )
    records = result.data or []
    logger.info("Fetched %d employees from external service", len(records))
    return [_to_employee(r) for r in records]


async def get_employees_by_name_search(name: str) -> List[Employee]:
    logger.info("Entering get_employees_by_name_search() with name=%r", name)
    return filter_by_name(await get_all_employees(), name)


async def get_employee_by_id(employee_id: str) -> Optional[Employee]:
    """
    Fetch one employee by id.

    Returns None when the upstream answers 404 or returns ``data: null``.
    """
    logger.info("Entering get_employee_by_id() with id=%r", employee_id)
    result = await _call_upstream(
        f"get_employee_by_id({employee_id!r})",
        "GET",
        _member_path(employee_id),
        UpstreamEmployeeResponse,
        not_found_ok=True,
    )
    if result is None or result.data is None:
        logger.info("No employee found for id=%r", employee_id)
        return None

    logger.info("Employee found for id=%r", employee_id)
    return _to_employee(result.data)


async def get_highest_salary_of_employees() -> int:
    logger.info("Entering get_highest_salary_of_employees()")
    return highest_salary(await get_all_employees())


async def get_top_ten_highest_earning_employee_names() -> List[str]:
    logger.info("Entering get_top_ten_highest_earning_employee_names()")
    return top_earning_names(await get_all_employees())


async def create_employee(request: CreateEmployeeRequest) -> Optional[Employee]:
    """
    Create an employee upstream.

    Returns the created Employee, or None if the upstream replied without
    a record (the router turns that into 400).
    """
    logger.info(
        "Entering create_employee() with name=%r, salary=%d, age=%d, title=%r",
        request.name,
        request.salary,
        request.age,
        request.title,
    )
    result = await _call_upstream(
        f"create_employee({request.name!r})",
        "POST",
        _collection_url(),
        UpstreamEmployeeResponse,
        json=request.model_dump(),
    )
    if result.data is None:
        logger.warning("create_employee() returned no data")
        return None
    return _to_employee(result.data)


async def delete_employee_by_name(name: str) -> bool:
    """
    Delete an employee upstream by name.

    The upstream DELETE takes the name in a JSON body and answers
    ``data: true`` when a record was removed.
    """
    logger.info("Entering delete_employee_by_name() with name=%r", name)
    result = await _call_upstream(
        f"delete_employee_by_name({name!r})",
        "DELETE",
        _collection_url(),
        UpstreamDeleteResponse,
        json=DeleteEmployeeRequest(name=name).model_dump(),
    )
    deleted = bool(result.data)
    if deleted:
        logger.info("Successfully deleted employee with name=%r", name)
    else:
        logger.info("Employee with name=%r not found or could not be deleted", name)
    return deleted
