"""
Employee API endpoints.

Thin layer over app.services.employees: logs each call, shapes the response
and turns "no result" into the right 4xx. Upstream failures raised by the
service are mapped to 429/500 by the exception handlers in app.main.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from app.models.employee import CreateEmployeeRequest, Employee
from app.services.employees import (
    create_employee,
    delete_employee_by_name,
    get_all_employees,
    get_employee_by_id,
    get_employees_by_name_search,
    get_highest_salary_of_employees,
    get_top_ten_highest_earning_employee_names,
)

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("", response_model=List[Employee])
async def list_employees():
    logger.info("GET /employees called")
    employees = await get_all_employees()
    logger.info("GET /employees returning %d employees", len(employees))
    return employees


@router.get("/search/{search_string}", response_model=List[Employee])
async def search_employees_by_name(search_string: str):
    """Employees whose name equals ``search_string``, ignoring case."""
    logger.info("GET /employees/search/%s called", search_string)
    matches = await get_employees_by_name_search(search_string)
    logger.info(
        "GET /employees/search/%s returning %d results", search_string, len(matches)
    )
    return matches


# Fixed paths are registered before /{employee_id} so they are not read as ids.

@router.get("/highestSalary", response_model=int)
async def highest_salary_of_employees():
    logger.info("GET /employees/highestSalary called")
    salary = await get_highest_salary_of_employees()
    logger.info("GET /employees/highestSalary returning %d", salary)
    return salary


@router.get("/topTenHighestEarningEmployeeNames", response_model=List[str])
async def top_ten_highest_earning_employee_names():
    logger.info("GET /employees/topTenHighestEarningEmployeeNames called")
    names = await get_top_ten_highest_earning_employee_names()
    logger.info(
        "GET /employees/topTenHighestEarningEmployeeNames returning %d names",
        len(names),
    )
    return names


@router.get(
    "/{employee_id}",
    response_model=Employee,
    responses={404: {"description": "Employee not found"}},
)
async def get_employee(employee_id: str):
    logger.info("GET /employees/%s called", employee_id)
    employee = await get_employee_by_id(employee_id)
    if employee is None:
        logger.info("Employee not found with id=%r", employee_id)
        raise HTTPException(status_code=404, detail="Employee not found")

    logger.info("Employee found with id=%r", employee_id)
    return employee


@router.post(
    "",
    response_model=Employee,
    responses={
        400: {"description": "Invalid body, or the upstream returned no record"},
        429: {"description": "Upstream rate limit hit"},
    },
)
async def create_new_employee(body: CreateEmployeeRequest):
    """
    Create an employee through the upstream service.

    The body is validated before anything is sent upstream: non-blank name and
    title, salary >= 1, age >= 16.
    """
    logger.info(
        "POST /employees called with payload: name=%r, salary=%d, age=%d, title=%r",
        body.name,
        body.salary,
        body.age,
        body.title,
    )
    created = await create_employee(body)
    if created is None:
        logger.warning("create_employee() returned empty result; sending 400 Bad Request")
        raise HTTPException(status_code=400, detail="Employee could not be created")

    logger.info("Employee created successfully with id=%r", created.id)
    return created


@router.delete(
    "/{employee_id}",
    response_model=str,
    responses={404: {"description": "Employee not found or could not be deleted"}},
)
async def delete_employee(employee_id: str):
    """
    Delete an employee by id.

    The upstream only deletes by name, so the id is resolved to a name first.
    Another client changing the record between the lookup and the delete is
    not guarded against.
    """
    logger.info("DELETE /employees/%s called", employee_id)
    employee = await get_employee_by_id(employee_id)
    if employee is None:
        logger.info("Employee not found with id=%r", employee_id)
        raise HTTPException(status_code=404, detail="Employee not found")

    deleted = await delete_employee_by_name(employee.name)
    if not deleted:
        logger.info("Employee with id=%r not found or could not be deleted", employee_id)
        raise HTTPException(
            status_code=404, detail="Employee not found or could not be deleted"
        )

    logger.info("Employee with id=%r deleted successfully", employee_id)
    return "Employee deleted successfully"
