"""
Pydantic models for employees.

Two shapes live here:
  - the internal Employee returned by this API, and
  - the upstream wire format (employee_* field names wrapped in a
    {"data": ..., "status": ...} envelope).
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Employee(BaseModel):
    """Employee as exposed by this API. Built only from an UpstreamEmployee."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    salary: int
    age: int
    title: str
    email: Optional[str] = None


class UpstreamEmployee(BaseModel):
    """A single employee record as the upstream service sends it."""

    model_config = ConfigDict(extra="ignore")

    id: str
    employee_name: str
    employee_salary: int
    employee_age: int
    employee_title: str
    employee_email: Optional[str] = None


class UpstreamEmployeeListResponse(BaseModel):
    """Envelope for GET "": data is a list of employees."""

    model_config = ConfigDict(extra="ignore")

    data: Optional[List[UpstreamEmployee]] = None
    status: Optional[str] = None


class UpstreamEmployeeResponse(BaseModel):
    """Envelope for GET "/{id}" and POST "": data is one employee or null."""

    model_config = ConfigDict(extra="ignore")

    data: Optional[UpstreamEmployee] = None
    status: Optional[str] = None


class UpstreamDeleteResponse(BaseModel):
    """Envelope for DELETE "": data is true when a record was removed."""

    model_config = ConfigDict(extra="ignore")

    data: Optional[bool] = None
    status: Optional[str] = None


class CreateEmployeeRequest(BaseModel):
    """Request body for POST /employees. Forwarded upstream as-is."""

    name: str = Field(min_length=1)
    salary: int = Field(ge=1)
    age: int = Field(ge=16)
    title: str = Field(min_length=1)

    @field_validator("name", "title")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class DeleteEmployeeRequest(BaseModel):
    """Body of the upstream DELETE call; the upstream deletes by name."""

    name: str = Field(min_length=1)
