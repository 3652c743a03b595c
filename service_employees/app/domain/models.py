"""
Employee data models.

Field aliases follow the upstream employee API wire format
(``employee_name``, ``employee_salary``, ...), which is also what the
service exposes to its own clients.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Employee(BaseModel):
    """Employee record as returned by the upstream service.

    Records are immutable once fetched and compare equal by ``id`` only.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1, description="Opaque employee identifier")
    name: str = Field(..., alias="employee_name", min_length=1)
    salary: int = Field(..., alias="employee_salary", ge=0)
    age: Optional[int] = Field(None, alias="employee_age")
    title: Optional[str] = Field(None, alias="employee_title")
    email: Optional[str] = Field(None, alias="employee_email")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Employee):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class EmployeeCreateRequest(BaseModel):
    """Payload for creating an employee upstream."""

    name: str = Field(..., description="Employee name")
    salary: int = Field(..., gt=0, description="Yearly salary")
    age: int = Field(..., ge=16, le=75, description="Employee age")
    title: str = Field(..., description="Job title")

    @field_validator("name", "title")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class DeleteEmployeeRequest(BaseModel):
    """Name-keyed payload the upstream expects on delete."""

    name: str
