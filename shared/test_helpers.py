"""
Test helper functions and factory methods for the Employee Access Service.
"""

import uuid
from typing import Dict, Any, Optional, List

import httpx


class EmployeeFactory:
    """Factory for creating upstream-shaped employee records."""

    @staticmethod
    def create_employee(
        name: str,
        salary: int,
        *,
        employee_id: Optional[str] = None,
        age: Optional[int] = 30,
        title: Optional[str] = "Engineer",
    ) -> Dict[str, Any]:
        """Create one employee record in upstream wire format."""
        return {
            "id": employee_id or str(uuid.uuid4()),
            "employee_name": name,
            "employee_salary": salary,
            "employee_age": age,
            "employee_title": title,
            "employee_email": f"{name.split(' ', 1)[0].lower()}@company.com",
        }

    @staticmethod
    def create_test_employees() -> List[Dict[str, Any]]:
        """Create a small roster with a salary tie."""
        return [
            EmployeeFactory.create_employee("Alice Smith", 500, employee_id="1", title="Analyst"),
            EmployeeFactory.create_employee("Bob Jones", 900, employee_id="2", title="Manager"),
            EmployeeFactory.create_employee("Carol White", 700, employee_id="3", title="Engineer"),
            EmployeeFactory.create_employee("Dan Brown", 700, employee_id="4", title="Engineer"),
            EmployeeFactory.create_employee("alice smith", 300, employee_id="5", title="Intern"),
        ]

    @staticmethod
    def create_employee_input(
        name: str = "Erin Green",
        salary: int = 1200,
        age: int = 41,
        title: str = "Director",
    ) -> Dict[str, Any]:
        """Create a create-employee request body."""
        return {"name": name, "salary": salary, "age": age, "title": title}


def create_upstream_response(status_code: int, payload: Any = None, method: str = "GET",
                             url: str = "http://upstream.test/api/v1/employee") -> httpx.Response:
    """Create an upstream httpx response carrying a JSON body."""
    return httpx.Response(
        status_code=status_code,
        json=payload,
        request=httpx.Request(method, url),
    )


def envelope(data: Any) -> Dict[str, Any]:
    """Wrap data in the upstream ``{"data": ...}`` envelope."""
    return {"data": data, "status": "Successfully processed request."}
