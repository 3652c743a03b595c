"""
Mock upstream employee API serving the ``{"data": ...}`` envelope.
"""

import uuid
from typing import Dict, Any, Optional, List
from fastapi import FastAPI, Body
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from shared.logging import get_logger


class MockCreateEmployeeInput(BaseModel):
    """Create payload accepted by the mock server."""
    name: str = Field(..., min_length=1)
    salary: int = Field(..., gt=0)
    age: int = Field(..., ge=16, le=75)
    title: str = Field(..., min_length=1)


class MockDeleteEmployeeInput(BaseModel):
    """Delete payload accepted by the mock server."""
    name: str = Field(..., min_length=1)


class MockEmployeeApiServer:
    """Mock upstream employee API implementation."""

    def __init__(
        self,
        port: int = 8112,
        employees: Optional[List[Dict[str, Any]]] = None,
        rate_limit_every: Optional[int] = None,
    ):
        self.port = port
        self.logger = get_logger("mock.employee_api")
        self.app = FastAPI(title="Mock Employee API", version="1.0.0")

        # Every Nth request is answered with 429 when set
        self.rate_limit_every = rate_limit_every
        self.request_count = 0

        self.employees: List[Dict[str, Any]] = list(employees) if employees is not None else [
            self._record("Tiger Nixon", 320800, 61, "System Architect"),
            self._record("Garrett Winters", 170750, 63, "Accountant"),
            self._record("Ashton Cox", 86000, 66, "Junior Technical Author"),
            self._record("Cedric Kelly", 433060, 22, "Senior Javascript Developer"),
        ]

        self._setup_routes()

    @staticmethod
    def _record(name: str, salary: int, age: int, title: str) -> Dict[str, Any]:
        handle = name.split(" ", 1)[0].lower()
        return {
            "id": str(uuid.uuid4()),
            "employee_name": name,
            "employee_salary": salary,
            "employee_age": age,
            "employee_title": title,
            "employee_email": f"{handle}@company.com",
        }

    def _rate_limited(self) -> Optional[JSONResponse]:
        self.request_count += 1
        if self.rate_limit_every and self.request_count % self.rate_limit_every == 0:
            self.logger.info("Rate limiting request", request_count=self.request_count)
            return JSONResponse(status_code=429, content={"status": "Too Many Requests"})
        return None

    def _setup_routes(self):
        """Set up mock employee routes."""

        @self.app.get("/api/v1/employee")
        async def list_employees():
            limited = self._rate_limited()
            if limited:
                return limited
            return {"data": self.employees, "status": "Successfully processed request."}

        @self.app.get("/api/v1/employee/{employee_id}")
        async def get_employee(employee_id: str):
            limited = self._rate_limited()
            if limited:
                return limited
            for employee in self.employees:
                if employee["id"] == employee_id:
                    return {"data": employee, "status": "Successfully processed request."}
            return JSONResponse(status_code=404, content={"status": "Employee not found"})

        @self.app.post("/api/v1/employee")
        async def create_employee(payload: MockCreateEmployeeInput):
            limited = self._rate_limited()
            if limited:
                return limited
            employee = self._record(payload.name, payload.salary, payload.age, payload.title)
            self.employees.append(employee)
            self.logger.info("Employee created", employee_id=employee["id"])
            return {"data": employee, "status": "Successfully processed request."}

        @self.app.delete("/api/v1/employee")
        async def delete_employee(payload: MockDeleteEmployeeInput = Body(...)):
            limited = self._rate_limited()
            if limited:
                return limited
            for index, employee in enumerate(self.employees):
                if employee["employee_name"] == payload.name:
                    del self.employees[index]
                    self.logger.info("Employee deleted", name=payload.name)
                    return {"data": True, "status": "Successfully processed request."}
            return JSONResponse(status_code=404, content={"status": "Employee not found"})


def create_app():
    """Create mock employee API application."""
    server = MockEmployeeApiServer()
    return server.app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8112)
