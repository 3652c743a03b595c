"""
Employee access service: REST façade over the upstream employee API.
"""

from typing import Any, Dict, List, Optional

import httpx
from fastapi import Query, Response, status
from fastapi.responses import PlainTextResponse

from shared.base_service import BaseService
from shared.config import ServiceConfig
from .adapters.employee_client import EmployeeClient
from .caching.cache_store import EMPLOYEES_BY_NAME, CacheStore
from .domain.employee_service import EmployeeService
from .domain.models import Employee, EmployeeCreateRequest


SERVICE_NAME = "employees"
DEFAULT_PORT = 8111
TOP_EARNERS_LIMIT = 10


class EmployeeAccessService(BaseService):
    """Employee access service implementation."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        *,
        upstream_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(SERVICE_NAME, DEFAULT_PORT, config=config)
        self.employee_client = EmployeeClient(
            self.config.employee_api_url,
            timeout=self.config.employee_api_timeout,
            metrics=self.metrics,
            transport=upstream_transport,
        )
        self.cache_store = CacheStore(
            max_sizes={EMPLOYEES_BY_NAME: self.config.name_search_cache_size},
            metrics=self.metrics,
        )
        self.employee_service = EmployeeService(self.employee_client, self.cache_store)

        self._setup_employee_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.employee_access_service = self

    async def _check_dependencies(self) -> Dict[str, str]:
        return {"employee_api": self.employee_client.base_url}

    def _health_details(self) -> Dict[str, Any]:
        return {"caches": self.cache_store.stats()}

    def _setup_employee_routes(self):
        """Set up /employees routes.

        Fixed paths are registered before ``/employees/{id}`` so they are
        not captured as identifiers.
        """
        service = self.employee_service

        @self.app.get("/employees", response_model=List[Employee], tags=["Employees"],
                      summary="Get all employees")
        async def get_all_employees():
            return await service.get_all_employees()

        @self.app.get("/employees/search", response_model=List[Employee], tags=["Employees"],
                      summary="Search employees by name",
                      responses={204: {"description": "No employee matches"}})
        async def get_employees_by_name_search(name: str = Query(..., description="Exact name, any case")):
            employees = await service.get_employees_by_name_search(name)
            if not employees:
                return Response(status_code=status.HTTP_204_NO_CONTENT)
            return employees

        @self.app.get("/employees/highest-salary", response_model=int, tags=["Employees"],
                      summary="Get highest salary")
        async def get_highest_salary_of_employees():
            return await service.get_highest_salary_of_employees()

        @self.app.get("/employees/top-10-highest-earning", response_model=List[str], tags=["Employees"],
                      summary="Get the names of the top 10 highest earning employees",
                      responses={204: {"description": "No employees"}})
        async def get_top_ten_highest_earning_employee_names():
            employees = await service.get_top_highest_earning_employees(TOP_EARNERS_LIMIT)
            if not employees:
                return Response(status_code=status.HTTP_204_NO_CONTENT)
            return [employee.name for employee in employees]

        @self.app.post("/employees/create", response_model=Employee, status_code=status.HTTP_201_CREATED,
                       tags=["Employees"], summary="Create a new employee")
        async def create_employee(request: EmployeeCreateRequest):
            return await service.create_employee(request)

        @self.app.get("/employees/{id}", response_model=Employee, tags=["Employees"],
                      summary="Get employee by ID")
        async def get_employee_by_id(id: str):
            return await service.get_employee_by_id(id)

        @self.app.delete("/employees/{id}", response_class=PlainTextResponse, tags=["Employees"],
                         summary="Delete employee by ID")
        async def delete_employee_by_id(id: str):
            employee = await service.delete_employee_by_id(id)
            return f"Employee with name {employee.name} got deleted successfully"


def create_app(
    config: Optional[ServiceConfig] = None,
    *,
    upstream_transport: Optional[httpx.AsyncBaseTransport] = None,
):
    """Create FastAPI application."""
    service = EmployeeAccessService(config, upstream_transport=upstream_transport)
    return service.app


if __name__ == "__main__":
    service = EmployeeAccessService()
    service.run()
