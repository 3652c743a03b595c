"""
Cached employee queries and cache-invalidating commands.
"""

from typing import Any, Dict, List, Union

from pydantic import ValidationError

from shared.errors import InvalidInputError, NotFoundError
from shared.logging import get_logger
from ..adapters.employee_client import EmployeeClient
from ..caching.cache_store import (
    ALL_EMPLOYEES,
    ALL_KEY,
    EMPLOYEE_BY_ID,
    EMPLOYEES_BY_NAME,
    HIGHEST_SALARY,
    MAX_KEY,
    TOP_EARNERS,
    CacheStore,
)
from .method_logging import log_method_calls
from .models import Employee, EmployeeCreateRequest

# Caches derived from the full employee list
AGGREGATE_CACHES = (ALL_EMPLOYEES, TOP_EARNERS, HIGHEST_SALARY, EMPLOYEES_BY_NAME)


def _require_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(message)
    return value.strip()


class EmployeeService:
    """Reads go through the cache store; writes evict what they make stale.

    Every write evicts the all-employees cache and the aggregates derived
    from it before returning to the caller.
    """

    def __init__(self, client: EmployeeClient, cache: CacheStore):
        self.client = client
        self.cache = cache
        self.logger = get_logger("employees.service")

    @log_method_calls("employees.service")
    async def get_all_employees(self) -> List[Employee]:
        employees = await self.cache.get_or_compute(ALL_EMPLOYEES, ALL_KEY, self.client.list_employees)
        return list(employees)

    @log_method_calls("employees.service")
    async def get_employee_by_id(self, employee_id: str) -> Employee:
        employee_id = _require_text(employee_id, "Employee ID cannot be empty")
        return await self.cache.get_or_compute(
            EMPLOYEE_BY_ID, employee_id, lambda: self.client.get_employee(employee_id)
        )

    @log_method_calls("employees.service")
    async def get_employees_by_name_search(self, name: str) -> List[Employee]:
        """Case-insensitive exact name match; an empty list when nothing matches."""
        key = _require_text(name, "Name parameter cannot be empty").lower()

        async def _search() -> List[Employee]:
            employees = await self.get_all_employees()
            return [employee for employee in employees if employee.name.lower() == key]

        matches = await self.cache.get_or_compute(EMPLOYEES_BY_NAME, key, _search)
        return list(matches)

    @log_method_calls("employees.service")
    async def get_highest_salary_of_employees(self) -> int:
        async def _highest() -> int:
            top = await self.get_top_highest_earning_employees(1)
            return top[0].salary

        return await self.cache.get_or_compute(HIGHEST_SALARY, MAX_KEY, _highest)

    @log_method_calls("employees.service")
    async def get_top_highest_earning_employees(self, size: int) -> List[Employee]:
        """The ``size`` best paid employees, ties kept in upstream order."""
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise InvalidInputError("Size must be a positive number", details={"size": size})

        async def _top() -> List[Employee]:
            employees = await self.get_all_employees()
            if not employees:
                raise NotFoundError("No employees available")
            # sorted() is stable with reverse=True
            return sorted(employees, key=lambda employee: employee.salary, reverse=True)[:size]

        top = await self.cache.get_or_compute(TOP_EARNERS, size, _top)
        return list(top)

    @log_method_calls("employees.service")
    async def create_employee(self, request: Union[EmployeeCreateRequest, Dict[str, Any]]) -> Employee:
        if not isinstance(request, EmployeeCreateRequest):
            try:
                request = EmployeeCreateRequest.model_validate(request)
            except ValidationError as exc:
                raise InvalidInputError(
                    "Invalid employee data",
                    details={"errors": [error["msg"] for error in exc.errors()]}
                ) from exc

        try:
            employee = await self.client.create_employee(request)
            self.cache.put(EMPLOYEE_BY_ID, employee.id, employee)
        finally:
            self._evict_aggregates()

        self.logger.info("Employee created", employee_id=employee.id)
        return employee

    @log_method_calls("employees.service")
    async def delete_employee(self, name: str) -> None:
        """Delete upstream by name.

        By-id entries holding that name are evicted before the upstream call
        so no stale record is served while the delete is in flight.
        """
        name = _require_text(name, "Employee name cannot be empty")
        self.cache.evict_where(EMPLOYEE_BY_ID, lambda _key, employee: employee.name == name)
        try:
            await self.client.delete_employee(name)
        finally:
            self._evict_aggregates()

        self.logger.info("Employee deleted", name=name)

    @log_method_calls("employees.service")
    async def delete_employee_by_id(self, employee_id: str) -> Employee:
        """Resolve ``employee_id``, then delete that employee by name."""
        employee = await self.get_employee_by_id(employee_id)
        self.cache.evict(EMPLOYEE_BY_ID, employee.id)
        await self.delete_employee(employee.name)
        return employee

    def _evict_aggregates(self) -> None:
        for cache_name in AGGREGATE_CACHES:
            self.cache.evict_all(cache_name)
