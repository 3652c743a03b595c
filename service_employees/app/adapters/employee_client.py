"""
Upstream employee API client.
"""

from typing import Any, Dict, List, Optional, TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from shared.logging import get_logger
from shared.errors import (
    AccessLayerException,
    InvalidInputError,
    NotFoundError,
    UpstreamClientError,
    UpstreamServerError,
)
from ..domain.method_logging import log_method_calls
from ..domain.models import DeleteEmployeeRequest, Employee, EmployeeCreateRequest

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


SERVICE_NAME = "employee_api"
DEFAULT_TIMEOUT = 10.0


class EmployeeClient:
    """Client for the external employee service.

    Every non-2xx status and every transport failure is translated into the
    shared error taxonomy; the originating ``httpx`` error is chained as the
    cause. No retries are performed.
    """

    def __init__(
        self,
        employee_api_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        metrics: Optional["MetricsCollector"] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = employee_api_url.rstrip('/')
        self.timeout = timeout
        self.transport = transport
        self.metrics = metrics
        self.logger = get_logger("employees.employee_client")

    @log_method_calls("employees.employee_client")
    async def list_employees(self) -> List[Employee]:
        """Fetch every employee (``GET /employee``)."""
        payload = await self._request("GET", "/employee")
        data = payload.get("data")
        if not isinstance(data, list):
            raise UpstreamServerError(SERVICE_NAME, "Malformed employee list response")
        return [self._parse_employee(item) for item in data]

    @log_method_calls("employees.employee_client")
    async def get_employee(self, employee_id: str) -> Employee:
        """Fetch one employee (``GET /employee/{id}``)."""
        payload = await self._request("GET", f"/employee/{quote(employee_id, safe='')}")
        data = payload.get("data")
        if data is None:
            raise NotFoundError(f"Employee {employee_id} not found", details={"id": employee_id})
        return self._parse_employee(data)

    @log_method_calls("employees.employee_client")
    async def create_employee(self, request: EmployeeCreateRequest) -> Employee:
        """Create an employee (``POST /employee``)."""
        payload = await self._request("POST", "/employee", json=request.model_dump())
        data = payload.get("data")
        if data is None:
            raise UpstreamServerError(SERVICE_NAME, "Create response carried no employee")
        return self._parse_employee(data)

    @log_method_calls("employees.employee_client")
    async def delete_employee(self, name: str) -> bool:
        """Delete an employee by name (``DELETE /employee`` with ``{name}`` body)."""
        payload = await self._request("DELETE", "/employee", json=DeleteEmployeeRequest(name=name).model_dump())
        return bool(payload.get("data", True))

    def _parse_employee(self, data: Any) -> Employee:
        try:
            return Employee.model_validate(data)
        except ValidationError as exc:
            self.logger.error("Malformed employee record from upstream", error=str(exc))
            raise UpstreamServerError(
                SERVICE_NAME,
                "Malformed employee record",
                details={"errors": exc.error_count()}
            ) from exc

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute an upstream request and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(method, url, json=json)
        except httpx.TimeoutException as exc:
            self._record(method, "timeout")
            self.logger.error("Employee API timed out", method=method, url=url, error=str(exc))
            raise UpstreamServerError(SERVICE_NAME, "Request timed out") from exc
        except httpx.HTTPError as exc:
            self._record(method, "transport_error")
            self.logger.error("Employee API transport error", method=method, url=url, error=str(exc))
            raise UpstreamServerError(SERVICE_NAME, "Upstream unavailable") from exc

        if response.is_success:
            self._record(method, "success")
            self.logger.debug("Employee API request succeeded", method=method, url=url, status_code=response.status_code)
            if not response.content:
                return {}
            try:
                body = response.json()
            except ValueError as exc:
                self.logger.error("Undecodable employee API response", method=method, url=url)
                raise UpstreamServerError(SERVICE_NAME, "Undecodable response body") from exc
            if not isinstance(body, dict):
                self.logger.error("Unexpected employee API envelope", method=method, url=url)
                raise UpstreamServerError(SERVICE_NAME, "Unexpected response envelope")
            return body

        self._record(method, str(response.status_code))
        raise self._translate_status(method, url, response)

    def _translate_status(self, method: str, url: str, response: httpx.Response) -> AccessLayerException:
        status_code = response.status_code
        details = {"status_code": status_code}
        cause = httpx.HTTPStatusError(
            f"{method} {url} returned {status_code}", request=httpx.Request(method, url), response=response
        )

        if status_code == 400:
            self.logger.warning("Employee API rejected request", method=method, url=url)
            error: AccessLayerException = InvalidInputError("Bad request: rejected by employee service", details=details)
        elif status_code == 404:
            self.logger.info("Employee API resource not found", method=method, url=url)
            error = NotFoundError("Resource not found", details=details)
        elif status_code >= 500:
            self.logger.error("Employee API server error", method=method, url=url, status_code=status_code)
            error = UpstreamServerError(SERVICE_NAME, f"Server error {status_code}", details=details)
        else:
            self.logger.error("Employee API client error", method=method, url=url, status_code=status_code)
            error = UpstreamClientError(SERVICE_NAME, f"Unexpected status {status_code}", details=details)

        error.__cause__ = cause
        return error

    def _record(self, method: str, outcome: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("upstream_requests_total", method=method, outcome=outcome)
