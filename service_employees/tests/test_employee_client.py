"""
Unit tests for the upstream Employee Client.
"""

import pytest
import httpx
from unittest.mock import AsyncMock, patch

from service_employees.app.adapters.employee_client import EmployeeClient
from service_employees.app.domain.models import Employee, EmployeeCreateRequest
from shared.errors import (
    InvalidInputError,
    NotFoundError,
    UpstreamClientError,
    UpstreamServerError,
)
from shared.metrics import MetricsCollector
from shared.test_helpers import EmployeeFactory, create_upstream_response, envelope


BASE_URL = "http://upstream.test/api/v1"


class TestEmployeeClient:
    """Test cases for EmployeeClient."""

    @pytest.fixture
    def employee_client(self):
        """Create EmployeeClient instance."""
        return EmployeeClient(BASE_URL + "/", timeout=2.5)

    @pytest.fixture
    def mock_employees(self):
        """Mock upstream employee records."""
        return EmployeeFactory.create_test_employees()

    @pytest.mark.asyncio
    async def test_list_employees_success(self, employee_client, mock_employees):
        """Test listing employees decodes the data envelope."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_request = AsyncMock(return_value=create_upstream_response(200, envelope(mock_employees)))
            mock_client.return_value.__aenter__.return_value.request = mock_request

            result = await employee_client.list_employees()

            assert [employee.id for employee in result] == ["1", "2", "3", "4", "5"]
            assert result[1].name == "Bob Jones"
            assert result[1].salary == 900
            mock_request.assert_awaited_once_with("GET", f"{BASE_URL}/employee", json=None)
            mock_client.assert_called_once_with(timeout=2.5, transport=None)

    @pytest.mark.asyncio
    async def test_get_employee_success(self, employee_client, mock_employees):
        """Test fetching one employee by id."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_request = AsyncMock(return_value=create_upstream_response(200, envelope(mock_employees[0])))
            mock_client.return_value.__aenter__.return_value.request = mock_request

            result = await employee_client.get_employee("1")

            assert result == Employee.model_validate(mock_employees[0])
            assert result.email == "alice@company.com"
            mock_request.assert_awaited_once_with("GET", f"{BASE_URL}/employee/1", json=None)

    @pytest.mark.asyncio
    async def test_get_employee_encodes_id(self, employee_client, mock_employees):
        """Test reserved characters in the id stay inside the path segment."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_request = AsyncMock(return_value=create_upstream_response(200, envelope(mock_employees[0])))
            mock_client.return_value.__aenter__.return_value.request = mock_request

            await employee_client.get_employee("1?x/y")

            mock_request.assert_awaited_once_with("GET", f"{BASE_URL}/employee/1%3Fx%2Fy", json=None)

    @pytest.mark.asyncio
    async def test_get_employee_not_found(self, employee_client):
        """Test upstream 404 surfaces as NotFoundError."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                return_value=create_upstream_response(404, {"status": "Employee not found"})
            )

            with pytest.raises(NotFoundError) as exc_info:
                await employee_client.get_employee("missing")

            assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_get_employee_empty_data(self, employee_client):
        """Test a 200 with no data is treated as missing."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                return_value=create_upstream_response(200, envelope(None))
            )

            with pytest.raises(NotFoundError):
                await employee_client.get_employee("1")

    @pytest.mark.asyncio
    async def test_create_employee_posts_payload(self, employee_client):
        """Test create sends the name/salary/age/title body."""
        created = EmployeeFactory.create_employee("Erin Green", 1200, employee_id="new-1", age=41)
        request = EmployeeCreateRequest(name="Erin Green", salary=1200, age=41, title="Director")

        with patch('httpx.AsyncClient') as mock_client:
            mock_request = AsyncMock(return_value=create_upstream_response(200, envelope(created), method="POST"))
            mock_client.return_value.__aenter__.return_value.request = mock_request

            result = await employee_client.create_employee(request)

            assert result.id == "new-1"
            mock_request.assert_awaited_once_with(
                "POST",
                f"{BASE_URL}/employee",
                json={"name": "Erin Green", "salary": 1200, "age": 41, "title": "Director"},
            )

    @pytest.mark.asyncio
    async def test_delete_employee_sends_name_body(self, employee_client):
        """Test delete is keyed by name in the request body."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_request = AsyncMock(return_value=create_upstream_response(200, envelope(True), method="DELETE"))
            mock_client.return_value.__aenter__.return_value.request = mock_request

            result = await employee_client.delete_employee("Bob Jones")

            assert result is True
            mock_request.assert_awaited_once_with("DELETE", f"{BASE_URL}/employee", json={"name": "Bob Jones"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code,expected",
        [
            (400, InvalidInputError),
            (404, NotFoundError),
            (409, UpstreamClientError),
            (429, UpstreamClientError),
            (500, UpstreamServerError),
            (503, UpstreamServerError),
        ],
    )
    async def test_status_translation(self, employee_client, status_code, expected):
        """Test each upstream status maps to one error type."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                return_value=create_upstream_response(status_code, {"status": "failed"})
            )

            with pytest.raises(expected) as exc_info:
                await employee_client.list_employees()

            assert exc_info.value.details["status_code"] == status_code
            assert "failed" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_transport_error(self, employee_client):
        """Test connection failures become UpstreamServerError with the cause attached."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                side_effect=httpx.ConnectError("Connection refused")
            )

            with pytest.raises(UpstreamServerError) as exc_info:
                await employee_client.list_employees()

            assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
            assert exc_info.value.code == "UPSTREAM_SERVER_ERROR"
            assert exc_info.value.message == "employee_api: Upstream unavailable"
            assert exc_info.value.details == {}

    @pytest.mark.asyncio
    async def test_timeout(self, employee_client):
        """Test timeouts become UpstreamServerError."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                side_effect=httpx.ReadTimeout("timed out")
            )

            with pytest.raises(UpstreamServerError) as exc_info:
                await employee_client.get_employee("1")

            assert "timed out" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_malformed_record(self, employee_client):
        """Test records failing validation become UpstreamServerError."""
        bad = {"id": "1", "employee_name": "", "employee_salary": -5}
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                return_value=create_upstream_response(200, envelope([bad]))
            )

            with pytest.raises(UpstreamServerError):
                await employee_client.list_employees()

    @pytest.mark.asyncio
    async def test_malformed_list_envelope(self, employee_client):
        """Test a list response without a data array is rejected."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                return_value=create_upstream_response(200, {"status": "ok"})
            )

            with pytest.raises(UpstreamServerError):
                await employee_client.list_employees()

    @pytest.mark.asyncio
    async def test_upstream_metrics(self, mock_employees):
        """Test upstream outcomes are counted."""
        metrics = MetricsCollector("employees")
        employee_client = EmployeeClient(BASE_URL, metrics=metrics)

        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                side_effect=[
                    create_upstream_response(200, envelope(mock_employees)),
                    create_upstream_response(503, {}),
                ]
            )

            await employee_client.list_employees()
            with pytest.raises(UpstreamServerError):
                await employee_client.list_employees()

        assert metrics.get_sample_value("upstream_requests_total", {"method": "GET", "outcome": "success"}) == 1.0
        assert metrics.get_sample_value("upstream_requests_total", {"method": "GET", "outcome": "503"}) == 1.0

    @pytest.mark.asyncio
    async def test_undecodable_body_hides_url(self, employee_client):
        """Test decode failures carry no upstream address."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.request = AsyncMock(
                return_value=httpx.Response(200, content=b"<html>", request=httpx.Request("GET", BASE_URL))
            )

            with pytest.raises(UpstreamServerError) as exc_info:
                await employee_client.list_employees()

            assert exc_info.value.details == {}
            assert "upstream.test" not in exc_info.value.message
