"""
Domain layer for the Employee Access Service.

Holds the employee models, the cached query/command service
(``domain.employee_service``), and the call logging decorator shared with
the adapters. Only the models are re-exported here so adapters can import
from the domain without pulling in the service.
"""

from .models import Employee, EmployeeCreateRequest

__all__ = [
    "Employee",
    "EmployeeCreateRequest",
]
