"""
Adapters package for the Employee Access Service.

Contains the HTTP client wrapper for the upstream employee API. The adapter
encapsulates:

- Base URL, timeout and request shapes
- Error handling that maps upstream failures to shared errors

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .employee_client import EmployeeClient

__all__ = [
    "EmployeeClient",
]
