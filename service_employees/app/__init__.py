"""
Employee Access Service package.

The service fronts the upstream employee API, adding:
- Request-response caching with explicit invalidation on writes
- Input validation before any upstream call
- Translation of upstream failures into the shared error taxonomy

Structure:
- app.main: FastAPI app, routes, and service wiring.
- app.adapters: HTTP client for the upstream employee API.
- app.caching: Named in-process caches.
- app.domain: Models, the cached query/command service, call logging.
"""
