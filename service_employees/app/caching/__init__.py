"""
Employee caching package.

Provides the named in-process caches used to reduce load on the upstream
employee API. Caches never expire; writes invalidate them explicitly.
"""

from .cache_store import CacheStore

__all__ = [
    "CacheStore",
]
