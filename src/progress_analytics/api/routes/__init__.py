"""API route modules."""

from . import analytics, catalog

__all__ = ["analytics", "catalog"]
