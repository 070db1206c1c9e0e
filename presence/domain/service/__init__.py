"""Domain services."""

from .aggregation_service import AggregationService, redact_location
from .base import Service
from .host_router import HostRouter
from .scope_service import ScopeService

__all__ = [
    "AggregationService",
    "HostRouter",
    "ScopeService",
    "Service",
    "redact_location",
]
