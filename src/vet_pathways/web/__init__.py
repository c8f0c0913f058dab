"""FastAPI application and request-level middleware."""

from vet_pathways.web.api import create_app
from vet_pathways.web.rate_limit import InMemoryRateLimiter, RateLimitDecision, client_ip

__all__ = ["InMemoryRateLimiter", "RateLimitDecision", "client_ip", "create_app"]
