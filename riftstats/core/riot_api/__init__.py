"""
Riot API client package for League of Legends API integration.

This package provides the HTTP client, the TTL response cache and the
cache-first data manager that sits between them.
"""

from .cache import CacheKeys, TTLCache
from .client import RiotAPIClient
from .constants import Platform, Region, RiotRegion
from .data_manager import RiotDataManager
from .endpoints import QueryType, RiotAPIEndpoints
from .errors import (
    AuthenticationError,
    BadRequestError,
    ForbiddenError,
    MatchFetchError,
    NotFoundError,
    ParseError,
    RateLimitError,
    RiotAPIError,
    ServiceUnavailableError,
    TransportError,
    UpstreamClientError,
    UpstreamServerError,
)

__all__ = [
    "CacheKeys",
    "TTLCache",
    "RiotAPIClient",
    "RiotDataManager",
    "RiotAPIEndpoints",
    "QueryType",
    "Platform",
    "Region",
    "RiotRegion",
    "RiotAPIError",
    "TransportError",
    "UpstreamClientError",
    "UpstreamServerError",
    "BadRequestError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "ServiceUnavailableError",
    "ParseError",
    "MatchFetchError",
]
