"""Single-workspace backend connection to the Railway GraphQL API."""

from . import operations
from .auth import BearerAuth
from .graphql import BackendConnection, JsonDict, RailwayClient

__all__ = ["BackendConnection", "BearerAuth", "JsonDict", "RailwayClient", "operations"]
