"""Asana API client package.

Typed, synchronous client for the Asana REST API.
"""

from asana_client.client import DEFAULT_OPT_FIELDS, AsanaClient, create_authenticated_client
from asana_client.config import LIBRARY_VERSION, AsanaSettings
from asana_client.errors import ApiError, ApiErrors, AsanaError, UnauthorizedError
from asana_client.models import (
    ApiResponse,
    Filter,
    Heart,
    Project,
    Story,
    Tag,
    Task,
    TaskUpdate,
    User,
    Workspace,
)
from asana_client.transport import BearerAuth, SessionTransport, Transport, TransportFunc

__all__ = [
    "ApiError",
    "ApiErrors",
    "ApiResponse",
    "AsanaClient",
    "AsanaError",
    "AsanaSettings",
    "BearerAuth",
    "DEFAULT_OPT_FIELDS",
    "Filter",
    "Heart",
    "Project",
    "SessionTransport",
    "Story",
    "Tag",
    "Task",
    "TaskUpdate",
    "Transport",
    "TransportFunc",
    "UnauthorizedError",
    "User",
    "Workspace",
    "create_authenticated_client",
]

__version__ = LIBRARY_VERSION
