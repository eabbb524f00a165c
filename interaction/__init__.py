"""
Browser-form interaction harness for functional tests.

Public API::

    from interaction import InteractionHarness, ClientTransport, authenticated_session
"""

from .exceptions import (
    AuthenticationError,
    ContentAssertionError,
    HarnessError,
    NavigationError,
    NotAuthenticatedError,
    PartialUpdateError,
)
from .harness import InteractionHarness, authenticated_session
from .responses import Credentials, PageResponse, PartialUpdatePayload, Session
from .transports import ClientTransport, RequestsTransport

__all__ = [
    "AuthenticationError",
    "ClientTransport",
    "ContentAssertionError",
    "Credentials",
    "HarnessError",
    "InteractionHarness",
    "NavigationError",
    "NotAuthenticatedError",
    "PageResponse",
    "PartialUpdateError",
    "PartialUpdatePayload",
    "RequestsTransport",
    "Session",
    "authenticated_session",
]
