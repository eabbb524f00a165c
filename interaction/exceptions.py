"""
Errors raised by the interaction harness.

All of them surface to the calling test unchanged; the harness never retries.
``ContentAssertionError`` is the only one expected in a normal negative test,
the rest signal a broken environment and should abort the run.
"""

from typing import Optional


class HarnessError(Exception):
    """Base class for harness environment and setup failures."""


class AuthenticationError(HarnessError):
    """The target rejected the supplied credentials."""

    def __init__(self, username: str, detail: Optional[str] = None):
        self.username = username
        message = f"Login failed for user '{username}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NotAuthenticatedError(HarnessError):
    """A page was requested before a session was established."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"{operation} requires an active session; call login() first"
        )


class NavigationError(HarnessError):
    """A request failed at the transport level or returned a non-2xx status."""

    def __init__(
        self, path: Optional[str], detail: str, status_code: Optional[int] = None
    ):
        self.path = path
        self.status_code = status_code
        super().__init__(f"Request to {path or '<unknown>'} failed: {detail}")


class PartialUpdateError(HarnessError):
    """A partial update could not be built, sent or merged into the page."""


class ContentAssertionError(AssertionError):
    """An expected text fragment was missing (or present when it should not be)."""

    def __init__(self, message: str, fragment: str, snippet: str):
        self.fragment = fragment
        self.snippet = snippet
        super().__init__(message)
