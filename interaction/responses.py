"""Value types exchanged between the harness, its transports and tests."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Mapping, NamedTuple, Union

FieldValue = Union[str, bool]


class Credentials(NamedTuple):
    """Username/password pair submitted to the login form."""

    username: str
    password: str


@dataclass(frozen=True)
class Session:
    """Authenticated state held by a harness between login and logout."""

    username: str
    cookie_name: str
    cookie_value: str = field(repr=False)
    established_at: datetime


@dataclass(frozen=True)
class PageResponse:
    """A rendered page: final path after redirects, status, body and headers."""

    url: str
    status_code: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict, repr=False)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def __contains__(self, fragment: str) -> bool:
        return fragment in self.body


@dataclass(frozen=True)
class PartialUpdatePayload:
    """
    Changed form fields plus the control that triggers the partial update.

    ``True`` checks a checkbox, ``False`` unchecks it; strings are submitted
    as-is.
    """

    fields: Dict[str, FieldValue]
    trigger_id: str
