"""
Interaction harness: log in, load pages, post partial form updates, assert.

A test builds one harness per run around a transport and calls it directly;
there is no base test class to inherit from. Sessions are scoped with
``authenticated_session`` so logout happens on every exit path::

    harness = InteractionHarness(ClientTransport(self.client))
    with authenticated_session(harness, credentials):
        page = harness.get_page("/ajax_forms_test_get_form")
        harness.assert_contains(page, "Test group")
"""

import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Collection, Iterator, Mapping, Optional, Tuple, Union

from .conf import harness_setting
from .exceptions import (
    AuthenticationError,
    ContentAssertionError,
    NavigationError,
    NotAuthenticatedError,
    PartialUpdateError,
)
from .forms import (
    AJAX_WRAPPER_ATTR,
    apply_edits,
    apply_insert_commands,
    collect_form_values,
    find_ajax_trigger,
    owning_form,
    parse_html,
)
from .responses import (
    Credentials,
    FieldValue,
    PageResponse,
    PartialUpdatePayload,
    Session,
)

logger = logging.getLogger(__name__)

AJAX_HEADERS = {"X-Requested-With": "XMLHttpRequest"}
TRIGGER_FIELD = "_triggering_element_name"
WRAPPER_FIELD = "_ajax_wrapper"


def _override(value, name):
    return harness_setting(name) if value is None else value


class InteractionHarness:
    """Drives one authenticated browsing session against a site under test."""

    def __init__(
        self,
        transport,
        *,
        login_path: Optional[str] = None,
        logout_path: Optional[str] = None,
        username_field: Optional[str] = None,
        password_field: Optional[str] = None,
        session_cookie_name: Optional[str] = None,
        snippet_length: Optional[int] = None,
    ):
        self.transport = transport
        self.login_path = _override(login_path, "LOGIN_PATH")
        self.logout_path = _override(logout_path, "LOGOUT_PATH")
        self.username_field = _override(username_field, "USERNAME_FIELD")
        self.password_field = _override(password_field, "PASSWORD_FIELD")
        self.session_cookie_name = _override(
            session_cookie_name, "SESSION_COOKIE_NAME"
        )
        self.csrf_cookie_name = harness_setting("CSRF_COOKIE_NAME")
        self.snippet_length = _override(snippet_length, "SNIPPET_LENGTH")

        self.session: Optional[Session] = None
        self.last_response: Optional[PageResponse] = None

    @property
    def current_url(self) -> Optional[str]:
        return self.last_response.url if self.last_response else None

    # Session lifecycle

    def login(self, credentials: Union[Credentials, Tuple[str, str]]) -> Session:
        """
        Log in through the site's login form and return the new session.

        Any existing session is logged out first. The login page is fetched,
        its form values (including the CSRF token) collected, the credentials
        filled in and the form posted. Success is judged by the site issuing a
        new session cookie; an anonymous session left over from earlier
        browsing does not count.

        Raises:
            AuthenticationError: the site did not establish a session
            NavigationError: the login page could not be loaded
        """
        credentials = Credentials(*credentials)
        self.logout()

        login_page = self.transport.request("GET", self.login_path)
        if not login_page.ok:
            raise NavigationError(
                self.login_path,
                f"login page returned HTTP {login_page.status_code}",
                login_page.status_code,
            )

        soup = parse_html(login_page.body)
        username_input = soup.find(attrs={"name": self.username_field})
        if username_input is None:
            raise NavigationError(
                login_page.url, f"no '{self.username_field}' field on the login page"
            )
        form = username_input.find_parent("form")
        if form is None:
            raise NavigationError(login_page.url, "login field is not inside a form")

        values = collect_form_values(form)
        values[self.username_field] = [credentials.username]
        values[self.password_field] = [credentials.password]
        action = form.get("action") or login_page.url

        previous_cookie = self.transport.cookie(self.session_cookie_name)
        response = self.transport.request("POST", action, data=values)
        cookie_value = self.transport.cookie(self.session_cookie_name)
        if not cookie_value or cookie_value == previous_cookie:
            logger.warning(
                f"Login rejected for '{credentials.username}' "
                f"(HTTP {response.status_code} at {response.url})"
            )
            raise AuthenticationError(
                credentials.username, "no new session cookie issued"
            )

        self.session = Session(
            username=credentials.username,
            cookie_name=self.session_cookie_name,
            cookie_value=cookie_value,
            established_at=datetime.now(timezone.utc),
        )
        self.last_response = response
        logger.info(f"Logged in as '{credentials.username}'")
        return self.session

    def logout(self) -> None:
        """
        End the session on the site and forget all client-side state.

        Cookies and the current page are dropped even when the logout request
        fails; the failure is still raised.
        """
        try:
            if self.session is not None:
                headers = {}
                csrf_token = self.transport.cookie(self.csrf_cookie_name)
                if csrf_token:
                    headers["X-CSRFToken"] = csrf_token
                self.transport.request("POST", self.logout_path, headers=headers)
                logger.info(f"Logged out '{self.session.username}'")
        finally:
            self.session = None
            self.transport.clear_cookies()
            self.last_response = None

    def close(self) -> None:
        try:
            self.logout()
        finally:
            self.transport.close()

    def _require_session(self, operation: str) -> None:
        if self.session is None:
            raise NotAuthenticatedError(operation)

    # Navigation

    def get_page(
        self,
        path: Optional[str] = None,
        tolerate_status: Union[bool, Collection[int]] = False,
    ) -> PageResponse:
        """
        Fetch ``path``, or reload the current page when ``path`` is None.

        Non-2xx responses raise ``NavigationError`` unless ``tolerate_status``
        is True or contains the returned status code.
        """
        self._require_session("get_page")

        if path is None:
            if self.current_url is None:
                raise NavigationError(None, "no page loaded to reload")
            path = self.current_url

        response = self.transport.request("GET", path)
        self._check_status(path, response, tolerate_status)
        self.last_response = response
        return response

    def post_partial_update(
        self,
        path: Optional[str],
        payload: Union[Mapping[str, FieldValue], PartialUpdatePayload],
        trigger_id: Optional[str] = None,
    ) -> PageResponse:
        """
        Submit an AJAX-style partial update and merge it into the current page.

        ``path`` None reuses the page already loaded; otherwise ``path`` is
        loaded first. The form owning the trigger control is serialized with
        ``payload`` applied and posted with the AJAX marker header. The insert
        commands in the JSON reply are applied to the current page, and the
        merged page is returned and becomes the current page.

        Raises:
            PartialUpdateError: unknown trigger or field, or an unusable reply
            NavigationError: transport failure or non-2xx reply
        """
        self._require_session("post_partial_update")

        if isinstance(payload, PartialUpdatePayload):
            trigger_id = trigger_id or payload.trigger_id
            payload = payload.fields
        if not trigger_id:
            raise PartialUpdateError("A trigger control identifier is required")
        update = PartialUpdatePayload(fields=dict(payload), trigger_id=trigger_id)

        if path is not None:
            self.get_page(path)
        elif self.last_response is None:
            raise NavigationError(None, "no page loaded for the partial update")
        page = self.last_response

        soup = parse_html(page.body)
        trigger = find_ajax_trigger(soup, update.trigger_id)
        form = owning_form(trigger)

        values = apply_edits(form, collect_form_values(form), update.fields)
        values[TRIGGER_FIELD] = [trigger.get("name") or update.trigger_id]
        values[WRAPPER_FIELD] = [trigger[AJAX_WRAPPER_ATTR]]
        action = form.get("action") or page.url

        logger.debug(f"Partial update via '{update.trigger_id}' to {action}")
        response = self.transport.request(
            "POST", action, data=values, headers=dict(AJAX_HEADERS)
        )
        self._check_status(action, response, False)

        try:
            commands = json.loads(response.body)
        except ValueError as e:
            raise PartialUpdateError(
                f"Partial update reply from {action} is not a JSON command list"
            ) from e
        if not isinstance(commands, list):
            raise PartialUpdateError(
                f"Partial update reply from {action} is not a JSON command list"
            )

        applied = apply_insert_commands(soup, commands)
        logger.debug(f"Applied {applied} insert command(s) from {action}")

        merged = PageResponse(
            url=page.url,
            status_code=response.status_code,
            body=str(soup),
            headers=page.headers,
        )
        self.last_response = merged
        return merged

    def _check_status(
        self,
        path: str,
        response: PageResponse,
        tolerate_status: Union[bool, Collection[int]],
    ) -> None:
        if response.ok or tolerate_status is True:
            return
        if tolerate_status and response.status_code in tolerate_status:
            return
        logger.warning(f"HTTP {response.status_code} for {path}")
        raise NavigationError(
            path, f"HTTP {response.status_code}", response.status_code
        )

    # Assertions

    def assert_contains(self, response: PageResponse, fragment: str) -> None:
        """Fail unless ``fragment`` is a literal substring of the body."""
        if fragment not in response.body:
            snippet = response.body[: self.snippet_length]
            raise ContentAssertionError(
                f"Expected {fragment!r} in {response.url}; "
                f"content begins: {snippet!r}",
                fragment,
                snippet,
            )

    def assert_not_contains(self, response: PageResponse, fragment: str) -> None:
        """Fail if ``fragment`` is a literal substring of the body."""
        position = response.body.find(fragment)
        if position != -1:
            start = max(position - self.snippet_length // 2, 0)
            snippet = response.body[start : start + self.snippet_length]
            raise ContentAssertionError(
                f"Unexpected {fragment!r} in {response.url}; found in: {snippet!r}",
                fragment,
                snippet,
            )


@contextmanager
def authenticated_session(
    harness: InteractionHarness, credentials: Union[Credentials, Tuple[str, str]]
) -> Iterator[Session]:
    """
    Log ``harness`` in for the duration of the block, logging out on exit.

    If the block raises, a failing logout is only logged so the block's own
    error reaches the caller.
    """
    session = harness.login(credentials)
    try:
        yield session
    except BaseException:
        try:
            harness.logout()
        except Exception as e:
            logger.warning(f"Logout after failed block raised: {e}")
        raise
    harness.logout()
