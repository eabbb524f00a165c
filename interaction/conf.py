"""Harness settings, read from ``settings.INTERACTION_HARNESS``."""

from typing import Any

from django.conf import settings

DEFAULTS = {
    "LOGIN_PATH": "/users/login/",
    "LOGOUT_PATH": "/users/logout/",
    "USERNAME_FIELD": "username",
    "PASSWORD_FIELD": "password",
    "SESSION_COOKIE_NAME": None,
    "CSRF_COOKIE_NAME": None,
    "TIMEOUT": 10,
    "SNIPPET_LENGTH": 300,
}


def harness_setting(name: str) -> Any:
    """
    Return a harness setting, falling back to the built-in default.

    Cookie names default to Django's own session and CSRF cookie names so a
    harness pointed at this project needs no extra configuration.
    """
    if name not in DEFAULTS:
        raise KeyError(f"Unknown interaction harness setting '{name}'")

    if not settings.configured:
        return DEFAULTS[name]

    value = getattr(settings, "INTERACTION_HARNESS", {}).get(name, DEFAULTS[name])
    if value is None and name == "SESSION_COOKIE_NAME":
        value = getattr(settings, "SESSION_COOKIE_NAME", "sessionid")
    elif value is None and name == "CSRF_COOKIE_NAME":
        value = getattr(settings, "CSRF_COOKIE_NAME", "csrftoken")
    return value
