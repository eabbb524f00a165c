"""
Capability-style helpers for tests that drive a harness.

They replace what a base test class would otherwise provide: tests call them
next to the harness instead of inheriting them.
"""

import logging
from typing import Optional, Tuple

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.utils.crypto import get_random_string

from .responses import Credentials

logger = logging.getLogger(__name__)

User = get_user_model()


def resolve_permission(permission: str) -> Permission:
    """
    Look up a permission by ``"app_label.codename"`` or by its display name.

    Display names such as ``"access content"`` are matched exactly.
    """
    if "." in permission:
        app_label, codename = permission.split(".", 1)
        try:
            return Permission.objects.get(
                content_type__app_label=app_label, codename=codename
            )
        except Permission.DoesNotExist:
            raise ValueError(f"Unknown permission '{permission}'")

    match = Permission.objects.filter(name=permission).first()
    if match is None:
        raise ValueError(f"Unknown permission '{permission}'")
    return match


def create_user(
    *permissions: str,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> Tuple[object, Credentials]:
    """
    Create an active user holding ``permissions`` and return it with its credentials.

    Username and password are random unless given, so each call yields a
    fresh account.
    """
    username = username or f"user_{get_random_string(8).lower()}"
    password = password or get_random_string(16)

    resolved = [resolve_permission(name) for name in permissions]
    user = User.objects.create_user(
        username=username, email=f"{username}@example.com", password=password
    )
    if resolved:
        user.user_permissions.add(*resolved)

    logger.debug(f"Created user '{username}' with permissions {list(permissions)}")
    return user, Credentials(username, password)
