"""Authentication helpers for the login endpoint."""

from typing import Optional

from django.contrib.auth import authenticate, get_user_model
from django.http import HttpRequest


def authenticate_by_email_or_username(
    request: Optional[HttpRequest], username: str, password: str
) -> Optional[object]:
    """
    Authenticate by username, or by email when the identifier contains '@'.

    Email lookups are case-insensitive and fall back to a plain username
    lookup when no account carries that address.
    """
    if not username or not password:
        return None

    User = get_user_model()

    if "@" in username:
        account = User.objects.filter(email__iexact=username).first()
        if account is not None:
            username = account.get_username()

    return authenticate(request=request, username=username, password=password)
