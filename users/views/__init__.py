"""
Views for the users app.
"""

from .auth_views import LoginView, LogoutView

__all__ = [
    "LoginView",
    "LogoutView",
]
