"""
Login and logout views: the authentication endpoint the harness signs in through.
"""

import logging

from django.contrib import messages
from django.contrib.auth.views import LoginView as BaseLoginView
from django.contrib.auth.views import LogoutView as BaseLogoutView
from django.urls import reverse_lazy

from ..forms import LoginForm

logger = logging.getLogger(__name__)


class LoginView(BaseLoginView):
    """User login view with email/username support."""

    form_class = LoginForm
    template_name = "registration/login.html"
    redirect_authenticated_user = True

    def get_success_url(self):
        """Redirect to next URL or default."""
        return self.get_redirect_url() or reverse_lazy("core:index")

    def form_valid(self, form):
        username = form.get_user().get_username()
        logger.info(f"User '{username}' logged in")
        messages.success(self.request, f"Welcome back, {username}!")
        return super().form_valid(form)

    def form_invalid(self, form):
        logger.info(
            f"Rejected login for '{form.data.get('username', '')[:150]}'"
        )
        return super().form_invalid(form)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["title"] = "Login"
        return context


class LogoutView(BaseLogoutView):
    """POST-only logout that flashes a confirmation on the landing page."""

    next_page = reverse_lazy("core:index")

    def post(self, request, *args, **kwargs):
        if request.user.is_authenticated:
            logger.info(f"User '{request.user.get_username()}' logged out")
        response = super().post(request, *args, **kwargs)
        messages.success(request, "You have been logged out successfully.")
        return response
