"""
Forms for the login endpoint driven by the interaction harness.

Failed logins use one message for unknown accounts and wrong passwords so the
response does not reveal which accounts exist.
"""

from django import forms
from django.core.exceptions import ValidationError

from .utils import authenticate_by_email_or_username


class LoginForm(forms.Form):
    """Authentication form accepting a username or an email address."""

    username = forms.CharField(
        max_length=254,
        label="Username or Email",
        widget=forms.TextInput(attrs={"autofocus": True, "autocomplete": "username"}),
    )
    password = forms.CharField(
        strip=False,
        widget=forms.PasswordInput(attrs={"autocomplete": "current-password"}),
    )

    error_messages = {
        "invalid_login": (
            "Please enter a correct username/email and password. Note that both "
            "fields may be case-sensitive."
        ),
        "inactive": "This account is inactive.",
    }

    def __init__(self, request=None, *args, **kwargs):
        self.request = request
        self.user_cache = None
        super().__init__(*args, **kwargs)

    def clean(self):
        username = self.cleaned_data.get("username")
        password = self.cleaned_data.get("password")

        if username is not None and password:
            self.user_cache = authenticate_by_email_or_username(
                self.request, username, password
            )
            if self.user_cache is None:
                raise ValidationError(
                    self.error_messages["invalid_login"], code="invalid_login"
                )
            if not self.user_cache.is_active:
                raise ValidationError(self.error_messages["inactive"], code="inactive")

        return self.cleaned_data

    def get_user(self):
        return self.user_cache
