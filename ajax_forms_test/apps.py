"""
Django app configuration for the ajax_forms_test app.

The app serves a form whose AJAX-enabled checkboxes sit inside (nested)
fieldsets. Functional tests drive it through the interaction harness.
"""

from django.apps import AppConfig


class AjaxFormsTestConfig(AppConfig):
    """Configuration for the ajax_forms_test app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "ajax_forms_test"
    verbose_name = "AJAX Forms Test"
