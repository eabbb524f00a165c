"""URL configuration for the interaction harness project."""

from django.urls import include, path

urlpatterns = [
    path("", include("core.urls")),
    path("users/", include("users.urls")),
    path("", include("ajax_forms_test.urls")),
]
