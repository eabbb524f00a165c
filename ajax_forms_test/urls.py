from django.urls import path

from . import views

app_name = "ajax_forms_test"

urlpatterns = [
    path(
        "ajax_forms_test_get_form",
        views.GroupedAjaxFormView.as_view(),
        name="group_form",
    ),
]
