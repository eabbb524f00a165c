"""
Views for the grouped AJAX form.

A plain GET renders the whole page. A POST carrying the
``X-Requested-With: XMLHttpRequest`` header is a partial update: the reply is
a JSON list of commands that replace the group wrapper with a fresh render.
Non-AJAX POSTs re-render the whole page with the submitted values.
"""

import logging

from django.contrib.auth.mixins import LoginRequiredMixin, PermissionRequiredMixin
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.template.loader import render_to_string
from django.views import View

from .forms import GROUP_WRAPPER_ID, GroupedAjaxForm

logger = logging.getLogger(__name__)

TRIGGER_FIELD = "_triggering_element_name"


def is_ajax(request: HttpRequest) -> bool:
    return request.headers.get("X-Requested-With") == "XMLHttpRequest"


class GroupedAjaxFormView(LoginRequiredMixin, PermissionRequiredMixin, View):
    """Serve the grouped form and answer its partial updates."""

    permission_required = "ajax_forms_test.access_content"
    template_name = "ajax_forms_test/group_form.html"
    wrapper_template_name = "ajax_forms_test/group_wrapper.html"

    def get(self, request: HttpRequest) -> HttpResponse:
        form = GroupedAjaxForm()
        return render(request, self.template_name, self.get_context_data(form))

    def post(self, request: HttpRequest) -> HttpResponse:
        form = GroupedAjaxForm(request.POST)

        if not is_ajax(request):
            return render(request, self.template_name, self.get_context_data(form))

        trigger = request.POST.get(TRIGGER_FIELD, "")
        if trigger not in form.ajax_fields:
            logger.warning(
                f"Partial update from user {request.user.pk} with unknown "
                f"trigger '{trigger[:50]}'"
            )
            return JsonResponse(
                {"error": "Unknown triggering element", "trigger": trigger[:50]},
                status=400,
            )

        wrapper = render_to_string(
            self.wrapper_template_name, self.get_context_data(form), request=request
        )
        commands = [
            {
                "command": "settings",
                "settings": {"ajaxTrigger": trigger},
                "merge": True,
            },
            {
                "command": "insert",
                "method": "replaceWith",
                "selector": f"#{GROUP_WRAPPER_ID}",
                "data": wrapper,
            },
        ]
        return JsonResponse(commands, safe=False)

    def get_context_data(self, form: GroupedAjaxForm) -> dict:
        return {
            "form": form,
            "title": "AJAX forms test",
            "wrapper_id": GROUP_WRAPPER_ID,
            "show_nested_group": form.show_nested_group(),
        }
