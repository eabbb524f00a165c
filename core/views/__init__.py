from django.http import HttpRequest, HttpResponse
from django.shortcuts import render


def index(request: HttpRequest) -> HttpResponse:
    """
    Landing page of the harness site.

    Login and logout both redirect here, so it doubles as the page a fresh
    session lands on.
    """
    return render(request, "core/index.html", {"title": "Home"})
