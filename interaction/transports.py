"""
Transports carry harness requests to the site under test.

Each call is one synchronous request/response cycle: redirects are followed,
cookies are kept between calls, and the final response is returned as a
``PageResponse``. Two implementations ship:

- ``ClientTransport`` drives a Django site in-process via ``django.test.Client``
- ``RequestsTransport`` drives any running site over HTTP via ``requests``
"""

import logging
from http.cookies import SimpleCookie
from typing import Dict, List, Mapping, Optional, Union
from urllib.parse import urljoin, urlsplit

import requests
from django.test import Client

from .conf import harness_setting
from .exceptions import NavigationError
from .responses import PageResponse

logger = logging.getLogger(__name__)

FormData = Mapping[str, Union[str, List[str]]]


def _path_of(url: str) -> str:
    """Strip scheme and host so responses from either transport compare equal."""
    parts = urlsplit(url)
    path = parts.path or "/"
    return f"{path}?{parts.query}" if parts.query else path


class ClientTransport:
    """
    In-process transport backed by Django's test client.

    Unlike ``RequestsTransport``, exceptions raised by a view are not wrapped
    in ``NavigationError``; they propagate unchanged, as they do from the test
    client itself.
    """

    def __init__(self, client: Optional[Client] = None):
        self.client = client or Client()

    def request(
        self,
        method: str,
        path: str,
        data: Optional[FormData] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> PageResponse:
        method = method.upper()
        logger.debug(f"{method} {path} (in-process)")

        if method == "GET":
            response = self.client.get(path, data=data, follow=True, headers=headers)
        elif method == "POST":
            response = self.client.post(
                path, data=data or {}, follow=True, headers=headers
            )
        else:
            raise NavigationError(path, f"unsupported method {method}")

        final_path = response.request.get("PATH_INFO", path)
        query = response.request.get("QUERY_STRING")
        if query:
            final_path = f"{final_path}?{query}"

        return PageResponse(
            url=final_path,
            status_code=response.status_code,
            body=response.content.decode(response.charset or "utf-8"),
            headers=dict(response.items()),
        )

    def cookie(self, name: str) -> Optional[str]:
        morsel = self.client.cookies.get(name)
        # Deleted cookies linger in the jar with an empty value
        if morsel is None or not morsel.value:
            return None
        return morsel.value

    def clear_cookies(self) -> None:
        self.client.cookies = SimpleCookie()

    def close(self) -> None:
        self.clear_cookies()


class RequestsTransport:
    """HTTP transport for a running site, e.g. a ``LiveServerTestCase``."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout if timeout is not None else harness_setting("TIMEOUT")
        self.http = http or requests.Session()
        self.http.headers.update({"User-Agent": "interaction-harness/1.0"})

    def request(
        self,
        method: str,
        path: str,
        data: Optional[FormData] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> PageResponse:
        method = method.upper()
        url = urljoin(self.base_url, path)
        logger.debug(f"{method} {url} (timeout={self.timeout})")

        try:
            if method == "GET":
                response = self.http.get(
                    url, params=data, headers=headers, timeout=self.timeout
                )
            elif method == "POST":
                response = self.http.post(
                    url, data=data or {}, headers=headers, timeout=self.timeout
                )
            else:
                raise NavigationError(path, f"unsupported method {method}")
        except requests.RequestException as e:
            logger.warning(f"Transport failure for {method} {url}: {e}")
            raise NavigationError(path, str(e)) from e

        return PageResponse(
            url=_path_of(response.url),
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )

    def cookie(self, name: str) -> Optional[str]:
        return self.http.cookies.get(name) or None

    def clear_cookies(self) -> None:
        self.http.cookies.clear()

    def close(self) -> None:
        self.http.close()
