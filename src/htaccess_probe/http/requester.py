# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP requester abstraction and factory."""

from typing import Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import HttpResponse


class HttpRequester(Protocol):
    """
    Performs one HTTP GET and returns the response.

    Implementations must not raise for ordinary network failures. They return an
    HttpResponse with status code 0 and an explanatory body instead.
    """

    def make_request(self, url: str) -> HttpResponse: ...


def create_default_http_requester(settings: ProbeSettings | None = None) -> HttpRequester:
    """Factory for the default httpx-backed requester."""
    from .httpx_requester import HttpxRequester

    return HttpxRequester(settings or load_probe_settings())
