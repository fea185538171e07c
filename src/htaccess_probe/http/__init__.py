# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP requester exports."""

from .adapters import CallableHttpRequester, StubHttpRequester
from .headers import has_header, header_value, normalize_headers
from .httpx_requester import HttpxRequester
from .models import TRANSPORT_FAILURE_STATUS, Headers, HttpResponse
from .requester import HttpRequester, create_default_http_requester

__all__ = [
    "TRANSPORT_FAILURE_STATUS",
    "CallableHttpRequester",
    "Headers",
    "HttpRequester",
    "HttpResponse",
    "HttpxRequester",
    "StubHttpRequester",
    "create_default_http_requester",
    "has_header",
    "header_value",
    "normalize_headers",
]
