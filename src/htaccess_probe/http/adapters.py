# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Adapters to plug foreign transports and test doubles into the HttpRequester protocol."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .models import HttpResponse
from .requester import HttpRequester


class CallableHttpRequester(HttpRequester):
    """
    Adapter for a plain ``url -> response`` callable.

    The callable may return an HttpResponse or a mapping with ``body``, ``status_code`` and
    ``headers`` keys. Exceptions it raises are folded into status-0 responses.
    """

    def __init__(self, func: Callable[[str], Any]):
        self._func = func

    def make_request(self, url: str) -> HttpResponse:
        try:
            data = self._func(url)
        except Exception as exc:  # noqa: BLE001
            return HttpResponse.transport_failure(url, f"{type(exc).__name__}: {exc}")
        if isinstance(data, HttpResponse):
            return data
        if isinstance(data, Mapping):
            return HttpResponse.from_mapping(data)
        return HttpResponse.transport_failure(url, f"unexpected response type {type(data).__name__}")


class StubHttpRequester(HttpRequester):
    """Deterministic, programmable HttpRequester for tests."""

    def __init__(self, responses: dict[str, HttpResponse] | None = None, default: HttpResponse | None = None):
        self._responses = responses or {}
        self._default = default
        self.requests: list[str] = []

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    def make_request(self, url: str) -> HttpResponse:
        self.requests.append(url)
        if url in self._responses:
            return self._responses[url]
        if self._default is not None:
            return self._default
        return HttpResponse.transport_failure(url, "no stubbed response configured")

    def close(self) -> None:
        return None
