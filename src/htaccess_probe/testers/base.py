# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tester base class and collaborator protocols."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Protocol

from ..http import HttpRequester, HttpResponse, create_default_http_requester
from ..models import TestResult


class CapabilityResolver(Protocol):
    """What composite testers need from the orchestrator to ask follow-up questions."""

    def call_method(self, method: str) -> bool | None: ...

    def crash_test(self, rules: str, sub_dir: str | None = None) -> bool | None: ...


class AbstractTester(ABC):
    """
    A self-contained capability probe.

    Subclasses stage fixture files below ``base_dir``, request the matching location
    below ``base_url`` and interpret the response. Constructors must not touch the
    filesystem or the network; all of that happens in ``run()``.
    """

    def __init__(self, base_dir: str, base_url: str):
        self.base_dir = str(base_dir)
        self.base_url = str(base_url)
        self._http_requester: HttpRequester | None = None
        self._capability_resolver: CapabilityResolver | None = None

    @abstractmethod
    def run(self) -> TestResult: ...

    def identity(self) -> tuple[Hashable, ...]:
        """Probe-specific parameters that distinguish two testers of the same type."""
        return ()

    @property
    def cache_key(self) -> tuple[Hashable, ...]:
        cls = type(self)
        return (f"{cls.__module__}.{cls.__qualname__}", self.base_dir, self.base_url, self.identity())

    def set_http_requester(self, requester: HttpRequester) -> None:
        self._http_requester = requester

    @property
    def http_requester(self) -> HttpRequester:
        """
        The injected requester. A tester run on its own creates a default one on first
        use; closing it is then up to the caller (``tester.http_requester.close()``).
        """
        if self._http_requester is None:
            self._http_requester = create_default_http_requester()
        return self._http_requester

    def set_capability_resolver(self, resolver: CapabilityResolver) -> None:
        self._capability_resolver = resolver

    @property
    def capability_resolver(self) -> CapabilityResolver:
        """The orchestrator that launched this tester, or a private one over the same base."""
        if self._capability_resolver is None:
            from ..runtime import HtaccessCapabilityTester

            self._capability_resolver = HtaccessCapabilityTester(
                self.base_dir,
                self.base_url,
                http_requester=self.http_requester,
            )
        return self._capability_resolver

    def make_http_request(self, url: str) -> HttpResponse:
        return self.http_requester.make_request(url)

    def url_for(self, *parts: str) -> str:
        """Join path segments onto ``base_url``."""
        url = self.base_url.rstrip("/")
        for part in parts:
            part = str(part).strip("/")
            if part:
                url = f"{url}/{part}"
        return url

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"{self.__class__.__name__}(base_url={self.base_url!r}, identity={self.identity()!r})"
