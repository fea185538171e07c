# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade answering capability questions about a live server."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from contextlib import suppress
from typing import Any

from .cache import TestResultCache
from .dispatch import Capability, parse_method_call
from .http import HttpRequester, create_default_http_requester
from .models import status_label
from .testers import (
    AbstractTester,
    AddTypeTester,
    ContentDigestTester,
    CrashTester,
    CustomTester,
    DirectoryIndexTester,
    HtaccessEnabledTester,
    ModuleLoadedTester,
    PassEnvThroughRequestHeaderTester,
    PassEnvThroughRewriteTester,
    RewriteTester,
    ServerSignatureTester,
    SetRequestHeaderTester,
    SetResponseHeaderTester,
    TestDefinition,
)

logger = logging.getLogger(__name__)


class HtaccessCapabilityTester:
    """
    Runs capability probes against ``base_url``, staging their files in ``base_dir``.

    Every query returns True (works), False (does not work) or None (inconclusive); the
    explanation of the last answer is kept in ``info_from_last_test``. Results are cached
    per tester identity for the lifetime of ``cache``, which by default belongs to this
    instance. Pass a shared TestResultCache to reuse answers across instances.
    """

    def __init__(
        self,
        base_dir: str,
        base_url: str,
        *,
        http_requester: HttpRequester | None = None,
        cache: TestResultCache | None = None,
    ):
        self.base_dir = str(base_dir)
        self.base_url = str(base_url)
        self.info_from_last_test = ""
        self.cache = cache if cache is not None else TestResultCache()
        self._requester = http_requester
        self._default_requester: HttpRequester | None = None

    def set_http_requester(self, requester: HttpRequester) -> None:
        self._requester = requester

    @property
    def http_requester(self) -> HttpRequester:
        """The configured requester, or the default transport shared by this instance's testers."""
        if self._requester is not None:
            return self._requester
        if self._default_requester is None:
            self._default_requester = create_default_http_requester()
        return self._default_requester

    def _run_test(self, tester: AbstractTester) -> bool | None:
        """Run the tester unless cached, record info, return status."""
        if self.cache.is_cached(tester):
            result = self.cache.get_cached(tester)
            logger.debug("Cache hit for %s", tester.cache_key[0])
        else:
            tester.set_http_requester(self.http_requester)
            tester.set_capability_resolver(self)
            result = tester.run()
            self.cache.cache(tester, result)
            logger.info("%s: %s %s", tester.cache_key[0], status_label(result.status), result.info)

        self.info_from_last_test = result.info
        return result.status

    def htaccess_enabled(self) -> bool | None:
        """Test if .htaccess files are processed at all (the server may ignore them completely)."""
        return self._run_test(HtaccessEnabledTester(self.base_dir, self.base_url))

    def module_loaded(self, module_name: str) -> bool | None:
        """
        Test if a module is loaded, i.e. if directives inside ``<IfModule mod_<name>.c>`` run.

        ``module_name`` is a module name such as ``"rewrite"`` (``"mod_rewrite"`` works too).
        """
        return self._run_test(ModuleLoadedTester(self.base_dir, self.base_url, module_name))

    def can_rewrite(self) -> bool | None:
        """Test if rewriting works (IfModule, RewriteEngine, RewriteRule)."""
        return self._run_test(RewriteTester(self.base_dir, self.base_url))

    def can_add_type(self) -> bool | None:
        """Test if AddType works (mod_mime, FileInfo override)."""
        return self._run_test(AddTypeTester(self.base_dir, self.base_url))

    def can_set_response_header(self) -> bool | None:
        return self._run_test(SetResponseHeaderTester(self.base_dir, self.base_url))

    def can_set_request_header(self) -> bool | None:
        return self._run_test(SetRequestHeaderTester(self.base_dir, self.base_url))

    def can_content_digest(self) -> bool | None:
        return self._run_test(ContentDigestTester(self.base_dir, self.base_url))

    def can_set_server_signature(self) -> bool | None:
        return self._run_test(ServerSignatureTester(self.base_dir, self.base_url))

    def can_set_directory_index(self) -> bool | None:
        return self._run_test(DirectoryIndexTester(self.base_dir, self.base_url))

    def can_pass_env_through_request_header(self) -> bool | None:
        """Test if an environment variable can be passed to a script through RequestHeader."""
        return self._run_test(PassEnvThroughRequestHeaderTester(self.base_dir, self.base_url))

    def can_pass_env_through_rewrite(self) -> bool | None:
        """Test if an environment variable set by a rewrite rule reaches a script."""
        return self._run_test(PassEnvThroughRewriteTester(self.base_dir, self.base_url))

    def crash_test(self, rules: str, sub_dir: str | None = None) -> bool | None:
        """
        Crash-test some .htaccess rules.

        True means the server did not error on them. Without ``sub_dir`` a unique one is
        generated, so the result is never shared with another call.
        """
        return self._run_test(CrashTester(self.base_dir, self.base_url, rules, sub_dir))

    def custom_test(self, definition: Mapping[str, Any] | TestDefinition) -> bool | None:
        """Run a caller-defined test (see ``htaccess_probe.testers.definition``)."""
        return self._run_test(CustomTester(self.base_dir, self.base_url, definition))

    def _handlers(self) -> dict[Capability, Callable[..., bool | None]]:
        return {
            Capability.HTACCESS_ENABLED: self.htaccess_enabled,
            Capability.MODULE_LOADED: self.module_loaded,
            Capability.CAN_REWRITE: self.can_rewrite,
            Capability.CAN_ADD_TYPE: self.can_add_type,
            Capability.CAN_SET_RESPONSE_HEADER: self.can_set_response_header,
            Capability.CAN_SET_REQUEST_HEADER: self.can_set_request_header,
            Capability.CAN_CONTENT_DIGEST: self.can_content_digest,
            Capability.CAN_SET_SERVER_SIGNATURE: self.can_set_server_signature,
            Capability.CAN_SET_DIRECTORY_INDEX: self.can_set_directory_index,
            Capability.CAN_PASS_ENV_THROUGH_REQUEST_HEADER: self.can_pass_env_through_request_header,
            Capability.CAN_PASS_ENV_THROUGH_REWRITE: self.can_pass_env_through_rewrite,
        }

    def call_method(self, method: str | Capability) -> bool | None:
        """
        Run an allow-listed capability query by name, e.g. ``"canRewrite()"`` or
        ``"module_loaded(headers)"``. Raises UnsupportedMethodError for anything else.
        """
        capability, args = parse_method_call(method)
        return self._handlers()[capability](*args)

    def close(self) -> None:
        for requester in (self._requester, self._default_requester):
            with suppress(Exception):
                if hasattr(requester, "close"):
                    requester.close()
        self._default_requester = None

    def __enter__(self) -> HtaccessCapabilityTester:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
