# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe: are .htaccess files processed at all."""

from __future__ import annotations

from ..models import TestResult
from .base import AbstractTester

# Any of these working proves the server read an .htaccess file.
INDICATORS = (
    "can_set_server_signature",
    "can_content_digest",
    "can_set_response_header",
    "can_add_type",
    "can_set_directory_index",
    "can_pass_env_through_rewrite",
)

MALFORMED_RULES = "ThisIsNotAValidDirective on\n"
MALFORMED_SUBDIR = "htaccess-enabled-malformed-htaccess"


class HtaccessEnabledTester(AbstractTester):
    """
    Composite probe built on the other capability queries.

    ServerSignature is a core directive, so it failing outright means the file was
    ignored. As a last resort a malformed .htaccess is crash-tested: a server that
    errors on it must have read it.
    """

    def run(self) -> TestResult:
        resolver = self.capability_resolver
        for capability in INDICATORS:
            if resolver.call_method(capability) is True:
                return TestResult.success(f"{capability} works, so .htaccess files are processed")

        if resolver.call_method("can_set_server_signature") is False:
            return TestResult.failure("ServerSignature does not work, and it is a core directive")

        no_crash = resolver.crash_test(MALFORMED_RULES, MALFORMED_SUBDIR)
        if no_crash is False:
            return TestResult.success("a malformed .htaccess makes the server error, so it is processed")
        if no_crash is True:
            return TestResult.failure("a malformed .htaccess does not make the server error")
        return TestResult.inconclusive("none of the indirect probes could tell whether .htaccess files are processed")
