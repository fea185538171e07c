# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Definition-driven tester; the built-in probes are specializations of it."""

from __future__ import annotations

import logging
import os
from collections.abc import Hashable, Mapping
from typing import Any

from ..http import HttpResponse
from ..models import TestResult
from .base import AbstractTester
from .definition import SubTest, TestDefinition, parse_test_definition
from .fixtures import write_fixture_files
from .interpreter import interpret

logger = logging.getLogger(__name__)


def standard_error_result(response: HttpResponse, subtest: SubTest) -> TestResult | None:
    """
    Apply the shared handling of transport failures and error statuses.

    Returns None when the response should go on to the interpretation rules.
    """
    if response.failed:
        return TestResult.inconclusive(response.body or "the request failed")
    if subtest.request.bypasses(response.status_code):
        return None
    if response.status_code == 403:
        return TestResult.inconclusive("the test request was forbidden (403)")
    if response.status_code == 404:
        return TestResult.inconclusive("the test file could not be found (404)")
    if response.status_code == 500:
        return TestResult.failure("the server responded with 500 Internal Server Error")
    return None


class CustomTester(AbstractTester):
    """Runs a caller-supplied test definition (see ``testers.definition``)."""

    def __init__(self, base_dir: str, base_url: str, definition: Mapping[str, Any] | TestDefinition):
        super().__init__(base_dir, base_url)
        self.definition = parse_test_definition(definition)

    def identity(self) -> tuple[Hashable, ...]:
        return (self.definition,)

    @property
    def subdir(self) -> str:
        return self.definition.subdir

    def subtest_dir(self, subtest: SubTest) -> str:
        return os.path.join(self.base_dir, *self.subdir.split("/"), *filter(None, subtest.subdir.split("/")))

    def subtest_url(self, subtest: SubTest) -> str:
        directory_url = self.url_for(self.subdir, subtest.subdir)
        return f"{directory_url}/{subtest.request.path}"

    def check_requirements(self) -> TestResult | None:
        resolver = self.capability_resolver
        for requirement in self.definition.requirements:
            status = resolver.call_method(requirement)
            if status is not True:
                outcome = "inconclusive" if status is None else "false"
                return TestResult.inconclusive(f"requirement {requirement} not met (it was {outcome})")
        return None

    def run_subtest(self, subtest: SubTest) -> TestResult:
        write_fixture_files(self.subtest_dir(subtest), subtest.files)
        url = self.subtest_url(subtest)
        response = self.make_http_request(url)
        logger.debug("GET %s -> %s", url, response.status_code)

        result = standard_error_result(response, subtest)
        if result is None:
            result = interpret(response, subtest.interpretation)
        return result

    def run(self) -> TestResult:
        if self.definition.requirements:
            unmet = self.check_requirements()
            if unmet is not None:
                return unmet

        result = TestResult.inconclusive("no subtests to run")
        for subtest in self.definition.subtests:
            result = self.run_subtest(subtest)
            if result.status is not True:
                if subtest.subdir and len(self.definition.subtests) > 1:
                    result = TestResult(result.status, f"{subtest.subdir}: {result.info}")
                return result
        return result


__all__ = ["CustomTester", "standard_error_result"]
