# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Memoization of probe results.

A TestResultCache maps a tester's structural identity (``AbstractTester.cache_key``) to
the TestResult its first run produced. Entries are never evicted: capability answers are
assumed stable for the lifetime of one run. The cache is owned by an orchestrator
instance and is not safe for concurrent mutation.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING

from .models.result import TestResult

if TYPE_CHECKING:
    from .testers.base import AbstractTester


class TestResultCache:
    __test__ = False

    def __init__(self) -> None:
        self._results: dict[Hashable, TestResult] = {}

    def is_cached(self, tester: AbstractTester) -> bool:
        return tester.cache_key in self._results

    def get_cached(self, tester: AbstractTester) -> TestResult:
        """Return the stored result; raises KeyError when the tester has not run yet."""
        return self._results[tester.cache_key]

    def cache(self, tester: AbstractTester, result: TestResult) -> None:
        self._results[tester.cache_key] = result

    def __contains__(self, tester: object) -> bool:
        key = getattr(tester, "cache_key", None)
        return key is not None and key in self._results

    def __len__(self) -> int:
        return len(self._results)


__all__ = ["TestResultCache"]
