# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tri-state test result model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TestResult:
    """
    Outcome of one probe execution.

    ``status`` is True when the capability is confirmed, False when it is confirmed
    absent and None when the probe could not tell. ``info`` explains false and
    inconclusive outcomes and may carry notes on success too.
    """

    __test__ = False

    status: bool | None
    info: str = ""

    @classmethod
    def success(cls, info: str = "") -> TestResult:
        return cls(True, info)

    @classmethod
    def failure(cls, info: str = "") -> TestResult:
        return cls(False, info)

    @classmethod
    def inconclusive(cls, info: str = "") -> TestResult:
        return cls(None, info)

    @property
    def is_conclusive(self) -> bool:
        return self.status is not None


def status_label(status: bool | None) -> str:
    """Render a tri-state status the way the CLI and logs print it."""
    if status is None:
        return "inconclusive"
    return "true" if status else "false"
