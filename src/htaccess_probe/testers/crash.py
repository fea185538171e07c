# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Crash-test arbitrary .htaccess rules."""

from __future__ import annotations

import secrets

from .custom import CustomTester

EMPTY_HTACCESS = "# Empty .htaccess\n"


def build_crash_definition(rules: str, sub_dir: str) -> dict:
    return {
        "subdir": f"crash-tester/{sub_dir}",
        "files": [
            [".htaccess", rules if rules else EMPTY_HTACCESS],
            ["request-me.txt", "thanks"],
        ],
        "request": {
            "url": "request-me.txt",
            "bypass_standard_error_handling": "all",
        },
        "interpretation": [
            ["success", "body", "equals", "thanks"],
            ["success", "status-code", "equals", "403"],
            ["failure", "status-code", "equals", "500"],
            ["inconclusive", "status-code", "equals", "404"],
        ],
    }


class CrashTester(CustomTester):
    """
    True when the rules do not make the server error, False on 500.

    A 403 counts as success since the rules were parsed (they may well deny access).
    A 404 or any other unexpected response is inconclusive. Without an explicit
    ``sub_dir`` a random one is generated, so such runs never share a cache entry.
    """

    def __init__(self, base_dir: str, base_url: str, rules: str, sub_dir: str | None = None):
        self.rules = rules or ""
        self.sub_dir = sub_dir or secrets.token_hex(8)
        super().__init__(base_dir, base_url, build_crash_definition(self.rules, self.sub_dir))
