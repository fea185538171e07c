# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe: can the Header directive (mod_headers) set a response header."""

from .custom import CustomTester

HTACCESS = """<IfModule mod_headers.c>
    Header set X-Response-Header-Test: test
</IfModule>
"""

DEFINITION = {
    "subdir": "set-response-header",
    "files": [
        [".htaccess", HTACCESS],
        ["request-me.txt", "hi"],
    ],
    "request": "request-me.txt",
    "interpretation": [
        ["success", "headers", "contains-key-value", "X-Response-Header-Test", "test"],
        ["failure", "status-code", "equals", "200"],
    ],
}


class SetResponseHeaderTester(CustomTester):
    """Failure when the file is served (200) without the header; other statuses are inconclusive."""

    def __init__(self, base_dir: str, base_url: str):
        super().__init__(base_dir, base_url, DEFINITION)
