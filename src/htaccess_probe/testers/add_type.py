# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe: does AddType (mod_mime, FileInfo override) work."""

from .custom import CustomTester

HTACCESS = """<IfModule mod_mime.c>
    AddType image/gif .test
</IfModule>
"""

DEFINITION = {
    "subdir": "add-type",
    "files": [
        [".htaccess", HTACCESS],
        ["request-me.test", "hi"],
    ],
    "request": "request-me.test",
    "interpretation": [
        ["success", "headers", "contains-key-value", "Content-Type", "image/gif"],
        ["failure", "status-code", "equals", "200"],
    ],
}


class AddTypeTester(CustomTester):
    """
    Success when the fixture is served as image/gif, failure when it is served (200)
    with any other type. Redirects and other statuses are inconclusive.
    """

    def __init__(self, base_dir: str, base_url: str):
        super().__init__(base_dir, base_url, DEFINITION)
