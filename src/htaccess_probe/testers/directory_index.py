# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe: does DirectoryIndex (mod_dir, Indexes override) pick the configured file."""

from .custom import CustomTester

HTACCESS = """<IfModule mod_dir.c>
    DirectoryIndex index2.html
</IfModule>
"""

DEFINITION = {
    "subdir": "directory-index",
    "files": [
        [".htaccess", HTACCESS],
        ["index.html", "0"],
        ["index2.html", "1"],
    ],
    "request": "",
    "interpretation": [
        ["success", "body", "equals", "1"],
        ["failure", "body", "equals", "0"],
    ],
}


class DirectoryIndexTester(CustomTester):
    """Requests the directory itself; a directory listing or other body is inconclusive."""

    def __init__(self, base_dir: str, base_url: str):
        super().__init__(base_dir, base_url, DEFINITION)
