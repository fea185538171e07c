# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe: does mod_rewrite act on rules in an .htaccess file."""

from .custom import CustomTester

HTACCESS = r"""<IfModule mod_rewrite.c>
    RewriteEngine On
    RewriteRule ^0\.txt$ 1\.txt [L]
</IfModule>
"""

DEFINITION = {
    "subdir": "rewrite",
    "files": [
        [".htaccess", HTACCESS],
        ["0.txt", "0"],
        ["1.txt", "1"],
    ],
    "request": "0.txt",
    "interpretation": [
        ["success", "body", "equals", "1"],
        ["failure", "body", "equals", "0"],
    ],
}


class RewriteTester(CustomTester):
    """Requests 0.txt; a working rewrite serves 1.txt instead. Other bodies are inconclusive."""

    def __init__(self, base_dir: str, base_url: str):
        super().__init__(base_dir, base_url, DEFINITION)
