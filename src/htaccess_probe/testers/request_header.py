# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe: can the RequestHeader directive (mod_headers) alter the request seen by scripts."""

from .custom import CustomTester

HTACCESS = """<IfModule mod_headers.c>
    RequestHeader set User-Agent "request-header-test"
</IfModule>
"""

SCRIPT = """<?php
if (isset($_SERVER['HTTP_USER_AGENT'])) {
    echo $_SERVER['HTTP_USER_AGENT'] == 'request-header-test' ? '1' : '0';
} else {
    echo '0';
}
"""

DEFINITION = {
    "subdir": "set-request-header",
    "files": [
        [".htaccess", HTACCESS],
        ["test.php", SCRIPT],
    ],
    "request": "test.php",
    "interpretation": [
        ["success", "body", "equals", "1"],
        ["failure", "body", "equals", "0"],
        ["inconclusive", "body", "begins-with", "<?php"],
    ],
}


class SetRequestHeaderTester(CustomTester):
    """
    Relies on a PHP script echoing 1 when it sees the rewritten User-Agent.

    An unprocessed script (body starting with ``<?php``) or any other body is inconclusive.
    """

    def __init__(self, base_dir: str, base_url: str):
        super().__init__(base_dir, base_url, DEFINITION)
