# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe: does the ServerSignature directive (core) take effect."""

from .custom import CustomTester

SCRIPT = """<?php
if (isset($_SERVER['SERVER_SIGNATURE']) && ($_SERVER['SERVER_SIGNATURE'] != '')) {
    echo '1';
} else {
    echo '0';
}
"""

DEFINITION = {
    "subdir": "server-signature",
    "subtests": [
        {
            "subdir": "on",
            "files": [
                [".htaccess", "ServerSignature On\n"],
                ["test.php", SCRIPT],
            ],
            "request": "test.php",
            "interpretation": [
                ["success", "body", "equals", "1"],
                ["failure", "body", "equals", "0"],
                ["inconclusive", "body", "begins-with", "<?php"],
            ],
        },
        {
            "subdir": "off",
            "files": [
                [".htaccess", "ServerSignature Off\n"],
                ["test.php", SCRIPT],
            ],
            "request": "test.php",
            "interpretation": [
                ["success", "body", "equals", "0"],
                ["failure", "body", "equals", "1"],
                ["inconclusive", "body", "begins-with", "<?php"],
            ],
        },
    ],
}


class ServerSignatureTester(CustomTester):
    """PHP-backed; both the ``On`` and the ``Off`` subtest must come out as expected."""

    def __init__(self, base_dir: str, base_url: str):
        super().__init__(base_dir, base_url, DEFINITION)
