# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe: does the ContentDigest directive toggle the Content-MD5 header."""

from .custom import CustomTester

DEFINITION = {
    "subdir": "content-digest",
    "subtests": [
        {
            "subdir": "on",
            "files": [
                [".htaccess", "ContentDigest On\n"],
                ["request-me.txt", "hi"],
            ],
            "request": "request-me.txt",
            "interpretation": [
                ["success", "headers", "contains-key", "Content-MD5"],
                ["failure", "status-code", "equals", "200"],
            ],
        },
        {
            "subdir": "off",
            "files": [
                [".htaccess", "ContentDigest Off\n"],
                ["request-me.txt", "hi"],
            ],
            "request": "request-me.txt",
            "interpretation": [
                ["failure", "headers", "contains-key", "Content-MD5"],
                ["success", "status-code", "equals", "200"],
            ],
        },
    ],
}


class ContentDigestTester(CustomTester):
    """
    Two subtests: the header must appear with ``On`` and be absent with ``Off``.

    A 200 response in the wrong state is a failure; anything else is inconclusive.
    """

    def __init__(self, base_dir: str, base_url: str):
        super().__init__(base_dir, base_url, DEFINITION)
