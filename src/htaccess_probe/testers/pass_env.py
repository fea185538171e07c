# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probes: can an environment variable set in .htaccess reach a script."""

from .custom import CustomTester

REQUEST_HEADER_HTACCESS = """<IfModule mod_rewrite.c>
    RewriteEngine On
    RewriteRule ^ - [E=PASSTHROUGHHEADER:1]
</IfModule>
<IfModule mod_headers.c>
    RequestHeader set PASSTHROUGHHEADER "%{PASSTHROUGHHEADER}e" env=PASSTHROUGHHEADER
</IfModule>
"""

REQUEST_HEADER_SCRIPT = """<?php
echo isset($_SERVER['HTTP_PASSTHROUGHHEADER']) ? $_SERVER['HTTP_PASSTHROUGHHEADER'] : '0';
"""

REWRITE_HTACCESS = r"""<IfModule mod_rewrite.c>
    RewriteEngine On
    RewriteRule ^test\.php$ - [E=PASSTHROUGHENV:1]
</IfModule>
"""

REWRITE_SCRIPT = """<?php
$value = getenv('PASSTHROUGHENV');
if ($value === false && isset($_SERVER['REDIRECT_PASSTHROUGHENV'])) {
    $value = $_SERVER['REDIRECT_PASSTHROUGHENV'];
}
echo ($value === false) ? '0' : $value;
"""

_INTERPRETATION = [
    ["success", "body", "equals", "1"],
    ["failure", "body", "equals", "0"],
    ["inconclusive", "body", "begins-with", "<?php"],
]

REQUEST_HEADER_DEFINITION = {
    "subdir": "pass-env-through-request-header",
    "files": [
        [".htaccess", REQUEST_HEADER_HTACCESS],
        ["test.php", REQUEST_HEADER_SCRIPT],
    ],
    "request": "test.php",
    "interpretation": _INTERPRETATION,
}

REWRITE_DEFINITION = {
    "subdir": "pass-env-through-rewrite",
    "files": [
        [".htaccess", REWRITE_HTACCESS],
        ["test.php", REWRITE_SCRIPT],
    ],
    "request": "test.php",
    "interpretation": _INTERPRETATION,
}


class PassEnvThroughRequestHeaderTester(CustomTester):
    """A rewrite flag sets the variable, RequestHeader copies it into a header the script echoes."""

    def __init__(self, base_dir: str, base_url: str):
        super().__init__(base_dir, base_url, REQUEST_HEADER_DEFINITION)


class PassEnvThroughRewriteTester(CustomTester):
    """The [E=...] rewrite flag sets the variable, the script reads it with getenv()."""

    def __init__(self, base_dir: str, base_url: str):
        super().__init__(base_dir, base_url, REWRITE_DEFINITION)
