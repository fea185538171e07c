# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe: is a given Apache module loaded (are its <IfModule> blocks applied)."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Hashable

from ..models import TestResult
from .base import AbstractTester
from .custom import CustomTester

logger = logging.getLogger(__name__)

_MODULE_NAME_RE = re.compile(r"^[a-z0-9_]+$")


def normalize_module_name(name: str) -> str:
    """Accept ``rewrite``, ``mod_rewrite`` and ``mod_rewrite.c``; return ``rewrite``."""
    normalized = str(name or "").strip().lower()
    if normalized.endswith(".c"):
        normalized = normalized[: -len(".c")]
    if normalized.startswith("mod_"):
        normalized = normalized[len("mod_") :]
    if not _MODULE_NAME_RE.match(normalized):
        raise ValueError(f"invalid module name: {name!r}")
    return normalized


def _directory_index_definition(module: str, subdir: str) -> dict:
    htaccess = f"DirectoryIndex 0.txt\n<IfModule mod_{module}.c>\n    DirectoryIndex 1.txt\n</IfModule>\n"
    return {
        "subdir": subdir,
        "files": [[".htaccess", htaccess], ["0.txt", "0"], ["1.txt", "1"]],
        "request": "",
        "interpretation": [
            ["success", "body", "equals", "1"],
            ["failure", "body", "equals", "0"],
        ],
    }


def _add_type_definition(module: str, subdir: str) -> dict:
    htaccess = f"<IfModule mod_{module}.c>\n    AddType image/gif .test\n</IfModule>\n"
    return {
        "subdir": subdir,
        "files": [[".htaccess", htaccess], ["request-me.test", "hi"]],
        "request": "request-me.test",
        "interpretation": [
            ["success", "headers", "contains-key-value", "Content-Type", "image/gif"],
            ["failure", "status-code", "equals", "200"],
        ],
    }


def _rewrite_definition(module: str, subdir: str) -> dict:
    htaccess = f"RewriteEngine On\n<IfModule mod_{module}.c>\n    RewriteRule ^0\\.txt$ 1\\.txt [L]\n</IfModule>\n"
    return {
        "subdir": subdir,
        "files": [[".htaccess", htaccess], ["0.txt", "0"], ["1.txt", "1"]],
        "request": "0.txt",
        "interpretation": [
            ["success", "body", "equals", "1"],
            ["failure", "body", "equals", "0"],
        ],
    }


def _response_header_definition(module: str, subdir: str) -> dict:
    htaccess = f"<IfModule mod_{module}.c>\n    Header set X-Module-Loaded-Test: yes\n</IfModule>\n"
    return {
        "subdir": subdir,
        "files": [[".htaccess", htaccess], ["request-me.txt", "hi"]],
        "request": "request-me.txt",
        "interpretation": [
            ["success", "headers", "contains-key-value", "X-Module-Loaded-Test", "yes"],
            ["failure", "status-code", "equals", "200"],
        ],
    }


# (capability that must work, strategy name, definition builder), tried in order
STRATEGIES: tuple[tuple[str, str, Callable[[str, str], dict]], ...] = (
    ("can_set_directory_index", "directory-index", _directory_index_definition),
    ("can_add_type", "add-type", _add_type_definition),
    ("can_rewrite", "rewrite", _rewrite_definition),
    ("can_set_response_header", "response-header", _response_header_definition),
)


class ModuleLoadedTester(AbstractTester):
    """
    Wraps a directive that is known to work inside ``<IfModule mod_<name>.c>``.

    The first strategy whose directive works on this server decides; when none does the
    result is inconclusive.
    """

    def __init__(self, base_dir: str, base_url: str, module_name: str):
        super().__init__(base_dir, base_url)
        self.module_name = normalize_module_name(module_name)

    def identity(self) -> tuple[Hashable, ...]:
        return (self.module_name,)

    def run(self) -> TestResult:
        resolver = self.capability_resolver
        for capability, strategy, build in STRATEGIES:
            if resolver.call_method(capability) is not True:
                continue
            logger.debug("Detecting mod_%s using the %s strategy", self.module_name, strategy)
            tester = CustomTester(
                self.base_dir,
                self.base_url,
                build(self.module_name, f"module-loaded/{self.module_name}/{strategy}"),
            )
            tester.set_http_requester(self.http_requester)
            result = tester.run()
            return TestResult(result.status, f"checked using {strategy}: {result.info}")
        return TestResult.inconclusive("none of the directives used for module detection work on this server")
