# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
htaccess-probe package entrypoint.

Finds out which .htaccess directives a live Apache-compatible server honors by staging
small fixture files on disk, requesting them over HTTP and reading the responses. Every
answer is tri-state (True / False / None for inconclusive) and is computed at most once
per tester identity. HTTP behavior is abstracted behind an injectable requester.
"""

from .cache import TestResultCache
from .config import ProbeSettings, load_probe_settings
from .dispatch import Capability, parse_method_call
from .errors import (
    FixtureWriteError,
    HtaccessProbeError,
    InvalidTestDefinitionError,
    UnsupportedMethodError,
)
from .http import (
    CallableHttpRequester,
    HttpRequester,
    HttpResponse,
    HttpxRequester,
    StubHttpRequester,
    create_default_http_requester,
)
from .log import setup_logging
from .models import TestResult
from .runtime import HtaccessCapabilityTester
from .testers import AbstractTester, CustomTester
from .version import __version__

__all__ = [
    "AbstractTester",
    "CallableHttpRequester",
    "Capability",
    "CustomTester",
    "FixtureWriteError",
    "HtaccessCapabilityTester",
    "HtaccessProbeError",
    "HttpRequester",
    "HttpResponse",
    "HttpxRequester",
    "InvalidTestDefinitionError",
    "ProbeSettings",
    "StubHttpRequester",
    "TestResult",
    "TestResultCache",
    "UnsupportedMethodError",
    "create_default_http_requester",
    "load_probe_settings",
    "parse_method_call",
    "setup_logging",
    "__version__",
]
