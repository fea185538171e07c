# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tester exports."""

from .add_type import AddTypeTester
from .base import AbstractTester, CapabilityResolver
from .content_digest import ContentDigestTester
from .crash import CrashTester
from .custom import CustomTester
from .definition import TestDefinition, parse_test_definition
from .directory_index import DirectoryIndexTester
from .htaccess_enabled import HtaccessEnabledTester
from .module_loaded import ModuleLoadedTester, normalize_module_name
from .pass_env import PassEnvThroughRequestHeaderTester, PassEnvThroughRewriteTester
from .request_header import SetRequestHeaderTester
from .response_header import SetResponseHeaderTester
from .rewrite import RewriteTester
from .server_signature import ServerSignatureTester

__all__ = [
    "AbstractTester",
    "AddTypeTester",
    "CapabilityResolver",
    "ContentDigestTester",
    "CrashTester",
    "CustomTester",
    "DirectoryIndexTester",
    "HtaccessEnabledTester",
    "ModuleLoadedTester",
    "PassEnvThroughRequestHeaderTester",
    "PassEnvThroughRewriteTester",
    "RewriteTester",
    "ServerSignatureTester",
    "SetRequestHeaderTester",
    "SetResponseHeaderTester",
    "TestDefinition",
    "normalize_module_name",
    "parse_test_definition",
]
