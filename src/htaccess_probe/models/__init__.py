# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for htaccess-probe."""

from ..http.models import Headers, HttpResponse
from .result import TestResult, status_label

__all__ = [
    "Headers",
    "HttpResponse",
    "TestResult",
    "status_label",
]
