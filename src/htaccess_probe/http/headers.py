# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Requesters are free to hand
back headers in whatever casing their transport produced, so probes read them through
these helpers instead of indexing the mapping directly.
"""

from __future__ import annotations

from collections.abc import Mapping


def normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    if not headers:
        return {}
    return {str(key).strip().lower(): str(value) for key, value in headers.items() if str(key).strip()}


def has_header(headers: Mapping[str, str] | None, name: str) -> bool:
    """Return True when a header is present, matching the name case-insensitively."""
    if not name:
        return False
    return str(name).strip().lower() in normalize_headers(headers)


def header_value(headers: Mapping[str, str] | None, name: str, default: str = "") -> str:
    """Return a header value (stripped) using case-insensitive key matching."""
    if not headers or not name:
        return default
    if name in headers:
        return str(headers[name]).strip()
    return normalize_headers(headers).get(str(name).strip().lower(), default).strip()


__all__ = ["has_header", "header_value", "normalize_headers"]
