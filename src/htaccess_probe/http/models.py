# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP response model handed from requesters to testers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .headers import has_header, header_value

Headers = dict[str, str]

# Status code reserved for "the transport itself failed"; never a real HTTP status.
TRANSPORT_FAILURE_STATUS = 0


@dataclass(frozen=True)
class HttpResponse:
    """Body, numeric status code and response headers of a single request."""

    body: str = ""
    status_code: int = TRANSPORT_FAILURE_STATUS
    headers: Headers = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        """True when the requester could not complete the request at all."""
        return self.status_code == TRANSPORT_FAILURE_STATUS

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)

    def has_header(self, name: str) -> bool:
        return has_header(self.headers, name)

    @classmethod
    def transport_failure(cls, url: str, reason: str = "") -> HttpResponse:
        """Build the status-0 response requesters return instead of raising."""
        message = f"The following request failed: {url}"
        if reason:
            message = f"{message} ({reason})"
        return cls(body=message, status_code=TRANSPORT_FAILURE_STATUS, headers={})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> HttpResponse:
        """Normalize a dictionary-like response (e.g. produced by a foreign transport)."""
        raw_headers: Any = data.get("headers") or {}
        headers: Headers = {}
        if isinstance(raw_headers, Mapping):
            for key, value in raw_headers.items():
                if key is None:
                    continue
                headers[str(key)] = "" if value is None else str(value)

        raw_body = data.get("body")
        if isinstance(raw_body, (bytes, bytearray, memoryview)):
            body = bytes(raw_body).decode("utf-8", errors="replace")
        elif raw_body is None:
            body = ""
        else:
            body = str(raw_body)

        try:
            status_code = int(data.get("status_code") or TRANSPORT_FAILURE_STATUS)
        except (TypeError, ValueError):
            status_code = TRANSPORT_FAILURE_STATUS

        return cls(body=body, status_code=status_code, headers=headers)
