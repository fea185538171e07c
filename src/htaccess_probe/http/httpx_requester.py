# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpRequester implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..errors import categorize_exception, error_category_to_reason
from .models import HttpResponse
from .requester import HttpRequester

logger = logging.getLogger(__name__)


class HttpxRequester(HttpRequester):
    """Synchronous httpx client wrapper mapping transport errors to status 0."""

    def __init__(self, settings: ProbeSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_probe_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def make_request(self, url: str) -> HttpResponse:
        headers = {"User-Agent": self.settings.user_agent}
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = ProbeSettings.max_body_bytes

        try:
            with self._client.stream("GET", url, headers=headers) as resp:
                content = bytearray()
                for chunk in resp.iter_bytes():
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if remaining <= 0:
                        break
                    content.extend(chunk[:remaining])

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                body=text,
                status_code=resp.status_code,
                headers=dict(resp.headers),
            )
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            logger.debug("Request to %s failed (%s): %s", url, category.value, exc)
            reason = error_category_to_reason(category)
            detail = str(exc)
            return HttpResponse.transport_failure(url, f"{reason}: {detail}" if detail else reason)

    def close(self) -> None:
        self._client.close()
