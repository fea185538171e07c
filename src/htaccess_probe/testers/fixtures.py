# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Stage fixture files for a probe below the base directory."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ..errors import FixtureWriteError

logger = logging.getLogger(__name__)


def write_fixture_files(directory: str | Path, files: Iterable[tuple[str, str]]) -> list[Path]:
    """
    Write ``(name, content)`` pairs below ``directory``.

    Files whose content is already in place are left untouched. Returns the paths that were
    actually written.
    """
    root = Path(directory)
    written: list[Path] = []
    try:
        root.mkdir(parents=True, exist_ok=True)
        for name, content in files:
            path = root / name
            if path.is_file() and path.read_text(encoding="utf-8", errors="replace") == content:
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            written.append(path)
    except OSError as exc:
        raise FixtureWriteError(f"could not write test files to {root}: {exc}") from exc

    if written:
        logger.debug("Wrote %d fixture file(s) in %s", len(written), root)
    return written


__all__ = ["write_fixture_files"]
