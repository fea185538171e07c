# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Allow-list for dispatching capability queries by name."""

from __future__ import annotations

import re
from enum import Enum

from .errors import UnsupportedMethodError


class Capability(str, Enum):
    HTACCESS_ENABLED = "htaccess_enabled"
    MODULE_LOADED = "module_loaded"
    CAN_REWRITE = "can_rewrite"
    CAN_ADD_TYPE = "can_add_type"
    CAN_SET_RESPONSE_HEADER = "can_set_response_header"
    CAN_SET_REQUEST_HEADER = "can_set_request_header"
    CAN_CONTENT_DIGEST = "can_content_digest"
    CAN_SET_SERVER_SIGNATURE = "can_set_server_signature"
    CAN_SET_DIRECTORY_INDEX = "can_set_directory_index"
    CAN_PASS_ENV_THROUGH_REQUEST_HEADER = "can_pass_env_through_request_header"
    CAN_PASS_ENV_THROUGH_REWRITE = "can_pass_env_through_rewrite"

    @property
    def arity(self) -> int:
        return 1 if self is Capability.MODULE_LOADED else 0


_CALL_RE = re.compile(r"^\s*(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s*(?:\((?P<args>[^()]*)\))?\s*$")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _to_snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub("_", name).lower()


def parse_method_call(method: str | Capability) -> tuple[Capability, tuple[str, ...]]:
    """
    Resolve ``"canRewrite()"``, ``"can_rewrite"`` or ``"moduleLoaded(headers)"`` to a
    Capability and its arguments.

    Raises UnsupportedMethodError for names outside the allow-list and for calls with
    the wrong number of arguments.
    """
    if isinstance(method, Capability):
        capability, args = method, ()
    else:
        match = _CALL_RE.match(str(method))
        if not match:
            raise UnsupportedMethodError(f"The method is not callable: {method!r}")
        try:
            capability = Capability(_to_snake_case(match.group("name")))
        except ValueError:
            raise UnsupportedMethodError(f"The method is not callable: {method!r}") from None
        raw_args = (match.group("args") or "").strip()
        args = tuple(arg.strip().strip("'\"") for arg in raw_args.split(",")) if raw_args else ()

    if len(args) != capability.arity:
        raise UnsupportedMethodError(
            f"{capability.value} takes {capability.arity} argument(s), got {len(args)}: {method!r}"
        )
    return capability, args


__all__ = ["Capability", "parse_method_call"]
