# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Declarative test definitions.

A definition is a plain mapping (usually loaded from JSON) describing which fixture files
to stage, which file to request and how to read the response::

    {
        "subdir": "rewrite",
        "files": [[".htaccess", "..."], ["0.txt", "0"], ["1.txt", "1"]],
        "request": "0.txt",
        "interpretation": [
            ["success", "body", "equals", "1"],
            ["failure", "body", "equals", "0"],
        ],
    }

Parsed definitions are frozen dataclasses built from tuples, so they are hashable and
double as the cache identity of the tester that runs them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from ..dispatch import parse_method_call
from ..errors import InvalidTestDefinitionError, UnsupportedMethodError

RESULT_STATUSES: dict[str, bool | None] = {
    "success": True,
    "failure": False,
    "inconclusive": None,
}

PROPERTIES = ("body", "status-code", "headers")

# operator -> number of arguments
VALUE_OPERATORS: dict[str, int] = {
    "is-empty": 0,
    "equals": 1,
    "not-equals": 1,
    "begins-with": 1,
    "not-begins-with": 1,
    "contains": 1,
    "not-contains": 1,
}
HEADER_OPERATORS: dict[str, int] = {
    "contains-key": 1,
    "not-contains-key": 1,
    "contains-key-value": 2,
    "not-contains-key-value": 2,
}

STANDARD_ERROR_STATUSES = frozenset({"403", "404", "500"})


@dataclass(frozen=True)
class InterpretationRule:
    result: str
    subject: str | None = None
    operator: str | None = None
    args: tuple[str, ...] = ()

    @property
    def status(self) -> bool | None:
        return RESULT_STATUSES[self.result]

    @property
    def unconditional(self) -> bool:
        return self.subject is None

    def describe(self) -> str:
        if self.unconditional:
            return f"{self.result} (fallback rule)"
        args = " ".join(repr(arg) for arg in self.args)
        return f"{self.subject} {self.operator} {args}".rstrip()


@dataclass(frozen=True)
class RequestSpec:
    path: str = ""
    bypass_standard_error_handling: frozenset[str] = frozenset()

    def bypasses(self, status_code: int) -> bool:
        return str(status_code) in self.bypass_standard_error_handling


@dataclass(frozen=True)
class SubTest:
    subdir: str
    files: tuple[tuple[str, str], ...]
    request: RequestSpec
    interpretation: tuple[InterpretationRule, ...]


@dataclass(frozen=True)
class TestDefinition:
    __test__ = False

    subdir: str
    subtests: tuple[SubTest, ...]
    requirements: tuple[str, ...] = ()


def _clean_relative_path(value: Any, what: str, *, allow_empty: bool) -> str:
    if value is None:
        value = ""
    if not isinstance(value, str):
        raise InvalidTestDefinitionError(f"{what} must be a string, got {type(value).__name__}")
    path = value.replace("\\", "/")
    if path.startswith("/"):
        raise InvalidTestDefinitionError(f"{what} must be relative: {value!r}")
    parts = [part for part in PurePosixPath(path).parts if part not in ("", ".")]
    if ".." in parts:
        raise InvalidTestDefinitionError(f"{what} must not leave its directory: {value!r}")
    cleaned = "/".join(parts)
    if not cleaned and not allow_empty:
        raise InvalidTestDefinitionError(f"{what} must not be empty")
    return cleaned


def _parse_files(raw: Any) -> tuple[tuple[str, str], ...]:
    if raw is None:
        return ()
    if isinstance(raw, Mapping):
        pairs = list(raw.items())
    elif isinstance(raw, Sequence) and not isinstance(raw, str):
        pairs = []
        for item in raw:
            if isinstance(item, Mapping):
                pairs.append((item.get("name"), item.get("content", "")))
            elif isinstance(item, Sequence) and not isinstance(item, str) and len(item) == 2:
                pairs.append((item[0], item[1]))
            else:
                raise InvalidTestDefinitionError(f"file entries must be [name, content] pairs, got {item!r}")
    else:
        raise InvalidTestDefinitionError("files must be a list of [name, content] pairs or a mapping")

    files: list[tuple[str, str]] = []
    for name, content in pairs:
        filename = _clean_relative_path(name, "file name", allow_empty=False)
        if not isinstance(content, str):
            raise InvalidTestDefinitionError(f"content of {filename!r} must be a string")
        files.append((filename, content))
    return tuple(files)


def _parse_request(raw: Any) -> RequestSpec:
    if raw is None or isinstance(raw, str):
        return RequestSpec(path=_clean_relative_path(raw, "request", allow_empty=True))
    if not isinstance(raw, Mapping):
        raise InvalidTestDefinitionError("request must be a string or a mapping with a 'url' key")

    path = _clean_relative_path(raw.get("url"), "request url", allow_empty=True)
    bypass_raw = raw.get("bypass_standard_error_handling") or ()
    if bypass_raw == "all":
        bypass = STANDARD_ERROR_STATUSES
    elif isinstance(bypass_raw, Sequence) and not isinstance(bypass_raw, str):
        bypass = frozenset(str(code) for code in bypass_raw)
        unknown = bypass - STANDARD_ERROR_STATUSES
        if unknown:
            raise InvalidTestDefinitionError(f"cannot bypass standard handling for {sorted(unknown)}")
    else:
        raise InvalidTestDefinitionError("bypass_standard_error_handling must be 'all' or a list of status codes")
    return RequestSpec(path=path, bypass_standard_error_handling=bypass)


def parse_rule(raw: Any) -> InterpretationRule:
    if isinstance(raw, str) or not isinstance(raw, Sequence) or not raw:
        raise InvalidTestDefinitionError(f"interpretation rules must be non-empty lists, got {raw!r}")
    result, *rest = list(raw)
    if not isinstance(result, str) or result not in RESULT_STATUSES:
        raise InvalidTestDefinitionError(f"unknown interpretation result {result!r}")
    if not rest:
        return InterpretationRule(result=result)
    if len(rest) < 2:
        raise InvalidTestDefinitionError(f"rule {raw!r} needs a property and an operator")

    prop, operator, *args = rest
    if not isinstance(prop, str) or prop not in PROPERTIES:
        raise InvalidTestDefinitionError(f"unknown property {prop!r} in rule {raw!r}")
    operators = HEADER_OPERATORS if prop == "headers" else VALUE_OPERATORS
    if not isinstance(operator, str) or operator not in operators:
        raise InvalidTestDefinitionError(f"operator {operator!r} is not valid for {prop!r}")
    if len(args) != operators[operator]:
        raise InvalidTestDefinitionError(
            f"operator {operator!r} takes {operators[operator]} argument(s), got {len(args)}"
        )
    return InterpretationRule(result=result, subject=prop, operator=operator, args=tuple(str(arg) for arg in args))


def _parse_requirements(raw: Any) -> tuple[str, ...]:
    if not raw:
        return ()
    if isinstance(raw, str):
        raw = (raw,)
    elif not isinstance(raw, Sequence):
        raise InvalidTestDefinitionError("requirements must be a capability name or a list of them")

    requirements = []
    for item in raw:
        if not isinstance(item, str):
            raise InvalidTestDefinitionError(f"requirement {item!r} must be a string")
        try:
            parse_method_call(item)
        except UnsupportedMethodError as exc:
            raise InvalidTestDefinitionError(f"unsupported requirement: {exc}") from exc
        requirements.append(item)
    return tuple(requirements)


def _parse_subtest(raw: Mapping[str, Any], *, subdir: str) -> SubTest:
    interpretation = raw.get("interpretation")
    if isinstance(interpretation, str) or not isinstance(interpretation, Sequence) or not interpretation:
        raise InvalidTestDefinitionError("interpretation must be a non-empty list of rules")
    if "request" not in raw:
        raise InvalidTestDefinitionError("request is required")
    return SubTest(
        subdir=subdir,
        files=_parse_files(raw.get("files")),
        request=_parse_request(raw.get("request")),
        interpretation=tuple(parse_rule(rule) for rule in interpretation),
    )


def parse_test_definition(raw: Any) -> TestDefinition:
    """Validate a definition mapping and freeze it; raises InvalidTestDefinitionError."""
    if isinstance(raw, TestDefinition):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidTestDefinitionError("test definition must be a mapping")

    subdir = _clean_relative_path(raw.get("subdir"), "subdir", allow_empty=False)

    requirements = _parse_requirements(raw.get("requirements"))

    subtests_raw = raw.get("subtests")
    if subtests_raw is None:
        subtests = (_parse_subtest(raw, subdir=""),)
    else:
        if isinstance(subtests_raw, str) or not isinstance(subtests_raw, Sequence) or not subtests_raw:
            raise InvalidTestDefinitionError("subtests must be a non-empty list")
        parsed = []
        for item in subtests_raw:
            if not isinstance(item, Mapping):
                raise InvalidTestDefinitionError("each subtest must be a mapping")
            parsed.append(
                _parse_subtest(item, subdir=_clean_relative_path(item.get("subdir"), "subtest subdir", allow_empty=True))
            )
        subtests = tuple(parsed)

    return TestDefinition(subdir=subdir, subtests=subtests, requirements=requirements)


__all__ = [
    "HEADER_OPERATORS",
    "PROPERTIES",
    "RESULT_STATUSES",
    "STANDARD_ERROR_STATUSES",
    "VALUE_OPERATORS",
    "InterpretationRule",
    "RequestSpec",
    "SubTest",
    "TestDefinition",
    "parse_rule",
    "parse_test_definition",
]
