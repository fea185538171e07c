# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Map an HttpResponse onto a TestResult using interpretation rules."""

from __future__ import annotations

from collections.abc import Iterable

from ..http import HttpResponse, has_header, header_value
from ..models import TestResult
from .definition import InterpretationRule


def _value_matches(value: str, operator: str, args: tuple[str, ...]) -> bool:
    if operator == "is-empty":
        return value == ""
    expected = args[0]
    if operator == "equals":
        return value == expected
    if operator == "not-equals":
        return value != expected
    if operator == "begins-with":
        return value.startswith(expected)
    if operator == "not-begins-with":
        return not value.startswith(expected)
    if operator == "contains":
        return expected in value
    if operator == "not-contains":
        return expected not in value
    raise ValueError(f"unknown operator {operator!r}")


def _headers_match(response: HttpResponse, operator: str, args: tuple[str, ...]) -> bool:
    name = args[0]
    if operator == "contains-key":
        return has_header(response.headers, name)
    if operator == "not-contains-key":
        return not has_header(response.headers, name)

    expected = args[1]
    present = has_header(response.headers, name) and header_value(response.headers, name) == expected
    if operator == "contains-key-value":
        return present
    if operator == "not-contains-key-value":
        return not present
    raise ValueError(f"unknown operator {operator!r}")


def rule_matches(rule: InterpretationRule, response: HttpResponse) -> bool:
    if rule.unconditional:
        return True
    if rule.subject == "headers":
        return _headers_match(response, rule.operator or "", rule.args)
    if rule.subject == "status-code":
        return _value_matches(str(response.status_code), rule.operator or "", rule.args)
    return _value_matches(response.body, rule.operator or "", rule.args)


def interpret(response: HttpResponse, rules: Iterable[InterpretationRule]) -> TestResult:
    """Return the result of the first matching rule, inconclusive when none matches."""
    for rule in rules:
        if rule_matches(rule, response):
            return TestResult(rule.status, rule.describe())
    return TestResult.inconclusive(f"no interpretation rule matched (status code {response.status_code})")


__all__ = ["interpret", "rule_matches"]
