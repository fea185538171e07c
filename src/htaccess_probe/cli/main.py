# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""htaccess-probe CLI."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from ..config import ProbeSettings, load_probe_settings
from ..dispatch import Capability
from ..errors import HtaccessProbeError, UnsupportedMethodError
from ..http import create_default_http_requester
from ..log import setup_logging
from ..models import status_label
from ..runtime import HtaccessCapabilityTester

DEFAULT_QUERIES = [capability.value for capability in Capability if capability.arity == 0]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Probe which .htaccess directives a live server honors")
    parser.add_argument("base_dir", help="Web-served directory where test files may be written")
    parser.add_argument("base_url", help="URL corresponding to BASE_DIR")
    parser.add_argument(
        "-c",
        "--capability",
        action="append",
        dest="capabilities",
        metavar="NAME",
        help="Capability query to run, e.g. can_rewrite or 'moduleLoaded(headers)' (repeatable)",
    )
    parser.add_argument("--crash-test", metavar="FILE", help="Crash-test the .htaccess rules in FILE")
    parser.add_argument("--sub-dir", help="Subdirectory for --crash-test (generated when omitted)")
    parser.add_argument("--custom-test", metavar="FILE", help="Run the JSON test definition in FILE")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--log-level", help="Logging level (default from HTACCESS_PROBE_LOG_LEVEL)")
    return parser


def run_queries(tester: HtaccessCapabilityTester, args: argparse.Namespace) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []

    def record(name: str, status: bool | None) -> None:
        rows.append({"query": name, "status": status, "info": tester.info_from_last_test})

    if args.crash_test:
        rules = Path(args.crash_test).read_text(encoding="utf-8")
        record("crash_test", tester.crash_test(rules, args.sub_dir))
    if args.custom_test:
        definition = json.loads(Path(args.custom_test).read_text(encoding="utf-8"))
        record("custom_test", tester.custom_test(definition))

    queries = args.capabilities
    if not queries and not (args.crash_test or args.custom_test):
        queries = DEFAULT_QUERIES
    for query in queries or []:
        record(query, tester.call_method(query))
    return rows


def _print_json(rows: list[dict[str, Any]]) -> None:
    json.dump(rows, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(rows: list[dict[str, Any]]) -> None:
    width = max((len(row["query"]) for row in rows), default=0)
    for row in rows:
        info = row.get("info") or ""
        suffix = f" ({info})" if info else ""
        print(f"{row['query']:<{width}}  {status_label(row['status'])}{suffix}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: ProbeSettings = load_probe_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    requester = create_default_http_requester(settings)

    with HtaccessCapabilityTester(args.base_dir, args.base_url, http_requester=requester) as tester:
        try:
            rows = run_queries(tester, args)
        except UnsupportedMethodError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        except (HtaccessProbeError, OSError, ValueError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    if args.json:
        _print_json(rows)
    else:
        _pretty_print(rows)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
