# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

from htaccess_probe.cli import main as cli_main
from htaccess_probe.cli.main import DEFAULT_QUERIES, _pretty_print, build_parser
from htaccess_probe.http import HttpResponse, StubHttpRequester

BASE_URL = "http://example.test/probe"


def install_stub(monkeypatch, responses=None):
    stub = StubHttpRequester(dict(responses or {}))
    monkeypatch.setattr(cli_main, "create_default_http_requester", lambda settings=None: stub)  # noqa: ARG005
    return stub


def test_build_parser():
    parser = build_parser()
    args = parser.parse_args(["/var/www/probe", BASE_URL, "-c", "can_rewrite", "-c", "moduleLoaded(headers)", "--json"])
    assert args.base_dir == "/var/www/probe"
    assert args.base_url == BASE_URL
    assert args.capabilities == ["can_rewrite", "moduleLoaded(headers)"]
    assert args.json is True


def test_pretty_print(capsys):
    _pretty_print(
        [
            {"query": "can_rewrite", "status": True, "info": ""},
            {"query": "can_add_type", "status": None, "info": "request failed"},
        ]
    )
    output = capsys.readouterr().out
    assert "can_rewrite   true" in output
    assert "can_add_type  inconclusive (request failed)" in output


def test_cli_json_output(monkeypatch, capsys, tmp_path):
    install_stub(monkeypatch, {f"{BASE_URL}/rewrite/0.txt": HttpResponse(body="1", status_code=200)})
    exit_code = cli_main.main([str(tmp_path), BASE_URL, "-c", "canRewrite()", "--json"])
    assert exit_code == 0
    rows = json.loads(capsys.readouterr().out)
    assert rows == [{"query": "canRewrite()", "status": True, "info": "body equals '1'"}]


def test_cli_runs_default_queries(monkeypatch, capsys, tmp_path):
    stub = install_stub(monkeypatch)
    assert cli_main.main([str(tmp_path), BASE_URL]) == 0
    output = capsys.readouterr().out
    for query in DEFAULT_QUERIES:
        assert query in output
    assert "module_loaded" not in DEFAULT_QUERIES
    assert stub.requests


def test_cli_crash_and_custom_tests(monkeypatch, capsys, tmp_path):
    rules = tmp_path / "rules.htaccess"
    rules.write_text("Options -Indexes\n")
    definition = tmp_path / "definition.json"
    definition.write_text(
        json.dumps({"subdir": "mine", "files": {"a.txt": "a"}, "request": "a.txt", "interpretation": [["success", "body", "equals", "a"]]})
    )
    install_stub(
        monkeypatch,
        {
            f"{BASE_URL}/crash-tester/ci/request-me.txt": HttpResponse(body="", status_code=500),
            f"{BASE_URL}/mine/a.txt": HttpResponse(body="a", status_code=200),
        },
    )
    web_root = tmp_path / "www"
    exit_code = cli_main.main(
        [str(web_root), BASE_URL, "--crash-test", str(rules), "--sub-dir", "ci", "--custom-test", str(definition), "--json"]
    )
    assert exit_code == 0
    rows = {row["query"]: row["status"] for row in json.loads(capsys.readouterr().out)}
    assert rows == {"crash_test": False, "custom_test": True}
    assert (web_root / "crash-tester" / "ci" / ".htaccess").read_text() == "Options -Indexes\n"


def test_cli_rejects_unsupported_capability(monkeypatch, capsys, tmp_path):
    stub = install_stub(monkeypatch)
    assert cli_main.main([str(tmp_path), BASE_URL, "-c", "rmRf()"]) == 2
    assert "not callable" in capsys.readouterr().err
    assert stub.requests == []


def test_cli_rejects_malformed_custom_test(monkeypatch, capsys, tmp_path):
    definition = tmp_path / "bad.json"
    definition.write_text(
        json.dumps({"subdir": "mine", "request": "a.txt", "interpretation": [["success", "body", ["equals"], "a"]]})
    )
    stub = install_stub(monkeypatch)
    assert cli_main.main([str(tmp_path / "www"), BASE_URL, "--custom-test", str(definition)]) == 1
    assert "error:" in capsys.readouterr().err
    assert stub.requests == []
