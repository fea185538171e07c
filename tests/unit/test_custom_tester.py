# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from htaccess_probe.errors import FixtureWriteError, InvalidTestDefinitionError
from htaccess_probe.http import HttpResponse, StubHttpRequester
from htaccess_probe.testers import CustomTester
from htaccess_probe.testers.fixtures import write_fixture_files

BASE_URL = "http://example.test/probe"


def response(body="", status_code=200, headers=None):
    return HttpResponse(body=body, status_code=status_code, headers=headers or {})


def make_tester(tmp_path, definition, responses=None):
    tester = CustomTester(str(tmp_path), BASE_URL, definition)
    stub = StubHttpRequester(responses or {})
    tester.set_http_requester(stub)
    return tester, stub


class FakeResolver:
    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    def call_method(self, method):
        self.calls.append(method)
        return self.answers.get(method)

    def crash_test(self, rules, sub_dir=None):  # noqa: ARG002
        return None


SIMPLE = {
    "subdir": "simple",
    "files": [[".htaccess", "# nothing\n"], ["request-me.txt", "hi"]],
    "request": "request-me.txt",
    "interpretation": [
        ["success", "body", "equals", "hi"],
        ["failure", "body", "equals", "nope"],
    ],
}


def test_construction_performs_no_io(tmp_path):
    CustomTester(str(tmp_path), BASE_URL, SIMPLE)
    assert list(tmp_path.iterdir()) == []


def test_run_writes_fixtures_and_requests_matching_url(tmp_path):
    tester, stub = make_tester(tmp_path, SIMPLE, {f"{BASE_URL}/simple/request-me.txt": response("hi")})
    result = tester.run()

    assert result.status is True
    assert result.info == "body equals 'hi'"
    assert stub.requests == [f"{BASE_URL}/simple/request-me.txt"]
    assert (tmp_path / "simple" / ".htaccess").read_text() == "# nothing\n"
    assert (tmp_path / "simple" / "request-me.txt").read_text() == "hi"


def test_directory_request_keeps_trailing_slash(tmp_path):
    definition = dict(SIMPLE, request="")
    tester, stub = make_tester(tmp_path, definition, {f"{BASE_URL}/simple/": response("hi")})
    assert tester.run().status is True
    assert stub.requests == [f"{BASE_URL}/simple/"]


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [(403, None), (404, None), (500, False)],
)
def test_standard_error_handling(tmp_path, status_code, expected):
    tester, _ = make_tester(tmp_path, SIMPLE, {f"{BASE_URL}/simple/request-me.txt": response("hi", status_code)})
    result = tester.run()
    assert result.status is expected
    assert str(status_code) in result.info


def test_transport_failure_is_inconclusive_even_when_bypassed(tmp_path):
    definition = dict(SIMPLE, request={"url": "request-me.txt", "bypass_standard_error_handling": "all"})
    tester, _ = make_tester(tmp_path, definition)
    result = tester.run()
    assert result.status is None
    assert result.info.startswith("The following request failed")


def test_bypassed_status_goes_to_interpretation(tmp_path):
    definition = dict(
        SIMPLE,
        request={"url": "request-me.txt", "bypass_standard_error_handling": ["500"]},
        interpretation=[["success", "status-code", "equals", "500"]],
    )
    tester, _ = make_tester(tmp_path, definition, {f"{BASE_URL}/simple/request-me.txt": response("", 500)})
    assert tester.run().status is True


def test_unmatched_response_is_inconclusive(tmp_path):
    tester, _ = make_tester(tmp_path, SIMPLE, {f"{BASE_URL}/simple/request-me.txt": response("something else")})
    result = tester.run()
    assert result.status is None
    assert "no interpretation rule matched" in result.info


SUBTESTS = {
    "subdir": "pair",
    "subtests": [
        {"subdir": "a", "files": {"f.txt": "a"}, "request": "f.txt", "interpretation": [["success", "body", "equals", "a"]]},
        {"subdir": "b", "files": {"f.txt": "b"}, "request": "f.txt", "interpretation": [["success", "body", "equals", "b"]]},
    ],
}


def test_subtests_all_must_succeed(tmp_path):
    tester, stub = make_tester(
        tmp_path,
        SUBTESTS,
        {f"{BASE_URL}/pair/a/f.txt": response("a"), f"{BASE_URL}/pair/b/f.txt": response("b")},
    )
    assert tester.run().status is True
    assert stub.requests == [f"{BASE_URL}/pair/a/f.txt", f"{BASE_URL}/pair/b/f.txt"]
    assert (tmp_path / "pair" / "b" / "f.txt").read_text() == "b"


def test_subtests_stop_at_first_non_success(tmp_path):
    tester, stub = make_tester(tmp_path, SUBTESTS, {f"{BASE_URL}/pair/a/f.txt": response("x", 500)})
    result = tester.run()
    assert result.status is False
    assert result.info.startswith("a: ")
    assert stub.requests == [f"{BASE_URL}/pair/a/f.txt"]


def test_unmet_requirement_skips_fixtures_and_requests(tmp_path):
    definition = dict(SIMPLE, requirements=["canRewrite()"])
    tester, stub = make_tester(tmp_path, definition)
    resolver = FakeResolver({"canRewrite()": False})
    tester.set_capability_resolver(resolver)

    result = tester.run()
    assert result.status is None
    assert "canRewrite()" in result.info
    assert resolver.calls == ["canRewrite()"]
    assert stub.requests == []
    assert list(tmp_path.iterdir()) == []


def test_met_requirement_runs_the_test(tmp_path):
    definition = dict(SIMPLE, requirements=["can_rewrite"])
    tester, _ = make_tester(tmp_path, definition, {f"{BASE_URL}/simple/request-me.txt": response("hi")})
    tester.set_capability_resolver(FakeResolver({"can_rewrite": True}))
    assert tester.run().status is True


def test_fixture_write_failure_raises(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")
    tester, stub = make_tester(blocker, SIMPLE)
    with pytest.raises(FixtureWriteError):
        tester.run()
    assert stub.requests == []


def test_write_fixture_files_skips_unchanged_content(tmp_path):
    files = [("a.txt", "1"), ("sub/b.txt", "2")]
    assert len(write_fixture_files(tmp_path, files)) == 2
    assert write_fixture_files(tmp_path, files) == []
    assert (tmp_path / "sub" / "b.txt").read_text() == "2"


def test_unknown_requirement_is_rejected_at_construction(tmp_path):
    with pytest.raises(InvalidTestDefinitionError):
        CustomTester(str(tmp_path), BASE_URL, dict(SIMPLE, requirements=["rmRf"]))
