# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from htaccess_probe import runtime as runtime_module
from htaccess_probe.cache import TestResultCache
from htaccess_probe.dispatch import Capability, parse_method_call
from htaccess_probe.errors import FixtureWriteError, UnsupportedMethodError
from htaccess_probe.http import HttpResponse, StubHttpRequester
from htaccess_probe.models import TestResult
from htaccess_probe.runtime import HtaccessCapabilityTester
from htaccess_probe.testers import CustomTester, ModuleLoadedTester, RewriteTester
from htaccess_probe.testers import custom as custom_module

BASE_URL = "http://example.test/probe"
REWRITE_URL = f"{BASE_URL}/rewrite/0.txt"


def response(body="", status_code=200, headers=None):
    return HttpResponse(body=body, status_code=status_code, headers=headers or {})


def make_hct(tmp_path, responses=None, **kwargs):
    stub = StubHttpRequester(dict(responses or {}))
    return HtaccessCapabilityTester(str(tmp_path), BASE_URL, http_requester=stub, **kwargs), stub


@pytest.fixture
def fixture_writes(monkeypatch):
    calls = []
    original = custom_module.write_fixture_files

    def counting(directory, files):
        calls.append(str(directory))
        return original(directory, files)

    monkeypatch.setattr(custom_module, "write_fixture_files", counting)
    return calls


def test_repeated_query_runs_probe_once(tmp_path, fixture_writes):
    hct, stub = make_hct(tmp_path, {REWRITE_URL: response("1")})

    assert hct.can_rewrite() is True
    first = hct.cache.get_cached(RewriteTester(str(tmp_path), BASE_URL))
    assert hct.can_rewrite() is True
    second = hct.cache.get_cached(RewriteTester(str(tmp_path), BASE_URL))

    assert stub.requests == [REWRITE_URL]
    assert len(fixture_writes) == 1
    assert first is second
    assert len(hct.cache) == 1


def test_cached_inconclusive_result_is_not_retried(tmp_path):
    hct, stub = make_hct(tmp_path)
    assert hct.can_rewrite() is None
    stub.add(REWRITE_URL, response("1"))
    assert hct.can_rewrite() is None
    assert stub.requests == [REWRITE_URL]


def test_parameterized_testers_get_distinct_entries(tmp_path):
    hct, stub = make_hct(tmp_path)
    hct.crash_test("Options -Indexes", "one")
    hct.crash_test("Options +Indexes", "one")
    hct.crash_test("Options -Indexes", "two")
    hct.custom_test({"subdir": "a", "request": "x", "interpretation": [["success"]]})
    hct.custom_test({"subdir": "b", "request": "x", "interpretation": [["success"]]})
    assert len(stub.requests) == 5

    rewrite = ModuleLoadedTester(str(tmp_path), BASE_URL, "rewrite")
    headers = ModuleLoadedTester(str(tmp_path), BASE_URL, "headers")
    assert rewrite.cache_key != headers.cache_key


def test_crash_test_with_explicit_subdir_hits_cache(tmp_path, fixture_writes):
    crash_url = f"{BASE_URL}/crash-tester/stable/request-me.txt"
    hct, stub = make_hct(tmp_path, {crash_url: response("thanks")})
    assert hct.crash_test("Options -Indexes", "stable") is True
    assert hct.crash_test("Options -Indexes", "stable") is True
    assert stub.requests == [crash_url]
    assert len(fixture_writes) == 1


def test_crash_test_without_subdir_is_never_shared(tmp_path):
    hct, stub = make_hct(tmp_path)
    hct.crash_test("Options -Indexes")
    hct.crash_test("Options -Indexes")
    assert len(stub.requests) == 2
    assert stub.requests[0] != stub.requests[1]


def test_custom_test_identity_is_structural(tmp_path):
    definition = {
        "subdir": "custom",
        "files": [["a.txt", "a"]],
        "request": "a.txt",
        "interpretation": [["success", "body", "equals", "a"]],
    }
    hct, stub = make_hct(tmp_path, {f"{BASE_URL}/custom/a.txt": response("a")})
    assert hct.custom_test(definition) is True
    assert hct.custom_test(dict(definition)) is True
    assert len(stub.requests) == 1
    assert (
        CustomTester(str(tmp_path), BASE_URL, definition).cache_key
        == CustomTester(str(tmp_path), BASE_URL, dict(definition)).cache_key
    )


def test_info_is_overwritten_on_every_query(tmp_path):
    hct, _ = make_hct(tmp_path, {REWRITE_URL: response("1")})
    assert hct.can_set_directory_index() is None
    assert "failed" in hct.info_from_last_test
    assert hct.can_rewrite() is True
    assert hct.info_from_last_test == "body equals '1'"
    assert hct.can_set_directory_index() is None
    assert "failed" in hct.info_from_last_test


def test_requester_is_injected_into_testers(tmp_path):
    hct, first_stub = make_hct(tmp_path)
    second_stub = StubHttpRequester({REWRITE_URL: response("0")})
    hct.set_http_requester(second_stub)
    assert hct.can_rewrite() is False
    assert first_stub.requests == []
    assert second_stub.requests == [REWRITE_URL]


def test_shared_cache_across_instances(tmp_path):
    cache = TestResultCache()
    first, first_stub = make_hct(tmp_path, {REWRITE_URL: response("1")}, cache=cache)
    second, second_stub = make_hct(tmp_path, {REWRITE_URL: response("0")}, cache=cache)
    assert first.can_rewrite() is True
    assert second.can_rewrite() is True
    assert second_stub.requests == []


def test_cache_contract(tmp_path):
    cache = TestResultCache()
    tester = RewriteTester(str(tmp_path), BASE_URL)
    assert cache.is_cached(tester) is False
    with pytest.raises(KeyError):
        cache.get_cached(tester)
    result = TestResult.failure("nope")
    cache.cache(tester, result)
    assert cache.is_cached(RewriteTester(str(tmp_path), BASE_URL))
    assert cache.get_cached(tester) is result
    assert tester in cache
    assert RewriteTester(str(tmp_path), "http://other.test") not in cache


def test_fixture_write_failure_propagates_and_is_not_cached(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    hct, stub = make_hct(blocker, {})
    with pytest.raises(FixtureWriteError):
        hct.can_rewrite()
    assert len(hct.cache) == 0
    assert stub.requests == []


@pytest.mark.parametrize("name", ["canRewrite()", "canRewrite", "can_rewrite", Capability.CAN_REWRITE])
def test_dispatch_matches_named_method(tmp_path, name):
    direct, _ = make_hct(tmp_path, {REWRITE_URL: response("1")})
    dispatched, _ = make_hct(tmp_path, {REWRITE_URL: response("1")})
    assert dispatched.call_method(name) == direct.can_rewrite()
    assert dispatched.info_from_last_test == direct.info_from_last_test


def test_dispatch_module_loaded_with_argument(tmp_path):
    hct, _ = make_hct(tmp_path)
    assert hct.call_method("moduleLoaded(rewrite)") is None
    assert hct.cache.is_cached(ModuleLoadedTester(str(tmp_path), BASE_URL, "rewrite"))


@pytest.mark.parametrize(
    "name",
    ["crashTest()", "customTest()", "deleteEverything()", "can_rewrite(now)", "moduleLoaded()", "__init__", "can rewrite"],
)
def test_dispatch_rejects_unknown_names_without_side_effects(tmp_path, name):
    hct, stub = make_hct(tmp_path)
    with pytest.raises(UnsupportedMethodError):
        hct.call_method(name)
    assert stub.requests == []
    assert list(tmp_path.iterdir()) == []
    assert len(hct.cache) == 0


def test_parse_method_call_variants():
    assert parse_method_call("htaccessEnabled()") == (Capability.HTACCESS_ENABLED, ())
    assert parse_method_call("canPassEnvThroughRequestHeader") == (Capability.CAN_PASS_ENV_THROUGH_REQUEST_HEADER, ())
    assert parse_method_call("module_loaded('headers')") == (Capability.MODULE_LOADED, ("headers",))
    with pytest.raises(UnsupportedMethodError):
        parse_method_call(Capability.MODULE_LOADED)


def test_context_manager_closes_requester(tmp_path):
    class ClosingRequester(StubHttpRequester):
        closed = False

        def close(self):
            self.closed = True

    requester = ClosingRequester()
    with HtaccessCapabilityTester(str(tmp_path), BASE_URL, http_requester=requester):
        pass
    assert requester.closed is True


def test_cache_hit_does_not_create_default_requester(tmp_path, monkeypatch):
    created = []
    monkeypatch.setattr(runtime_module, "create_default_http_requester", lambda: created.append(1) or StubHttpRequester())
    cache = TestResultCache()
    cache.cache(RewriteTester(str(tmp_path), BASE_URL), TestResult.success("cached"))

    hct = HtaccessCapabilityTester(str(tmp_path), BASE_URL, cache=cache)
    assert hct.can_rewrite() is True
    assert hct.info_from_last_test == "cached"
    assert created == []

    assert hct.can_add_type() is None
    assert created == [1]
