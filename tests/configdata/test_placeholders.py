"""Tests for _placeholders.py — PlaceholderResolver and scan()."""

import logging

import pytest

from configdata._placeholders import PlaceholderResolver, scan
from configdata._repository import FakeEnvironment
from configdata._types import UnresolvedPlaceholderError


def _resolver(**env) -> PlaceholderResolver:
    return PlaceholderResolver(FakeEnvironment(env))


class CountingEnvironment(FakeEnvironment):
    def __init__(self, values=None):
        super().__init__(values)
        self.calls = 0

    def snapshot(self):
        self.calls += 1
        return super().snapshot()


class TestScan:
    def test_mandatory_tokens(self):
        tokens = scan("${A}-${?B}-${A}", mandatory=True)
        assert [t.name for t in tokens] == ["A", "A"]
        assert tokens[0].span == (0, 4)
        assert all(t.mandatory for t in tokens)

    def test_optional_tokens(self):
        tokens = scan("${A}-${?B}", mandatory=False)
        assert [t.name for t in tokens] == ["B"]
        assert tokens[0].literal == "${?B}"

    @pytest.mark.parametrize("raw", ["${1A}", "${A-B}", "${}", "$A", "{A}", "${ A}", "${É}"])
    def test_invalid_names_not_matched(self, raw):
        assert scan(raw, mandatory=True) == []

    def test_names_are_case_sensitive(self):
        assert [t.name for t in scan("${home}${HOME}", mandatory=True)] == ["home", "HOME"]


class TestPassThrough:
    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_returned_unchanged(self, raw):
        env = CountingEnvironment()
        assert PlaceholderResolver(env).resolve(raw) == raw
        assert env.calls == 0

    @pytest.mark.parametrize("raw", ["plain", "100$", "${", "$}", "{x}", "${1abc}"])
    def test_no_placeholders(self, raw):
        assert _resolver().resolve(raw) == raw


class TestMandatory:
    def test_single(self):
        assert _resolver(NAME="value").resolve("${NAME}") == "value"

    def test_repeated_name_substituted_everywhere(self):
        assert _resolver(NAME="V").resolve("${NAME}${NAME}") == "VV"

    def test_embedded(self):
        resolver = _resolver(HOST="localhost", PORT="9000")
        assert resolver.resolve("http://${HOST}:${PORT}/api") == "http://localhost:9000/api"

    def test_empty_env_value_counts_as_set(self):
        assert _resolver(EMPTY="").resolve("a${EMPTY}b") == "ab"

    def test_missing_raises(self):
        with pytest.raises(UnresolvedPlaceholderError, match="MISSING_VAR") as exc_info:
            _resolver().resolve("${MISSING_VAR}")
        assert exc_info.value.names == ("MISSING_VAR",)

    def test_only_missing_names_reported(self):
        with pytest.raises(UnresolvedPlaceholderError) as exc_info:
            _resolver(HOST="localhost").resolve("http://${HOST}:${PORT}")
        assert exc_info.value.names == ("PORT",)
        assert "HOST" not in str(exc_info.value)

    def test_all_missing_names_joined(self):
        with pytest.raises(UnresolvedPlaceholderError) as exc_info:
            _resolver().resolve("${B}/${A}/${B}")
        assert str(exc_info.value) == "Environment variables not found: B, A"

    def test_missing_logs_error(self, caplog):
        with caplog.at_level(logging.WARNING, logger="configdata"):
            with pytest.raises(UnresolvedPlaceholderError):
                _resolver().resolve("${X}${Y}")

        [record] = caplog.records
        assert record.levelno == logging.ERROR
        assert record.getMessage() == "Environment variables not found"
        assert record.varsNotFound == "X, Y"

    def test_mandatory_failure_wins_over_optional(self, caplog):
        with caplog.at_level(logging.WARNING, logger="configdata"):
            with pytest.raises(UnresolvedPlaceholderError):
                _resolver().resolve("${?OPT}${REQ}")

        assert [r.levelno for r in caplog.records] == [logging.ERROR]

    def test_substituted_value_not_rescanned(self):
        resolver = _resolver(A="${B}", B="oops")
        assert resolver.resolve("${A}") == "${B}"

    def test_value_with_unset_placeholder_text_is_not_an_error(self):
        assert _resolver(A="${MISSING}").resolve("${A}") == "${MISSING}"


class TestOptional:
    def test_set(self):
        assert _resolver(NAME="v").resolve("x${?NAME}x") == "xvx"

    def test_missing_left_verbatim(self):
        assert _resolver().resolve("${?MISSING_VAR}") == "${?MISSING_VAR}"

    def test_missing_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="configdata"):
            _resolver(A="1").resolve("${?A}${?B}${?C}${?B}")

        [record] = caplog.records
        assert record.levelno == logging.WARNING
        assert record.varsNotFound == "B, C"

    def test_nothing_logged_when_all_resolve(self, caplog):
        with caplog.at_level(logging.WARNING, logger="configdata"):
            _resolver(A="1").resolve("${?A}${A}")
        assert caplog.records == []

    def test_same_name_in_both_forms(self):
        assert _resolver(N="v").resolve("${N}|${?N}") == "v|v"

    def test_mixed_partial(self):
        assert _resolver(REQ="r").resolve("${REQ}:${?OPT}") == "r:${?OPT}"


class TestEnvironmentSnapshot:
    def test_snapshot_read_once_per_call(self):
        env = CountingEnvironment({"A": "1"})
        resolver = PlaceholderResolver(env)
        resolver.resolve("${A}${?A}${A}")
        assert env.calls == 1

    def test_not_cached_across_calls(self):
        env = FakeEnvironment({"A": "1"})
        resolver = PlaceholderResolver(env)
        assert resolver.resolve("${A}") == "1"
        env.set("A", "2")
        assert resolver.resolve("${A}") == "2"
        env.unset("A")
        with pytest.raises(UnresolvedPlaceholderError):
            resolver.resolve("${A}")

    def test_default_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("CONFIGDATA_TEST_VAR", "from-os")
        assert PlaceholderResolver().resolve("${CONFIGDATA_TEST_VAR}") == "from-os"


class TestInjectedLogger:
    def test_uses_given_logger(self, caplog):
        custom = logging.getLogger("app.settings")
        with caplog.at_level(logging.WARNING, logger="app.settings"):
            PlaceholderResolver(FakeEnvironment(), logger=custom).resolve("${?X}")

        [record] = caplog.records
        assert record.name == "app.settings"
