"""Tests for the class-name matchers."""

from __future__ import annotations

import pytest

from hiermatch import ClassNameMatcher, MatcherError, PrefixMatcher, RegexMatcher


class TestClassNameMatcher:
    def test_any_of_names(self) -> None:
        m = ClassNameMatcher(("com.example.Task", "com.example.Job"))
        assert m.matches("com.example.Job") is True
        assert m.matches("com.example.Tasks") is False

    def test_single_string_is_one_name(self) -> None:
        m = ClassNameMatcher("com.example.Task")
        assert m.names == ("com.example.Task",)
        assert m.matches("c") is False

    def test_ignore_case(self) -> None:
        m = ClassNameMatcher(("com.example.Task",), ignore_case=True)
        assert m.matches("COM.EXAMPLE.TASK") is True

    def test_non_string(self) -> None:
        assert ClassNameMatcher("1").matches(1) is False
        assert ClassNameMatcher("").matches(None) is False


class TestPrefixMatcher:
    def test_package_prefix(self) -> None:
        m = PrefixMatcher("java.util.")
        assert m.matches("java.util.concurrent.Callable") is True
        assert m.matches("javax.util.Thing") is False

    def test_any_of_prefixes(self) -> None:
        m = PrefixMatcher(("com.example.", "org.acme."))
        assert m.matches("org.acme.Worker") is True
        assert m.matches("net.other.Worker") is False

    def test_empty_prefix_matches_any_string(self) -> None:
        assert PrefixMatcher("").matches("anything") is True

    def test_no_prefixes_matches_nothing(self) -> None:
        assert PrefixMatcher(()).matches("anything") is False

    def test_ignore_case(self) -> None:
        assert PrefixMatcher("Com.", ignore_case=True).matches("com.example.Task") is True


class TestRegexMatcher:
    def test_search_anywhere(self) -> None:
        m = RegexMatcher(r"Impl$")
        assert m.matches("com.example.RunnableImpl") is True
        assert m.matches("com.example.Impl.Runner") is False

    def test_ignore_case(self) -> None:
        assert RegexMatcher("impl$", ignore_case=True).matches("RunnableImpl") is True
        assert RegexMatcher("impl$").matches("RunnableImpl") is False

    def test_non_string(self) -> None:
        assert RegexMatcher(".*").matches(b"bytes") is False

    def test_invalid_pattern(self) -> None:
        with pytest.raises(MatcherError, match="invalid regex pattern"):
            RegexMatcher("(unclosed")

    def test_backreference_rejected(self) -> None:
        with pytest.raises(MatcherError):
            RegexMatcher(r"(a)\1")
