"""Tests for matching tokens against a single option and consuming its argument."""

from __future__ import annotations

import pytest

from simopts.core.handlers import CallbackHandler
from simopts.core.option import Arity, MatchResult, Option
from simopts.core.tokens import TokenCursor
from simopts.foundation.exceptions import InternalInconsistencyError


def _option(name: str, arity: Arity, default: str | None = None, short: str | None = None) -> Option:
    return Option(name, CallbackHandler(lambda arg: True), short=short, arity=arity, default=default)


def _offer(option: Option, tokens: list[str]) -> tuple[MatchResult, TokenCursor]:
    cursor = TokenCursor(tokens)
    token = next(cursor)
    return option.process_option(token, cursor), cursor


class TestConstruction:
    def test_rejects_dashed_names(self):
        with pytest.raises(ValueError):
            Option("--seed", CallbackHandler(lambda arg: True))

    def test_rejects_long_short_names(self):
        with pytest.raises(ValueError):
            Option("seed", CallbackHandler(lambda arg: True), short="sd")
        with pytest.raises(ValueError):
            Option("seed", CallbackHandler(lambda arg: True), short="-")

    def test_default_for_flags(self):
        assert _option("verbose", Arity.NONE).default == "noverbose"
        assert _option("seed", Arity.OPTIONAL).default == ""


class TestLongOptions:
    def test_no_match_leaves_option_untouched(self):
        option = _option("seed", Arity.OPTIONAL, "0")
        result, cursor = _offer(option, ["--seeds", "5"])
        assert result is MatchResult.NO_MATCH
        assert not option.is_set
        assert cursor.position == 1

    def test_flag(self):
        option = _option("verbose", Arity.NONE)
        result, cursor = _offer(option, ["--verbose", "5"])
        assert result is MatchResult.SUCCESS
        assert option.is_set
        assert option.is_default
        assert cursor.peek() == "5"

    def test_required_consumes_next_token(self):
        option = _option("count", Arity.REQUIRED, "1")
        result, cursor = _offer(option, ["--count", "5"])
        assert result is MatchResult.SUCCESS
        assert option.get_arg() == "5"
        assert not cursor.has_next()

    def test_required_is_greedy_with_dashes(self):
        option = _option("offset", Arity.REQUIRED, "0")
        result, _ = _offer(option, ["--offset", "-x"])
        assert result is MatchResult.SUCCESS
        assert option.get_arg() == "-x"

    def test_required_missing_at_end(self):
        option = _option("count", Arity.REQUIRED, "1")
        result, _ = _offer(option, ["--count"])
        assert result is MatchResult.ARG_PARSE_FAILURE
        assert not option.is_set
        assert option.get_arg() == "1"

    def test_required_does_not_swallow_long_option(self):
        option = _option("count", Arity.REQUIRED, "1")
        result, cursor = _offer(option, ["--count", "--verbose"])
        assert result is MatchResult.ARG_PARSE_FAILURE
        assert cursor.peek() == "--verbose"

    def test_required_rejects_foreign_key(self):
        option = _option("geometry", Arity.REQUIRED, "M")
        option.add_key("M", "well-mixed")
        option.add_key("l", "lattice")
        result, cursor = _offer(option, ["--geometry", "x"])
        assert result is MatchResult.ARG_PARSE_FAILURE
        assert cursor.peek() == "x"

    def test_required_accepts_key_with_suffix(self):
        option = _option("geometry", Arity.REQUIRED, "M")
        option.add_key("l", "lattice")
        option.add_key("-", "strong suppressor")
        result, _ = _offer(option, ["--geometry", "l4"])
        assert result is MatchResult.SUCCESS
        assert option.get_arg() == "l4"
        result, _ = _offer(option, ["--geometry", "-"])
        assert result is MatchResult.SUCCESS
        assert option.get_arg() == "-"

    def test_optional_at_end(self):
        option = _option("seed", Arity.OPTIONAL, "0")
        result, _ = _offer(option, ["--seed"])
        assert result is MatchResult.SUCCESS
        assert option.is_set
        assert option.get_arg() == "0"

    def test_optional_leaves_long_option(self):
        option = _option("foo", Arity.OPTIONAL, "dflt")
        result, cursor = _offer(option, ["--foo", "--bar"])
        assert result is MatchResult.SUCCESS
        assert option.is_set
        assert option.get_arg() == "dflt"
        assert cursor.peek() == "--bar"

    def test_optional_takes_negative_number(self):
        option = _option("weight", Arity.OPTIONAL, "1")
        result, _ = _offer(option, ["--weight", "-3.5"])
        assert result is MatchResult.SUCCESS
        assert option.get_arg() == "-3.5"

    def test_optional_takes_negative_matrix(self):
        option = _option("payoffs", Arity.OPTIONAL, "1")
        result, _ = _offer(option, ["--payoffs", "-1,2;3,-4"])
        assert result is MatchResult.SUCCESS
        assert option.get_arg() == "-1,2;3,-4"

    def test_optional_leaves_short_option(self):
        option = _option("seed", Arity.OPTIONAL, "0")
        result, cursor = _offer(option, ["--seed", "-v"])
        assert result is MatchResult.SUCCESS
        assert option.is_set
        assert option.is_default
        assert cursor.peek() == "-v"

    def test_optional_takes_plain_word(self):
        option = _option("export", Arity.OPTIONAL, "state.plist")
        result, _ = _offer(option, ["--export", "end.plist"])
        assert result is MatchResult.SUCCESS
        assert option.get_arg() == "end.plist"


class TestShortOptions:
    def test_bare_short_uses_next_token(self):
        option = _option("popsize", Arity.REQUIRED, "100", short="N")
        result, _ = _offer(option, ["-N", "400"])
        assert result is MatchResult.SUCCESS
        assert option.get_arg() == "400"

    def test_concatenated_argument(self):
        option = _option("popsize", Arity.REQUIRED, "100", short="N")
        result, cursor = _offer(option, ["-N20x", "next"])
        assert result is MatchResult.SUCCESS
        assert option.get_arg() == "20x"
        assert cursor.peek() == "next"

    def test_concatenated_argument_rejected_key(self):
        option = _option("geometry", Arity.REQUIRED, "M", short="G")
        option.add_key("M", "well-mixed")
        result, _ = _offer(option, ["-Gq"])
        assert result is MatchResult.SHORT_CONCAT_FAILURE
        assert not option.is_set

    def test_concatenated_optional(self):
        option = _option("seed", Arity.OPTIONAL, "0", short="s")
        result, _ = _offer(option, ["-s-42"])
        assert result is MatchResult.SUCCESS
        assert option.get_arg() == "-42"
        result, _ = _offer(option, ["-s-x"])
        assert result is MatchResult.SUCCESS
        assert option.is_set
        assert option.is_default

    def test_flag_with_trailing_characters_does_not_match(self):
        option = _option("verbose", Arity.NONE, short="v")
        result, _ = _offer(option, ["-vx"])
        assert result is MatchResult.NO_MATCH
        assert not option.is_set

    def test_unreachable_branch_is_fatal(self):
        option = _option("verbose", Arity.NONE, short="v")
        with pytest.raises(InternalInconsistencyError):
            option._consume_inline("x")


class TestState:
    def test_reset(self):
        option = _option("count", Arity.REQUIRED, "1")
        _offer(option, ["--count", "5"])
        option.reset()
        assert not option.is_set
        assert option.get_arg() == "1"

    def test_set_default_from_key(self):
        option = _option("geometry", Arity.REQUIRED, "M")
        key = option.add_key("l", "lattice")
        option.set_default(key)
        assert option.default == "l"

    def test_description_annotations(self):
        flag = Option("run", CallbackHandler(lambda arg: True), description="--run  start")
        assert flag.get_description().endswith("(current: not set)")
        count = Option("count", CallbackHandler(lambda arg: True), arity=Arity.REQUIRED, default="1", description="--count <n>")
        assert count.get_description() == "--count <n>\n      (default: 1)"
        _offer(count, ["--count", "5"])
        assert count.get_description() == "--count <n>\n      (current: 5, default: 1)"

    def test_description_from_handler(self):
        handler = CallbackHandler(lambda arg: True, on_describe=lambda: "--dyn  dynamic text")
        option = Option("dyn", handler, arity=Arity.REQUIRED, default="x")
        assert option.get_description().startswith("--dyn  dynamic text")

    def test_description_lists_keys(self):
        option = Option("geometry", CallbackHandler(lambda arg: True), arity=Arity.REQUIRED, default="M", description="--geometry <g>")
        option.add_key("M", "well-mixed")
        assert "\n         M: well-mixed" in option.get_description()
