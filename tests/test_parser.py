import pytest

from shellkit.commands import Command, CommandRegistry, ParamKind
from shellkit.errors import CannotParseLine
from shellkit.interface import (
    build_usage,
    longest_match,
    resolve_command,
    split_inline_commands,
    tokenize,
)


def _noop(*args, **kwargs):
    return None


@pytest.fixture
def mode_registry(registry):
    registry.add(Command(name="mode", callback=_noop, kinds=()))
    registry.add(Command(name="mode advanced", callback=_noop, kinds=(ParamKind.INT8,)))
    return registry


class TestSplitInlineCommands:
    def test_separates_statements_in_order(self):
        assert split_inline_commands("mode advanced 3;mode") == ["mode advanced 3", "mode"]

    def test_separator_after_whitespace(self):
        assert split_inline_commands("a 1 ; b 2 ;c") == ["a 1", "b 2", "c"]

    def test_doubled_separator_is_rejected(self):
        with pytest.raises(CannotParseLine):
            split_inline_commands("foo;;bar")

    def test_leading_and_trailing_separators_are_dropped(self):
        assert split_inline_commands(";foo") == ["foo"]
        assert split_inline_commands("foo;") == ["foo"]

    @pytest.mark.parametrize("line", ["", "   ", "\t"])
    def test_blank_input_has_no_invocations(self, line):
        assert split_inline_commands(line) == []

    def test_escaped_separator_keeps_marker(self):
        assert split_inline_commands(r"echo a\;b;next") == [r"echo a\;b", "next"]

    def test_quoted_separator_is_literal(self):
        assert split_inline_commands('echo "a;b" \'c;;d\';x') == ['echo "a;b" \'c;;d\'', "x"]

    def test_words_joined_with_single_spaces(self):
        assert split_inline_commands("echo    one \t two") == ["echo one two"]

    def test_statement_without_separator_is_unchanged(self):
        for line in ("mode", "mode advanced 3", 'echo "hello world"'):
            assert split_inline_commands(line) == [line]

    def test_unclosed_quote_is_rejected(self):
        with pytest.raises(CannotParseLine):
            split_inline_commands('echo "open;x')


class TestTokenize:
    def test_posix_quoting(self):
        assert tokenize('echo "hello world" it\\\'s') == ["echo", "hello world", "it's"]

    def test_escaped_separator_becomes_literal_token(self):
        assert tokenize(r"echo a\;b") == ["echo", "a;b"]

    def test_bad_quoting_raises(self):
        with pytest.raises(CannotParseLine):
            tokenize("echo 'unterminated")


class TestResolver:
    def test_longest_name_wins(self, mode_registry):
        cmd, residual = resolve_command(["mode", "advanced", "3"], mode_registry)
        assert cmd.name == "mode advanced"
        assert residual == ["3"]

    def test_short_name_alone(self, mode_registry):
        cmd, residual = resolve_command(["mode"], mode_registry)
        assert cmd.name == "mode"
        assert residual == []

    def test_unknown_subword_falls_back_to_parent(self, mode_registry):
        cmd, residual = resolve_command(["mode", "basic", "x"], mode_registry)
        assert cmd.name == "mode"
        assert residual == ["basic", "x"]

    def test_not_found(self, mode_registry):
        assert resolve_command(["unknown", "arg"], mode_registry) is None
        assert longest_match([], mode_registry) is None

    def test_resolution_does_not_mutate_registry(self, mode_registry):
        before = mode_registry.as_dict()
        resolve_command(["mode", "advanced", "3"], mode_registry)
        assert mode_registry.as_dict() == before

    def test_longest_match_reports_consumed_tokens(self, mode_registry):
        cmd, consumed = longest_match(["mode", "advanced", "1", "2"], mode_registry)
        assert cmd.name == "mode advanced"
        assert consumed == 2


class TestBuildUsage:
    def test_required_optional_and_varargs(self):
        def op(a: int, b: str = "x", *rest: str):
            return None

        cmd = CommandRegistry().add(Command(name="op", callback=op))
        assert build_usage(cmd) == "op <int> [string] [args...]"

    def test_no_parameters(self):
        assert build_usage(Command(name="mode", callback=_noop, kinds=())) == "mode"
