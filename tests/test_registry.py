import logging
import textwrap

import pytest

from shellkit.commands import (
    Command,
    CommandRegistry,
    Float32,
    Int8,
    ParamKind,
    Uint16,
    command,
    describe_signature,
    register_command,
)
from shellkit.interface import Dispatcher
from shellkit.ui import OutputWriter


def _noop(*args, **kwargs):
    return None


class TestDescribeSignature:
    def test_plain_and_annotated_kinds(self):
        def op(a: int, b: Int8, c: Uint16, d: Float32, e: float, f: str, g: bool, h):
            return None

        meta = describe_signature(op)
        assert meta["kinds"] == (
            ParamKind.INT, ParamKind.INT8, ParamKind.UINT16, ParamKind.FLOAT32,
            ParamKind.FLOAT64, ParamKind.STRING, ParamKind.BOOL, ParamKind.STRING,
        )
        assert meta["required"] == 8
        assert meta["varargs_kind"] is None

    def test_defaults_varargs_and_injection(self):
        def op(a: int, b: int = 2, *rest: Int8, out: OutputWriter, registry: CommandRegistry, flag=False):
            return None

        meta = describe_signature(op)
        assert meta["kinds"] == (ParamKind.INT, ParamKind.INT)
        assert meta["required"] == 1
        assert meta["varargs_kind"] is ParamKind.INT8
        assert meta["writer_param"] == "out"
        assert meta["registry_param"] == "registry"

    def test_unknown_annotation_is_kept(self):
        def op(value: complex):
            return None

        assert describe_signature(op)["kinds"] == (complex,)


class TestCommandRegistry:
    def test_add_derives_kinds_once(self, registry):
        def op(level: Int8):
            return level

        cmd = registry.add(Command(name="mode advanced", callback=op))
        assert cmd.kinds == (ParamKind.INT8,)
        assert cmd.arity == 1
        assert cmd.required_count == 1
        assert registry.get("mode advanced") is cmd

    def test_explicit_kinds_are_kept(self, registry):
        cmd = registry.add(Command(name="raw", callback=_noop, kinds=[ParamKind.BOOL]))
        assert cmd.kinds == (ParamKind.BOOL,)

    def test_name_whitespace_is_normalized(self, registry):
        registry.add(Command(name="  mode   advanced ", callback=_noop, kinds=()))
        assert "mode advanced" in registry

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_invalid_names(self, registry, name):
        with pytest.raises(ValueError):
            registry.add(Command(name=name, callback=_noop, kinds=()))

    def test_overwrite_in_place(self, registry):
        first = registry.add(Command(name="x", callback=_noop, kinds=()))
        second = registry.add(Command(name="x", callback=_noop, kinds=(), description="new"))
        assert len(registry) == 1
        assert registry.get("x") is second
        assert second is not first

    def test_remove_and_clear(self, registry):
        registry.add(Command(name="a", callback=_noop, kinds=()))
        registry.add(Command(name="b", callback=_noop, kinds=()))
        registry.remove("a")
        registry.remove("missing")
        assert registry.names() == ["b"]
        registry.clear()
        assert len(registry) == 0

    def test_lookup_is_case_sensitive(self, registry):
        registry.add(Command(name="Mode", callback=_noop, kinds=()))
        assert registry.get("mode") is None

    def test_unsupported_kind_warns_at_registration(self, registry, caplog):
        def op(value: complex):
            return None

        with caplog.at_level(logging.WARNING, logger="shellkit"):
            registry.add(Command(name="bad", callback=op))
        assert "unsupported parameter kinds" in caplog.text
        assert "bad" in registry

    def test_categories(self, registry):
        registry.add(Command(name="a", callback=_noop, kinds=(), category="tools"))
        registry.add(Command(name="b", callback=_noop, kinds=()))
        registry.set_category_description("tools", "  Tooling.  ")
        assert [c.name for c in registry.categories()["tools"]] == ["a"]
        assert registry.get_category_description("tools") == "Tooling."
        assert registry.get_category_description("none") == ""


class TestCommandDecorator:
    def test_registers_with_metadata(self, registry):
        @command(registry=registry, example="say-hello bob")
        def say_hello(name: str):
            """Greet someone."""
            return f"hello {name}"

        cmd = registry.get("say-hello")
        assert cmd.description == "Greet someone."
        assert cmd.example == "say-hello bob"
        assert cmd.kinds == (ParamKind.STRING,)
        assert cmd.module == __name__
        assert say_hello("x") == "hello x"

    def test_register_command(self, registry):
        register_command(Command(name="z", callback=_noop, kinds=()), registry)
        assert "z" in registry

    def test_command_without_completer_offers_nothing(self):
        assert Command(name="a", callback=_noop).complete("x") == []

    def test_command_without_err_handler_propagates(self):
        err = ValueError("boom")
        assert Command(name="a", callback=_noop).handle_err(err, []) is err


class TestParamKind:
    def test_members_are_distinct(self):
        assert ParamKind.INT64 is not ParamKind.INT
        assert ParamKind.UINT64 is not ParamKind.UINT
        assert ParamKind.INT64.name == "INT64"
        assert len(ParamKind) == 14

    def test_family_and_width(self):
        assert (ParamKind.INT.family, ParamKind.INT.bits) == ("int", 64)
        assert (ParamKind.UINT64.family, ParamKind.UINT64.bits) == ("uint", 64)
        assert (ParamKind.FLOAT32.family, ParamKind.FLOAT32.bits) == ("float", 32)


DEFERRED_SOURCE = textwrap.dedent('''
    from __future__ import annotations

    from typing import TYPE_CHECKING

    from shellkit.commands import Int8
    from shellkit.ui import OutputWriter

    if TYPE_CHECKING:
        from decimal import Decimal


    def set_level(level: int, small: Int8, *, out: OutputWriter, note: Decimal | None = None):
        out.print_line(level, small)
''')


class TestDeferredAnnotations:
    @pytest.fixture
    def set_level(self):
        namespace = {"__name__": "deferred_commands"}
        exec(compile(DEFERRED_SOURCE, "<deferred_commands>", "exec"), namespace)
        return namespace["set_level"]

    def test_unresolvable_name_does_not_hide_other_hints(self, set_level):
        meta = describe_signature(set_level)
        assert meta["kinds"] == (ParamKind.INT, ParamKind.INT8)
        assert meta["writer_param"] == "out"

    def test_dispatches_normally(self, set_level, registry, writer, stream, caplog):
        with caplog.at_level(logging.WARNING, logger="shellkit"):
            registry.add(Command(name="lvl", callback=set_level))
        assert "unsupported" not in caplog.text

        Dispatcher(registry, writer).dispatch("lvl 5 -3")
        assert stream.getvalue() == "5 -3\n"
