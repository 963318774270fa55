import math
import struct

import pytest

from shellkit.commands import ParamKind
from shellkit.errors import (
    ArgumentError,
    IntegerOverflow,
    InvalidArgument,
    MissingArguments,
    UnsignedOverflow,
    UnsupportedParameterKind,
)
from shellkit.interface import bind_args, convert_value


class TestSignedIntegers:
    def test_int8_boundary(self):
        assert convert_value(ParamKind.INT8, "127") == 127
        assert convert_value(ParamKind.INT8, "-128") == -128
        with pytest.raises(IntegerOverflow):
            convert_value(ParamKind.INT8, "128")
        with pytest.raises(IntegerOverflow):
            convert_value(ParamKind.INT8, "-129")

    @pytest.mark.parametrize("kind,top", [
        (ParamKind.INT16, 2**15 - 1),
        (ParamKind.INT32, 2**31 - 1),
        (ParamKind.INT64, 2**63 - 1),
        (ParamKind.INT, 2**63 - 1),
    ])
    def test_width_limits(self, kind, top):
        assert convert_value(kind, str(top)) == top
        with pytest.raises(IntegerOverflow):
            convert_value(kind, str(top + 1))

    @pytest.mark.parametrize("text,expected", [
        ("0x1f", 31),
        ("0X1F", 31),
        ("0o17", 15),
        ("017", 15),
        ("0b101", 5),
        ("1_000", 1000),
        ("-0x10", -16),
        ("+42", 42),
        ("0", 0),
    ])
    def test_base_prefixes(self, text, expected):
        assert convert_value(ParamKind.INT64, text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "1.5", "08", "0x", "1__0", "_1", " 1", "1e3"])
    def test_malformed(self, text):
        with pytest.raises(InvalidArgument):
            convert_value(ParamKind.INT32, text)

    def test_far_beyond_64_bits_is_overflow(self):
        with pytest.raises(IntegerOverflow):
            convert_value(ParamKind.INT64, "9" * 40)


class TestUnsignedIntegers:
    def test_uint8_boundary(self):
        assert convert_value(ParamKind.UINT8, "255") == 255
        with pytest.raises(UnsignedOverflow):
            convert_value(ParamKind.UINT8, "256")

    def test_uint64_top(self):
        assert convert_value(ParamKind.UINT64, "0xffffffffffffffff") == 2**64 - 1
        with pytest.raises(UnsignedOverflow):
            convert_value(ParamKind.UINT, str(2**64))

    def test_overflow_classes_are_distinct(self):
        with pytest.raises(UnsignedOverflow) as excinfo:
            convert_value(ParamKind.UINT16, "70000")
        assert not isinstance(excinfo.value, IntegerOverflow)

    @pytest.mark.parametrize("text", ["-1", "+1", "x"])
    def test_signs_are_rejected(self, text):
        with pytest.raises(InvalidArgument):
            convert_value(ParamKind.UINT32, text)


class TestFloats:
    def test_float64(self):
        assert convert_value(ParamKind.FLOAT64, "0.1") == 0.1
        assert convert_value(ParamKind.FLOAT64, "-2.5e3") == -2500.0
        assert convert_value(ParamKind.FLOAT64, "0x1p-2") == 0.25

    def test_float32_rounds_to_single_precision(self):
        value = convert_value(ParamKind.FLOAT32, "0.1")
        assert value == struct.unpack("<f", struct.pack("<f", 0.1))[0]
        assert value != 0.1

    def test_special_values(self):
        assert math.isinf(convert_value(ParamKind.FLOAT64, "inf"))
        assert math.isnan(convert_value(ParamKind.FLOAT32, "NaN"))

    @pytest.mark.parametrize("kind,text", [
        (ParamKind.FLOAT64, "1e400"),
        (ParamKind.FLOAT32, "1e39"),
        (ParamKind.FLOAT64, "one"),
        (ParamKind.FLOAT64, ""),
        (ParamKind.FLOAT64, "1_0.0"),
    ])
    def test_invalid(self, kind, text):
        with pytest.raises(InvalidArgument):
            convert_value(kind, text)


class TestBoolAndString:
    @pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
    def test_truthy(self, text):
        assert convert_value(ParamKind.BOOL, text) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
    def test_falsy(self, text):
        assert convert_value(ParamKind.BOOL, text) is False

    @pytest.mark.parametrize("text", ["yes", "tRUE", "", "2"])
    def test_invalid_bool(self, text):
        with pytest.raises(InvalidArgument):
            convert_value(ParamKind.BOOL, text)

    def test_string_is_verbatim(self):
        assert convert_value(ParamKind.STRING, r" any thing\; ") == r" any thing\; "


class TestBindArgs:
    def test_binds_in_declared_order(self):
        kinds = (ParamKind.INT8, ParamKind.STRING, ParamKind.BOOL)
        assert bind_args(kinds, ["3", "x", "true"]) == [3, "x", True]

    def test_missing_arguments(self):
        with pytest.raises(MissingArguments) as excinfo:
            bind_args((ParamKind.INT8, ParamKind.INT8), ["1"])
        assert excinfo.value.index == 1

    def test_surplus_tokens_are_ignored(self):
        assert bind_args((ParamKind.INT8,), ["1", "2", "3"]) == [1]

    def test_varargs_consume_surplus(self):
        values = bind_args((ParamKind.STRING,), ["a", "1", "2"], varargs_kind=ParamKind.INT8)
        assert values == ["a", 1, 2]

    def test_optional_parameters(self):
        kinds = (ParamKind.INT8, ParamKind.INT8)
        assert bind_args(kinds, ["1"], required=1) == [1]
        assert bind_args(kinds, ["1", "2"], required=1) == [1, 2]

    def test_error_carries_position(self):
        with pytest.raises(IntegerOverflow) as excinfo:
            bind_args((ParamKind.STRING, ParamKind.INT8), ["ok", "300"])
        err = excinfo.value
        assert (err.index, err.token, err.kind) == (1, "300", ParamKind.INT8)

    def test_unsupported_kind(self):
        with pytest.raises(UnsupportedParameterKind) as excinfo:
            bind_args((complex,), ["1"])
        assert excinfo.value.kind is complex

    def test_failures_share_a_base(self):
        for exc in (MissingArguments, InvalidArgument, IntegerOverflow,
                    UnsignedOverflow, UnsupportedParameterKind):
            assert issubclass(exc, ArgumentError)

    def test_tokens_are_not_mutated(self):
        tokens = ["1", "2"]
        bind_args((ParamKind.INT8,), tokens)
        assert tokens == ["1", "2"]

    @pytest.mark.parametrize("kind,value", [
        (ParamKind.INT8, -128),
        (ParamKind.INT32, 123456),
        (ParamKind.UINT16, 65535),
        (ParamKind.FLOAT64, 1.25),
        (ParamKind.BOOL, True),
        (ParamKind.STRING, "word"),
    ])
    def test_canonical_text_converts_back(self, kind, value):
        assert bind_args((kind,), [str(value)]) == [value]


class TestFloatForms:
    @pytest.mark.parametrize("text,expected", [
        (".5", 0.5),
        ("5.", 5.0),
        ("-0x1.8p1", -3.0),
        ("0X.8P0", 0.5),
        ("1E3", 1000.0),
    ])
    def test_accepted(self, text, expected):
        assert convert_value(ParamKind.FLOAT64, text) == expected

    @pytest.mark.parametrize("text", ["Infinity", "-inf", "+INF"])
    def test_infinities(self, text):
        assert math.isinf(convert_value(ParamKind.FLOAT64, text))

    @pytest.mark.parametrize("text", [
        "0x1",  # hex mantissa needs a p exponent
        "0x1.8",
        "١.٥",  # Arabic-Indic digits
        "-nan",
        "+nan",
        "1e",
        ".",
        "1.5 ",
        "infinit",
    ])
    def test_rejected(self, text):
        with pytest.raises(InvalidArgument):
            convert_value(ParamKind.FLOAT64, text)
