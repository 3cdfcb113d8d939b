import pytest

from boundls.fortran_format import (
    FormatError,
    IntFormat,
    RealFormat,
    parse_int_format,
    parse_real_format,
)


@pytest.mark.parametrize(
    "fmt, per_line, width",
    [("(8I10)", 8, 10), ("(13I6)", 13, 6), ("(16I5)", 16, 5)],
)
def test_parse_int_format_source_defaults(fmt, per_line, width):
    parsed = parse_int_format(fmt)
    assert parsed == IntFormat(per_line=per_line, width=width)


def test_parse_int_format_is_case_insensitive_and_ignores_padding():
    assert parse_int_format("  (8i10)      ") == parse_int_format("(8I10)")


def test_parse_int_format_rejects_missing_parts():
    with pytest.raises(FormatError):
        parse_int_format("8I10")
    with pytest.raises(FormatError):
        parse_int_format("(8X10)")


def test_int_printf_spec_width():
    spec = parse_int_format("(8I10)")
    rendered = spec.format(42)
    assert len(rendered) == spec.width
    assert int(rendered) == 42


@pytest.mark.parametrize(
    "fmt, per_line, width, precision",
    [("(4E20.13)", 4, 20, 13), ("(3E26.18)", 3, 26, 18)],
)
def test_parse_real_format_source_defaults(fmt, per_line, width, precision):
    parsed = parse_real_format(fmt)
    assert parsed == RealFormat(
        per_line=per_line, width=width, precision=precision, flag="E"
    )


@pytest.mark.parametrize("scaled", ["(1P,4E20.13)", "(1P4E20.13)", "(1p,4e20.13)"])
def test_scale_factor_is_dropped(scaled):
    assert parse_real_format(scaled) == parse_real_format("(4E20.13)")


def test_trailing_text_after_parenthesis_is_ignored():
    assert parse_real_format("(4E20.13)   junk") == parse_real_format("(4E20.13)")


def test_d_and_f_flags():
    d = parse_real_format("(4D20.13)")
    f = parse_real_format("(4F20.13)")
    assert d.flag == "D"
    assert f.flag == "F"
    assert (d.per_line, d.width, d.precision) == (f.per_line, f.width, f.precision)


def test_real_format_without_precision():
    parsed = parse_real_format("(4E20)")
    assert parsed.width == 20
    assert parsed.precision == 0


def test_unsupported_real_format():
    with pytest.raises(FormatError):
        parse_real_format("(8I10)")


def test_format_error_is_value_error():
    with pytest.raises(ValueError):
        parse_real_format("(4G20.13)")


@pytest.mark.parametrize("value", [0.0, 1.5, -3.25e-7, 6.02e23])
def test_real_format_round_trip(value):
    spec = parse_real_format("(4E20.13)")
    rendered = spec.format(value)
    assert len(rendered) == spec.width
    assert float(rendered) == pytest.approx(value, rel=1e-12, abs=0.0)


def test_d_format_writes_e_exponent():
    d = parse_real_format("(4D20.13)")
    e = parse_real_format("(4E20.13)")
    assert d.printf_spec() == e.printf_spec()
    assert "E" in d.format(2.5)


def test_fixed_format_round_trip():
    spec = parse_real_format("(5F16.8)")
    rendered = spec.format(-12.125)
    assert len(rendered) == spec.width
    assert "E" not in rendered
    assert float(rendered) == -12.125