import pytest

from hints_optimizer.deriver.signal_parser import (
    SignalAttempt, first_parsed, first_value,
    parse_float, parse_int, parse_flag
)


@pytest.mark.parametrize("raw, expected", [
    ("1", 1.0),
    ("1.5", 1.5),
    ("-2", -2.0),
    ("+0.25", 0.25),
    (".5", 0.5),
    ("3.", 3.0),
    ("1e-1", 0.1),
    ("2E2", 200.0),
])
def test_parse_float_valid(raw, expected):
    assert parse_float(raw) == expected


@pytest.mark.parametrize("raw", [
    None, "", " 1.5", "1.5 ", "abc", "1,5", "1_000", "nan", "inf", "-Infinity", "1e400", "0x10",
])
def test_parse_float_invalid(raw):
    """Тест: пробелы, мусор и не-конечные значения -> None."""
    assert parse_float(raw) is None


@pytest.mark.parametrize("raw, expected", [("320", 320), ("-5", -5), ("+7", 7), ("0", 0)])
def test_parse_int_valid(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "100.5", "1e3", " 1", "ten", "99999999999999999999"])
def test_parse_int_invalid(raw):
    assert parse_int(raw) is None


def test_parse_flag():
    on = parse_flag("1")
    assert on("1") is True
    assert on("0") is None
    assert on("on") is None
    assert on(None) is None


def test_first_value_case_insensitive():
    headers = {"save-data": "1", "DPR": ["2", "3"]}
    assert first_value(headers, "Save-Data", case_insensitive=True) == "1"
    assert first_value(headers, "dpr", case_insensitive=True) == "2"
    assert first_value(headers, "Width", case_insensitive=True) is None


def test_first_value_case_sensitive_for_params():
    params = {"dpr": "2"}
    assert first_value(params, "dpr") == "2"
    assert first_value(params, "DPR") is None


def test_first_value_empty_sources():
    assert first_value(None, "dpr") is None
    assert first_value({}, "dpr") is None
    assert first_value({"dpr": []}, "dpr") is None


def test_first_value_stringifies():
    assert first_value({"width": 320}, "width") == "320"


def test_first_parsed_returns_first_success():
    """Тест: первый источник битый -> берётся второй."""
    attempts = [
        SignalAttempt("header:DPR", "abc", parse_float),
        SignalAttempt("param:dpr", "1.5", parse_float),
    ]
    assert first_parsed(attempts, default=1.0) == 1.5


def test_first_parsed_priority():
    """Тест: если первый источник разобрался, второй не используется."""
    attempts = [
        SignalAttempt("header:DPR", "2", parse_float),
        SignalAttempt("param:dpr", "3", parse_float),
    ]
    assert first_parsed(attempts, default=1.0) == 2.0


def test_first_parsed_default():
    attempts = [
        SignalAttempt("header:DPR", None, parse_float),
        SignalAttempt("param:dpr", "x", parse_float),
    ]
    assert first_parsed(attempts, default=1.0) == 1.0
