import io

import pytest

from practicum.calculator import (
    BAD_FORMAT,
    MIXED_SYSTEMS,
    NON_POSITIVE_ROMAN,
    NOT_EXPRESSION,
    OUT_OF_RANGE,
    CalculatorError,
    evaluate,
    main,
    parse,
    to_roman,
)

ROMAN_DIGITS = ["I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X"]


def test_parse_normalises_input():
    expr = parse(" x + v \n")
    assert (expr.operator, expr.left, expr.right) == ("+", "X", "V")


@pytest.mark.parametrize("a", range(1, 11))
@pytest.mark.parametrize("b", [1, 4, 10])
def test_arabic_operations(a, b):
    assert evaluate(f"{a} + {b}") == a + b
    assert evaluate(f"{a}-{b}") == a - b
    assert evaluate(f"{a}*{b}") == a * b
    assert evaluate(f"{a}/{b}") == a // b


def test_to_roman_matches_numeral_table():
    assert [to_roman(i) for i in range(1, 11)] == ROMAN_DIGITS
    assert to_roman(100) == "C"
    assert to_roman(90) == "XC"


@pytest.mark.parametrize("a", range(1, 11))
@pytest.mark.parametrize("b", range(1, 11))
def test_roman_addition_and_multiplication(a, b):
    left, right = ROMAN_DIGITS[a - 1], ROMAN_DIGITS[b - 1]
    assert evaluate(f"{left}+{right}") == to_roman(a + b)
    assert evaluate(f"{left}*{right}") == to_roman(a * b)


def test_lower_case_roman():
    assert evaluate("ix-viii") == "I"


@pytest.mark.parametrize(
    "text, message",
    [
        ("1+II", MIXED_SYSTEMS),
        ("hello", NOT_EXPRESSION),
        ("", NOT_EXPRESSION),
        ("1+2+3", BAD_FORMAT),
        ("-1+2", BAD_FORMAT),
        ("11+1", OUT_OF_RANGE),
        ("0*5", OUT_OF_RANGE),
        ("XI+I", OUT_OF_RANGE),
        ("C-X", OUT_OF_RANGE),
        ("I-II", NON_POSITIVE_ROMAN),
        ("I/II", NON_POSITIVE_ROMAN),
    ],
)
def test_errors(text, message):
    with pytest.raises(CalculatorError) as info:
        evaluate(text)
    assert str(info.value) == message


def test_to_roman_rejects_non_positive():
    with pytest.raises(CalculatorError):
        to_roman(0)
    with pytest.raises(CalculatorError):
        to_roman(-3)


def test_main_prints_result_then_stops_on_error(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1+2\n"))
    assert main([]) == 1
    captured = capsys.readouterr()
    assert "Результат работы: \n3\n" in captured.out
    assert NOT_EXPRESSION in captured.err