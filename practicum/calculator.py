"""Calculator for two integers from 1 to 10, written in Arabic or Roman numerals."""

from __future__ import annotations

import argparse
import operator
import re
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass

NOT_EXPRESSION = "Вывод ошибки, так как строка не является математической операцией."
BAD_FORMAT = (
    "Вывод ошибки, так как формат математической операции не удовлетворяет заданию. "
    "Необходимо писать два операнда и один оператор (+, -, /, *)."
)
OUT_OF_RANGE = (
    "Калькулятор умеет работать только с арабскими целыми числами или римскими цифрами "
    "от 1 до 10 включительно"
)
MIXED_SYSTEMS = "Вывод ошибки, так как используются одновременно разные системы счисления."
NON_POSITIVE_ROMAN = "Вывод ошибки, так как в римской системе нет числа 0 и отрицательных чисел."

GREETING = (
    "Добро пожаловать, пользователь! Тебя приветствует Калькулус!\n"
    "Я умею выполнять операции сложения, вычитания, умножения и деления с двумя ЦЕЛЫМИ "
    "числами от 1 до 10, записанными в строку. Например, A + B.\n"
    "Выражения могут содержать как арабские, так и римские числа, но совмещать разные "
    "системы нельзя.\n"
    "Результатом моей работы с арабскими числами могут быть отрицательные числа и ноль. "
    "Результатом работы с римскими числами могут быть только положительные числа."
)

_ROMAN = (
    ("C", 100), ("XC", 90), ("L", 50), ("XL", 40), ("X", 10), ("IX", 9), ("VIII", 8),
    ("VII", 7), ("VI", 6), ("V", 5), ("IV", 4), ("III", 3), ("II", 2), ("I", 1),
)
_ROMAN_VALUES = dict(_ROMAN)

_OPERATORS: dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "/": operator.floordiv,
    "*": operator.mul,
}
_ARABIC = re.compile(r"[0-9]+")


class CalculatorError(ValueError):
    """The expression cannot be calculated."""


@dataclass(frozen=True)
class Expression:
    operator: str
    left: str
    right: str


def parse(text: str) -> Expression:
    """Split an expression into its operator and two operand strings."""
    normalized = text.replace(" ", "").strip().upper()
    found = [char for char in normalized if char in _OPERATORS]
    if len(found) > 1:
        raise CalculatorError(BAD_FORMAT)
    if not found:
        raise CalculatorError(NOT_EXPRESSION)
    left, _, right = normalized.partition(found[0])
    return Expression(found[0], left, right)


def _in_range(value: int) -> bool:
    return 0 < value < 11


def to_roman(value: int) -> str:
    """Write a positive integer in Roman numerals."""
    if value <= 0:
        raise CalculatorError(NON_POSITIVE_ROMAN)
    parts = []
    for numeral, amount in _ROMAN:
        count, value = divmod(value, amount)
        parts.append(numeral * count)
    return "".join(parts)


def evaluate(text: str) -> int | str:
    """Calculate an expression: an int for Arabic operands, a Roman numeral string otherwise."""
    expr = parse(text)
    operands = (expr.left, expr.right)
    romans = [op for op in operands if not _ARABIC.fullmatch(op)]
    apply = _OPERATORS[expr.operator]
    if len(romans) == 1:
        raise CalculatorError(MIXED_SYSTEMS)
    if not romans:
        left, right = (int(op) for op in operands)
        if not (_in_range(left) and _in_range(right)):
            raise CalculatorError(OUT_OF_RANGE)
        return apply(left, right)
    values = []
    for numeral in romans:
        value = _ROMAN_VALUES.get(numeral, 0)
        if not _in_range(value):
            raise CalculatorError(OUT_OF_RANGE)
        values.append(value)
    return to_roman(apply(values[0], values[1]))


def main(argv: Sequence[str] | None = None) -> int:
    argparse.ArgumentParser(description="Two-operand calculator").parse_args(argv)
    print(GREETING)
    while True:
        print("Введите выражение: ")
        line = sys.stdin.readline()
        try:
            result = evaluate(line)
        except CalculatorError as exc:
            print(exc, file=sys.stderr)
            return 1
        print(f"Результат работы: \n{result}")


if __name__ == "__main__":
    sys.exit(main())