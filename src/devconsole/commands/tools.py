"""Calculator and JSON helpers."""

from __future__ import annotations

import ast
import json
import math
import operator
from collections.abc import Callable
from typing import Any

from devconsole.core.registry import Command, CommandContext, command
from devconsole.errors import CommandUsageError

CATEGORY = "Calculators & Converters"

_CONSTANTS: dict[str, float] = {"pi": math.pi, "e": math.e}
_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "sqrt": math.sqrt,
    "pow": math.pow,
    "abs": abs,
    "round": round,
    "floor": math.floor,
    "ceil": math.ceil,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "log": math.log,
}
_BINARY: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}
_UNARY: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}
MAX_EXPONENT = 10_000


def _evaluate(node: ast.AST) -> int | float:
    if isinstance(node, ast.Expression):
        return _evaluate(node.body)
    if isinstance(node, ast.Constant):
        if isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
            return node.value
        raise CommandUsageError("only numbers are allowed")
    if isinstance(node, ast.BinOp):
        op = _BINARY.get(type(node.op))
        if op is None:
            raise CommandUsageError(f"operator not allowed: {type(node.op).__name__}")
        left, right = _evaluate(node.left), _evaluate(node.right)
        if isinstance(node.op, ast.Pow) and abs(right) > MAX_EXPONENT:
            raise CommandUsageError("exponent too large")
        return op(left, right)
    if isinstance(node, ast.UnaryOp):
        unary = _UNARY.get(type(node.op))
        if unary is None:
            raise CommandUsageError(f"operator not allowed: {type(node.op).__name__}")
        return unary(_evaluate(node.operand))
    if isinstance(node, ast.Name):
        if node.id in _CONSTANTS:
            return _CONSTANTS[node.id]
        raise CommandUsageError(f"unknown name: {node.id}")
    if isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name) or node.func.id not in _FUNCTIONS or node.keywords:
            raise CommandUsageError("only simple calls to math functions are allowed")
        return _FUNCTIONS[node.func.id](*(_evaluate(arg) for arg in node.args))
    raise CommandUsageError(f"expression element not allowed: {type(node).__name__}")


def evaluate_expression(expression: str) -> int | float:
    """Evaluate an arithmetic expression over a whitelist of operators and math functions."""
    normalized = expression.strip().replace("^", "**").replace("×", "*").replace("÷", "/")
    try:
        tree = ast.parse(normalized, mode="eval")
    except SyntaxError as exc:
        raise CommandUsageError(f"invalid expression: {expression}") from exc
    return _evaluate(tree)


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return str(value)


def tool_commands() -> list[Command]:
    @command("calc", "Calculator (supports +, -, *, /, %, sqrt, pow)", category=CATEGORY)
    def calc(args: list[str]) -> str:
        expression = " ".join(args)
        if not expression.strip():
            return "Usage: calc <expression>\nExamples: calc 2 + 2, calc sqrt(16), calc pow(2,3)"
        return f"{expression} = {_format_number(evaluate_expression(expression))}"

    @command("json-validate", "Validate and pretty-print JSON input", category=CATEGORY, context=True)
    def json_validate(_args: list[str], *, context: CommandContext) -> str:
        raw = context.raw_arguments
        if not raw.strip():
            return 'Usage: json-validate <json>\nExample: json-validate {"test": "data"}'
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            return f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
        return "Valid JSON:\n" + json.dumps(payload, indent=2, ensure_ascii=False)

    return [calc, json_validate]
