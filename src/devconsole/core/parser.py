"""Command line tokenizing and flag parsing."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Union

from loguru import logger

FlagValue = Union[bool, str, int, float, list[str]]

INT_RE = re.compile(r"^[+-]?(0|[1-9][0-9]*)$")
FLOAT_RE = re.compile(r"^[+-]?([0-9]+\.[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$|^[+-]?[0-9]+[eE][+-]?[0-9]+$")


@dataclass(frozen=True)
class ParsedLine:
    """Positional arguments and flags parsed from one line."""

    positional: list[str] = field(default_factory=list)
    flags: dict[str, FlagValue] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.positional[0] if self.positional else ""

    @property
    def is_empty(self) -> bool:
        return not self.positional and not self.flags


def tokenize(line: str) -> list[str]:
    """Split a line on whitespace, keeping double-quoted spans together.

    Quotes are stripped. An unbalanced quote runs to the end of the line.
    """

    tokens: list[str] = []
    current: list[str] = []
    in_token = False
    in_quote = False
    for char in line:
        if char == '"':
            in_quote = not in_quote
            in_token = True
            continue
        if char.isspace() and not in_quote:
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
            continue
        current.append(char)
        in_token = True

    if in_token:
        tokens.append("".join(current))
    return tokens


def coerce_number(value: str) -> str | int | float:
    """Turn numeric text into a number; anything else is returned unchanged."""

    text = value.strip()
    if INT_RE.match(text):
        return int(text)
    if FLOAT_RE.match(text):
        number = float(text)
        if math.isfinite(number):
            return number
    return value


def is_number(token: str) -> bool:
    return not isinstance(coerce_number(token), str)


def parse_line(line: str) -> ParsedLine:
    """Parse a raw console line into positional arguments and flags."""

    if not line or not line.strip():
        return ParsedLine()
    try:
        return _parse_tokens(tokenize(line))
    except Exception:
        logger.opt(exception=True).debug("parse.degraded line={!r}", line)
        return ParsedLine(positional=_fallback_split(line))


def _fallback_split(line: str) -> list[str]:
    try:
        return tokenize(line)
    except Exception:
        return line.split()


def _parse_tokens(tokens: list[str]) -> ParsedLine:
    flags: dict[str, FlagValue] = {}
    positional: list[str] = []
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]

        if token.startswith("--") and len(token) > 2:
            key = token[2:]
            if "=" in key:
                name, value = key.split("=", 1)
                _set_flag(flags, name, coerce_number(value))
                idx += 1
                continue

            if idx + 1 < len(tokens) and not tokens[idx + 1].startswith("-"):
                _set_flag(flags, key, coerce_number(tokens[idx + 1]))
                idx += 2
                continue

            _set_flag(flags, key, True)
            idx += 1
            continue

        if token.startswith("-") and not token.startswith("--") and len(token) > 1 and not is_number(token):
            for char in token[1:]:
                flags[char] = True
            idx += 1
            continue

        positional.append(token)
        idx += 1

    return ParsedLine(positional=positional, flags=flags)


def _set_flag(flags: dict[str, FlagValue], name: str, value: FlagValue) -> None:
    if name not in flags or isinstance(value, bool) or isinstance(flags[name], bool):
        flags[name] = value
        return

    previous = flags[name]
    if isinstance(previous, list):
        previous.append(str(value))
    else:
        flags[name] = [str(previous), str(value)]


def flatten_args(parsed: ParsedLine) -> list[str]:
    """Rebuild flat argv (without the command name) for handlers."""

    args = list(parsed.positional[1:])
    for name, value in parsed.flags.items():
        option = f"--{name}"
        if value is True:
            args.append(option)
        elif value is False:
            continue
        elif isinstance(value, list):
            for item in value:
                args.extend([option, item])
        else:
            args.extend([option, str(value)])
    return args
