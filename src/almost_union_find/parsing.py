"""Readers that turn text operation streams into :class:`Scenario` objects."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional, Tuple

from .operations import Move, Operation, SameSet, Scenario, SetSize, SetStats, SetSum, Union


_WHITESPACE_PATTERN = re.compile(r"\s+")
_COMMENT_PATTERN = re.compile(r"#.*$")
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

KATTIS = "kattis"
COMMANDS = "commands"
FORMATS = (KATTIS, COMMANDS)

_KATTIS_OPCODES = {1: (Union, 2), 2: (Move, 2), 3: (SetStats, 1)}
_COMMANDS = {
    "union": (Union, 2),
    "move": (Move, 2),
    "same": (SameSet, 2),
    "size": (SetSize, 1),
    "sum": (SetSum, 1),
    "stats": (SetStats, 1),
}


class MalformedInputError(ValueError):
    """Raised when an operation stream cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        prefix = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{prefix}{message}")
        self.line_number = line_number


def parse_text(text: str, fmt: str = "auto") -> List[Scenario]:
    """Parse ``text`` in the given format (``kattis``, ``commands`` or ``auto``)."""

    lines = text.splitlines()
    if fmt == "auto":
        fmt = detect_format(lines)
    if fmt == KATTIS:
        return list(parse_kattis(lines))
    if fmt == COMMANDS:
        return list(parse_commands(lines))
    raise ValueError(f"Unknown input format: '{fmt}'")


def detect_format(lines: Iterable[str]) -> str:
    for _, tokens in _tokenize(lines, strip_comments=True):
        return KATTIS if _INTEGER_PATTERN.match(tokens[0]) else COMMANDS
    return KATTIS


def parse_kattis(lines: Iterable[str]) -> Iterator[Scenario]:
    """Yield scenarios from ``n m`` headers followed by ``m`` opcode lines.

    Opcodes: ``1 p q`` unions, ``2 p q`` moves ``p`` next to ``q`` and ``3 p``
    reports the size and sum of ``p``'s set. Every element's value is its id.
    Test cases repeat until the input is exhausted.
    """

    stream = _tokenize(lines, strip_comments=False)
    for line_number, tokens in stream:
        if len(tokens) != 2:
            raise MalformedInputError(f"expected 'n m' header, got {len(tokens)} tokens", line_number)
        size, expected = (_to_int(token, line_number) for token in tokens)
        if size < 0 or expected < 0:
            raise MalformedInputError("header values must be non-negative", line_number)

        operations: List[Operation] = []
        while len(operations) < expected:
            entry = next(stream, None)
            if entry is None:
                raise MalformedInputError(f"expected {expected} operations, found {len(operations)}")
            op_line, op_tokens = entry
            opcode = _to_int(op_tokens[0], op_line)
            if opcode not in _KATTIS_OPCODES:
                raise MalformedInputError(f"unknown opcode {opcode}", op_line)
            record, arity = _KATTIS_OPCODES[opcode]
            operations.append(record(*_arguments(op_tokens, arity, op_line)))

        yield Scenario(size=size, values=list(range(1, size + 1)), operations=operations)


def parse_commands(lines: Iterable[str]) -> Iterator[Scenario]:
    """Yield scenarios from the keyword command format.

    ``universe N`` opens a scenario, ``values v1 .. vN`` optionally sets element
    values, and ``union``/``move``/``same``/``size``/``sum``/``stats`` follow.
    """

    scenario: Optional[Scenario] = None
    for line_number, tokens in _tokenize(lines, strip_comments=True):
        keyword = tokens[0].lower()
        if keyword == "universe":
            if scenario is not None:
                yield scenario
            (size,) = _arguments(tokens, 1, line_number)
            if size < 0:
                raise MalformedInputError("universe size must be non-negative", line_number)
            scenario = Scenario(size=size)
            continue

        if scenario is None:
            raise MalformedInputError(f"'{keyword}' before any 'universe' line", line_number)

        if keyword == "values":
            if scenario.operations:
                raise MalformedInputError("'values' must precede the operations", line_number)
            scenario.values = _arguments(tokens, scenario.size, line_number)
            continue

        if keyword not in _COMMANDS:
            raise MalformedInputError(f"unknown command '{keyword}'", line_number)
        record, arity = _COMMANDS[keyword]
        scenario.operations.append(record(*_arguments(tokens, arity, line_number)))

    if scenario is not None:
        yield scenario


def _tokenize(lines: Iterable[str], strip_comments: bool) -> Iterator[Tuple[int, List[str]]]:
    for line_number, line in enumerate(lines, start=1):
        if strip_comments:
            line = _COMMENT_PATTERN.sub("", line)
        stripped = line.strip()
        if not stripped:
            continue
        yield line_number, _WHITESPACE_PATTERN.split(stripped)


def _arguments(tokens: List[str], arity: int, line_number: int) -> List[int]:
    arguments = tokens[1:]
    if len(arguments) != arity:
        raise MalformedInputError(
            f"'{tokens[0]}' takes {arity} argument(s), got {len(arguments)}",
            line_number,
        )
    return [_to_int(token, line_number) for token in arguments]


def _to_int(token: str, line_number: int) -> int:
    if not _INTEGER_PATTERN.match(token):
        raise MalformedInputError(f"not an integer: '{token}'", line_number)
    return int(token)
