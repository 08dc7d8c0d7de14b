"""Typed operation records accepted by the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union as TypingUnion

from .structures import AlmostDisjointSet


@dataclass(frozen=True)
class Union:
    """Merge the sets containing ``a`` and ``b``."""

    a: int
    b: int
    is_query = False

    def apply(self, engine: AlmostDisjointSet) -> None:
        engine.union(self.a, self.b)


@dataclass(frozen=True)
class Move:
    """Relocate ``a`` into the set containing ``b``."""

    a: int
    b: int
    is_query = False

    def apply(self, engine: AlmostDisjointSet) -> None:
        engine.move(self.a, self.b)


@dataclass(frozen=True)
class SameSet:
    a: int
    b: int
    is_query = True

    def apply(self, engine: AlmostDisjointSet) -> bool:
        return engine.same_set(self.a, self.b)


@dataclass(frozen=True)
class SetSize:
    a: int
    is_query = True

    def apply(self, engine: AlmostDisjointSet) -> int:
        return engine.set_size(self.a)


@dataclass(frozen=True)
class SetSum:
    a: int
    is_query = True

    def apply(self, engine: AlmostDisjointSet) -> int:
        return engine.set_sum(self.a)


@dataclass(frozen=True)
class SetStats:
    """Size and sum of the set containing ``a`` in one query."""

    a: int
    is_query = True

    def apply(self, engine: AlmostDisjointSet) -> Tuple[int, int]:
        return engine.set_stats(self.a)


Operation = TypingUnion[Union, Move, SameSet, SetSize, SetSum, SetStats]
QueryValue = TypingUnion[bool, int, Tuple[int, int]]


@dataclass(frozen=True)
class QueryResult:
    """Answer to one query, tagged with the query's position in the stream."""

    index: int
    operation: Operation
    value: QueryValue


@dataclass
class Scenario:
    """One universe of elements together with the operations to run against it."""

    size: int
    values: Optional[Sequence[int]] = None
    operations: List[Operation] = field(default_factory=list)

    def build_engine(self) -> AlmostDisjointSet:
        return AlmostDisjointSet(self.size, self.values)


def operation_name(operation: Operation) -> str:
    return type(operation).__name__


def operation_elements(operation: Operation) -> Tuple[int, Optional[int]]:
    return operation.a, getattr(operation, "b", None)


__all__ = [
    "Move",
    "Operation",
    "QueryResult",
    "QueryValue",
    "SameSet",
    "Scenario",
    "SetStats",
    "SetSize",
    "SetSum",
    "Union",
    "operation_elements",
    "operation_name",
]
