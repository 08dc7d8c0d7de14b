"""Core pipeline that drives the engine over an operation stream."""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import numpy as np
import pandas as pd

try:
    from tqdm import tqdm

    _TQDM_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    _TQDM_AVAILABLE = False

from .formatting import OutputConfig, results_to_dataframe
from .operations import Move, Operation, QueryResult, Scenario, Union
from .structures import AlmostDisjointSet, InvariantViolationError


@dataclass
class ProcessorStats:
    """Summary metrics for one processed scenario."""

    operations: int
    unions: int
    moves: int
    queries: int
    set_count: int
    virtual_nodes: int
    runtime_seconds: float


@dataclass
class ProcessorResult:
    """Result bundle returned by :class:`OperationProcessor`."""

    results: List[QueryResult]
    dataframe: pd.DataFrame
    engine: AlmostDisjointSet
    stats: ProcessorStats


@dataclass
class ProcessorConfig:
    """Configuration parameters for :class:`OperationProcessor`."""

    use_tqdm: bool | None = None
    verbose: bool = False
    check_invariants: bool = False
    compact_every: int = 0
    summary_sets: int = 5
    output: OutputConfig = field(default_factory=OutputConfig)


class OperationProcessor:
    """Apply a scenario's operations in order and collect query answers."""

    def __init__(self, config: ProcessorConfig | None = None) -> None:
        self.config = config or ProcessorConfig()

    def run(self, scenario: Scenario) -> ProcessorResult:
        verbose = self.config.verbose
        start_time = time.time()
        if verbose:
            print(f"--- Processing {len(scenario.operations)} operations over {scenario.size} elements ---")

        engine = scenario.build_engine()
        expected_total = int(np.sum(np.asarray(engine.values, dtype=object))) if engine.size else 0
        results: List[QueryResult] = []
        counter: Counter[str] = Counter()

        iterator: Iterable[Operation] = scenario.operations
        if scenario.operations and self._use_tqdm:
            iterator = tqdm(scenario.operations, desc="   Operations", unit="op")

        for index, operation in enumerate(iterator):
            answer = operation.apply(engine)
            if operation.is_query:
                results.append(QueryResult(index=index, operation=operation, value=answer))
                counter["queries"] += 1
            elif isinstance(operation, Union):
                counter["unions"] += 1
            elif isinstance(operation, Move):
                counter["moves"] += 1
                if self.config.compact_every and counter["moves"] % self.config.compact_every == 0:
                    engine.compact()

            if self.config.check_invariants:
                engine.check_invariants()
                check_conservation(engine, expected_total)

        dataframe = results_to_dataframe(results, self.config.output)
        elapsed = time.time() - start_time
        stats = ProcessorStats(
            operations=len(scenario.operations),
            unions=counter["unions"],
            moves=counter["moves"],
            queries=counter["queries"],
            set_count=engine.set_count,
            virtual_nodes=engine.virtual_node_count,
            runtime_seconds=elapsed,
        )

        if verbose:
            self._print_summary(engine, stats)

        return ProcessorResult(results=results, dataframe=dataframe, engine=engine, stats=stats)

    @property
    def _use_tqdm(self) -> bool:
        if self.config.use_tqdm is not None:
            return self.config.use_tqdm and _TQDM_AVAILABLE
        return _TQDM_AVAILABLE

    def _print_summary(self, engine: AlmostDisjointSet, stats: ProcessorStats) -> None:
        print("\n--- Results Summary ---")
        print(f"   - Operations applied: {stats.operations} ({stats.unions} unions, {stats.moves} moves)")
        print(f"   - Queries answered: {stats.queries}")
        print(f"   - Non-empty sets: {stats.set_count}")
        print(f"   - Virtual nodes: {stats.virtual_nodes}")
        summary = summarize_sets(engine)
        if self.config.summary_sets > 0 and not summary.empty:
            print("\n   --- Largest Sets ---")
            for rank, row in enumerate(summary.head(self.config.summary_sets).itertuples(index=False), start=1):
                members = list(row.members)
                shown = ", ".join(str(m) for m in members[:5])
                more = ", ..." if len(members) > 5 else ""
                print(f"   Set {rank} (Size: {row.size}, Sum: {row.sum}): {shown}{more}")
        print(f"\n--- Finished in {stats.runtime_seconds:.2f} seconds ---")


def check_conservation(engine: AlmostDisjointSet, expected_total: int) -> None:
    """Raise if the root sums of all non-empty sets do not add up to `expected_total`."""

    roots = list(engine.groups())
    observed = int(np.sum(np.asarray([engine.total[root] for root in roots], dtype=object))) if roots else 0
    if observed != expected_total:
        raise InvariantViolationError(f"set sums add up to {observed}, element values to {expected_total}")


def summarize_sets(engine: AlmostDisjointSet) -> pd.DataFrame:
    """Return one row per non-empty set, largest first."""

    groups: Dict[int, List[int]] = engine.groups()
    roots = np.fromiter(groups.keys(), dtype=np.int64, count=len(groups))
    sizes = np.array([engine.count[root] for root in groups], dtype=np.int64)
    sums = [engine.total[root] for root in groups]
    dataframe = pd.DataFrame(
        {
            "root": roots,
            "size": sizes,
            "sum": pd.Series(sums, dtype=object),
            "members": list(groups.values()),
        }
    )
    order = np.lexsort((roots, -sizes))
    return dataframe.iloc[order].reset_index(drop=True)


__all__ = [
    "OperationProcessor",
    "check_conservation",
    "ProcessorConfig",
    "ProcessorResult",
    "ProcessorStats",
    "summarize_sets",
]
