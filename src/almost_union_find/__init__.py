"""Almost Union-Find library initialization."""

from .structures import AlmostDisjointSet, ElementOutOfRangeError, InvariantViolationError
from .operations import Move, QueryResult, SameSet, Scenario, SetSize, SetStats, SetSum, Union
from .parsing import MalformedInputError, parse_commands, parse_kattis, parse_text
from .formatting import OutputConfig, render_results, results_to_dataframe
from .pipeline import OperationProcessor, ProcessorConfig, ProcessorResult, ProcessorStats
from .runner import process_file

__all__ = [
    "AlmostDisjointSet",
    "ElementOutOfRangeError",
    "InvariantViolationError",
    "Move",
    "QueryResult",
    "SameSet",
    "Scenario",
    "SetSize",
    "SetStats",
    "SetSum",
    "Union",
    "MalformedInputError",
    "parse_commands",
    "parse_kattis",
    "parse_text",
    "OutputConfig",
    "render_results",
    "results_to_dataframe",
    "OperationProcessor",
    "ProcessorConfig",
    "ProcessorResult",
    "ProcessorStats",
    "process_file",
]
