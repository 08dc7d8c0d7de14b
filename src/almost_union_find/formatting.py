"""Rendering of query results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import pandas as pd

from .operations import QueryResult, QueryValue, operation_elements, operation_name


@dataclass
class OutputConfig:
    """How query answers are written out."""

    yes: str = "yes"
    no: str = "no"
    separator: str = " "


def render_value(value: QueryValue, config: OutputConfig | None = None) -> str:
    config = config or OutputConfig()
    if isinstance(value, bool):
        return config.yes if value else config.no
    if isinstance(value, tuple):
        return config.separator.join(str(part) for part in value)
    return str(value)


def render_results(results: Iterable[QueryResult], config: OutputConfig | None = None) -> List[str]:
    """Return one output line per query result, in stream order."""

    return [render_value(result.value, config) for result in results]


def results_to_dataframe(results: Iterable[QueryResult], config: OutputConfig | None = None) -> pd.DataFrame:
    rows = []
    for result in results:
        element, other = operation_elements(result.operation)
        rows.append(
            {
                "index": result.index,
                "operation": operation_name(result.operation),
                "element": element,
                "other": other,
                "result": render_value(result.value, config),
            }
        )
    dataframe = pd.DataFrame(rows, columns=["index", "operation", "element", "other", "result"])
    dataframe["other"] = dataframe["other"].astype("Int64")
    return dataframe
