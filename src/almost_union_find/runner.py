"""Convenience helpers for running operation files end-to-end."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pandas as pd

from .formatting import render_results
from .parsing import MalformedInputError, parse_text
from .pipeline import OperationProcessor, ProcessorConfig, ProcessorResult
from .structures import ElementOutOfRangeError


def process_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    config: Optional[ProcessorConfig] = None,
    input_format: str = "auto",
    values_path: str | Path | None = None,
    value_column: str = "value",
) -> List[ProcessorResult] | None:
    """Run every scenario in `input_path` and write the rendered answers."""

    input_path = Path(input_path)
    try:
        scenarios = parse_text(input_path.read_text(), input_format)
    except FileNotFoundError:
        print(f"ERROR: Input file not found at '{input_path}'.")
        return None
    except UnicodeDecodeError as exc:
        print(f"ERROR: '{input_path}' is not valid UTF-8 text: {exc}")
        return None
    except OSError as exc:
        print(f"ERROR: Could not read '{input_path}': {exc}")
        return None
    except MalformedInputError as exc:
        print(f"ERROR: Could not parse '{input_path}': {exc}")
        return None

    if values_path is not None:
        try:
            values = load_values(values_path, value_column)
        except FileNotFoundError:
            print(f"ERROR: Values file not found at '{values_path}'.")
            return None
        except (KeyError, ValueError) as exc:
            print(f"ERROR: {exc}")
            return None
        for scenario in scenarios:
            if len(values) != scenario.size:
                print(f"ERROR: '{values_path}' has {len(values)} values, universe has {scenario.size} elements.")
                return None
            scenario.values = values

    processor = OperationProcessor(config)
    outcomes: List[ProcessorResult] = []
    try:
        for scenario in scenarios:
            outcomes.append(processor.run(scenario))
    except ElementOutOfRangeError as exc:
        print(f"ERROR: {exc}")
        return None

    if output_path is not None:
        _save_results(outcomes, Path(output_path), processor.config)
    else:
        for outcome in outcomes:
            for line in render_results(outcome.results, processor.config.output):
                print(line)
    return outcomes


def load_values(path: str | Path, column: str = "value") -> List[int]:
    """Read element values, in element order, from a CSV or Excel table."""

    dataframe = _load_dataframe(Path(path))
    if column not in dataframe.columns:
        raise KeyError(f"Column '{column}' not found in '{path}'")
    series = pd.to_numeric(dataframe[column], errors="raise")
    if series.isna().any():
        raise ValueError(f"Column '{column}' in '{path}' has missing values")
    if (series != series.round()).any():
        raise ValueError(f"Column '{column}' in '{path}' must hold integers")
    return [int(v) for v in series]


def _load_dataframe(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix in {".xls", ".xlsx"}:
        return pd.read_excel(path)
    raise ValueError(f"Unsupported values file format: '{suffix}'")


def _save_results(outcomes: List[ProcessorResult], path: Path, config: ProcessorConfig) -> None:
    suffix = path.suffix.lower()
    if suffix in {".csv", ".xlsx"}:
        frames = []
        for scenario_index, outcome in enumerate(outcomes):
            frame = outcome.dataframe.copy()
            frame.insert(0, "scenario", scenario_index)
            frames.append(frame)
        dataframe = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame()
        if suffix == ".csv":
            dataframe.to_csv(path, index=False)
        else:
            dataframe.to_excel(path, index=False)
        return

    lines = [line for outcome in outcomes for line in render_results(outcome.results, config.output)]
    path.write_text("".join(f"{line}\n" for line in lines))
