import pandas as pd
import pytest

from almost_union_find import __main__ as cli
from almost_union_find.__main__ import main
from almost_union_find.pipeline import ProcessorConfig
from almost_union_find.runner import load_values, process_file


KATTIS_SAMPLE = "5 7\n1 1 2\n2 3 4\n1 3 5\n3 4\n2 4 1\n3 4\n3 3\n"
QUIET = ProcessorConfig(use_tqdm=False)


def test_process_file_writes_text_answers(tmp_path):
    source = tmp_path / "ops.txt"
    source.write_text(KATTIS_SAMPLE)
    target = tmp_path / "answers.txt"

    outcomes = process_file(source, target, QUIET)

    assert len(outcomes) == 1
    assert target.read_text() == "3 12\n3 7\n2 8\n"


def test_process_file_prints_when_no_output(tmp_path, capsys):
    source = tmp_path / "ops.txt"
    source.write_text("universe 3\nunion 1 2\nsame 1 2\nsame 1 3\n")

    process_file(source, config=QUIET)

    assert capsys.readouterr().out.splitlines() == ["yes", "no"]


def test_process_file_writes_csv_with_scenario_column(tmp_path):
    source = tmp_path / "ops.txt"
    source.write_text("2 1\n3 1\n2 2\n1 1 2\n3 2\n")
    target = tmp_path / "answers.csv"

    process_file(source, target, QUIET)

    dataframe = pd.read_csv(target)
    assert dataframe["scenario"].tolist() == [0, 1]
    assert dataframe["result"].tolist() == ["1 1", "2 3"]


def test_process_file_uses_values_table(tmp_path):
    source = tmp_path / "ops.txt"
    source.write_text("universe 3\nunion 1 3\nsum 1\nsum 2\n")
    values = tmp_path / "values.csv"
    pd.DataFrame({"weight": [10, -4, 5]}).to_csv(values, index=False)

    outcomes = process_file(source, tmp_path / "out.txt", QUIET, values_path=values, value_column="weight")

    assert [r.value for r in outcomes[0].results] == [15, -4]


def test_process_file_reports_missing_input(tmp_path, capsys):
    assert process_file(tmp_path / "missing.txt", config=QUIET) is None
    assert "ERROR: Input file not found" in capsys.readouterr().out


def test_process_file_reports_malformed_input(tmp_path, capsys):
    source = tmp_path / "ops.txt"
    source.write_text("universe 2\njoin 1 2\n")
    assert process_file(source, config=QUIET) is None
    assert "line 2: unknown command 'join'" in capsys.readouterr().out


def test_process_file_reports_out_of_range(tmp_path, capsys):
    source = tmp_path / "ops.txt"
    source.write_text("universe 2\nmove 1 3\n")
    assert process_file(source, config=QUIET) is None
    assert "element 3 is out of range [1, 2]" in capsys.readouterr().out


def test_process_file_reports_value_count_mismatch(tmp_path, capsys):
    source = tmp_path / "ops.txt"
    source.write_text("universe 3\nsum 1\n")
    values = tmp_path / "values.csv"
    pd.DataFrame({"value": [1, 2]}).to_csv(values, index=False)
    assert process_file(source, config=QUIET, values_path=values) is None
    assert "has 2 values, universe has 3 elements" in capsys.readouterr().out


def test_load_values_requires_column(tmp_path):
    values = tmp_path / "values.csv"
    pd.DataFrame({"value": [1, 2]}).to_csv(values, index=False)
    assert load_values(values) == [1, 2]
    with pytest.raises(KeyError, match="weight"):
        load_values(values, "weight")


def test_main_runs_end_to_end(tmp_path):
    source = tmp_path / "ops.txt"
    source.write_text(KATTIS_SAMPLE)
    target = tmp_path / "answers.txt"

    assert main([str(source), str(target), "--disable-tqdm", "--check-invariants"]) == 0
    assert target.read_text() == "3 12\n3 7\n2 8\n"


def test_main_custom_words_and_failure_code(tmp_path, capsys):
    source = tmp_path / "ops.txt"
    source.write_text("universe 2\nsame 1 2\n")
    assert main([str(source), "--no", "NO"]) == 0
    assert capsys.readouterr().out.strip() == "NO"

    assert main([str(tmp_path / "nope.txt")]) == 1


def test_process_file_reports_invalid_utf8(tmp_path, capsys):
    source = tmp_path / "ops.txt"
    source.write_bytes(b"universe 2\nsame 1 \xff\n")
    assert process_file(source, config=QUIET) is None
    assert "is not valid UTF-8 text" in capsys.readouterr().out


def test_process_file_reports_unreadable_input(tmp_path, capsys):
    assert process_file(tmp_path, config=QUIET) is None
    assert "ERROR: Could not read" in capsys.readouterr().out


def test_main_enables_progress_bars_without_verbose(tmp_path, monkeypatch):
    captured = {}

    def fake_process_file(input_path, output_path, config, **kwargs):
        captured["config"] = config
        return []

    monkeypatch.setattr(cli, "process_file", fake_process_file)
    source = tmp_path / "ops.txt"

    assert main([str(source)]) == 0
    assert captured["config"].use_tqdm is True
    assert captured["config"].verbose is False

    assert main([str(source), "--disable-tqdm"]) == 0
    assert captured["config"].use_tqdm is False
