from almost_union_find.formatting import OutputConfig, render_results, render_value, results_to_dataframe
from almost_union_find.operations import QueryResult, SameSet, SetSize, SetStats


def test_render_value_uses_yes_no_words():
    assert render_value(True) == "yes"
    assert render_value(False) == "no"
    assert render_value(False, OutputConfig(yes="Y", no="N")) == "N"


def test_render_value_numbers_and_pairs():
    assert render_value(7) == "7"
    assert render_value(-3) == "-3"
    assert render_value((3, 12)) == "3 12"


def test_render_results_keeps_order():
    results = [
        QueryResult(index=2, operation=SetStats(4), value=(3, 12)),
        QueryResult(index=5, operation=SameSet(1, 2), value=True),
    ]
    assert render_results(results) == ["3 12", "yes"]


def test_results_to_dataframe_columns():
    results = [
        QueryResult(index=0, operation=SetSize(1), value=2),
        QueryResult(index=3, operation=SameSet(1, 2), value=False),
    ]
    dataframe = results_to_dataframe(results)
    assert list(dataframe.columns) == ["index", "operation", "element", "other", "result"]
    assert dataframe["operation"].tolist() == ["SetSize", "SameSet"]
    assert dataframe["result"].tolist() == ["2", "no"]
    assert dataframe["other"].isna().tolist() == [True, False]


def test_results_to_dataframe_empty():
    assert results_to_dataframe([]).empty
