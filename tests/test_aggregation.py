import pandas as pd
import plotly.graph_objects as go
import pytest
from aggregation import (
    DashboardState,
    Selection,
    distinct_sorted,
    filter_rows,
    on_selection_changed,
    roll_up,
)
from data_loader import normalize_cases
from tests.conftest import SAMPLE_CSV, SAMPLE_GEOJSON

@pytest.fixture
def sample_state(sample_rows):
    """Application state built around the three Measles rows."""
    return DashboardState(
        rows=sample_rows,
        geojson=SAMPLE_GEOJSON,
        diseases=("Measles",),
        counties=("Alameda", "Fresno"),
    )

def test_distinct_sorted_dedupes_and_sorts():
    rows = normalize_cases(SAMPLE_CSV)
    assert distinct_sorted(rows, "Disease") == ["Measles", "Mumps"]
    assert distinct_sorted(rows, "County") == ["Alameda", "Fresno", "Los Angeles"]

def test_distinct_sorted_is_lexical():
    rows = pd.DataFrame({"County": ["b", "B", "a", "b", "A"]})
    values = distinct_sorted(rows, "County")
    assert values == ["A", "B", "a", "b"]
    assert len(values) == len(set(values))

def test_filter_rows_matches_both_fields_exactly():
    rows = normalize_cases(SAMPLE_CSV)
    subset = filter_rows(rows, "Measles", "Male")
    assert len(subset) == 3
    assert len(subset) <= len(rows)
    assert (subset["Disease"] == "Measles").all()
    assert (subset["Sex"] == "Male").all()

def test_filter_rows_is_case_sensitive():
    rows = normalize_cases(SAMPLE_CSV)
    assert filter_rows(rows, "measles", "Male").empty
    assert filter_rows(rows, "Measles", "male").empty

def test_filter_rows_does_not_modify_input(sample_rows):
    before = sample_rows.copy()
    subset = filter_rows(sample_rows, "Measles", "Male")
    subset.loc[subset.index[0], "Cases"] = 100
    pd.testing.assert_frame_equal(sample_rows, before)

def test_roll_up_scenario(sample_rows):
    subset = filter_rows(sample_rows, "Measles", "Male")
    assert len(subset) == 3
    assert list(roll_up(subset, "County").items()) == [("Alameda", 5), ("Fresno", 5)]
    assert list(roll_up(subset, "Year").items()) == [(2020, 5), (2021, 5)]

def test_roll_up_conserves_total_cases():
    rows = normalize_cases(SAMPLE_CSV)
    for by in ("Year", "County"):
        assert roll_up(rows, by).sum() == rows["Cases"].sum()

def test_roll_up_sorts_years_numerically():
    rows = pd.DataFrame(
        {
            "Year": pd.array([2010, 999, 2009, 10000], dtype="Int64"),
            "Cases": pd.array([1, 2, 3, 4], dtype="Int64"),
        }
    )
    totals = roll_up(rows, "Year")
    assert totals.index.tolist() == [999, 2009, 2010, 10000]
    assert totals.index.is_unique

def test_roll_up_keeps_missing_years_last():
    rows = pd.DataFrame(
        {
            "Year": pd.array([2021, None, 2020], dtype="Int64"),
            "Cases": pd.array([1, 2, 3], dtype="Int64"),
        }
    )
    totals = roll_up(rows, "Year")
    assert totals.iloc[:2].tolist() == [3, 1]
    assert pd.isna(totals.index[-1])
    assert totals.sum() == 6

def test_roll_up_rejects_unknown_key(sample_rows):
    with pytest.raises(ValueError):
        roll_up(sample_rows, "Sex")

def test_no_disease_selected_draws_nothing(sample_state):
    assert on_selection_changed(sample_state, Selection(disease=None, sex="Male")) is None
    assert on_selection_changed(sample_state, Selection(disease="", sex="Male")) is None

def test_selection_returns_chart_and_map(sample_state):
    draw = on_selection_changed(sample_state, Selection(disease="Measles", sex="Male"))
    assert isinstance(draw.chart, go.Figure)
    assert isinstance(draw.map, go.Figure)
    assert list(draw.chart.data[0].x) == [2020, 2021]
    assert list(draw.chart.data[0].y) == [5, 5]
    assert draw.chart.layout.title.text == "Measles cases by year (Male)"
    assert list(draw.map.data[0].locations) == ["Alameda", "Fresno"]

def test_all_counties_has_no_highlight(sample_state):
    draw = on_selection_changed(sample_state, Selection(disease="Measles", sex="Male", county="All"))
    assert len(draw.map.data) == 1

def test_selected_county_adds_one_highlight(sample_state):
    draw = on_selection_changed(sample_state, Selection(disease="Measles", sex="Male", county="Alameda"))
    assert len(draw.map.data) == 2
    assert list(draw.map.data[1].locations) == ["Alameda"]
    assert draw.map.data[1].showscale is False

def test_redraw_does_not_change_state(sample_state):
    before = sample_state.rows.copy()
    on_selection_changed(sample_state, Selection(disease="Measles", sex="Male", county="Fresno"))
    pd.testing.assert_frame_equal(sample_state.rows, before)
