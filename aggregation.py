# -*- coding: utf-8 -*-
"""
Filtering and roll-up of the case table, plus the selection handler that turns
the current dashboard selection into chart and map figures.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

import pandas as pd
import plotly.graph_objects as go

from config import ALL_COUNTIES
from plotting import build_county_map, build_trend_chart

logger = logging.getLogger(__name__)

# Explicit ordering per roll-up key: numeric for years, lexical for counties
ROLLUP_SORT_KEYS: Dict[str, Callable[[pd.Index], pd.Index]] = {
    "Year": lambda idx: idx.astype("Float64"),
    "County": lambda idx: idx.astype(str),
}


@dataclass(frozen=True)
class DashboardState:
    """Everything loaded at startup. Built once, never modified."""
    rows: pd.DataFrame
    geojson: Dict[str, Any]
    diseases: Tuple[str, ...]
    counties: Tuple[str, ...]


@dataclass(frozen=True)
class Selection:
    disease: Optional[str]
    sex: str
    county: str = ALL_COUNTIES


class DrawRequests(NamedTuple):
    chart: go.Figure
    map: go.Figure


def distinct_sorted(rows: pd.DataFrame, column: str) -> List[str]:
    """Returns the distinct values of ``column`` in ascending lexical order."""
    return sorted(rows[column].dropna().unique().tolist())


def filter_rows(rows: pd.DataFrame, disease: str, sex: str) -> pd.DataFrame:
    """Returns a new frame with the rows matching both ``disease`` and ``sex`` exactly."""
    mask = (rows["Disease"] == disease) & (rows["Sex"] == sex)
    return rows[mask].copy()


def roll_up(rows: pd.DataFrame, by: str) -> pd.Series:
    """
    Sums the ``Cases`` column per unique value of ``by``.

    Args:
        rows: Case rows, usually already filtered.
        by: Roll-up key, either "Year" or "County".

    Returns:
        pd.Series: Summed cases named "Cases", indexed by key in ascending order.
        Rows with a missing key form their own group, placed last.
    """
    if by not in ROLLUP_SORT_KEYS:
        raise ValueError(f"Cannot roll up by '{by}'. Expected one of {list(ROLLUP_SORT_KEYS)}.")

    totals = rows.groupby(by, dropna=False, sort=False)["Cases"].sum()
    totals = totals.sort_index(key=ROLLUP_SORT_KEYS[by], na_position="last")
    totals.name = "Cases"
    return totals


def on_selection_changed(state: DashboardState, selection: Selection) -> Optional[DrawRequests]:
    """
    Recomputes both figures for the current selection.

    Nothing is drawn until a disease is chosen, in which case None is returned.
    """
    if not selection.disease:
        return None

    subset = filter_rows(state.rows, selection.disease, selection.sex)
    yearly = roll_up(subset, "Year")
    by_county = roll_up(subset, "County")

    highlight = None if selection.county == ALL_COUNTIES else selection.county
    logger.debug(
        "Redrawing %s (%s): %d matching rows, highlight=%s",
        selection.disease, selection.sex, len(subset), highlight,
    )
    return DrawRequests(
        chart=build_trend_chart(yearly, selection.disease, selection.sex),
        map=build_county_map(by_county, state.geojson, selection.disease, highlight),
    )
