from typing import Any, Dict, Optional

import pandas as pd
import plotly.graph_objects as go

from config import (
    BORDER_COLOR,
    FEATURE_ID_KEY,
    FONT_COLOR,
    FONT_FAMILY,
    HIGHLIGHT_COLOR,
    LINE_COLOR,
    MAP_CENTER,
    MAP_COLOR_SCALE,
    MARKER_COLOR,
    TRANSPARENT,
)


def _plain(values) -> list:
    # Plotly cannot serialise pd.NA
    return [None if pd.isna(value) else value for value in values]


def build_trend_chart(yearly: pd.Series, disease: str, sex: str) -> go.Figure:
    """Yearly time series of summed cases for one disease and sex."""
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=_plain(yearly.index),
            y=_plain(yearly),
            mode="lines+markers",
            name="Cases",
            line=dict(color=LINE_COLOR, width=3),
            marker=dict(color=MARKER_COLOR, size=6),
        )
    )
    fig.update_layout(
        title=f"{disease} cases by year ({sex})",
        xaxis_title="Year",
        yaxis_title="Cases",
        paper_bgcolor=TRANSPARENT,
        plot_bgcolor=TRANSPARENT,
        font=dict(color=FONT_COLOR, family=FONT_FAMILY),
    )
    return fig


def build_county_map(
    county_totals: pd.Series,
    geojson: Dict[str, Any],
    disease: str,
    highlight: Optional[str] = None,
) -> go.Figure:
    """
    Generates a county choropleth of summed cases.

    When ``highlight`` names a county, a second trace paints just that county in
    a single fixed colour on top of the base layer, without a colour bar.
    """
    fig = go.Figure()
    fig.add_trace(
        go.Choropleth(
            geojson=geojson,
            featureidkey=FEATURE_ID_KEY,
            locations=_plain(county_totals.index),
            z=_plain(county_totals),
            colorscale=MAP_COLOR_SCALE,
            colorbar=dict(title="Cases"),
            marker=dict(line=dict(color=BORDER_COLOR, width=0.4)),
            name="Cases",
        )
    )

    if highlight is not None:
        fig.add_trace(
            go.Choropleth(
                geojson=geojson,
                featureidkey=FEATURE_ID_KEY,
                locations=[highlight],
                z=[1],
                colorscale=[[0, HIGHLIGHT_COLOR], [1, HIGHLIGHT_COLOR]],
                showscale=False,
                marker=dict(line=dict(color=HIGHLIGHT_COLOR, width=1)),
                name=highlight,
            )
        )

    fig.update_layout(
        title=f"{disease} burden by county",
        geo=dict(
            scope="usa",
            center=MAP_CENTER,
            fitbounds="locations",
            bgcolor=TRANSPARENT,
        ),
        paper_bgcolor=TRANSPARENT,
        margin={"r": 0, "t": 40, "l": 0, "b": 0},
        font=dict(color=FONT_COLOR, family=FONT_FAMILY),
    )
    return fig
