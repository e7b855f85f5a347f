import json
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from io import StringIO
from pathlib import Path
from typing import Any, Dict, Tuple

import geopandas as gpd
import pandas as pd
import pandera as pa
import requests

from aggregation import DashboardState, distinct_sorted
from config import (
    CSV_COLUMNS,
    CSV_SOURCE,
    FEATURE_ID_KEY,
    GEOJSON_SOURCE,
    REQUEST_TIMEOUT_SECONDS,
)
from schemas import CaseDataSchema

logger = logging.getLogger(__name__)

# First word character of every whitespace-delimited word
_WORD_START = re.compile(r"(?<!\S)\w")


class DataLoadError(Exception):
    """Raised when either data source cannot be fetched or parsed."""


def _upper(match: re.Match) -> str:
    return match.group(0).upper()


def title_case(text: str) -> str:
    """Lower-cases ``text`` and capitalises the first letter of each word."""
    return _WORD_START.sub(_upper, text.lower())


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch_text(source: str) -> str:
    if _is_url(source):
        response = requests.get(source, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        return response.text
    return Path(source).read_text(encoding="utf-8")


def fetch_csv_text(source: str) -> str:
    """Fetches the raw case CSV as text."""
    return _fetch_text(source)


def fetch_geojson(source: str) -> Dict[str, Any]:
    """
    Fetches and parses the county boundary GeoJSON.
    Raises ValueError if the payload is not a FeatureCollection.
    """
    geojson = json.loads(_fetch_text(source))
    if not isinstance(geojson, dict) or geojson.get("type") != "FeatureCollection":
        raise ValueError("GeoJSON payload is not a FeatureCollection")
    if not isinstance(geojson.get("features"), list):
        raise ValueError("GeoJSON payload has no feature list")
    return geojson


def load_sources(csv_source: str, geojson_source: str) -> Tuple[str, Dict[str, Any]]:
    """
    Fetches the case CSV and the boundary GeoJSON concurrently.

    Both fetches must succeed. If either one fails the whole load fails with a
    single DataLoadError and nothing is returned.

    Args:
        csv_source: Local path or http(s) URL of the case CSV.
        geojson_source: Local path or http(s) URL of the county GeoJSON.

    Returns:
        tuple: The raw CSV text and the parsed GeoJSON mapping.
    """
    with ThreadPoolExecutor(max_workers=2) as executor:
        csv_future = executor.submit(fetch_csv_text, csv_source)
        geo_future = executor.submit(fetch_geojson, geojson_source)

        try:
            csv_text = csv_future.result()
        except (requests.RequestException, OSError, UnicodeDecodeError) as e:
            logger.error("Fetching %s failed: %s", csv_source, e)
            raise DataLoadError(f"CSV not found: {csv_source}") from e

        try:
            geojson = geo_future.result()
        except (requests.RequestException, OSError, ValueError) as e:
            logger.error("Fetching %s failed: %s", geojson_source, e)
            raise DataLoadError(f"GeoJSON not found: {geojson_source}") from e

    return csv_text, geojson


def _to_integer(values: pd.Series) -> pd.Series:
    # Anything that is not a whole number within int64 range becomes <NA>
    numeric = pd.to_numeric(values.str.strip(), errors="coerce")
    numeric = numeric.where((numeric.mod(1) == 0) & numeric.abs().lt(2**63))
    return numeric.astype("Int64")


def normalize_cases(csv_text: str) -> pd.DataFrame:
    """
    Maps the raw case CSV into the normalised table, one row per data line in
    source order.

    Disease and Sex pass through unchanged, County is title-cased, and Year and
    Cases are parsed as integers. Unparsable numbers are kept as missing values
    rather than rejecting the row.
    """
    try:
        raw = pd.read_csv(StringIO(csv_text), dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise DataLoadError(f"CSV could not be parsed: {e}") from e

    missing = [col for col in CSV_COLUMNS if col not in raw.columns]
    if missing:
        raise DataLoadError(f"CSV is missing expected columns: {missing}")

    rows = pd.DataFrame(
        {
            "Disease": raw["Disease"],
            "County": raw["County"].map(title_case),
            "Year": _to_integer(raw["Year"]),
            "Sex": raw["Sex"],
            "Cases": _to_integer(raw["Cases"]),
        }
    )

    for col in ("Year", "Cases"):
        n_missing = int(rows[col].isna().sum())
        if n_missing:
            logger.warning("%d %s value(s) were not whole numbers and are treated as missing.", n_missing, col)

    try:
        return CaseDataSchema.validate(rows)
    except pa.errors.SchemaError as e:
        raise DataLoadError(f"Case data validation failed: {e}") from e


def _warn_unmapped_counties(counties: Tuple[str, ...], geojson: Dict[str, Any]) -> None:
    gdf = gpd.GeoDataFrame.from_features(geojson["features"])
    name_col = FEATURE_ID_KEY.split(".", 1)[1]
    known = set(gdf[name_col]) if name_col in gdf.columns else set()
    unmapped = [county for county in counties if county not in known]
    if unmapped:
        logger.warning("%d county name(s) have no boundary and cannot be coloured: %s", len(unmapped), ", ".join(unmapped))


def load_dashboard(csv_source: str = CSV_SOURCE, geojson_source: str = GEOJSON_SOURCE) -> DashboardState:
    """
    Loads both sources and builds the application state used by every redraw.
    Raises DataLoadError if anything about the load fails.
    """
    csv_text, geojson = load_sources(csv_source, geojson_source)
    rows = normalize_cases(csv_text)

    state = DashboardState(
        rows=rows,
        geojson=geojson,
        diseases=tuple(distinct_sorted(rows, "Disease")),
        counties=tuple(distinct_sorted(rows, "County")),
    )
    try:
        _warn_unmapped_counties(state.counties, geojson)
    except Exception as e:
        raise DataLoadError(f"GeoJSON features could not be read: {e}") from e

    logger.info(
        "Loaded %d case rows and %d boundary features.", len(rows), len(geojson["features"])
    )
    return state
