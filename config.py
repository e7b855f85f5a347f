# config.py

"""
Central configuration file for the Infectious Disease County dashboard.
This file stores constants and settings to make the application more maintainable.
"""

from typing import Final, Tuple

# Data files for the dashboard (local paths or http(s) URLs)
CSV_SOURCE: Final[str] = "infectious-diseases-by-county-year-and-sex.csv"
GEOJSON_SOURCE: Final[str] = "california_counties.geojson"

REQUEST_TIMEOUT_SECONDS: Final[int] = 30

# Header columns the case CSV must provide
CSV_COLUMNS: Final[Tuple[str, ...]] = ("Disease", "County", "Year", "Sex", "Cases")

# The sex control is static; a render always needs one of these
SEX_OPTIONS: Final[Tuple[str, ...]] = ("Male", "Female", "Total")

# County control default, meaning "no highlighted county"
ALL_COUNTIES: Final[str] = "All"

# GeoJSON property joined against county names on the map
FEATURE_ID_KEY: Final[str] = "properties.name"

# --- Styling ---
FONT_FAMILY: Final[str] = "Orbitron"
FONT_COLOR: Final[str] = "#eceff1"
TRANSPARENT: Final[str] = "rgba(0,0,0,0)"
LINE_COLOR: Final[str] = "#18ffff"
MARKER_COLOR: Final[str] = "#b388ff"
HIGHLIGHT_COLOR: Final[str] = "#ff4081"
BORDER_COLOR: Final[str] = "#111"
MAP_COLOR_SCALE: Final[str] = "Viridis"
MAP_CENTER: Final[dict] = {"lat": 37.3, "lon": -119.5}
