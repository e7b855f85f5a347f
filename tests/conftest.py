import json

import pandas as pd
import pytest

SAMPLE_CSV = (
    "Disease,County,Year,Sex,Cases\n"
    "Measles,alameda,2020,Male,3\n"
    "Measles,Alameda,2020,Male,2\n"
    "Measles,Fresno,2021,Male,5\n"
    "Measles,FRESNO,2021,Female,4\n"
    "Mumps,los angeles,2019,Total,7\n"
)

SAMPLE_GEOJSON = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {"name": name},
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[x, 37.0], [x + 1, 37.0], [x + 1, 38.0], [x, 38.0], [x, 37.0]]],
            },
        }
        for x, name in [(-122.0, "Alameda"), (-120.0, "Fresno"), (-118.0, "Los Angeles")]
    ],
}


@pytest.fixture
def sample_rows():
    """The three Measles rows used throughout the roll-up scenarios."""
    return pd.DataFrame(
        {
            "Disease": ["Measles", "Measles", "Measles"],
            "County": ["Alameda", "Alameda", "Fresno"],
            "Year": pd.array([2020, 2020, 2021], dtype="Int64"),
            "Sex": ["Male", "Male", "Male"],
            "Cases": pd.array([3, 2, 5], dtype="Int64"),
        }
    )


@pytest.fixture
def data_files(tmp_path):
    """Writes the sample CSV and GeoJSON to disk and returns their paths."""
    csv_path = tmp_path / "cases.csv"
    csv_path.write_text(SAMPLE_CSV, encoding="utf-8")
    geo_path = tmp_path / "counties.geojson"
    geo_path.write_text(json.dumps(SAMPLE_GEOJSON), encoding="utf-8")
    return str(csv_path), str(geo_path)
