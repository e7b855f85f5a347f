# -*- coding: utf-8 -*-
import logging

import streamlit as st

import config
from aggregation import filter_rows, on_selection_changed
from data_loader import DataLoadError, load_dashboard
from ui import (
    setup_page_config,
    display_header_and_about,
    display_load_error,
    display_sidebar,
    display_download_button,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@st.cache_resource(show_spinner="Loading case data and county boundaries...")
def get_dashboard_state(csv_source, geojson_source):
    """Loads the data once per pair of sources. Failures are not cached."""
    return load_dashboard(csv_source, geojson_source)


def main() -> None:
    """Main function to run the Streamlit application."""
    setup_page_config()
    display_header_and_about()

    try:
        state = get_dashboard_state(config.CSV_SOURCE, config.GEOJSON_SOURCE)
    except DataLoadError as e:
        display_load_error(str(e))
        st.stop()

    selection = display_sidebar(state)

    draw = on_selection_changed(state, selection)
    if draw is None:
        st.info("Select a disease in the sidebar to see its yearly trend and county map.")
        st.stop()

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(draw.chart, use_container_width=True)
    with col2:
        st.plotly_chart(draw.map, use_container_width=True)

    display_download_button(filter_rows(state.rows, selection.disease, selection.sex), selection)
    st.markdown("---")
    st.markdown("Data Source: California Department of Public Health, infectious diseases by county, year and sex.")


if __name__ == "__main__":
    main()
