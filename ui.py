# -*- coding: utf-8 -*-
"""
This module contains the UI components for the Streamlit application.
"""
import pandas as pd
import streamlit as st

from aggregation import DashboardState, Selection
from config import ALL_COUNTIES, SEX_OPTIONS

def setup_page_config():
    """Sets the Streamlit page configuration."""
    st.set_page_config(
        page_title="Infectious Disease Dashboard",
        page_icon="🦠",
        layout="wide",
    )

def display_header_and_about():
    """Displays the main title and the 'About' expander."""
    st.title("Infectious Disease Dashboard")
    st.markdown(
        "Explore reported infectious disease cases by year and by county. "
        "Pick a disease and a sex in the sidebar; optionally highlight one county on the map."
    )
    with st.expander("About the data"):
        st.markdown(
            """
            - **Cases:** Reported case counts, summed over every matching row for the selection.
            - **Sex:** Counts are reported separately for males and females, and as a combined total.
            - **County:** County names are normalised to title case so spelling variants are merged.
            """
        )

def display_load_error(message):
    """Shows the single banner used when the data could not be loaded."""
    st.error(f"⚠ {message}")

def display_sidebar(state: DashboardState) -> Selection:
    """
    Renders the sidebar controls.

    Args:
        state (DashboardState): The loaded rows and their selector values.

    Returns:
        Selection: The current disease, sex and county choice.
    """
    with st.sidebar:
        st.header("Dashboard Controls")

        disease = st.selectbox(
            "1. Select Disease:",
            options=list(state.diseases),
            index=None,
            placeholder="Choose a disease",
            key="disease_select",
        )

        sex = st.selectbox(
            "2. Select Sex:",
            options=list(SEX_OPTIONS),
            key="sex_select",
        )

        county = st.selectbox(
            "3. Highlight a County:",
            options=[ALL_COUNTIES, *state.counties],
            key="county_select",
            help="Pick a county to outline it on the map. 'All' shows no highlight.",
        )

        if disease is None:
            st.success("Start Here! 👆 Select a disease to begin.")

    return Selection(disease=disease, sex=sex, county=county)

def display_download_button(subset: pd.DataFrame, selection: Selection):
    """
    Renders the download button in the sidebar.

    Args:
        subset (pd.DataFrame): The filtered rows to be downloaded.
        selection (Selection): The selection the rows were filtered by.
    """
    if not subset.empty:
        st.sidebar.download_button(
            label="Download Selected Data (CSV)",
            data=subset.to_csv(index=False).encode("utf-8"),
            file_name=f"{selection.disease}_{selection.sex}_cases.csv".replace(" ", "_"),
            mime="text/csv",
            key="download_button",
        )
