# schemas.py
"""Data validation schemas for the disease dashboard application."""

import pandas as pd
import pandera as pa
from pandera.typing import Series

class CaseDataSchema(pa.DataFrameModel):
    """Schema for the normalised case-count DataFrame."""
    Disease: Series[str] = pa.Field(nullable=False)
    County: Series[str] = pa.Field(nullable=False)
    Year: Series[pd.Int64Dtype] = pa.Field(nullable=True)
    Sex: Series[str] = pa.Field(nullable=False)
    Cases: Series[pd.Int64Dtype] = pa.Field(nullable=True)

    class Config:
        strict = True
        coerce = True
        ordered = True
