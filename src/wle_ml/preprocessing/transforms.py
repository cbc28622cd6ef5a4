import pandas as pd
import numpy as np

from wle_ml.domain.columns import NA_TOKENS


def coerce_numeric(df: pd.DataFrame) -> pd.DataFrame:
    """Convert every column whose non-null values all parse as numbers to float."""
    df_num = df.copy()
    for col in df_num.columns:
        if pd.api.types.is_numeric_dtype(df_num[col]):
            continue
        converted = pd.to_numeric(df_num[col], errors="coerce")
        # Columns left entirely null by the token replacement are numeric too.
        if converted.notna().sum() == df_num[col].notna().sum():
            df_num[col] = converted.astype(float)
    return df_num


def normalize_missing(df: pd.DataFrame, tokens=NA_TOKENS) -> pd.DataFrame:
    df_norm = df.replace(list(tokens), np.nan)
    return coerce_numeric(df_norm)
