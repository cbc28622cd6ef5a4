import pandas as pd
import numpy as np

from wle_ml.domain.columns import METADATA_COLUMNS


def measurement_columns(df: pd.DataFrame, label_column: str, metadata_columns=METADATA_COLUMNS) -> list[str]:
    """Numeric columns that are neither the label nor recording metadata, in table order."""
    numeric = df.select_dtypes(include=[np.number]).columns
    return [col for col in numeric if col != label_column and col not in metadata_columns]


def drop_incomplete_columns(df: pd.DataFrame, columns: list[str]) -> list[str]:
    has_nulls = df[columns].isnull().any()
    return [col for col in columns if not has_nulls[col]]
