import pandas as pd

from wle_ml.common.errors import FeatureMismatchError, ReducerContractError


def validate_dataframe_schema(df: pd.DataFrame, required_columns: list[str]) -> bool:
    missing = [col for col in required_columns if col not in df.columns]
    if missing:
        raise FeatureMismatchError(f"Missing required columns: {missing}")
    return True


def validate_feature_columns(df: pd.DataFrame, feature_names: list[str]) -> bool:
    """Check that ``df`` carries every training feature as a complete numeric column."""
    validate_dataframe_schema(df, feature_names)
    non_numeric = [col for col in feature_names if not pd.api.types.is_numeric_dtype(df[col])]
    if non_numeric:
        raise FeatureMismatchError(f"Non-numeric feature columns: {non_numeric}")
    with_nulls = [col for col in feature_names if df[col].isna().any()]
    if with_nulls:
        raise FeatureMismatchError(f"Feature columns with missing values: {with_nulls}")
    return True


def ensure_complete(df: pd.DataFrame, columns: list[str]) -> bool:
    with_nulls = [col for col in columns if df[col].isna().any()]
    if with_nulls:
        raise ReducerContractError(f"Null values reached model fitting in columns: {with_nulls}")
    return True
