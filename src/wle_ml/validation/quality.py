import pandas as pd


def check_data_quality(df: pd.DataFrame, label_column: str | None = None) -> dict:
    missing = df.isnull().sum()
    quality_report = {
        "total_rows": len(df),
        "total_columns": df.shape[1],
        "missing_values": {col: int(n) for col, n in missing.items()},
        "columns_with_missing": int((missing > 0).sum()),
        "empty_columns": int((missing == len(df)).sum()) if len(df) else 0,
        "duplicate_rows": int(df.duplicated().sum()),
    }

    if label_column is not None and label_column in df.columns:
        counts = df[label_column].value_counts().sort_index()
        quality_report["label_distribution"] = {str(k): int(v) for k, v in counts.items()}

    return quality_report
