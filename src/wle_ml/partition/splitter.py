import logging
import math

import numpy as np
import pandas as pd

from wle_ml.common.errors import DataValidationError

logger = logging.getLogger(__name__)


def stratified_split(
    df: pd.DataFrame, label_column: str, train_fraction: float = 0.8, random_state: int = 42
):
    """
    Split ``df`` into a training and a holdout subset, stratified on ``label_column``.

    Every label stratum is shuffled on its own and its first ``ceil(n * train_fraction)``
    rows go to the training subset. Both subsets keep the original row order and index.
    """
    if not 0 < train_fraction < 1:
        raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")
    if label_column not in df.columns:
        raise DataValidationError(f"Label column '{label_column}' not found")
    if df[label_column].isna().any():
        raise DataValidationError(f"Label column '{label_column}' contains missing values")

    rng = np.random.RandomState(random_state)
    labels = df[label_column].to_numpy()
    train_positions = []

    for label in sorted(pd.unique(labels), key=str):
        positions = np.flatnonzero(labels == label)
        rng.shuffle(positions)
        n_train = math.ceil(len(positions) * train_fraction)
        train_positions.append(positions[:n_train])

    train_mask = np.zeros(len(df), dtype=bool)
    if train_positions:
        train_mask[np.concatenate(train_positions)] = True

    train_df, holdout_df = df[train_mask], df[~train_mask]
    logger.info(f"Stratified split: {len(train_df)} training rows, {len(holdout_df)} holdout rows")
    return train_df, holdout_df
