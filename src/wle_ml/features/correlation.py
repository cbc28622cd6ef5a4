import logging
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


@dataclass
class CorrelationPruning:
    kept: list[str]
    removed: list[str] = field(default_factory=list)
    # (kept column, removed column, absolute correlation) for each removal
    pairs: list[tuple] = field(default_factory=list)


def pairwise_correlation(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    """
    Pearson correlation over pairwise-complete observations.

    Pairs without a defined correlation (a constant column, or fewer than two
    shared non-null rows) are reported as 0. The diagonal is 0 so the largest
    entry is always an inter-column correlation.
    """
    corr = df[columns].corr(method="pearson").fillna(0.0)
    values = corr.to_numpy(copy=True)
    np.fill_diagonal(values, 0.0)
    return pd.DataFrame(values, index=corr.index, columns=corr.columns)


def _column_to_remove(abs_corr: pd.DataFrame, first: str, second: str, cutoff: float) -> str:
    # Most pairs above the cutoff, then highest mean |r|, then later column.
    n_high = (abs_corr > cutoff).sum()
    if n_high[first] != n_high[second]:
        return first if n_high[first] > n_high[second] else second

    n_others = max(len(abs_corr) - 1, 1)
    mean_first = abs_corr[first].sum() / n_others
    mean_second = abs_corr[second].sum() / n_others
    if not np.isclose(mean_first, mean_second):
        return first if mean_first > mean_second else second
    return second


def prune_correlated(corr: pd.DataFrame, cutoff: float = 0.7) -> CorrelationPruning:
    """Greedily remove columns until no pair's absolute correlation exceeds ``cutoff``."""
    abs_corr = corr.abs()
    removed, pairs = [], []

    while len(abs_corr) > 1:
        values = np.triu(abs_corr.to_numpy(), k=1)
        # argmax returns the first maximum in row-major (column) order
        i, j = np.unravel_index(np.argmax(values), values.shape)
        strongest = values[i, j]
        if strongest <= cutoff:
            break

        first, second = abs_corr.columns[i], abs_corr.columns[j]
        drop = _column_to_remove(abs_corr, first, second, cutoff)
        keep = second if drop == first else first
        logger.debug(f"|r({first}, {second})| = {strongest:.3f}; removing {drop}")

        removed.append(drop)
        pairs.append((keep, drop, float(strongest)))
        abs_corr = abs_corr.drop(index=drop, columns=drop)

    return CorrelationPruning(kept=list(abs_corr.columns), removed=removed, pairs=pairs)
