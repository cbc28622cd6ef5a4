"""
Class-separation utility of measurement columns.

Numeric columns are quantile-binned, then scored with entropy-based measures:
information gain against the label for ranking, and symmetric uncertainty for
the correlation-based feature-subset selection (CFS) merit.
"""

import logging
import math

import numpy as np
import pandas as pd
from scipy.stats import entropy

logger = logging.getLogger(__name__)


def discretize(values, n_bins: int = 10) -> np.ndarray:
    """Quantile-bin a numeric column into integer codes; nulls get their own code (-1)."""
    values = pd.Series(values).reset_index(drop=True)
    codes = np.full(len(values), -1, dtype=int)
    present = values.notna().to_numpy()
    observed = values[present]
    if observed.nunique() <= n_bins:
        codes[present] = pd.factorize(observed, sort=True)[0]
    else:
        codes[present] = np.asarray(pd.qcut(observed, q=n_bins, labels=False, duplicates="drop"), dtype=int)
    return codes


def label_codes(labels) -> np.ndarray:
    return pd.factorize(pd.Series(labels).astype(str), sort=True)[0]


def _entropy(codes: np.ndarray) -> float:
    _, counts = np.unique(codes, return_counts=True)
    return float(entropy(counts, base=2))


def _joint_entropy(a: np.ndarray, b: np.ndarray) -> float:
    _, counts = np.unique(np.column_stack([a, b]), axis=0, return_counts=True)
    return float(entropy(counts, base=2))


def _information_gain(feature_codes: np.ndarray, class_codes: np.ndarray) -> float:
    gain = _entropy(class_codes) + _entropy(feature_codes) - _joint_entropy(feature_codes, class_codes)
    return max(gain, 0.0)


def symmetric_uncertainty(a: np.ndarray, b: np.ndarray) -> float:
    h_a, h_b = _entropy(a), _entropy(b)
    if h_a + h_b == 0:
        return 0.0
    gain = h_a + h_b - _joint_entropy(a, b)
    return max(2.0 * gain / (h_a + h_b), 0.0)


def information_gain(df: pd.DataFrame, columns: list[str], labels, n_bins: int = 10) -> pd.Series:
    """Information gain (bits) of each column about the label, highest first."""
    y = label_codes(labels)
    scores = pd.Series(
        {col: _information_gain(discretize(df[col], n_bins), y) for col in columns}, dtype=float
    )
    return scores.sort_values(ascending=False, kind="mergesort")


class _MeritCache:
    """CFS merit of column subsets with memoized symmetric uncertainties."""

    def __init__(self, df: pd.DataFrame, columns: list[str], labels, n_bins: int):
        self.binned = {col: discretize(df[col], n_bins) for col in columns}
        y = label_codes(labels)
        self.class_su = {col: symmetric_uncertainty(self.binned[col], y) for col in columns}
        self._pair_su = {}

    def feature_su(self, a: str, b: str) -> float:
        key = (a, b) if a < b else (b, a)
        if key not in self._pair_su:
            self._pair_su[key] = symmetric_uncertainty(self.binned[a], self.binned[b])
        return self._pair_su[key]

    def merit(self, subset: tuple) -> float:
        k = len(subset)
        if k == 0:
            return 0.0
        r_cf = sum(self.class_su[col] for col in subset) / k
        if k == 1:
            r_ff = 0.0
        else:
            pair_sus = [self.feature_su(a, b) for i, a in enumerate(subset) for b in subset[i + 1:]]
            r_ff = sum(pair_sus) / len(pair_sus)
        denom = math.sqrt(k + k * (k - 1) * r_ff)
        return k * r_cf / denom if denom > 0 else 0.0


def cfs_select(df: pd.DataFrame, columns: list[str], labels, n_bins: int = 10, max_stale: int = 5) -> list[str]:
    """
    Correlation-based feature-subset selection with best-first forward search.

    The merit of a subset of k columns is ``k * mean(r_cf) / sqrt(k + k(k-1) * mean(r_ff))``,
    where r_cf is the symmetric uncertainty between a column and the label and r_ff
    between two columns. The search expands the most promising subset on the open
    list and stops after ``max_stale`` expansions that did not improve the best merit.

    Returns a non-empty subset of ``columns`` in their original order. When no subset
    has positive merit, the column with the highest information gain is returned.
    """
    if not columns:
        raise ValueError("cfs_select needs at least one candidate column")

    position = {col: i for i, col in enumerate(columns)}
    cache = _MeritCache(df, columns, labels, n_bins)

    best_subset, best_merit = (), 0.0
    open_list = [(0.0, ())]
    visited = {frozenset()}
    stale = 0

    while open_list and stale < max_stale:
        open_list.sort(key=lambda item: (-item[0], len(item[1]), [position[c] for c in item[1]]))
        _, subset = open_list.pop(0)
        improved = False
        for col in columns:
            if col in subset:
                continue
            candidate = tuple(sorted(subset + (col,), key=position.get))
            key = frozenset(candidate)
            if key in visited:
                continue
            visited.add(key)
            merit = cache.merit(candidate)
            open_list.append((merit, candidate))
            if merit > best_merit + 1e-12:
                best_subset, best_merit = candidate, merit
                improved = True
        stale = 0 if improved else stale + 1

    if not best_subset:
        top = information_gain(df, columns, labels, n_bins).index[0]
        logger.warning(f"No column subset has positive merit; falling back to {top}")
        return [top]

    logger.info(f"CFS selected {len(best_subset)} of {len(columns)} columns (merit {best_merit:.4f})")
    return list(best_subset)
