import numpy as np
import pandas as pd
import pytest

from wle_ml.common.config import ReducerConfig
from wle_ml.features.correlation import pairwise_correlation, prune_correlated
from wle_ml.features.filters import drop_incomplete_columns, measurement_columns
from wle_ml.features.ranking import cfs_select, discretize, information_gain, symmetric_uncertainty
from wle_ml.features.reducer import FeatureReducer


def _corr(values, columns):
    return pd.DataFrame(values, index=columns, columns=columns)


def test_measurement_columns_skip_metadata_and_label(observations):
    columns = measurement_columns(observations, "classe")
    assert "num_window" not in columns
    assert "user_name" not in columns
    assert "classe" not in columns
    assert columns[0] == "roll_belt"


def test_drop_incomplete_columns_is_idempotent(observations):
    columns = measurement_columns(observations, "classe")
    once = drop_incomplete_columns(observations, columns)
    twice = drop_incomplete_columns(observations, once)

    assert "magnet_forearm_z" not in once
    assert once == twice


def test_pairwise_correlation_uses_complete_pairs():
    df = pd.DataFrame({"a": [1.0, 2.0, 3.0, 4.0, 5.0], "b": [2.0, 4.0, np.nan, 8.0, 10.0]})
    corr = pairwise_correlation(df, ["a", "b"])

    assert corr.loc["a", "b"] == pytest.approx(1.0)
    assert corr.loc["a", "a"] == 0.0


def test_constant_column_is_uncorrelated():
    df = pd.DataFrame({"a": [1.0, 2.0, 3.0, 4.0], "flat": [5.0, 5.0, 5.0, 5.0]})
    corr = pairwise_correlation(df, ["a", "flat"])

    assert corr.loc["a", "flat"] == 0.0
    assert prune_correlated(corr, 0.7).removed == []


def test_single_correlated_pair_loses_one_column():
    rng = np.random.RandomState(0)
    x = rng.normal(size=200)
    df = pd.DataFrame({"x": x, "y": 2 * x + rng.normal(0, 0.1, 200), "z": rng.normal(size=200)})

    pruning = prune_correlated(pairwise_correlation(df, ["x", "y", "z"]), 0.7)

    assert len(pruning.removed) == 1
    assert pruning.removed[0] in {"x", "y"}
    assert "z" in pruning.kept


def test_pruning_leaves_no_pair_above_cutoff(observations):
    columns = ["roll_belt", "pitch_belt", "gyros_arm_x", "accel_dumbbell_y"]
    pruning = prune_correlated(pairwise_correlation(observations, columns), 0.7)

    remaining = pairwise_correlation(observations, pruning.kept).abs()
    assert (remaining.to_numpy() <= 0.7).all()


def test_pruning_removes_column_with_more_high_pairs():
    corr = _corr([[0, 0.9, 0.1], [0.9, 0, 0.8], [0.1, 0.8, 0]], ["p", "q", "r"])
    pruning = prune_correlated(corr, 0.7)

    assert pruning.removed == ["q"]
    assert pruning.kept == ["p", "r"]
    assert pruning.pairs == [("p", "q", 0.9)]


def test_pruning_breaks_ties_on_mean_correlation():
    corr = _corr([[0, 0.9, 0.3], [0.9, 0, 0.5], [0.3, 0.5, 0]], ["p", "q", "r"])
    assert prune_correlated(corr, 0.7).removed == ["q"]

    corr = _corr([[0, 0.9, 0.6], [0.9, 0, 0.2], [0.6, 0.2, 0]], ["p", "q", "r"])
    assert prune_correlated(corr, 0.7).removed == ["p"]


def test_pruning_final_tie_removes_later_column():
    corr = _corr([[0, 0.95], [0.95, 0]], ["first", "second"])
    assert prune_correlated(corr, 0.7).removed == ["second"]


def test_discretize_handles_constant_and_missing_values():
    assert (discretize(pd.Series([3.0] * 5)) == 0).all()

    codes = discretize(pd.Series([1.0, np.nan, 2.0]))
    assert list(codes) == [0, -1, 1]

    codes = discretize(pd.Series(np.arange(100, dtype=float)), n_bins=4)
    assert sorted(set(codes)) == [0, 1, 2, 3]


def test_information_gain_ranks_informative_column_first(observations):
    gain = information_gain(observations, ["gyros_arm_x", "roll_belt"], observations["classe"])
    assert gain.index[0] == "roll_belt"
    assert gain["roll_belt"] > gain["gyros_arm_x"] >= 0


def test_symmetric_uncertainty_bounds():
    a = np.array([0, 0, 1, 1, 2, 2])
    assert symmetric_uncertainty(a, a) == pytest.approx(1.0)
    assert symmetric_uncertainty(a, np.zeros(6, dtype=int)) == 0.0


def test_cfs_skips_exact_duplicate(observations):
    df = observations.assign(roll_copy=observations["roll_belt"])
    selected = cfs_select(df, ["roll_belt", "roll_copy", "gyros_arm_x"], df["classe"])

    assert "roll_belt" in selected
    assert "roll_copy" not in selected


def test_cfs_falls_back_to_single_column():
    df = pd.DataFrame({"flat_a": [1.0] * 10, "flat_b": [2.0] * 10})
    labels = pd.Series(list("ABABABABAB"))
    assert cfs_select(df, ["flat_a", "flat_b"], labels) == ["flat_a"]


def test_cfs_requires_candidates(observations):
    with pytest.raises(ValueError):
        cfs_select(observations, [], observations["classe"])


def test_reducer_on_synthetic_table(observations):
    report = FeatureReducer(ReducerConfig(), "classe").fit(observations)

    assert report.dropped_null_columns == ["magnet_forearm_z"]
    assert len(report.pruning.removed) == 1
    assert report.pruning.removed[0] in {"roll_belt", "pitch_belt"}
    assert 1 <= len(report.selected) <= 3
    assert set(report.selected) <= set(report.pruning.kept)
    assert set(report.selected) <= set(report.complete_columns)


def test_reducer_is_deterministic(observations):
    reducer = FeatureReducer(ReducerConfig(), "classe")
    assert reducer.fit(observations).selected == reducer.fit(observations).selected


def _complementary_table():
    # Two binary columns that each split the grades differently, plus noise and a constant.
    grade_idx = np.arange(100) % 5
    rng = np.random.RandomState(0)
    return pd.DataFrame(
        {
            "roll_arm": (grade_idx >= 2).astype(float),
            "yaw_forearm": (grade_idx % 2 == 0).astype(float),
            "gyros_belt_x": rng.randint(0, 2, 100).astype(float),
            "gyros_belt_y": rng.randint(0, 2, 100).astype(float),
            "total_accel_dumbbell": np.full(100, 9.8),
            "classe": [list("ABCDE")[i] for i in grade_idx],
        }
    )


def test_cfs_combines_complementary_columns():
    df = _complementary_table()
    columns = ["roll_arm", "yaw_forearm", "gyros_belt_x", "gyros_belt_y", "total_accel_dumbbell"]

    assert cfs_select(df, columns, df["classe"]) == ["roll_arm", "yaw_forearm"]
    assert cfs_select(df, columns, df["classe"], max_stale=1) == ["roll_arm", "yaw_forearm"]


def test_cfs_without_expansions_falls_back_to_top_ranked_column():
    df = _complementary_table()
    columns = ["roll_arm", "yaw_forearm", "gyros_belt_x", "gyros_belt_y", "total_accel_dumbbell"]

    assert cfs_select(df, columns, df["classe"], max_stale=0) == ["roll_arm"]
