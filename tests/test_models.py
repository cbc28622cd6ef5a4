import numpy as np
import pytest

from wle_ml.common.errors import FeatureMismatchError, ReducerContractError
from wle_ml.models.forest import ForestModel, mtry_grid

FEATURES = ["roll_belt", "gyros_arm_x", "accel_dumbbell_y"]


def _fit(observations, **kwargs):
    params = {"n_estimators": 20, "random_state": 3}
    params.update(kwargs)
    return ForestModel(**params).fit(observations[FEATURES], observations["classe"])


def test_mtry_grid():
    assert mtry_grid(1) == [1]
    assert mtry_grid(2) == [1, 2]
    assert mtry_grid(3) == [2, 3]
    assert mtry_grid(52) == [2, 27, 52]


def test_fit_records_features_and_tuning(observations):
    model = _fit(observations)

    assert model.feature_names == FEATURES
    assert model.classes_ == ["A", "B", "C", "D", "E"]
    assert model.best_params_["max_features"] in mtry_grid(len(FEATURES))
    assert len(model.cv_results_) == len(mtry_grid(len(FEATURES)))
    assert model.feature_importances().index[0] == "roll_belt"


def test_fit_is_deterministic_for_fixed_seed(observations):
    first = _fit(observations).predict(observations)
    second = _fit(observations, n_jobs=2).predict(observations)
    assert np.array_equal(first, second)


def test_fit_rejects_missing_values(observations):
    with pytest.raises(ReducerContractError):
        ForestModel(n_estimators=5).fit(observations[["roll_belt", "magnet_forearm_z"]], observations["classe"])


def test_model_cannot_be_refitted(observations):
    model = _fit(observations)
    with pytest.raises(RuntimeError):
        model.fit(observations[FEATURES], observations["classe"])


def test_predict_rejects_missing_feature(observations):
    model = _fit(observations)
    with pytest.raises(FeatureMismatchError, match="gyros_arm_x"):
        model.predict(observations.drop(columns="gyros_arm_x"))


def test_predict_rejects_non_numeric_feature(observations):
    model = _fit(observations)
    broken = observations.assign(roll_belt=observations["roll_belt"].astype(str))
    with pytest.raises(FeatureMismatchError, match="Non-numeric"):
        model.predict(broken)


def test_predict_ignores_extra_columns_and_order(observations):
    model = _fit(observations)
    shuffled = observations[list(reversed(observations.columns))]
    assert np.array_equal(model.predict(shuffled), model.predict(observations))


def test_predict_proba_columns(observations):
    proba = _fit(observations).predict_proba(observations.head(5))
    assert list(proba.columns) == ["A", "B", "C", "D", "E"]
    assert np.allclose(proba.sum(axis=1), 1.0)


def test_save_and_load(observations, tmp_path):
    model = _fit(observations)
    path = model.save(tmp_path / "models" / "model.joblib")

    loaded = ForestModel.load(path)
    assert loaded.feature_names == FEATURES
    assert np.array_equal(loaded.predict(observations), model.predict(observations))


def test_load_rejects_other_objects(tmp_path):
    import joblib

    path = tmp_path / "other.joblib"
    joblib.dump({"model": None}, path)
    with pytest.raises(TypeError):
        ForestModel.load(path)
