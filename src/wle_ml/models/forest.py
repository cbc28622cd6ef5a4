import logging

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.model_selection import GridSearchCV, StratifiedKFold

from wle_ml.common.config import ModelConfig
from wle_ml.models.base import BaseModel
from wle_ml.validation.schema import ensure_complete, validate_feature_columns

logger = logging.getLogger(__name__)


def mtry_grid(n_features: int, tune_length: int = 3) -> list[int]:
    """Candidate ``max_features`` values, evenly spaced from 2 to the feature count."""
    if n_features <= 2:
        return list(range(1, n_features + 1))
    grid = np.floor(np.linspace(2, n_features, tune_length)).astype(int)
    return sorted(set(int(v) for v in grid))


class ForestModel(BaseModel):
    """Random forest tuned on ``max_features`` by stratified k-fold cross-validation."""

    def __init__(
        self,
        n_estimators: int = 100,
        cv_folds: int = 2,
        tune_length: int = 3,
        random_state: int = 42,
        n_jobs: int = 1,
    ):
        self.n_estimators = n_estimators
        self.cv_folds = cv_folds
        self.tune_length = tune_length
        self.random_state = random_state
        self.n_jobs = n_jobs
        self.estimator: RandomForestClassifier | None = None
        self.feature_names: list[str] = []
        self.classes_: list = []
        self.best_params_: dict = {}
        self.cv_results_: pd.DataFrame | None = None

    @classmethod
    def from_config(cls, config: ModelConfig) -> "ForestModel":
        return cls(
            n_estimators=config.n_estimators,
            cv_folds=config.cv_folds,
            tune_length=config.tune_length,
            random_state=config.random_state,
            n_jobs=config.n_jobs,
        )

    @property
    def is_fitted(self) -> bool:
        return self.estimator is not None

    def fit(self, X: pd.DataFrame, y) -> "ForestModel":
        if self.is_fitted:
            raise RuntimeError("ForestModel is already fitted; create a new one to refit")
        features = list(X.columns)
        ensure_complete(X, features)

        forest = RandomForestClassifier(
            n_estimators=self.n_estimators,
            random_state=self.random_state,
            n_jobs=self.n_jobs,
        )
        cv = StratifiedKFold(n_splits=self.cv_folds, shuffle=True, random_state=self.random_state)
        grid = {"max_features": mtry_grid(len(features), self.tune_length)}
        search = GridSearchCV(forest, grid, cv=cv, scoring="accuracy", n_jobs=self.n_jobs, refit=True)

        logger.info(
            f"Training Random Forest ({self.n_estimators} trees, {self.cv_folds}-fold CV, "
            f"mtry grid {grid['max_features']}) on {len(X)} rows x {len(features)} features"
        )
        search.fit(X.to_numpy(), np.asarray(y))

        self.estimator = search.best_estimator_
        self.feature_names = features
        self.classes_ = list(self.estimator.classes_)
        self.best_params_ = dict(search.best_params_)
        self.cv_results_ = pd.DataFrame(
            {
                "max_features": search.cv_results_["param_max_features"].astype(int),
                "mean_accuracy": search.cv_results_["mean_test_score"],
                "std_accuracy": search.cv_results_["std_test_score"],
            }
        )
        logger.info(f"Best max_features={self.best_params_['max_features']} "
                    f"(CV accuracy {search.best_score_:.4f})")
        return self

    def _feature_matrix(self, X: pd.DataFrame) -> np.ndarray:
        if not self.is_fitted:
            raise RuntimeError("ForestModel must be fitted before predicting")
        validate_feature_columns(X, self.feature_names)
        return X[self.feature_names].to_numpy()

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        return self.estimator.predict(self._feature_matrix(X))

    def predict_proba(self, X: pd.DataFrame) -> pd.DataFrame:
        proba = self.estimator.predict_proba(self._feature_matrix(X))
        return pd.DataFrame(proba, columns=self.classes_, index=X.index)

    def feature_importances(self) -> pd.Series:
        if not self.is_fitted:
            raise RuntimeError("ForestModel must be fitted first")
        importances = pd.Series(self.estimator.feature_importances_, index=self.feature_names)
        return importances.sort_values(ascending=False)
