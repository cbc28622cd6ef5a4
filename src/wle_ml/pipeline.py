"""
End-to-end pipeline: load -> partition -> reduce features -> train/evaluate -> predict.

Every stage returns new objects; the input tables are never modified.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from wle_ml.common.config import PipelineConfig
from wle_ml.common.errors import DataValidationError
from wle_ml.dataio.readers import load_tables, read_observations
from wle_ml.dataio.writers import write_predictions
from wle_ml.evaluation.metrics import ConfusionReport
from wle_ml.evaluation.reports import save_evaluation_report, save_markdown_report
from wle_ml.features.reducer import FeatureReducer, ReductionReport
from wle_ml.models.forest import ForestModel
from wle_ml.partition.splitter import stratified_split
from wle_ml.training.trainer import evaluate_model, predict_table, train_model
from wle_ml.validation.quality import check_data_quality

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    reduction: ReductionReport
    model: ForestModel
    evaluation: ConfusionReport
    predictions: pd.DataFrame | None = None

    def summary(self) -> dict:
        return {
            "reduction": self.reduction.summary(),
            "model": {
                "n_estimators": self.model.n_estimators,
                "cv_folds": self.model.cv_folds,
                "best_params": self.model.best_params_,
                "cv_results": self.model.cv_results_.to_dict(orient="records"),
            },
            "evaluation": self.evaluation.to_dict(),
            "feature_importance": self.model.feature_importances().to_dict(),
        }


def _require_path(path, name: str) -> Path:
    if path is None:
        raise DataValidationError(f"No {name} configured")
    return Path(path)


def check_training_table(config: PipelineConfig, train_df: pd.DataFrame) -> pd.DataFrame:
    quality = check_data_quality(train_df, config.label_column)
    logger.info(
        f"Training table: {quality['total_rows']} rows, "
        f"{quality['columns_with_missing']} columns with missing values, "
        f"labels {quality.get('label_distribution', {})}"
    )
    if config.label_column not in train_df.columns:
        raise DataValidationError(f"Training table has no label column '{config.label_column}'")
    return train_df


def load_training_table(config: PipelineConfig) -> pd.DataFrame:
    train_df = read_observations(_require_path(config.loader.train_path, "training table"), config.loader.na_values)
    return check_training_table(config, train_df)


def reduce_features(config: PipelineConfig, train_df: pd.DataFrame | None = None):
    """Load (unless given), partition and reduce; returns ``(train, holdout, reduction)``."""
    if train_df is None:
        train_df = load_training_table(config)
    else:
        check_training_table(config, train_df)
    train, holdout = stratified_split(
        train_df,
        config.label_column,
        train_fraction=config.partition.train_fraction,
        random_state=config.partition.random_state,
    )
    reduction = FeatureReducer(config.reducer, config.label_column).fit(train)
    return train, holdout, reduction


def train_and_evaluate(config: PipelineConfig, train_df: pd.DataFrame | None = None):
    train, holdout, reduction = reduce_features(config, train_df)
    model = train_model(train, reduction.selected, config.label_column, config.model)
    evaluation = evaluate_model(model, holdout, config.label_column)
    return reduction, model, evaluation


def save_outputs(result: PipelineResult, config: PipelineConfig) -> Path:
    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    result.model.save(config.model_path)
    logger.info(f"Model saved to {config.model_path}")
    summary = result.summary()
    save_evaluation_report(summary, output_dir / "evaluation.json")
    save_markdown_report(summary, output_dir / "report.md")
    if result.predictions is not None:
        write_predictions(result.predictions, config.predictions_path)
    return output_dir


def run_pipeline(
    config: PipelineConfig,
    train_df: pd.DataFrame | None = None,
    test_df: pd.DataFrame | None = None,
    save: bool = True,
) -> PipelineResult:
    logger.info("=" * 60)
    logger.info("Starting Weight Lifting Exercise quality pipeline")
    logger.info("=" * 60)

    if train_df is None and test_df is None and config.loader.test_path is not None:
        train_path = _require_path(config.loader.train_path, "training table")
        train_df, test_df = load_tables(train_path, config.loader.test_path, config.loader.na_values)
    elif test_df is None and config.loader.test_path is not None:
        test_df = read_observations(config.loader.test_path, config.loader.na_values)

    reduction, model, evaluation = train_and_evaluate(config, train_df)
    predictions = predict_table(model, test_df) if test_df is not None else None
    result = PipelineResult(reduction=reduction, model=model, evaluation=evaluation, predictions=predictions)

    if save:
        save_outputs(result, config)
    return result
