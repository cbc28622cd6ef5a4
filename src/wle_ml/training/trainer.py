import logging

import pandas as pd

from wle_ml.common.config import ModelConfig
from wle_ml.domain.columns import PREDICTION_COLUMN
from wle_ml.domain.grades import ordered_labels
from wle_ml.evaluation.metrics import ConfusionReport, calculate_metrics, confusion_report
from wle_ml.models.forest import ForestModel

logger = logging.getLogger(__name__)


def train_model(train_df: pd.DataFrame, features: list[str], label_column: str, config: ModelConfig) -> ForestModel:
    model = ForestModel.from_config(config)
    return model.fit(train_df[features], train_df[label_column])


def evaluate_model(model: ForestModel, holdout_df: pd.DataFrame, label_column: str) -> ConfusionReport:
    y_true = holdout_df[label_column].to_numpy()
    y_pred = model.predict(holdout_df)
    labels = ordered_labels(set(y_true) | set(model.classes_))
    report = confusion_report(y_true, y_pred, labels=labels)
    macro = calculate_metrics(y_true, y_pred)
    logger.info(
        f"Holdout accuracy {report.accuracy_percent:.2f}% "
        f"(out-of-sample error {100 * report.error_rate:.2f}%) on {report.total} rows"
    )
    logger.info(f"Macro precision {macro['precision']:.4f}, recall {macro['recall']:.4f}, F1 {macro['f1']:.4f}")
    return report


def predict_table(model: ForestModel, df: pd.DataFrame, column: str = PREDICTION_COLUMN) -> pd.DataFrame:
    """Copy of ``df`` with one predicted label per row in ``column``."""
    predictions = model.predict(df)
    result = df.copy()
    result[column] = predictions
    logger.info(f"Predicted {len(result)} rows: {result[column].value_counts().sort_index().to_dict()}")
    return result
