import logging
from dataclasses import dataclass, field

import pandas as pd

from wle_ml.common.config import ReducerConfig
from wle_ml.common.errors import DataValidationError
from wle_ml.features.correlation import CorrelationPruning, pairwise_correlation, prune_correlated
from wle_ml.features.filters import drop_incomplete_columns, measurement_columns
from wle_ml.features.ranking import cfs_select, information_gain

logger = logging.getLogger(__name__)


@dataclass
class ReductionReport:
    measurement_columns: list[str]
    complete_columns: list[str]
    dropped_null_columns: list[str]
    pruning: CorrelationPruning
    information_gain: pd.Series
    selected: list[str] = field(default_factory=list)

    def summary(self) -> dict:
        return {
            "measurement_columns": len(self.measurement_columns),
            "dropped_null_columns": len(self.dropped_null_columns),
            "dropped_correlated_columns": self.pruning.removed,
            "surviving_columns": len(self.pruning.kept),
            "selected": self.selected,
        }


class FeatureReducer:
    """Null-column elimination, correlation pruning, then CFS selection on a training table."""

    def __init__(self, config: ReducerConfig | None = None, label_column: str = "classe"):
        self.config = config or ReducerConfig()
        self.label_column = label_column

    def fit(self, df: pd.DataFrame) -> ReductionReport:
        if self.label_column not in df.columns:
            raise DataValidationError(f"Label column '{self.label_column}' not found")
        labels = df[self.label_column]

        measured = measurement_columns(df, self.label_column, self.config.metadata_columns)
        complete = drop_incomplete_columns(df, measured)
        dropped_null = [col for col in measured if col not in complete]
        logger.info(
            f"{len(measured)} measurement columns, {len(dropped_null)} dropped for missing values"
        )
        if not complete:
            raise DataValidationError("Every measurement column contains missing values")

        pruning = prune_correlated(pairwise_correlation(df, complete), self.config.correlation_cutoff)
        logger.info(
            f"Correlation pruning at {self.config.correlation_cutoff}: "
            f"removed {len(pruning.removed)}, kept {len(pruning.kept)}"
        )

        gain = information_gain(df, pruning.kept, labels, self.config.n_bins)
        selected = cfs_select(df, pruning.kept, labels, self.config.n_bins, self.config.max_stale)
        logger.info(f"Selected features: {selected}")

        return ReductionReport(
            measurement_columns=measured,
            complete_columns=complete,
            dropped_null_columns=dropped_null,
            pruning=pruning,
            information_gain=gain,
            selected=selected,
        )
