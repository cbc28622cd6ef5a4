from sklearn.metrics import accuracy_score, cohen_kappa_score, confusion_matrix, f1_score, precision_score, recall_score
from scipy.stats import binomtest
from dataclasses import dataclass, field
import numpy as np
import pandas as pd


def calculate_metrics(y_true, y_pred) -> dict:
    return {
        "accuracy": accuracy_score(y_true, y_pred),
        "precision": precision_score(y_true, y_pred, average="macro", zero_division=0),
        "recall": recall_score(y_true, y_pred, average="macro", zero_division=0),
        "f1": f1_score(y_true, y_pred, average="macro", zero_division=0),
    }


def calculate_class_metrics(matrix: pd.DataFrame) -> pd.DataFrame:
    """One-vs-rest statistics per class from a confusion matrix (rows actual, columns predicted)."""
    counts = matrix.to_numpy()
    total = counts.sum()
    rows = {}
    for i, label in enumerate(matrix.index):
        tp = counts[i, i]
        fn = counts[i, :].sum() - tp
        fp = counts[:, i].sum() - tp
        tn = total - tp - fn - fp

        sensitivity = tp / (tp + fn) if (tp + fn) > 0 else 0
        specificity = tn / (tn + fp) if (tn + fp) > 0 else 0
        ppv = tp / (tp + fp) if (tp + fp) > 0 else 0
        npv = tn / (tn + fn) if (tn + fn) > 0 else 0

        rows[label] = {
            "sensitivity": sensitivity,
            "specificity": specificity,
            "ppv": ppv,
            "npv": npv,
            "prevalence": (tp + fn) / total if total > 0 else 0,
            "balanced_accuracy": (sensitivity + specificity) / 2,
        }
    return pd.DataFrame.from_dict(rows, orient="index")


@dataclass
class ConfusionReport:
    matrix: pd.DataFrame
    accuracy: float
    accuracy_ci: tuple
    no_information_rate: float
    kappa: float
    by_class: pd.DataFrame = field(repr=False)

    @property
    def error_rate(self) -> float:
        return 1.0 - self.accuracy

    @property
    def accuracy_percent(self) -> float:
        return 100.0 * self.accuracy

    @property
    def total(self) -> int:
        return int(self.matrix.to_numpy().sum())

    def to_dict(self) -> dict:
        return {
            "accuracy": self.accuracy,
            "accuracy_percent": self.accuracy_percent,
            "error_rate": self.error_rate,
            "accuracy_ci_95": list(self.accuracy_ci),
            "no_information_rate": self.no_information_rate,
            "kappa": self.kappa,
            "confusion_matrix": {
                str(actual): {str(pred): int(n) for pred, n in row.items()}
                for actual, row in self.matrix.iterrows()
            },
            "by_class": {
                str(label): {k: float(v) for k, v in stats.items()}
                for label, stats in self.by_class.iterrows()
            },
        }


def confusion_report(y_true, y_pred, labels=None) -> ConfusionReport:
    """Confusion matrix (rows actual, columns predicted) and the statistics derived from it."""
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    if len(y_true) == 0:
        raise ValueError("Cannot evaluate an empty prediction set")
    if labels is None:
        labels = sorted(set(y_true) | set(y_pred), key=str)
    labels = list(labels)

    counts = confusion_matrix(y_true, y_pred, labels=labels)
    matrix = pd.DataFrame(counts, index=pd.Index(labels, name="actual"), columns=pd.Index(labels, name="predicted"))

    total = int(counts.sum())
    correct = int(np.trace(counts))
    ci = binomtest(correct, total).proportion_ci(confidence_level=0.95, method="exact")
    kappa = cohen_kappa_score(y_true, y_pred, labels=labels)

    return ConfusionReport(
        matrix=matrix,
        accuracy=correct / total,
        accuracy_ci=(float(ci.low), float(ci.high)),
        no_information_rate=float(counts.sum(axis=1).max() / total),
        kappa=0.0 if np.isnan(kappa) else float(kappa),
        by_class=calculate_class_metrics(matrix),
    )
