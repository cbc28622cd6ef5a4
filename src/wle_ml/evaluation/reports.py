import json
from pathlib import Path

from wle_ml.domain.columns import sensor_location
from wle_ml.domain.grades import get_grade_description


def save_evaluation_report(metrics: dict, output_path: str | Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(metrics, f, indent=2, default=str)
    return output_path


def render_markdown_report(summary: dict) -> str:
    """Markdown rendering of the run summary produced by the pipeline."""
    evaluation = summary["evaluation"]
    report = "# Weight Lifting Exercise Quality - Model Report\n\n"

    report += "## Holdout Evaluation\n\n"
    report += f"- **accuracy**: {evaluation['accuracy_percent']:.2f}%\n"
    low, high = evaluation["accuracy_ci_95"]
    report += f"- **95% CI**: ({100 * low:.2f}%, {100 * high:.2f}%)\n"
    report += f"- **expected out-of-sample error**: {100 * evaluation['error_rate']:.2f}%\n"
    report += f"- **kappa**: {evaluation['kappa']:.4f}\n\n"

    matrix = evaluation["confusion_matrix"]
    labels = list(matrix)
    report += "| actual \\ predicted | " + " | ".join(labels) + " |\n"
    report += "|---" * (len(labels) + 1) + "|\n"
    for actual in labels:
        report += f"| {actual} | " + " | ".join(str(matrix[actual].get(pred, 0)) for pred in labels) + " |\n"
    report += "\n"
    for label in labels:
        report += f"- **{label}**: {get_grade_description(label)}\n"

    report += "\n## Selected Features\n\n"
    importances = summary.get("feature_importance", {})
    for i, feat in enumerate(summary["reduction"]["selected"], 1):
        importance = importances.get(feat)
        suffix = f" - importance {importance:.4f}" if importance is not None else ""
        report += f"{i:2}. {feat} ({sensor_location(feat)}){suffix}\n"

    dropped = summary["reduction"]["dropped_correlated_columns"]
    if dropped:
        report += "\n## Removed For Correlation\n\n"
        report += "".join(f"- {col}\n" for col in dropped)
    return report


def save_markdown_report(summary: dict, output_path: str | Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_markdown_report(summary))
    return output_path
