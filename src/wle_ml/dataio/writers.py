import logging
from pathlib import Path
import pandas as pd

logger = logging.getLogger(__name__)


def write_predictions(df: pd.DataFrame, output_path: str | Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    logger.info(f"Predictions saved to {output_path}")
    return output_path
