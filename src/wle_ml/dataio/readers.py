import csv
import logging
from pathlib import Path
import pandas as pd

from wle_ml.common.errors import InputFormatError
from wle_ml.domain.columns import NA_TOKENS
from wle_ml.preprocessing.transforms import coerce_numeric

logger = logging.getLogger(__name__)


def _check_rectangular(file_path: Path) -> None:
    with open(file_path, newline="") as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None:
            raise InputFormatError(f"{file_path}: file is empty")
        for line_no, row in enumerate(reader, start=2):
            if row and len(row) != len(header):
                raise InputFormatError(
                    f"{file_path}: line {line_no} has {len(row)} fields, header has {len(header)}"
                )


def read_observations(file_path: str | Path, na_values=NA_TOKENS) -> pd.DataFrame:
    file_path = Path(file_path)
    if not file_path.is_file():
        raise InputFormatError(f"{file_path}: no such file")
    try:
        _check_rectangular(file_path)
        df = pd.read_csv(file_path, na_values=list(na_values), keep_default_na=False)
    except (csv.Error, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise InputFormatError(f"{file_path}: {e}") from e
    df = coerce_numeric(df)
    logger.info(f"Read {len(df)} rows x {df.shape[1]} columns from {file_path}")
    return df


def load_tables(train_path: str | Path, test_path: str | Path, na_values=NA_TOKENS):
    """Read the labelled training table and the unlabelled test table."""
    train = read_observations(train_path, na_values)
    test = read_observations(test_path, na_values)
    return train, test
