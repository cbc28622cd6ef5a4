from .schema import validate_dataframe_schema, validate_feature_columns
from .quality import check_data_quality

__all__ = ["validate_dataframe_schema", "validate_feature_columns", "check_data_quality"]
