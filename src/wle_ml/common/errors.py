"""
Exceptions raised by the pipeline stages.

Every error is fatal for the run: stages raise, nothing retries.
"""


class DataValidationError(ValueError):
    """Raised when input data cannot be used by the pipeline."""
    pass


class InputFormatError(DataValidationError):
    """Raised when an input file is missing, unparsable or not rectangular."""
    pass


class ReducerContractError(DataValidationError):
    """Raised when null values reach the correlation or fitting stage."""
    pass


class FeatureMismatchError(DataValidationError):
    """Raised when a table does not carry the features a model was trained on."""
    pass
