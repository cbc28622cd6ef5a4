LABEL_COLUMN = "classe"
PREDICTION_COLUMN = "predicted_classe"

# Spreadsheet exports mark missing values three different ways.
NA_TOKENS = ("", "NA", "#DIV/0!")

# Bookkeeping columns that identify a recording rather than measure motion.
METADATA_COLUMNS = (
    "",
    "Unnamed: 0",
    "X",
    "user_name",
    "raw_timestamp_part_1",
    "raw_timestamp_part_2",
    "cvtd_timestamp",
    "new_window",
    "num_window",
    "problem_id",
)

SENSOR_LOCATIONS = ("belt", "arm", "forearm", "dumbbell")


def sensor_location(column: str) -> str:
    """Return the sensor a measurement column comes from, e.g. ``gyros_forearm_x`` -> ``forearm``."""
    tokens = column.split("_")
    for location in SENSOR_LOCATIONS:
        if location in tokens:
            return location
    return "unknown"
