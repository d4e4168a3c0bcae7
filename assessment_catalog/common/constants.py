"""Application constants."""

USER_AGENT = "assessment-catalog/0.1.0"
DEFAULT_CONFIG_DIR = "config"
CONFIG_DIR_ENV_VAR = "ASSESSMENT_CATALOG_CONFIG_DIR"
CONFIG_FILENAME = "catalog.yml"

EARTH_RADIUS_METERS = 6_371_000
NEIGHBOURHOOD_LIST_LIMIT = 999
VALUE_RANGE_LIST_LIMIT = 99

# Positional layout of the 16-column assessment export.
SOURCE_COLUMN_COUNT = 16
COLUMN_INDEX = {
    "account_number": 0,
    "suite": 1,
    "house_number": 2,
    "street_name": 3,
    "garage": 4,
    "neighbourhood_id": 5,
    "neighbourhood": 6,
    "ward": 7,
    "assessed_value": 8,
    "latitude": 9,
    "longitude": 10,
    "assessment_class": 15,
}
GARAGE_FLAG = "Y"

EXIT_SUCCESS = 0
EXIT_NOT_FOUND = 3
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "event",
    "status",
    "source",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
