"""Default configuration values."""

# Separator used when list values are sent to the backend
VALUE_SEPARATOR = ","

# Logging format used by the CLI
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
