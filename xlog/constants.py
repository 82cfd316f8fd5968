DEFAULT_LOG_DIRECTORY = "./logs"
DEFAULT_BASE_NAME = "app"
DEFAULT_ROLL_SIZE = 10 * 1024 * 1024  # 10MB
DEFAULT_LEVEL = "DEBUG"

LOG_FILE_SUFFIX = ".log"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

ENV_PREFIX = "XLOG_LOG_"

FAULT_MAPPING = dict(
    invalid_level="Invalid log level '{level}'. Must be one of: {choices}",
    invalid_roll_size="Invalid roll_size '{roll_size}'. Must be a non-negative integer.",
    missing_directory="Please provide a log directory using the --dir argument or the 'directory' setting.",
    missing_base_name="Please provide a log file base name using the --base-name argument or the 'base_name' setting.",
    yaml_file_parse_issue="Error occurred while parsing yaml file ({file_path}). "
    "Make sure that the file contains a 'logging' mapping.",
    file_open_issue="Error occurred while opening the file ({file_path}). "
    "Make sure that the file exists or the path is correct.",
)
