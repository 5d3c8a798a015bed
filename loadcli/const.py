"""Constants for the loadcli HTTP load generator."""

# Default benchmark values
DEFAULT_CONNECTIONS = 512
DEFAULT_REQUESTS = 100_000
DEFAULT_TARGET_URI = "http://localhost:8080/person"
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds
DEFAULT_PROGRESS_BATCH_SIZE = 100
DEFAULT_REMAINDER_POLICY = "drop"

# Connection count bounds accepted on the command line
MIN_CONNECTIONS = 1
MAX_CONNECTIONS = 65532

# Simulated requester
DEFAULT_SIMULATE_MEAN_DELAY_MS = 20.0
DEFAULT_SIMULATE_STD_DELAY_MS = 6.0
SIMULATE_SEED = 42

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library log levels
LIBRARY_LOG_LEVELS = {
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "matplotlib": "WARNING",
}

# HTTP status codes
HTTP_SUCCESS = 200
HTTP_BAD_REQUEST = 400

# Allowed target schemes
ALLOWED_SCHEMES = ("http", "https")

# File names
CONFIG_FILE_NAME = "config.json"

# Exit codes
EXIT_OK = 0
EXIT_BENCHMARK_FAILED = 1

# Application metadata
APP_NAME = "loadcli"
APP_DESCRIPTION = "Concurrent HTTP load generator with per-status latency statistics"
APP_VERSION = "0.1.0"
