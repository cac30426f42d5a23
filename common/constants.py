"""Project-wide constants (bucket space, path conventions, defaults)."""

BUCKET_COUNT: int = 16
BUCKETS: tuple[str, ...] = tuple(format(i, "x") for i in range(BUCKET_COUNT))

HIDDEN_PREFIX: str = "."
PATH_SEPARATOR: str = "/"
KEY_PREFIX_LENGTH: int = 1  # leading separator stripped from object keys

DEFAULT_QQ_PATH: str = "/opt/qumulo/cli/qq"
DEFAULT_LOG_FILE: str = "/history/q2s3.log"

DEFAULT_TERMINAL_WIDTH: int = 100
DEFAULT_START_DELAY_SECONDS: float = 2.0

DEFAULT_CONNECT_TIMEOUT: int = 10
DEFAULT_READ_TIMEOUT: int = 60
DEFAULT_MAX_ATTEMPTS: int = 3

ACTION_UPLOAD: str = "upload"
ACTION_DOWNLOAD: str = "download"
ACTIONS: tuple[str, ...] = (ACTION_UPLOAD, ACTION_DOWNLOAD)
