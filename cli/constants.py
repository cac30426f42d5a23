"""CLI constants and messages."""

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

LOGGER_NAMES = ("cli", "syncer", "common")

NO_TERMINAL = "No terminal found"
NO_BUCKETS = "No buckets assigned to this node"
DOWNLOAD_DISABLED = "Download function not enabled"
LOGFILE_ERROR = "Unable to init logfile, {error}"
DONE = "\n\nDone"
