from packed_dna.utils.logging_utils import (
    DEFAULT_LOG_DIR,
    SILENT,
    get_log_file_path,
    setup_logger,
)

__all__ = [
    "DEFAULT_LOG_DIR",
    "SILENT",
    "get_log_file_path",
    "setup_logger",
]
