from jobpool.infrastructure.logging.log_paths import get_log_dir, get_main_log_path
from jobpool.infrastructure.logging.logging_setup import LOG_LEVELS, setup_logging

__all__ = ["LOG_LEVELS", "get_log_dir", "get_main_log_path", "setup_logging"]
