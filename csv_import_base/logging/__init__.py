from .error_log import ErrorLogBuffer
from .init import get_logger, log_summary, setup_logging

__all__ = [
    "ErrorLogBuffer",
    "get_logger",
    "log_summary",
    "setup_logging",
]
