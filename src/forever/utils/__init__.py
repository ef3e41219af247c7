"""Utilities shared across forever."""

from ._logging import LogFormatType, create_logger, open_log_file
from ._system import UNKNOWN_HOSTNAME, get_hostname, now_millis

__all__ = [
    "UNKNOWN_HOSTNAME",
    "LogFormatType",
    "create_logger",
    "get_hostname",
    "now_millis",
    "open_log_file",
]
