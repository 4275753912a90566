"""
Utility helpers used by the migration tool.

This subpackage exposes the result type, structured logging, run
configuration and the transfer report writer.
"""

from .config import MigrationConfig, load_config
from .errors import ERRORS, Result, report_error, report_ok
from .reports import generate_transfer_report_csv

__all__ = [
    "ERRORS",
    "MigrationConfig",
    "Result",
    "generate_transfer_report_csv",
    "load_config",
    "report_error",
    "report_ok",
]
