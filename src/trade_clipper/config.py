"""Configuration management for Trade Clipper."""

import os
from typing import Any, Dict

from .utils import EXEC_TIME_FORMAT

TRUE_VALUES = ('1', 'true', 'yes', 'on')

def get_reader_defaults() -> Dict[str, str]:
    """Get settings for locating and parsing account statements."""
    return {
        'section_header': os.getenv('TRADE_HISTORY_HEADER', 'Account Trade History'),
        'time_format': os.getenv('EXEC_TIME_FORMAT', EXEC_TIME_FORMAT),
        'statement_glob': os.getenv('STATEMENT_GLOB', '*.csv')
    }

def get_report_defaults() -> Dict[str, Any]:
    """Get settings for portfolio reporting."""
    return {
        'include_swing': os.getenv('INCLUDE_SWING', 'false').strip().lower() in TRUE_VALUES,
        'log_level': os.getenv('LOG_LEVEL', 'INFO').upper()
    }
