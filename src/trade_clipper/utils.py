"""Utility functions for Trade Clipper."""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

EXEC_TIME_FORMAT = '%m/%d/%y %H:%M:%S'

# Stand-in for an execution time that could not be parsed
ZERO_TIME = datetime.min

def parse_quantity(value: str) -> int:
    """Parse a signed share quantity such as '+100' or '-50'; 0 if malformed."""
    try:
        return int(str(value).strip())
    except ValueError:
        logger.debug(f"Invalid quantity {value!r}, using 0")
        return 0

def parse_price(value: str) -> float:
    """Parse a price field; 0.0 if malformed."""
    try:
        return float(str(value).strip().replace(',', ''))
    except ValueError:
        logger.debug(f"Invalid price {value!r}, using 0.0")
        return 0.0

def parse_exec_time(value: str, time_format: str = EXEC_TIME_FORMAT) -> datetime:
    """Parse an execution timestamp in local time; ZERO_TIME if malformed."""
    try:
        return datetime.strptime(str(value).strip(), time_format)
    except ValueError:
        logger.debug(f"Invalid execution time {value!r}, using zero time")
        return ZERO_TIME

def average_price(executions: Iterable) -> Optional[float]:
    """Volume-weighted average net price of a list of executions.

    Returns None when there is no volume to average over.
    """
    total = 0.0
    shares = 0
    for e in executions:
        total += e.net_price * abs(e.qty)
        shares += abs(e.qty)

    if shares == 0:
        return None
    return total / shares

def fmt_duration(duration: timedelta) -> str:
    """Format a duration as HH:MM:SS."""
    seconds = int(duration.total_seconds())
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
