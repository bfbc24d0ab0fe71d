"""Account statement reader module."""

import io
import logging
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd

from .config import get_reader_defaults
from .models import Execution, PositionEffect
from .utils import parse_exec_time, parse_price, parse_quantity

logger = logging.getLogger(__name__)

# Positions of the fields used from each trade history row
EXEC_TIME, SPREAD, SIDE, QTY, POS_EFFECT, SYMBOL, EXP, STRIKE, TYPE, PRICE, NET_PRICE, ORDER_TYPE = range(1, 13)
MIN_ROW_LENGTH = ORDER_TYPE + 1

class SourceUnavailableError(OSError):
    """A statement file or directory could not be read."""

def parse_executions(rows: Sequence[Sequence[str]], time_format: Optional[str] = None) -> List[Execution]:
    """Turn raw trade history rows into executions ordered by time.

    Malformed numbers and timestamps become zero values instead of
    failing the whole statement. Option legs (rows with a strike) are dropped.
    """
    time_format = time_format or get_reader_defaults()['time_format']

    executions = []
    for row in rows:
        if len(row) < MIN_ROW_LENGTH:
            logger.warning(f"Skipping short trade history row: {list(row)}")
            continue

        strike = str(row[STRIKE]).strip()
        if strike:
            logger.debug(f"Dropping option execution for {row[SYMBOL]} with strike {strike}")
            continue

        execution = Execution(
            exec_time=parse_exec_time(row[EXEC_TIME], time_format),
            spread=str(row[SPREAD]),
            side=str(row[SIDE]),
            qty=parse_quantity(row[QTY]),
            pos_effect=PositionEffect.parse(str(row[POS_EFFECT]).strip()),
            symbol=str(row[SYMBOL]).strip(),
            exp=str(row[EXP]),
            strike=strike,
            type=str(row[TYPE]),
            price=parse_price(row[PRICE]),
            net_price=parse_price(row[NET_PRICE]),
            order_type=str(row[ORDER_TYPE])
        )
        if execution.qty == 0:
            logger.warning(f"Execution with zero quantity: {execution}")
        executions.append(execution)

    executions.sort(key=lambda e: e.exec_time)
    return executions

def extract_trade_history(lines: Sequence[str], section_header: Optional[str] = None) -> List[str]:
    """Return the data lines of the trade history section of a statement.

    Data starts two lines below the section title (after the column header)
    and runs until the next blank line.
    """
    section_header = section_header or get_reader_defaults()['section_header']

    for i, line in enumerate(lines):
        if line.strip() == section_header:
            start = i + 2
            end = len(lines)
            for j in range(start, len(lines)):
                if not lines[j].strip():
                    end = j
                    break
            return list(lines[start:end])

    return []

def read_statement(file_path: str) -> List[Execution]:
    """Read the executions from one account statement file."""
    logger.info(f"Reading statement: {file_path}")
    defaults = get_reader_defaults()

    try:
        with open(file_path, encoding='utf-8-sig') as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailableError(f"Cannot read statement {file_path}: {e}") from e

    section = extract_trade_history(lines, defaults['section_header'])
    if not section:
        logger.warning(f"No '{defaults['section_header']}' section found in {file_path}")
        return []

    try:
        df = pd.read_csv(
            io.StringIO("\n".join(section)),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True
        ).fillna('')
    except pd.errors.ParserError as e:
        raise SourceUnavailableError(f"Malformed trade history in {file_path}: {e}") from e

    executions = parse_executions(df.values.tolist(), defaults['time_format'])
    logger.info(f"Collected {len(executions):,} executions from {file_path}")
    return executions

def read_statements(path: str) -> List[List[Execution]]:
    """Read a statement file, or every statement in a directory.

    Returns one execution list per file, files in name order.
    """
    source = Path(path)
    if not source.exists():
        raise SourceUnavailableError(f"Statement source not found: {path}")

    if source.is_dir():
        pattern = get_reader_defaults()['statement_glob']
        files = sorted(p for p in source.glob(pattern) if p.is_file())
        if not files:
            logger.warning(f"No statements matching {pattern} in {path}")
    else:
        files = [source]

    return [read_statement(str(f)) for f in files]
