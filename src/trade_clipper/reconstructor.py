"""Rebuilds trades from a time-ordered stream of executions."""

import logging
from typing import Dict, Iterable, List, Optional

from .models import Execution, Trade, TradeSide
from .utils import ZERO_TIME

logger = logging.getLogger(__name__)

def apply_execution(trade: Trade, execution: Execution) -> None:
    """Add one execution to a trade, updating its position and timestamps."""
    if trade.side is TradeSide.UNKNOWN:
        trade.side = TradeSide.from_quantity(execution.qty)

    trade.current_share_count += execution.qty

    if trade.current_share_count == 0:
        trade.close_time = execution.exec_time
        if trade.open_time is None:
            trade.open_time = execution.exec_time
    elif trade.open_time is None:
        trade.open_time = execution.exec_time

    if execution.is_opening:
        trade.open_executions.append(execution)
        trade.total_share_count += abs(execution.qty)
    else:
        trade.close_executions.append(execution)

class TradeReconstructor:
    """Matches executions into trades, one open trade per symbol at a time.

    Executions must be fed in time order. Open trades carry over between
    calls to consume(), so statements can be fed one after another.
    """

    def __init__(self, trades: Optional[Iterable[Trade]] = None):
        self._trades: List[Trade] = list(trades or [])
        self._open: Dict[str, Trade] = {t.ticker: t for t in self._trades if t.is_open}

    def consume(self, executions: Iterable[Execution]) -> None:
        for execution in executions:
            trade = self._open.get(execution.symbol)
            if trade is None:
                trade = Trade(ticker=execution.symbol, side=TradeSide.from_quantity(execution.qty))
                self._trades.append(trade)
                self._open[execution.symbol] = trade
                logger.debug(f"Opened {trade.side.value} trade for {execution.symbol} at {execution.exec_time}")

            apply_execution(trade, execution)

            if trade.is_closed:
                del self._open[execution.symbol]
                logger.debug(f"Closed trade {trade}")

    @property
    def open_trades(self) -> List[Trade]:
        return list(self._open.values())

    @property
    def trades(self) -> List[Trade]:
        """All trades ordered by close time; still-open trades come first."""
        return sorted(self._trades, key=lambda t: t.close_time or ZERO_TIME)

def build_trades(executions: Iterable[Execution]) -> List[Trade]:
    """Reconstruct trades from a single time-ordered execution sequence."""
    reconstructor = TradeReconstructor()
    reconstructor.consume(executions)
    return reconstructor.trades
