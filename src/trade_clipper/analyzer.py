"""Portfolio analytics over reconstructed trades."""

import logging
from datetime import date
from itertools import groupby
from typing import List, Optional, Tuple

from .models import Execution, Trade, TradeSummary
from .reader import read_statements
from .reconstructor import TradeReconstructor
from .utils import ZERO_TIME, fmt_duration

logger = logging.getLogger(__name__)

class Portfolio:
    """All trades rebuilt from one or more statements, plus queries over them.

    Date arguments are optional; None ignores that criterion. Queries only
    see closed trades, and skip swing trades unless include_swing is set.
    """

    def __init__(self, trades: Optional[List[Trade]] = None, include_swing: bool = False):
        self.include_swing = include_swing
        self._reconstructor = TradeReconstructor(trades)

    @classmethod
    def from_path(cls, path: str, include_swing: bool = False) -> 'Portfolio':
        """Build a portfolio from a statement file or a directory of them."""
        portfolio = cls(include_swing=include_swing)
        # One time-ordered stream across all statements, whatever the file names
        executions = [e for statement in read_statements(path) for e in statement]
        executions.sort(key=lambda e: e.exec_time)
        portfolio.add_executions(executions)
        logger.info(f"Reconstructed {len(portfolio.trades):,} trades from {path}")
        return portfolio

    def add_executions(self, executions: List[Execution]) -> None:
        self._reconstructor.consume(executions)

    @property
    def trades(self) -> List[Trade]:
        return self._reconstructor.trades

    def get_trades(self) -> List[Trade]:
        """Every trade, open ones included, minus closed swing trades unless enabled."""
        if self.include_swing:
            return self.trades
        return [t for t in self.trades if t.is_open or not t.is_swing()]

    def filter_trades(self, year: Optional[int] = None, month: Optional[int] = None,
                      day: Optional[int] = None) -> List[Trade]:
        """Closed trades whose close time matches the given date parts."""
        trades = []
        for trade in self.trades:
            if trade.is_open:
                continue
            closed = trade.close_time
            if year is not None and closed.year != year:
                continue
            if month is not None and closed.month != month:
                continue
            if day is not None and closed.day != day:
                continue
            if not self.include_swing and trade.is_swing():
                continue
            trades.append(trade)
        return trades

    def get_summaries(self, year: Optional[int] = None, month: Optional[int] = None,
                      day: Optional[int] = None) -> List[TradeSummary]:
        return [t.summary() for t in self.filter_trades(year, month, day)]

    def get_shares_traded(self, year: Optional[int] = None, month: Optional[int] = None,
                          day: Optional[int] = None) -> int:
        return sum(t.total_share_count for t in self.filter_trades(year, month, day))

    def get_profit(self, year: Optional[int] = None, month: Optional[int] = None,
                   day: Optional[int] = None) -> float:
        return sum((t.profit for t in self.filter_trades(year, month, day)), 0.0)

    def get_win_percentage(self, year: Optional[int] = None, month: Optional[int] = None,
                           day: Optional[int] = None) -> Optional[float]:
        """Fraction of trades that broke even or better; None without trades."""
        trades = self.filter_trades(year, month, day)
        if not trades:
            return None
        wins = sum(1 for t in trades if t.profit >= 0.0)
        return wins / len(trades)

    def get_profit_per_share(self, year: Optional[int] = None, month: Optional[int] = None,
                             day: Optional[int] = None) -> Optional[float]:
        shares = self.get_shares_traded(year, month, day)
        if shares == 0:
            return None
        return self.get_profit(year, month, day) / shares

    def get_trade_pl(self, year: Optional[int] = None, month: Optional[int] = None,
                     day: Optional[int] = None) -> Optional[float]:
        """Average profit per trade; None without trades."""
        trades = self.filter_trades(year, month, day)
        if not trades:
            return None
        return sum(t.profit for t in trades) / len(trades)

    def get_trading_days(self, year: Optional[int] = None, month: Optional[int] = None,
                         day: Optional[int] = None) -> List[date]:
        days = {t.close_time.date() for t in self.filter_trades(year, month, day)}
        return sorted(days)

    def get_green_vs_red_days(self, year: Optional[int] = None, month: Optional[int] = None,
                              day: Optional[int] = None) -> Tuple[int, int]:
        """Count days whose trades, grouped by the day they opened, made or lost money.

        Returns (green, red); a day that broke even is green.
        """
        trades = sorted(self.filter_trades(year, month, day), key=lambda t: t.open_time or ZERO_TIME)

        green = red = 0
        for _, day_trades in groupby(trades, key=lambda t: (t.open_time or ZERO_TIME).date()):
            if sum(t.profit for t in day_trades) >= 0.0:
                green += 1
            else:
                red += 1
        return green, red

def _fmt_optional(value: Optional[float], spec: str) -> str:
    return 'n/a' if value is None else format(value, spec)

def create_summary_report(portfolio: Portfolio, year: Optional[int] = None,
                          month: Optional[int] = None, day: Optional[int] = None) -> str:
    """Create a plain-text report of the portfolio statistics."""
    trades = portfolio.filter_trades(year, month, day)
    green, red = portfolio.get_green_vs_red_days(year, month, day)
    days = portfolio.get_trading_days(year, month, day)
    win_pct = portfolio.get_win_percentage(year, month, day)

    trade_lines = []
    for t in trades:
        trade_lines.append(
            f"- {t.name}: {t.side.value} {t.total_share_count:,} shares "
            f"@ {_fmt_optional(t.opening_price_avg, '.3f')} -> {_fmt_optional(t.closing_price_avg, '.3f')} "
            f"P/L {t.profit:+.2f} held {fmt_duration(t.duration)}{' (swing)' if t.is_swing() else ''}"
        )

    report = f"""### Summary
- Trades: {len(trades):,}{' (swing trades included)' if portfolio.include_swing else ''}
- Trading Days: {len(days):,}{f' ({days[0]} to {days[-1]})' if days else ''}
- Green/Red Days: {green}/{red}
- Shares Traded: {portfolio.get_shares_traded(year, month, day):,}
- Profit: {portfolio.get_profit(year, month, day):+.2f}
- Win Rate: {'n/a' if win_pct is None else f'{win_pct:.1%}'}
- Average P/L per Trade: {_fmt_optional(portfolio.get_trade_pl(year, month, day), '+.2f')}
- Profit per Share: {_fmt_optional(portfolio.get_profit_per_share(year, month, day), '+.4f')}

### Trades
{chr(10).join(trade_lines) if trade_lines else '(none)'}"""

    return report
