"""Data models for Trade Clipper."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from .utils import average_price

class TradeSide(Enum):
    UNKNOWN = "UNKNOWN"
    LONG = "LONG"
    SHORT = "SHORT"

    @staticmethod
    def from_quantity(qty: int) -> 'TradeSide':
        return TradeSide.LONG if qty > 0 else TradeSide.SHORT

class PositionEffect(Enum):
    OPENING = "TO OPEN"
    CLOSING = "TO CLOSE"

    @staticmethod
    def parse(token: str) -> 'PositionEffect':
        """Anything other than the literal opening token counts as closing."""
        if token == PositionEffect.OPENING.value:
            return PositionEffect.OPENING
        return PositionEffect.CLOSING

@dataclass(frozen=True)
class Execution:
    """A single brokerage fill."""
    exec_time: datetime
    symbol: str
    qty: int
    pos_effect: PositionEffect
    price: float
    net_price: float
    side: str = ""
    spread: str = ""
    exp: str = ""
    strike: str = ""
    type: str = ""
    order_type: str = ""

    @property
    def is_opening(self) -> bool:
        return self.pos_effect is PositionEffect.OPENING

    def __str__(self) -> str:
        """String representation of an execution."""
        return f"Execution(exec_time='{self.exec_time}', symbol='{self.symbol}', qty={self.qty}, pos_effect='{self.pos_effect.value}', price={self.price})"

@dataclass(frozen=True)
class TradeSummary:
    """What a clipping or export collaborator needs to know about one trade."""
    name: str
    ticker: str
    side: str
    open_time: Optional[datetime]
    close_time: Optional[datetime]
    total_share_count: int
    opening_price_avg: Optional[float]
    closing_price_avg: Optional[float]
    profit: float
    is_swing: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'ticker': self.ticker,
            'side': self.side,
            'open_time': self.open_time,
            'close_time': self.close_time,
            'total_share_count': self.total_share_count,
            'opening_price_avg': self.opening_price_avg,
            'closing_price_avg': self.closing_price_avg,
            'profit': self.profit,
            'is_swing': self.is_swing
        }

@dataclass
class Trade:
    """Executions for one symbol from a flat position back to flat.

    Only the reconstructor mutates a Trade; once closed it is left alone.
    """
    ticker: str
    side: TradeSide = TradeSide.UNKNOWN
    current_share_count: int = 0
    total_share_count: int = 0
    open_time: Optional[datetime] = None
    close_time: Optional[datetime] = None
    open_executions: List[Execution] = field(default_factory=list)
    close_executions: List[Execution] = field(default_factory=list)

    @property
    def is_open(self) -> bool:
        return self.current_share_count != 0

    @property
    def is_closed(self) -> bool:
        return not self.is_open

    @property
    def profit(self) -> float:
        """Closing proceeds minus opening cost, sign flipped for shorts; 0.0 while open."""
        if self.is_open:
            return 0.0

        open_value = sum(abs(e.qty * e.price) for e in self.open_executions)
        close_value = sum(abs(e.qty * e.price) for e in self.close_executions)
        profit = close_value - open_value

        if self.side is TradeSide.SHORT:
            profit *= -1
        return profit

    @property
    def opening_price_avg(self) -> Optional[float]:
        return average_price(self.open_executions)

    @property
    def closing_price_avg(self) -> Optional[float]:
        return average_price(self.close_executions)

    @property
    def duration(self) -> Optional[timedelta]:
        if self.open_time is None or self.close_time is None:
            return None
        return self.close_time - self.open_time

    @property
    def percent_gain(self) -> Optional[float]:
        """Profit per share as a fraction of the average entry price."""
        entry = self.opening_price_avg
        if not self.total_share_count or not entry:
            return None
        return (self.profit / self.total_share_count) / entry

    @property
    def open_date(self) -> Optional[date]:
        """Calendar date of the first opening execution."""
        if not self.open_executions:
            return None
        return self.open_executions[0].exec_time.date()

    @property
    def close_date(self) -> Optional[date]:
        """Calendar date of the first closing execution."""
        if not self.close_executions:
            return None
        return self.close_executions[0].exec_time.date()

    def is_swing(self) -> bool:
        """True when the trade was opened and closed on different days.

        A side with no executions has no date, so a trade with executions
        on only one side counts as a swing trade.
        """
        return self.open_date != self.close_date

    @property
    def name(self) -> str:
        stamp = self.open_time.strftime('%Y-%m-%d-%H-%M-%S') if self.open_time else 'unopened'
        return f"{self.ticker}-{stamp}"

    def summary(self) -> TradeSummary:
        return TradeSummary(
            name=self.name,
            ticker=self.ticker,
            side=self.side.value,
            open_time=self.open_time,
            close_time=self.close_time,
            total_share_count=self.total_share_count,
            opening_price_avg=self.opening_price_avg,
            closing_price_avg=self.closing_price_avg,
            profit=self.profit,
            is_swing=self.is_swing()
        )

    def __str__(self) -> str:
        """String representation of a trade."""
        status = 'OPEN' if self.is_open else 'CLOSED'
        return f"Trade(ticker='{self.ticker}', side='{self.side.value}', shares={self.total_share_count}, status='{status}', profit={self.profit:.2f})"
