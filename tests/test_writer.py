"""Tests for the trade summary writer."""

from datetime import datetime

import duckdb
import pandas as pd
import pytest

from trade_clipper.models import TradeSummary
from trade_clipper.writer import save_summaries_to_csv, save_summaries_to_parquet

@pytest.fixture
def summaries():
    return [
        TradeSummary(
            name="X-2024-02-01-09-30-00",
            ticker="X",
            side="LONG",
            open_time=datetime(2024, 2, 1, 9, 30),
            close_time=datetime(2024, 2, 1, 10, 0),
            total_share_count=100,
            opening_price_avg=10.0,
            closing_price_avg=12.0,
            profit=200.0,
            is_swing=False
        ),
        TradeSummary(
            name="Y-2024-02-01-15-00-00",
            ticker="Y",
            side="SHORT",
            open_time=datetime(2024, 2, 1, 15, 0),
            close_time=datetime(2024, 2, 2, 9, 45),
            total_share_count=50,
            opening_price_avg=11.0,
            closing_price_avg=10.0,
            profit=50.0,
            is_swing=True
        ),
    ]

def test_save_summaries_to_csv(tmp_path, summaries):
    """Test exporting summaries to CSV."""
    output = tmp_path / "trades.csv"
    save_summaries_to_csv(summaries, str(output))

    df = pd.read_csv(output)
    assert list(df['ticker']) == ["X", "Y"]
    assert list(df['profit']) == [200.0, 50.0]
    assert list(df['is_swing']) == [False, True]

def test_save_summaries_to_parquet(tmp_path, summaries):
    """Test exporting summaries to Parquet."""
    output = tmp_path / "trades.parquet"
    save_summaries_to_parquet(summaries, str(output))

    con = duckdb.connect(database=':memory:')
    rows = con.execute("SELECT ticker, total_share_count, profit FROM read_parquet(?) ORDER BY ticker",
                       [str(output)]).fetchall()
    con.close()
    assert rows == [("X", 100, 200.0), ("Y", 50, 50.0)]
