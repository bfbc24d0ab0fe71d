"""Tests for the account statement reader."""

from datetime import datetime

import pytest

from trade_clipper.models import PositionEffect
from trade_clipper.reader import (
    SourceUnavailableError,
    extract_trade_history,
    parse_executions,
    read_statement,
    read_statements,
)
from trade_clipper.utils import ZERO_TIME

STATEMENT = """Account Statement for 000000000 since 2/1/24 through 2/2/24

Cash Balance
DATE,TIME,TYPE,REF #,DESCRIPTION,Misc Fees,Commissions & Fees,AMOUNT,BALANCE

Account Trade History
,Exec Time,Spread,Side,Qty,Pos Effect,Symbol,Exp,Strike,Type,Price,Net Price,Order Type
,2/1/24 10:00:00,STOCK,SELL,-100,TO CLOSE,X,,,STOCK,12.00,11.99,LMT
,2/1/24 09:30:00,STOCK,BUY,+100,TO OPEN,X,,,STOCK,10.00,10.01,LMT
,2/1/24 09:45:00,SINGLE,BUY,+1,TO OPEN,SPY,16 FEB 24,150,CALL,1.50,1.50,LMT

Equities
Symbol,Description,Qty,Trade Price
"""

def row(exec_time="2/1/24 09:30:00", qty="+100", effect="TO OPEN", symbol="X",
        strike="", price="10.00", net_price="10.00"):
    return ["", exec_time, "STOCK", "BUY", qty, effect, symbol, "", strike, "STOCK", price, net_price, "LMT"]

def test_parse_executions_fields():
    """Test a row becomes a typed execution."""
    executions = parse_executions([row()])
    assert len(executions) == 1
    e = executions[0]
    assert e.exec_time == datetime(2024, 2, 1, 9, 30)
    assert e.symbol == "X"
    assert e.qty == 100
    assert e.pos_effect is PositionEffect.OPENING
    assert e.price == 10.0
    assert e.net_price == 10.0
    assert e.side == "BUY"
    assert e.order_type == "LMT"

def test_parse_executions_sorted_by_time():
    """Executions come back in time order."""
    executions = parse_executions([
        row(exec_time="2/1/24 10:00:00", qty="-100", effect="TO CLOSE"),
        row(exec_time="2/1/24 09:30:00"),
    ])
    assert [e.qty for e in executions] == [100, -100]

def test_parse_executions_drops_options():
    """Rows with a strike are not tracked."""
    executions = parse_executions([row(symbol="SPY", strike="150")])
    assert executions == []

def test_parse_executions_is_lenient():
    """Malformed fields become zero values instead of failing."""
    executions = parse_executions([row(exec_time="yesterday", qty="lots", price="n/a", net_price="")])
    e = executions[0]
    assert e.exec_time == ZERO_TIME
    assert e.qty == 0
    assert e.price == 0.0
    assert e.net_price == 0.0

def test_parse_executions_unknown_effect_is_closing():
    """Any effect other than the opening token counts as closing."""
    executions = parse_executions([row(effect="TO-OPEN")])
    assert executions[0].pos_effect is PositionEffect.CLOSING

def test_parse_executions_skips_short_rows():
    """Rows without all the fields are skipped."""
    assert parse_executions([["", "2/1/24 09:30:00", "STOCK"]]) == []

def test_extract_trade_history():
    """Only the data rows of the trade history section are returned."""
    section = extract_trade_history(STATEMENT.splitlines())
    assert len(section) == 3
    assert section[0].startswith(",2/1/24 10:00:00")

def test_extract_trade_history_missing_section():
    """A statement without the section yields nothing."""
    assert extract_trade_history(["Cash Balance", "a,b,c"]) == []

def test_extract_trade_history_runs_to_end_of_file():
    """Without a trailing blank line the section runs to the end."""
    lines = ["Account Trade History", "header", "row1", "row2"]
    assert extract_trade_history(lines) == ["row1", "row2"]

def test_read_statement(tmp_path):
    """Test reading executions from a statement file."""
    path = tmp_path / "2024-02-01-AccountStatement.csv"
    path.write_text(STATEMENT)

    executions = read_statement(str(path))
    assert [e.qty for e in executions] == [100, -100]
    assert executions[0].net_price == pytest.approx(10.01)
    assert executions[1].pos_effect is PositionEffect.CLOSING

def test_read_statements_directory(tmp_path):
    """Every statement in a directory is read, in name order."""
    (tmp_path / "b.csv").write_text(STATEMENT)
    (tmp_path / "a.csv").write_text(STATEMENT.replace(",X,", ",Y,"))
    (tmp_path / "recording.mkv").write_bytes(b"")

    statements = read_statements(str(tmp_path))
    assert len(statements) == 2
    assert statements[0][0].symbol == "Y"
    assert statements[1][0].symbol == "X"

def test_read_statements_missing_source(tmp_path):
    """A missing source is an error, not an empty portfolio."""
    with pytest.raises(SourceUnavailableError):
        read_statements(str(tmp_path / "nope"))

def test_read_statement_undecodable(tmp_path):
    """A file that is not valid text is an unavailable source."""
    path = tmp_path / "statement.csv"
    path.write_bytes(b"Account Trade History\n\xff\xfe\xff\n")
    with pytest.raises(SourceUnavailableError):
        read_statement(str(path))
