"""Trade summary writer module."""

import logging
from dataclasses import fields
from typing import List

import duckdb
import pandas as pd

from .models import TradeSummary

logger = logging.getLogger(__name__)

def summaries_to_dataframe(summaries: List[TradeSummary]) -> pd.DataFrame:
    columns = [f.name for f in fields(TradeSummary)]
    return pd.DataFrame([s.to_dict() for s in summaries], columns=columns)

def save_summaries_to_csv(summaries: List[TradeSummary], output_file: str) -> None:
    """Save trade summaries to a CSV file."""
    logger.info(f"Saving {len(summaries)} trades to {output_file}")

    df = summaries_to_dataframe(summaries)
    df.to_csv(output_file, index=False)
    logger.info(f"Successfully saved trades to {output_file}")

def save_summaries_to_parquet(summaries: List[TradeSummary], output_file: str) -> None:
    """Save trade summaries to a Parquet file."""
    logger.info(f"Saving {len(summaries)} trades to {output_file}")

    df = summaries_to_dataframe(summaries)

    # DuckDB writes the Parquet file with compression
    con = duckdb.connect(database=':memory:')
    try:
        con.register('summaries_df', df)
        escaped = output_file.replace("'", "''")
        con.execute(f"""
            COPY (SELECT * FROM summaries_df)
            TO '{escaped}' (FORMAT 'parquet', COMPRESSION 'ZSTD')
        """)
    finally:
        con.close()
    logger.info(f"Successfully saved trades to {output_file}")
