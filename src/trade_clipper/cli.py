"""Command-line interface for Trade Clipper."""

import argparse
import logging
import sys

from dotenv import load_dotenv

from .analyzer import Portfolio, create_summary_report
from .config import get_report_defaults
from .reader import SourceUnavailableError
from .writer import save_summaries_to_csv, save_summaries_to_parquet

logger = logging.getLogger(__name__)

def main(argv=None):
    """Main entry point for the trade clipper CLI."""
    parser = argparse.ArgumentParser(description='Rebuild trades from account statements and report on them')
    parser.add_argument('path', help='Account statement (.csv) or a directory of statements')
    parser.add_argument('--include-swing', action='store_true', default=None,
                        help='Include trades held overnight (default: INCLUDE_SWING env var)')
    parser.add_argument('--year', type=int, help='Only trades closed in this year')
    parser.add_argument('--month', type=int, help='Only trades closed in this month (1-12)')
    parser.add_argument('--day', type=int, help='Only trades closed on this day of the month')
    parser.add_argument('--export', help='Write trade summaries to this file (use .parquet or .csv extension)')

    args = parser.parse_args(argv)

    # Load environment variables
    load_dotenv()
    defaults = get_report_defaults()

    logging.basicConfig(
        level=defaults['log_level'],
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    include_swing = defaults['include_swing'] if args.include_swing is None else args.include_swing

    try:
        portfolio = Portfolio.from_path(args.path, include_swing=include_swing)

        print(create_summary_report(portfolio, args.year, args.month, args.day))

        if args.export:
            summaries = portfolio.get_summaries(args.year, args.month, args.day)
            if args.export.endswith('.parquet'):
                save_summaries_to_parquet(summaries, args.export)
            else:
                save_summaries_to_csv(summaries, args.export)

    except SourceUnavailableError as e:
        logger.error(f"Cannot load statements: {e}")
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
