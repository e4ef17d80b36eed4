#!/usr/bin/env python
"""
Print billing statements for every invoice in an invoices file.

Usage:
    python scripts/print_statement.py
    python scripts/print_statement.py --plays plays.csv --invoices invoices.json --rates rates.json
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from theater_billing.config.settings import get_settings
from theater_billing.data.loaders import load_invoices, load_plays
from theater_billing.engine import PricingEngine, RateTable, StatementError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Print theater billing statements.")
    parser.add_argument('--plays', type=Path, help="Play catalog (.json or .csv)")
    parser.add_argument('--invoices', type=Path, help="Invoices (.json)")
    parser.add_argument('--rates', type=Path, help="Rate overrides (.json)")
    parser.add_argument('-v', '--verbose', action='store_true', help="Log each priced line")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        settings = get_settings()
        rates = RateTable.from_json(args.rates) if args.rates else settings.rates
        engine = PricingEngine(rates=rates, line_separator="\n")

        plays = load_plays(args.plays or settings.plays_file)
        invoices = load_invoices(args.invoices or settings.invoices_file)

        for i, invoice in enumerate(invoices):
            if i:
                print()
            print(engine.statement(invoice, plays), end="")
    except StatementError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
