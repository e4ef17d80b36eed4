#!/usr/bin/env python
"""
Launch the Streamlit statement viewer.

Usage:
    python scripts/run_app.py
    python scripts/run_app.py --plays plays.csv --invoices invoices.json -- --server.port 8600

Arguments after `--` go straight to `streamlit run`.
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path

VIEWER = Path(__file__).resolve().parent.parent / 'src' / 'theater_billing' / 'ui' / 'app_streamlit.py'


def build_command(streamlit_args):
    return [sys.executable, '-m', 'streamlit', 'run', str(VIEWER), *streamlit_args]


def build_env(plays=None, invoices=None, rates=None):
    """Environment for the viewer; data file options become THEATER_BILLING_* overrides."""
    env = os.environ.copy()
    for var, path in (
        ('THEATER_BILLING_PLAYS', plays),
        ('THEATER_BILLING_INVOICES', invoices),
        ('THEATER_BILLING_RATES', rates),
    ):
        if path:
            env[var] = str(Path(path).resolve())
    return env


def main(argv=None):
    parser = argparse.ArgumentParser(description="Launch the statement viewer.")
    parser.add_argument('--plays', type=Path, help="Play catalog (.json or .csv)")
    parser.add_argument('--invoices', type=Path, help="Invoices (.json)")
    parser.add_argument('--rates', type=Path, help="Rate overrides (.json)")
    parser.add_argument('streamlit_args', nargs=argparse.REMAINDER)
    args = parser.parse_args(argv)

    streamlit_args = args.streamlit_args
    if streamlit_args[:1] == ['--']:
        streamlit_args = streamlit_args[1:]

    cmd = build_command(streamlit_args)
    print(f"Statement viewer: {VIEWER}")

    try:
        completed = subprocess.run(cmd, env=build_env(args.plays, args.invoices, args.rates))
    except KeyboardInterrupt:
        print("\nViewer closed.")
        return
    sys.exit(completed.returncode)


if __name__ == "__main__":
    main()
