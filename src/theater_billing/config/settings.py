"""
Centralized settings and path configuration for theater billing.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from ..engine.rates import RateTable


def get_data_dir() -> Path:
    """Directory holding the sample plays and invoices shipped with the package."""
    return Path(__file__).resolve().parent.parent / 'data'


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Input files
    plays_file: Path
    invoices_file: Path
    rates_file: Optional[Path] = None

    # Pricing
    rates: RateTable = field(default_factory=RateTable)

    # Statement rendering
    line_separator: str = os.linesep

    @classmethod
    def load(cls) -> 'Settings':
        """
        Load settings, defaulting to the sample data shipped with the package.

        THEATER_BILLING_PLAYS, THEATER_BILLING_INVOICES and
        THEATER_BILLING_RATES override the file locations.
        """
        data_dir = get_data_dir()

        plays_file = Path(os.environ.get('THEATER_BILLING_PLAYS') or data_dir / 'plays.json')
        invoices_file = Path(os.environ.get('THEATER_BILLING_INVOICES') or data_dir / 'invoices.json')

        rates_file = None
        rates = RateTable()
        if os.environ.get('THEATER_BILLING_RATES'):
            rates_file = Path(os.environ['THEATER_BILLING_RATES'])
            rates = RateTable.from_json(rates_file)

        return cls(
            plays_file=plays_file,
            invoices_file=invoices_file,
            rates_file=rates_file,
            rates=rates,
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings():
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
