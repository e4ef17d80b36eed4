"""
Rate table - every threshold and rate used to price performances.
"""
import json
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Optional

from .errors import InvoiceDataError


@dataclass(frozen=True)
class RateTable:
    """
    Pricing and credit constants bound to a pricing engine.

    Amounts are in minor currency units (cents).
    """

    # Tragedy pricing
    tragedy_base: int = 40000
    tragedy_threshold: int = 30
    tragedy_over_per_person: int = 1000

    # Comedy pricing
    comedy_base: int = 30000
    comedy_threshold: int = 20
    comedy_over_flat: int = 10000
    comedy_over_per_person: int = 500
    comedy_per_audience: int = 300

    # Volume credits
    base_volume_credit_threshold: int = 30
    comedy_extra_volume_factor: int = 5

    # Currency
    minor_units_per_major: int = 100

    def __post_init__(self):
        if self.comedy_extra_volume_factor <= 0:
            raise InvoiceDataError("comedy_extra_volume_factor must be positive")
        if self.minor_units_per_major <= 0:
            raise InvoiceDataError("minor_units_per_major must be positive")

    @classmethod
    def from_dict(cls, data: dict, source: Optional[str] = None) -> 'RateTable':
        """Build a rate table from a partial mapping; missing keys keep their defaults."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvoiceDataError(f"unknown rate(s): {', '.join(unknown)}", source)

        for key, value in data.items():
            # bool is an int subclass but never a valid rate
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvoiceDataError(f"rate {key} must be an integer, got {value!r}", source)
        return cls(**data)

    @classmethod
    def from_json(cls, path: Path) -> 'RateTable':
        """Load a rate table from a JSON object of overrides."""
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise InvoiceDataError(f"cannot read rates: {e}", str(path)) from e

        if not isinstance(data, dict):
            raise InvoiceDataError("rates must be a JSON object", str(path))
        return cls.from_dict(data, source=str(path))

    def to_dict(self) -> dict:
        return asdict(self)
