"""
Data models for the statement engine.

Uses dataclasses for structured, type-safe data representation.
Reference data (plays, performances, invoices) is frozen; statement
results are built once per call and never updated afterwards.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import pandas as pd

from .errors import UnknownPlayType


class PlayType(str, Enum):
    """The recognized kinds of play."""
    TRAGEDY = "tragedy"
    COMEDY = "comedy"

    @classmethod
    def parse(cls, value) -> 'PlayType':
        """Decode a play type; only the exact values are recognized."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise UnknownPlayType(value)


@dataclass(frozen=True)
class Play:
    """A play in the catalog."""
    name: str
    type: PlayType


@dataclass(frozen=True)
class Performance:
    """One performance billed on an invoice."""
    play_id: str
    audience: int


@dataclass(frozen=True)
class Invoice:
    """A customer's invoice: performances in billing order."""
    customer: str
    performances: tuple[Performance, ...] = ()

    def __post_init__(self):
        # Accept any iterable but keep the stored value immutable
        object.__setattr__(self, 'performances', tuple(self.performances))


@dataclass
class TraceStep:
    """A single step in the pricing trace of a statement line."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class StatementLine:
    """A single priced performance on a statement."""
    play_id: str
    play_name: str
    audience: int
    amount: int
    volume_credits: int
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this line."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)


@dataclass(frozen=True)
class StatementResult:
    """Complete result of rendering a statement."""
    customer: str
    lines: tuple[StatementLine, ...]
    total_amount: int
    total_volume_credits: int
    text: str

    def to_dict(self) -> dict:
        """Convert to a plain dict (JSON friendly)."""
        return {
            "customer": self.customer,
            "total_amount": self.total_amount,
            "total_volume_credits": self.total_volume_credits,
            "lines": [
                {
                    "play_id": line.play_id,
                    "play": line.play_name,
                    "audience": line.audience,
                    "amount": line.amount,
                    "volume_credits": line.volume_credits,
                }
                for line in self.lines
            ],
            "text": self.text,
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per statement line."""
        columns = ["play_id", "play", "audience", "amount", "volume_credits"]
        return pd.DataFrame(self.to_dict()["lines"], columns=columns)
