"""
Play catalog and invoice loaders.

Decodes the plain data supplied by external collaborators into engine
models:
- plays.json: {"hamlet": {"name": "Hamlet", "type": "tragedy"}, ...}
- plays.csv: columns play_id, name, type
- invoices.json: [{"customer": "BigCo", "performances": [{"playID": "hamlet", "audience": 55}]}]

Raw records are validated with pydantic; unknown play types are rejected
here, before anything is priced.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..engine.errors import InvoiceDataError
from ..engine.models import Invoice, Performance, Play, PlayType

logger = logging.getLogger(__name__)

PLAY_CSV_COLUMNS = ['play_id', 'name', 'type']


class PlayRecord(BaseModel):
    """Raw play entry."""
    name: str
    type: str


class PerformanceRecord(BaseModel):
    """Raw performance entry; accepts both playID and play_id."""
    model_config = ConfigDict(populate_by_name=True)

    play_id: str = Field(alias='playID')
    audience: int = Field(ge=0, strict=True)


class InvoiceRecord(BaseModel):
    """Raw invoice entry."""
    customer: str
    performances: list[PerformanceRecord] = Field(default_factory=list)


def _describe(error: ValidationError) -> str:
    """Compact one-line summary of a pydantic validation error."""
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err['loc'])
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def _read_json(path: Path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvoiceDataError(f"cannot read file: {e}", str(path)) from e


def parse_plays(raw: dict, source: Optional[str] = None) -> dict[str, Play]:
    """
    Decode a play catalog mapping.

    Raises:
        InvoiceDataError: the mapping or one of its entries is malformed
        UnknownPlayType: a play has an unrecognized type
    """
    if not isinstance(raw, dict):
        raise InvoiceDataError("play catalog must be a mapping of play ID to play", source)

    plays = {}
    for play_id, entry in raw.items():
        try:
            record = PlayRecord.model_validate(entry)
        except ValidationError as e:
            raise InvoiceDataError(f"play {play_id}: {_describe(e)}", source) from e
        plays[str(play_id)] = Play(name=record.name, type=PlayType.parse(record.type))
    return plays


def parse_invoices(raw: Union[list, dict], source: Optional[str] = None) -> list[Invoice]:
    """
    Decode one invoice object or a list of them.

    Raises:
        InvoiceDataError: an invoice or performance is malformed
    """
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        raise InvoiceDataError("invoices must be an object or a list of objects", source)

    invoices = []
    for index, entry in enumerate(raw):
        try:
            record = InvoiceRecord.model_validate(entry)
        except ValidationError as e:
            raise InvoiceDataError(f"invoice {index}: {_describe(e)}", source) from e
        invoices.append(Invoice(
            customer=record.customer,
            performances=[Performance(play_id=p.play_id, audience=p.audience) for p in record.performances],
        ))
    return invoices


def _load_plays_csv(path: Path) -> dict[str, Play]:
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise InvoiceDataError(f"cannot read file: {e}", str(path)) from e

    # Normalize headers
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in PLAY_CSV_COLUMNS if c not in df.columns]
    if missing:
        raise InvoiceDataError(f"missing column(s): {', '.join(missing)}", str(path))
    # Play types are matched exactly, so only IDs and names are trimmed
    for col in ('play_id', 'name'):
        df[col] = df[col].str.strip()

    duplicated = df.loc[df['play_id'].duplicated(), 'play_id'].unique().tolist()
    if duplicated:
        raise InvoiceDataError(f"duplicate play ID(s): {', '.join(duplicated)}", str(path))

    raw = {
        row['play_id']: {'name': row['name'], 'type': row['type']}
        for row in df[PLAY_CSV_COLUMNS].to_dict(orient='records')
    }
    return parse_plays(raw, source=str(path))


def load_plays(path: Path) -> dict[str, Play]:
    """Load a play catalog from a .json or .csv file."""
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == '.json':
        plays = parse_plays(_read_json(path), source=str(path))
    elif suffix == '.csv':
        plays = _load_plays_csv(path)
    else:
        raise InvoiceDataError(f"unsupported play catalog format '{suffix}'", str(path))

    logger.debug("Loaded %d play(s) from %s", len(plays), path)
    return plays


def load_invoices(path: Path) -> list[Invoice]:
    """Load invoices from a .json file."""
    path = Path(path)
    if path.suffix.lower() != '.json':
        raise InvoiceDataError(f"unsupported invoice format '{path.suffix}'", str(path))

    invoices = parse_invoices(_read_json(path), source=str(path))
    logger.debug("Loaded %d invoice(s) from %s", len(invoices), path)
    return invoices
