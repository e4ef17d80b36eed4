"""Engine subpackage - core pricing and statement logic."""
from .pricing_engine import PricingEngine
from .models import Invoice, Performance, Play, PlayType, StatementLine, StatementResult
from .rates import RateTable
from .errors import StatementError, UnknownPlay, UnknownPlayType, InvoiceDataError
from .formatting import usd

__all__ = [
    'PricingEngine', 'Invoice', 'Performance', 'Play', 'PlayType',
    'StatementLine', 'StatementResult', 'RateTable',
    'StatementError', 'UnknownPlay', 'UnknownPlayType', 'InvoiceDataError',
    'usd',
]
