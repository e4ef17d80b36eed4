import sys
import os

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from theater_billing.engine import Invoice, Performance, Play, PlayType, PricingEngine


@pytest.fixture
def plays():
    return {
        "hamlet": Play(name="Hamlet", type=PlayType.TRAGEDY),
        "as-like": Play(name="As You Like It", type=PlayType.COMEDY),
        "othello": Play(name="Othello", type=PlayType.TRAGEDY),
    }


@pytest.fixture
def invoice():
    return Invoice(
        customer="BigCo",
        performances=[
            Performance(play_id="hamlet", audience=55),
            Performance(play_id="as-like", audience=35),
            Performance(play_id="othello", audience=40),
        ],
    )


@pytest.fixture
def engine():
    return PricingEngine(line_separator="\n")
