import re

import pytest

from theater_billing.engine import (
    Invoice, Performance, Play, PricingEngine, RateTable, UnknownPlay, UnknownPlayType,
)

EXPECTED_BIGCO = (
    "Statement for BigCo\n"
    "  Hamlet: $650.00 (55 seats)\n"
    "  As You Like It: $580.00 (35 seats)\n"
    "  Othello: $500.00 (40 seats)\n"
    "Amount owed is $1,730.00\n"
    "You earned 47 credits\n"
)


def test_statement_text(engine, invoice, plays):
    assert engine.statement(invoice, plays) == EXPECTED_BIGCO


def test_render_statement_returns_totals(engine, invoice, plays):
    result = engine.render_statement(invoice, plays)

    assert result.customer == "BigCo"
    assert result.total_amount == 173000
    assert result.total_volume_credits == 47
    assert result.text == EXPECTED_BIGCO
    assert [line.play_id for line in result.lines] == ["hamlet", "as-like", "othello"]


def test_totals_equal_sum_of_lines(engine, invoice, plays):
    result = engine.render_statement(invoice, plays)

    assert result.total_amount == sum(line.amount for line in result.lines)
    assert result.total_volume_credits == sum(line.volume_credits for line in result.lines)

    # Cross-check against the rendered text
    shown = re.findall(r"^  .*: \$([\d,]+\.\d{2}) \(\d+ seats\)$", result.text, re.MULTILINE)
    shown_cents = sum(int(amount.replace(",", "").replace(".", "")) for amount in shown)
    assert shown_cents == result.total_amount


def test_empty_invoice(engine, plays):
    result = engine.render_statement(Invoice(customer="Nobody"), plays)

    assert result.total_amount == 0
    assert result.total_volume_credits == 0
    assert result.lines == ()
    assert result.text == (
        "Statement for Nobody\n"
        "Amount owed is $0.00\n"
        "You earned 0 credits\n"
    )


def test_line_order_follows_invoice(engine, plays):
    invoice = Invoice(customer="Acme", performances=[
        Performance(play_id="othello", audience=40),
        Performance(play_id="hamlet", audience=55),
    ])
    lines = engine.statement(invoice, plays).splitlines()

    assert lines[1].startswith("  Othello:")
    assert lines[2].startswith("  Hamlet:")


def test_totals_do_not_depend_on_order(engine, invoice, plays):
    reversed_invoice = Invoice(customer=invoice.customer, performances=reversed(invoice.performances))

    first = engine.render_statement(invoice, plays)
    second = engine.render_statement(reversed_invoice, plays)
    assert (first.total_amount, first.total_volume_credits) == (second.total_amount, second.total_volume_credits)


def test_unknown_play_type_fails_whole_statement(engine, plays):
    catalog = dict(plays, farce=Play(name="Noises Off", type="farce"))
    invoice = Invoice(customer="BigCo", performances=[
        Performance(play_id="hamlet", audience=55),
        Performance(play_id="farce", audience=10),
    ])

    with pytest.raises(UnknownPlayType, match="unknown type: farce"):
        engine.render_statement(invoice, catalog)


def test_unknown_play_fails_whole_statement(engine, plays):
    invoice = Invoice(customer="BigCo", performances=[
        Performance(play_id="hamlet", audience=55),
        Performance(play_id="macbeth", audience=10),
    ])

    with pytest.raises(UnknownPlay, match="macbeth"):
        engine.render_statement(invoice, plays)


def test_engine_is_reusable_across_invoices(engine, invoice, plays):
    first = engine.render_statement(invoice, plays)
    engine.render_statement(Invoice(customer="Other", performances=[Performance("hamlet", 10)]), plays)
    again = engine.render_statement(invoice, plays)

    assert first == again


def test_default_line_separator_is_platform(invoice, plays):
    import os

    text = PricingEngine().statement(invoice, plays)
    assert text.endswith("You earned 47 credits" + os.linesep)
    assert text.count(os.linesep) == 6


def test_custom_line_separator(invoice, plays):
    text = PricingEngine(line_separator="\r\n").statement(invoice, plays)
    assert text == EXPECTED_BIGCO.replace("\n", "\r\n")


def test_custom_formatter(invoice, plays):
    engine = PricingEngine(formatter=lambda cents: f"{cents}c", line_separator="\n")
    lines = engine.statement(invoice, plays).splitlines()

    assert lines[1] == "  Hamlet: 65000c (55 seats)"
    assert lines[-2] == "Amount owed is 173000c"


def test_custom_rates_flow_into_statement(invoice, plays):
    engine = PricingEngine(rates=RateTable(tragedy_base=50000), line_separator="\n")
    result = engine.render_statement(invoice, plays)

    # Two tragedies, each 10000 more
    assert result.total_amount == 173000 + 2 * 10000


def test_result_to_dict_and_frame(engine, invoice, plays):
    result = engine.render_statement(invoice, plays)

    data = result.to_dict()
    assert data["total_amount"] == 173000
    assert data["lines"][1] == {
        "play_id": "as-like",
        "play": "As You Like It",
        "audience": 35,
        "amount": 58000,
        "volume_credits": 12,
    }

    df = result.to_frame()
    assert list(df.columns) == ["play_id", "play", "audience", "amount", "volume_credits"]
    assert df["amount"].sum() == result.total_amount
    assert df["volume_credits"].sum() == result.total_volume_credits


def test_empty_result_frame_has_columns(engine, plays):
    df = engine.render_statement(Invoice(customer="Nobody"), plays).to_frame()
    assert df.empty
    assert list(df.columns) == ["play_id", "play", "audience", "amount", "volume_credits"]
