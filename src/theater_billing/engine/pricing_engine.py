"""
Pricing Engine - prices performances and renders invoice statements.

Each performance is priced from its play's type and audience size:
- Tragedies pay a base amount plus a per-person charge above a threshold
- Comedies pay a base amount, a flat plus per-person charge above a
  threshold, and a per-attendee charge on every performance
- Volume credits accrue for attendance above a threshold, with a bonus
  for comedies

The engine holds only its rate table, formatter and line separator, so
one instance can price any number of invoices.
"""
import logging
import os
from typing import Mapping, Optional

from .errors import UnknownPlay
from .formatting import Formatter, usd
from .models import Invoice, Performance, Play, PlayType, StatementLine, StatementResult
from .rates import RateTable

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Computes performance charges and volume credits, and renders statements.

    Statement layout:
        Statement for <customer>
          <play name>: <amount> (<audience> seats)
        Amount owed is <total amount>
        You earned <total credits> credits
    """

    def __init__(
        self,
        rates: Optional[RateTable] = None,
        formatter: Optional[Formatter] = None,
        line_separator: str = os.linesep,
    ):
        self.rates = rates or RateTable()
        self.formatter = formatter or self._default_formatter
        self.line_separator = line_separator

    @classmethod
    def from_settings(cls, settings) -> 'PricingEngine':
        """Build an engine bound to the rates and line separator of a Settings object."""
        return cls(rates=settings.rates, line_separator=settings.line_separator)

    def _default_formatter(self, amount: int) -> str:
        return usd(amount, self.rates.minor_units_per_major)

    def get_play(self, plays: Mapping[str, Play], play_id: str) -> Play:
        """Resolve a play ID against the catalog."""
        try:
            return plays[play_id]
        except KeyError:
            raise UnknownPlay(play_id) from None

    def compute_amount(self, performance: Performance, play: Play) -> int:
        """Amount owed for a performance, in minor units."""
        return sum(amount for _, _, amount in self._amount_terms(performance, play))

    def compute_volume_credits(self, performance: Performance, play: Play) -> int:
        """Volume credits earned by a performance."""
        return sum(credits for _, _, credits in self._credit_terms(performance, play))

    def _amount_terms(self, performance: Performance, play: Play) -> list[tuple[str, str, int]]:
        """(step, description, amount) for each charge on a performance."""
        play_type = PlayType.parse(play.type)
        rates = self.rates
        audience = performance.audience

        if play_type is PlayType.TRAGEDY:
            terms = [("Base", "Tragedy base amount", rates.tragedy_base)]
            if audience > rates.tragedy_threshold:
                over = audience - rates.tragedy_threshold
                terms.append((
                    "Over Threshold",
                    f"{over} seats over {rates.tragedy_threshold}",
                    rates.tragedy_over_per_person * over,
                ))
            return terms

        terms = [("Base", "Comedy base amount", rates.comedy_base)]
        if audience > rates.comedy_threshold:
            over = audience - rates.comedy_threshold
            terms.append((
                "Over Threshold",
                f"{over} seats over {rates.comedy_threshold}",
                rates.comedy_over_flat + rates.comedy_over_per_person * over,
            ))
        terms.append(("Per Audience", f"{audience} seats", rates.comedy_per_audience * audience))
        return terms

    def _credit_terms(self, performance: Performance, play: Play) -> list[tuple[str, str, int]]:
        """(step, description, credits) for each volume credit term on a performance."""
        play_type = PlayType.parse(play.type)
        rates = self.rates
        audience = performance.audience

        terms = [(
            "Volume Credits",
            f"Seats over {rates.base_volume_credit_threshold}",
            max(audience - rates.base_volume_credit_threshold, 0),
        )]
        if play_type is PlayType.COMEDY:
            terms.append((
                "Comedy Bonus",
                f"One credit per {rates.comedy_extra_volume_factor} seats",
                audience // rates.comedy_extra_volume_factor,
            ))
        return terms

    def _price_line(self, performance: Performance, play: Play) -> StatementLine:
        """Price a single performance, recording each step in the line trace."""
        line = StatementLine(
            play_id=performance.play_id,
            play_name=play.name,
            audience=performance.audience,
            amount=0,
            volume_credits=0,
        )

        for step, description, amount in self._amount_terms(performance, play):
            line.amount += amount
            line.add_trace(step, description, self.formatter(amount))
        for step, description, credits in self._credit_terms(performance, play):
            line.volume_credits += credits
            line.add_trace(step, description, str(credits))

        logger.debug("Priced %s (%s, %d seats): amount=%d credits=%d",
                     line.play_id, PlayType.parse(play.type).value, line.audience, line.amount, line.volume_credits)
        return line

    def format_line(self, line: StatementLine) -> str:
        return f"  {line.play_name}: {self.formatter(line.amount)} ({line.audience} seats)"

    def render_statement(self, invoice: Invoice, plays: Mapping[str, Play]) -> StatementResult:
        """
        Price every performance of an invoice and render its statement.

        Args:
            invoice: Customer and performances, in billing order
            plays: Play catalog keyed by play ID

        Returns:
            StatementResult with the rendered text and both totals

        Raises:
            UnknownPlay: a performance references a play missing from the catalog
            UnknownPlayType: a play's type is not recognized
        """
        lines = []
        total_amount = 0
        total_volume_credits = 0

        for performance in invoice.performances:
            play = self.get_play(plays, performance.play_id)
            line = self._price_line(performance, play)
            lines.append(line)
            total_amount += line.amount
            total_volume_credits += line.volume_credits

        text_lines = [f"Statement for {invoice.customer}"]
        text_lines.extend(self.format_line(line) for line in lines)
        text_lines.append(f"Amount owed is {self.formatter(total_amount)}")
        text_lines.append(f"You earned {total_volume_credits} credits")
        text = "".join(t + self.line_separator for t in text_lines)

        logger.info("Rendered statement for %s: %d line(s), total=%d, credits=%d",
                    invoice.customer, len(lines), total_amount, total_volume_credits)

        return StatementResult(
            customer=invoice.customer,
            lines=tuple(lines),
            total_amount=total_amount,
            total_volume_credits=total_volume_credits,
            text=text,
        )

    def statement(self, invoice: Invoice, plays: Mapping[str, Play]) -> str:
        """Rendered statement text only."""
        return self.render_statement(invoice, plays).text
