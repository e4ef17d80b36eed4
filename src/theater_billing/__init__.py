"""
Theater Billing Package

Computes and renders billing statements for theater invoices.
Prices each performance by play type and audience, accrues volume credits,
and renders a currency-formatted statement.
"""

__version__ = "1.0.0"
