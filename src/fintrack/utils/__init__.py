"""Utility functions for fintrack."""

from fintrack.utils.date_parser import parse_date
from fintrack.utils.amount_parser import parse_amount, parse_money

__all__ = ["parse_date", "parse_amount", "parse_money"]
