"""Utility functions for gaurakshak."""

from gaurakshak.utils.date_parser import parse_date
from gaurakshak.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
