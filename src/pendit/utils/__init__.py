"""Utility functions for pendit."""

from pendit.utils.date_parser import parse_date, parse_timestamp, format_timestamp
from pendit.utils.quantity_parser import parse_quantity

__all__ = ["parse_date", "parse_timestamp", "format_timestamp", "parse_quantity"]
