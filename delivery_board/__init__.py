"""Delivery board: normalization, grouping and customer scoping of report rows."""

__version__ = "0.1.0"
