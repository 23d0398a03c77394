"""Utility functions for ledgerstat."""

from ledgerstat.utils.amount_parser import parse_amount

__all__ = ["parse_amount"]
