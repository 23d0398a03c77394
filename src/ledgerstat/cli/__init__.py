"""CLI interface for ledgerstat."""
