"""Operational scripts (migrations, development tokens)."""
