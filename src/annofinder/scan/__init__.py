"""Scanning pipeline: extraction, aggregation and navigation."""
