"""Presentation adapters over ranking results."""
