"""Ranking pipeline entry points."""
