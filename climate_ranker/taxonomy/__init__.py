"""Controlled vocabularies shared across the scoring engine."""
