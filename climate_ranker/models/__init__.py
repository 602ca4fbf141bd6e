"""Frozen pydantic models for disclosures, cohorts, and derived scores."""
