"""Reviewer selection: blame aggregation, eligibility, ranking, sizing and fallback."""
