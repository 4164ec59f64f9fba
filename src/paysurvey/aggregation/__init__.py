"""Grouped income aggregation."""

from paysurvey.aggregation.income import AggregateRow, IncomeSummary, aggregate_income

__all__ = ["AggregateRow", "IncomeSummary", "aggregate_income"]
