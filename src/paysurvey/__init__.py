"""
Paysurvey: Salary Survey Income Pipeline.

This package provides loading, normalization, aggregation and charting
for free-form salary survey exports.
"""

from importlib.metadata import version

__version__ = version("paysurvey")

__all__ = ["__version__"]
