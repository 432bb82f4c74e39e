"""Data models for roimetrics."""

from roimetrics.models.investment import (
    CalculationReport,
    Grade,
    InvestmentInput,
    InvestmentResult,
)
from roimetrics.models.property import (
    PropertyFilter,
    PropertyListing,
    PropertyType,
    RatioMetrics,
)

__all__ = [
    "Grade",
    "InvestmentInput",
    "InvestmentResult",
    "CalculationReport",
    "PropertyType",
    "PropertyListing",
    "RatioMetrics",
    "PropertyFilter",
]
