"""Rental property investment metrics."""

from roimetrics.analysis import (
    InvestmentCalculator,
    PropertyRanker,
    classify_ratio,
    classify_return,
    compute_amortized_payment,
    compute_metrics,
)
from roimetrics.errors import InvalidInputError, RoiMetricsError
from roimetrics.forms import input_from_form, parse_form_value
from roimetrics.models import (
    CalculationReport,
    Grade,
    InvestmentInput,
    InvestmentResult,
    PropertyFilter,
    PropertyListing,
)

__version__ = "0.1.0"

__all__ = [
    "InvestmentCalculator",
    "PropertyRanker",
    "compute_amortized_payment",
    "compute_metrics",
    "classify_return",
    "classify_ratio",
    "input_from_form",
    "parse_form_value",
    "InvalidInputError",
    "RoiMetricsError",
    "Grade",
    "InvestmentInput",
    "InvestmentResult",
    "CalculationReport",
    "PropertyListing",
    "PropertyFilter",
]
