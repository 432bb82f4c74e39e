"""Investment analysis modules for property evaluation.

This package provides the metrics calculator, the grade thresholds and
rent-to-price ranking of property lists.
"""

from .calculator import InvestmentCalculator, compute_amortized_payment, compute_metrics
from .grading import (
    RATIO_GRADE_THRESHOLDS,
    RETURN_GRADE_THRESHOLDS,
    classify_ratio,
    classify_return,
    grade_label,
)
from .ranker import PropertyRanker

__all__ = [
    "InvestmentCalculator",
    "PropertyRanker",
    "compute_amortized_payment",
    "compute_metrics",
    "classify_return",
    "classify_ratio",
    "grade_label",
    "RETURN_GRADE_THRESHOLDS",
    "RATIO_GRADE_THRESHOLDS",
]
