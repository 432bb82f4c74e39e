"""Grade thresholds for cash-on-cash return and rent-to-price ratio.

Both classifiers walk a table of (minimum, grade) pairs from the highest
cut point down and fall through to Grade.D. The tables differ: the
calculator grades cash-on-cash return, the map and trends views grade
the rent-to-price ratio.
"""

import logging
import math

from ..errors import InvalidInputError
from ..models.investment import Grade

logger = logging.getLogger(__name__)


# Cash-on-cash return (%), as shown by the calculator.
# 12%+ excellent, 8-12% good, 4-8% fair, below 4% poor.
RETURN_GRADE_THRESHOLDS: tuple[tuple[float, Grade], ...] = (
    (12.0, Grade.A),
    (8.0, Grade.B),
    (4.0, Grade.C),
)

# Rent-to-price ratio (annual rent / price, %), as shown on maps and trends.
RATIO_GRADE_THRESHOLDS: tuple[tuple[float, Grade], ...] = (
    (8.0, Grade.A),
    (6.0, Grade.B),
    (4.0, Grade.C),
)


def _classify(
    value: float,
    thresholds: tuple[tuple[float, Grade], ...],
    field: str,
) -> Grade:
    if value is None or isinstance(value, bool) or not math.isfinite(value):
        logger.debug(f"Cannot grade {field}={value!r}")
        raise InvalidInputError(field, value, "must be a finite number")

    for minimum, grade in thresholds:
        if value >= minimum:
            return grade
    return Grade.D


def classify_return(cash_on_cash_return_pct: float) -> Grade:
    """Grade a cash-on-cash return percentage.

    Args:
        cash_on_cash_return_pct: Return as a percentage (e.g., 9.5 for 9.5%)

    Returns:
        Grade.A (>= 12), Grade.B (>= 8), Grade.C (>= 4) or Grade.D

    Raises:
        InvalidInputError: If the value is NaN or infinite
    """
    return _classify(cash_on_cash_return_pct, RETURN_GRADE_THRESHOLDS, "cash_on_cash_return_pct")


def classify_ratio(rent_to_price_pct: float) -> Grade:
    """Grade a rent-to-price ratio percentage.

    Args:
        rent_to_price_pct: Annual rent / price as a percentage

    Returns:
        Grade.A (>= 8), Grade.B (>= 6), Grade.C (>= 4) or Grade.D

    Raises:
        InvalidInputError: If the value is NaN or infinite
    """
    return _classify(rent_to_price_pct, RATIO_GRADE_THRESHOLDS, "rent_to_price_pct")


def grade_label(grade: Grade) -> str:
    """Return the label for a grade ("Excellent", "Good", "Fair", "Poor")."""
    return grade.label
