"""Coercion of untyped form values into an InvestmentInput.

Blank fields mean "not entered" and count as 0. Values that are present
but cannot be read as a finite number are rejected with an
InvalidInputError naming the field, instead of silently becoming 0.
"""

import logging
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional

from .config import Settings, config
from .errors import InvalidInputError
from .models.investment import InvestmentInput

logger = logging.getLogger(__name__)


# The calculator's default scenario.
DEFAULT_FORM_VALUES: dict[str, Any] = {
    "purchase_price": 250000,
    "down_payment": 50000,
    "closing_costs": 7500,
    "rehab_costs": 15000,
    "monthly_rent": 2200,
    "monthly_expenses": 800,
    "loan_amount": 200000,
    "interest_rate": 6.5,
    "loan_term_years": 30,
}

MONEY_FIELDS = (
    "down_payment",
    "closing_costs",
    "rehab_costs",
    "monthly_rent",
    "monthly_expenses",
    "loan_amount",
    "interest_rate",
)

# Alternate spellings accepted for each field
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "purchase_price": ("purchasePrice",),
    "down_payment": ("downPayment",),
    "closing_costs": ("closingCosts",),
    "rehab_costs": ("rehabCosts",),
    "monthly_rent": ("monthlyRent",),
    "monthly_expenses": ("monthlyExpenses",),
    "loan_amount": ("loanAmount",),
    "interest_rate": ("interestRate",),
    "loan_term_years": ("loanTermYears", "loanTerm"),
}


def is_blank(raw: Any) -> bool:
    """True when a form value was not entered."""
    return raw is None or (isinstance(raw, str) and raw.strip() == "")


def parse_form_value(field: str, raw: Any) -> float:
    """Convert one form value to a float.

    Args:
        field: Field name, used in error reports
        raw: Value as received (str, number or None)

    Returns:
        The parsed number, or 0.0 when the value is blank

    Raises:
        InvalidInputError: If the value is present but not a finite number
    """
    if is_blank(raw):
        return 0.0

    if isinstance(raw, bool):
        raise InvalidInputError(field, raw, "must be a number")

    if isinstance(raw, (int, float, Decimal)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if text.startswith("$"):
            text = text[1:].strip()
        try:
            value = float(text)
        except ValueError:
            raise InvalidInputError(field, raw, "must be a number") from None
    else:
        raise InvalidInputError(field, raw, "must be a number")

    if not math.isfinite(value):
        raise InvalidInputError(field, raw, "must be a finite number")
    return value


def _lookup(data: Mapping[str, Any], field: str) -> Any:
    if field in data:
        return data[field]
    for alias in FIELD_ALIASES.get(field, ()):
        if alias in data:
            return data[alias]
    return None


def input_from_form(
    data: Mapping[str, Any],
    settings: Optional[Settings] = None,
) -> InvestmentInput:
    """Build an InvestmentInput from submitted form values.

    Keys may be snake_case (purchase_price) or camelCase (purchasePrice,
    loanTerm). Unknown keys are ignored.

    Args:
        data: Mapping of field name to raw value
        settings: Optional Settings for the default loan term

    Returns:
        InvestmentInput with blank fields set to 0

    Raises:
        InvalidInputError: If purchase_price is blank or not positive,
            loan_term_years is not a positive whole number, or any value
            cannot be parsed
    """
    settings = settings or config

    raw_price = _lookup(data, "purchase_price")
    if is_blank(raw_price):
        raise InvalidInputError("purchase_price", raw_price, "is required")
    purchase_price = parse_form_value("purchase_price", raw_price)
    if purchase_price <= 0:
        raise InvalidInputError("purchase_price", raw_price, "must be greater than 0")

    values = {field: parse_form_value(field, _lookup(data, field)) for field in MONEY_FIELDS}

    raw_term = _lookup(data, "loan_term_years")
    if is_blank(raw_term):
        loan_term_years = settings.default_loan_term_years
    else:
        term = parse_form_value("loan_term_years", raw_term)
        if term <= 0 or not term.is_integer():
            raise InvalidInputError("loan_term_years", raw_term, "must be a positive whole number")
        loan_term_years = int(term)

    logger.debug(f"Parsed form input: price={purchase_price}, term={loan_term_years}")
    return InvestmentInput(
        purchase_price=purchase_price,
        loan_term_years=loan_term_years,
        **values,
    )
