"""Investment calculation data models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field
from pydantic.alias_generators import to_camel


class Grade(str, Enum):
    """Qualitative investment grade, best first."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @property
    def label(self) -> str:
        """Human readable label shown next to the letter."""
        return _GRADE_LABELS[self]

    @property
    def rank(self) -> int:
        """Numeric rank where higher is better (A=4 ... D=1)."""
        return _GRADE_RANKS[self]


_GRADE_LABELS = {
    Grade.A: "Excellent",
    Grade.B: "Good",
    Grade.C: "Fair",
    Grade.D: "Poor",
}

_GRADE_RANKS = {Grade.A: 4, Grade.B: 3, Grade.C: 2, Grade.D: 1}


class InvestmentInput(BaseModel):
    """Property and loan inputs for a single calculation.

    Types are enforced on construction; ranges (negative amounts,
    non-finite values, zero purchase price) are checked by the engine
    so that callers get an InvalidInputError naming the bad field.

    loan_amount is independent of purchase_price - down_payment and is
    never cross-checked against it.
    """

    purchase_price: float = Field(..., description="Purchase price, must be > 0")
    down_payment: float = Field(default=0.0, description="Cash down payment")
    closing_costs: float = Field(default=0.0, description="Closing costs paid in cash")
    rehab_costs: float = Field(default=0.0, description="Rehab / renovation budget")
    monthly_rent: float = Field(default=0.0, description="Total monthly rent")
    monthly_expenses: float = Field(
        default=0.0,
        description="Taxes, insurance, maintenance, vacancy and management per month",
    )
    loan_amount: float = Field(default=0.0, description="Principal financed")
    interest_rate: float = Field(
        default=0.0, description="Annual nominal rate in percent (6.5 means 6.5%)"
    )
    loan_term_years: int = Field(default=30, description="Loan term in years")

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class InvestmentResult(BaseModel):
    """Metrics derived from an InvestmentInput.

    cash_on_cash_return_pct, debt_service_coverage_ratio and
    investment_grade are None when the metric is mathematically undefined
    (no cash invested, no mortgage payment). None means "not applicable",
    not a failure.
    """

    total_cash_invested: float
    monthly_mortgage_payment: float = Field(..., ge=0)
    monthly_cash_flow: float
    annual_cash_flow: float
    cash_on_cash_return_pct: Optional[float] = None
    cap_rate_pct: float
    rent_to_price_pct: float
    debt_service_coverage_ratio: Optional[float] = None
    investment_grade: Optional[Grade] = None
    is_dscr_healthy: Optional[bool] = Field(
        default=None,
        description="DSCR at or above the healthy threshold; None when DSCR is undefined",
    )

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @computed_field
    @property
    def is_cash_flow_positive(self) -> bool:
        """Check if the property produces positive monthly cash flow."""
        return self.monthly_cash_flow > 0

    @computed_field
    @property
    def grade_label(self) -> Optional[str]:
        """Label for investment_grade (e.g. "Excellent")."""
        if self.investment_grade is None:
            return None
        return self.investment_grade.label


class CalculationReport(BaseModel):
    """Exportable snapshot of one calculation.

    Same layout as the calculator's download (inputs, results, timestamp),
    but keys are the camelCase model field names: loanTermYears,
    monthlyMortgagePayment, cashOnCashReturnPct, rentToPricePct and
    debtServiceCoverageRatio rather than loanTerm, monthlyMortgage,
    cashOnCashReturn, rentToPrice and debtServiceCoverage.
    """

    inputs: InvestmentInput
    results: InvestmentResult
    calculated_at: datetime

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    def to_json(self) -> str:
        """Serialize with camelCase field-name keys and 2-space indent."""
        return self.model_dump_json(by_alias=True, indent=2)

    @property
    def filename(self) -> str:
        """Download name used by the calculator's export."""
        return "cash-on-cash-analysis.json"
