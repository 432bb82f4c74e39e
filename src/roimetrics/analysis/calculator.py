"""Investment metrics calculator for rental property analysis.

This module is the single home of the calculator formulas: total cash
invested, amortized mortgage payment, cash flow, cash-on-cash return,
cap rate, rent-to-price ratio and debt service coverage ratio. Every
function is pure: no I/O, no clock, no shared mutable state.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Optional

from ..config import Settings, config
from ..errors import InvalidInputError
from ..models.investment import CalculationReport, InvestmentInput, InvestmentResult
from .grading import classify_return

logger = logging.getLogger(__name__)


# Fields that must be finite and non-negative, in validation order.
NON_NEGATIVE_FIELDS = (
    "down_payment",
    "closing_costs",
    "rehab_costs",
    "monthly_rent",
    "monthly_expenses",
    "loan_amount",
    "interest_rate",
)

# Input field reported when a derived metric overflows to inf.
OVERFLOW_SOURCE_FIELDS = {
    "total_cash_invested": "down_payment",
    "monthly_mortgage_payment": "loan_amount",
    "monthly_cash_flow": "monthly_rent",
    "annual_cash_flow": "monthly_rent",
    "cash_on_cash_return_pct": "down_payment",
    "cap_rate_pct": "monthly_rent",
    "rent_to_price_pct": "monthly_rent",
    "debt_service_coverage_ratio": "loan_amount",
}


def _require_finite(field: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidInputError(field, value, "must be a finite number")


def _require_non_negative(field: str, value: float) -> None:
    _require_finite(field, value)
    if value < 0:
        raise InvalidInputError(field, value, "must not be negative")


class InvestmentCalculator:
    """Calculate investment metrics for a rental property.

    Example:
        calc = InvestmentCalculator()

        payment = calc.amortized_payment(200000, 6.5, 30)
        print(f"P&I: ${payment:,.2f}/mo")

        result = calc.compute_metrics(InvestmentInput(purchase_price=250000, ...))
        print(result.cash_on_cash_return_pct, result.investment_grade)
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize calculator.

        Args:
            settings: Optional Settings instance for thresholds.
                      Uses the module-level config if not provided.
        """
        self.settings = settings or config

    # =========================================================================
    # Validation
    # =========================================================================

    def validate_input(self, data: InvestmentInput) -> None:
        """Check value ranges of an InvestmentInput.

        Raises:
            InvalidInputError: On the first field that is non-finite,
                negative, or (for purchase_price) not strictly positive.
        """
        _require_finite("purchase_price", data.purchase_price)
        if data.purchase_price <= 0:
            raise InvalidInputError("purchase_price", data.purchase_price, "must be greater than 0")

        for field in NON_NEGATIVE_FIELDS:
            _require_non_negative(field, getattr(data, field))

        if data.down_payment > data.purchase_price:
            raise InvalidInputError(
                "down_payment", data.down_payment, "must not exceed purchase_price"
            )
        if data.loan_term_years <= 0:
            raise InvalidInputError("loan_term_years", data.loan_term_years, "must be greater than 0")

    # =========================================================================
    # Core Investment Metrics
    # =========================================================================

    def total_cash_invested(
        self,
        down_payment: float,
        closing_costs: float,
        rehab_costs: float,
    ) -> float:
        """Total cash invested = down payment + closing costs + rehab costs."""
        return down_payment + closing_costs + rehab_costs

    def amortized_payment(
        self,
        principal: float,
        annual_rate_pct: float,
        term_years: int,
    ) -> float:
        """Calculate the monthly principal-and-interest payment.

        Uses monthly compounding of the nominal annual rate:

            r = annual_rate_pct / 100 / 12
            n = term_years * 12
            payment = principal * r / (1 - (1 + r)^-n)

        A zero rate repays the principal in equal installments
        (principal / n). A zero principal costs nothing.

        Args:
            principal: Loan amount, >= 0
            annual_rate_pct: Annual nominal rate in percent (6.5 for 6.5%), >= 0
            term_years: Loan term in years, > 0

        Returns:
            Monthly payment, never negative, NaN or infinite

        Raises:
            InvalidInputError: If an argument is out of range
        """
        _require_non_negative("loan_amount", principal)
        _require_non_negative("interest_rate", annual_rate_pct)
        _require_finite("loan_term_years", term_years)
        if term_years <= 0:
            raise InvalidInputError("loan_term_years", term_years, "must be greater than 0")

        if principal == 0:
            return 0.0

        n_payments = term_years * 12
        monthly_rate = annual_rate_pct / 100 / 12
        if monthly_rate == 0:
            return principal / n_payments

        # 1 - (1+r)^-n, exact for tiny r and bounded by 1 for huge r
        discount = -math.expm1(-n_payments * math.log1p(monthly_rate))
        payment = principal * monthly_rate / discount
        if not math.isfinite(payment):
            raise InvalidInputError(
                "loan_amount", principal, f"payment overflows at interest_rate={annual_rate_pct!r}"
            )
        return payment

    def monthly_cash_flow(
        self,
        monthly_rent: float,
        monthly_expenses: float,
        monthly_mortgage: float,
    ) -> float:
        """Cash flow = rent - expenses - mortgage payment (can be negative)."""
        return monthly_rent - monthly_expenses - monthly_mortgage

    def cash_on_cash_return(
        self,
        annual_cash_flow: float,
        total_cash_invested: float,
    ) -> Optional[float]:
        """Calculate cash-on-cash return percentage.

        CoC Return = (Annual Cash Flow / Total Cash Invested) × 100

        Returns:
            Return as percentage, or None when no cash was invested
        """
        if total_cash_invested == 0:
            return None
        return (annual_cash_flow / total_cash_invested) * 100

    def cap_rate(
        self,
        purchase_price: float,
        monthly_rent: float,
        monthly_expenses: float,
    ) -> float:
        """Cap Rate = (annual rent - annual expenses) / purchase price × 100.

        Debt service is excluded. Can be negative when expenses exceed rent.
        """
        noi = monthly_rent * 12 - monthly_expenses * 12
        return (noi / purchase_price) * 100

    def rent_to_price_ratio(self, purchase_price: float, monthly_rent: float) -> float:
        """Rent-to-price = annual rent / purchase price × 100."""
        return (monthly_rent * 12 / purchase_price) * 100

    def debt_service_coverage(
        self,
        monthly_rent: float,
        monthly_expenses: float,
        monthly_mortgage: float,
    ) -> Optional[float]:
        """DSCR = (rent - expenses) / mortgage payment.

        Returns:
            The ratio, or None when there is no mortgage payment
        """
        if monthly_mortgage == 0:
            return None
        return (monthly_rent - monthly_expenses) / monthly_mortgage

    # =========================================================================
    # Full Analysis
    # =========================================================================

    def compute_metrics(self, data: InvestmentInput) -> InvestmentResult:
        """Compute every metric for one set of inputs.

        Either all metrics are returned or InvalidInputError is raised;
        there are no partial results. Undefined ratios come back as None.

        Args:
            data: Property and loan inputs

        Returns:
            InvestmentResult with all calculated values

        Raises:
            InvalidInputError: If any field is out of range
        """
        try:
            self.validate_input(data)
        except InvalidInputError as e:
            logger.debug(f"Rejected investment input: {e}")
            raise

        try:
            metrics = self._derive_metrics(data)
        except InvalidInputError as e:
            logger.debug(f"Input overflows metrics: {e}")
            raise

        coc_return = metrics["cash_on_cash_return_pct"]
        dscr = metrics["debt_service_coverage_ratio"]
        grade = classify_return(coc_return) if coc_return is not None else None
        dscr_healthy = dscr >= self.settings.dscr_healthy_threshold if dscr is not None else None

        return InvestmentResult(
            **metrics,
            investment_grade=grade,
            is_dscr_healthy=dscr_healthy,
        )

    def _derive_metrics(self, data: InvestmentInput) -> dict[str, Optional[float]]:
        """Compute the numeric metrics, rejecting inputs whose results overflow."""
        total_cash = self.total_cash_invested(
            data.down_payment, data.closing_costs, data.rehab_costs
        )
        mortgage = self.amortized_payment(
            data.loan_amount, data.interest_rate, data.loan_term_years
        )
        cash_flow = self.monthly_cash_flow(data.monthly_rent, data.monthly_expenses, mortgage)
        annual_cash_flow = cash_flow * 12

        metrics = {
            "total_cash_invested": total_cash,
            "monthly_mortgage_payment": mortgage,
            "monthly_cash_flow": cash_flow,
            "annual_cash_flow": annual_cash_flow,
            "cash_on_cash_return_pct": self.cash_on_cash_return(annual_cash_flow, total_cash),
            "cap_rate_pct": self.cap_rate(
                data.purchase_price, data.monthly_rent, data.monthly_expenses
            ),
            "rent_to_price_pct": self.rent_to_price_ratio(data.purchase_price, data.monthly_rent),
            "debt_service_coverage_ratio": self.debt_service_coverage(
                data.monthly_rent, data.monthly_expenses, mortgage
            ),
        }

        for metric, value in metrics.items():
            if value is not None and not math.isfinite(value):
                field = OVERFLOW_SOURCE_FIELDS[metric]
                raise InvalidInputError(
                    field, getattr(data, field), f"too large, {metric} is not finite"
                )
        return metrics

    def build_report(
        self,
        data: InvestmentInput,
        calculated_at: Optional[datetime] = None,
    ) -> CalculationReport:
        """Bundle inputs, results and a timestamp for export.

        Args:
            data: Property and loan inputs
            calculated_at: Timestamp to record; defaults to now (UTC)

        Returns:
            CalculationReport ready for to_json()
        """
        results = self.compute_metrics(data)
        return CalculationReport(
            inputs=data,
            results=results,
            calculated_at=calculated_at or datetime.now(timezone.utc),
        )


# Shared instance for the module-level helpers
_calculator = InvestmentCalculator()


def compute_amortized_payment(principal: float, annual_rate_pct: float, term_years: int) -> float:
    """Monthly payment for a fixed-rate amortized loan. See InvestmentCalculator.amortized_payment."""
    return _calculator.amortized_payment(principal, annual_rate_pct, term_years)


def compute_metrics(data: InvestmentInput) -> InvestmentResult:
    """Compute all metrics for data. See InvestmentCalculator.compute_metrics."""
    return _calculator.compute_metrics(data)
