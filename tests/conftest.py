"""Pytest fixtures and test utilities."""

import pytest

from roimetrics.analysis import InvestmentCalculator, PropertyRanker
from roimetrics.config import Settings
from roimetrics.models import InvestmentInput, PropertyListing, PropertyType


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def calculator(settings: Settings) -> InvestmentCalculator:
    """InvestmentCalculator instance."""
    return InvestmentCalculator(settings)


@pytest.fixture
def ranker(settings: Settings) -> PropertyRanker:
    """PropertyRanker instance."""
    return PropertyRanker(settings=settings)


@pytest.fixture
def default_input() -> InvestmentInput:
    """The calculator's default scenario."""
    return InvestmentInput(
        purchase_price=250000,
        down_payment=50000,
        closing_costs=7500,
        rehab_costs=15000,
        monthly_rent=2200,
        monthly_expenses=800,
        loan_amount=200000,
        interest_rate=6.5,
        loan_term_years=30,
    )


@pytest.fixture
def grade_a_listing() -> PropertyListing:
    """9.0% rent-to-price."""
    return PropertyListing(
        id="grade-a",
        address="1001 Congress Ave",
        city="Austin",
        state="TX",
        zip_code="78701",
        list_price=200000,
        estimated_rent=1500,
        property_type=PropertyType.SINGLE_FAMILY,
        bedrooms=3,
        bathrooms=2,
    )


@pytest.fixture
def grade_b_listing() -> PropertyListing:
    """6.4% rent-to-price."""
    return PropertyListing(
        id="grade-b",
        address="1002 Lamar Blvd",
        city="Austin",
        state="TX",
        zip_code="78704",
        list_price=300000,
        estimated_rent=1600,
        property_type=PropertyType.CONDO,
        bedrooms=2,
        bathrooms=1,
    )


@pytest.fixture
def grade_c_listing() -> PropertyListing:
    """4.8% rent-to-price."""
    return PropertyListing(
        id="grade-c",
        address="1003 Guadalupe St",
        city="Austin",
        state="TX",
        zip_code="78705",
        list_price=250000,
        estimated_rent=1000,
        property_type=PropertyType.TOWNHOUSE,
        bedrooms=2,
        bathrooms=1.5,
    )


@pytest.fixture
def grade_d_listing() -> PropertyListing:
    """3.0% rent-to-price."""
    return PropertyListing(
        id="grade-d",
        address="1004 Riverside Dr",
        city="Austin",
        state="TX",
        zip_code="78702",
        list_price=400000,
        estimated_rent=1000,
        property_type=PropertyType.SINGLE_FAMILY,
        bedrooms=4,
        bathrooms=3,
    )


@pytest.fixture
def sample_listings(
    grade_c_listing: PropertyListing,
    grade_a_listing: PropertyListing,
    grade_d_listing: PropertyListing,
    grade_b_listing: PropertyListing,
) -> list[PropertyListing]:
    """Listings of every grade, deliberately unsorted."""
    return [grade_c_listing, grade_a_listing, grade_d_listing, grade_b_listing]
