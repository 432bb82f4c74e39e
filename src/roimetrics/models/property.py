"""Property listing and rent-to-price data models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .investment import Grade


class PropertyType(str, Enum):
    """Types of residential properties."""

    SINGLE_FAMILY = "single_family"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    MULTI_FAMILY = "multi_family"


class PropertyListing(BaseModel):
    """Real estate listing data model.

    Represents a listing as returned by the property search API, with
    the fields needed for rent-to-price analysis.
    """

    # Identification
    id: str = Field(..., description="Unique listing identifier")

    # Location
    address: str = Field(..., description="Street address")
    city: str = Field(..., description="City name")
    state: Optional[str] = Field(default=None, description="Two-letter state code")
    zip_code: Optional[str] = Field(default=None, description="ZIP code")

    # Pricing
    list_price: float = Field(..., gt=0, description="Asking price in USD")
    estimated_rent: float = Field(..., ge=0, description="Estimated monthly rent")

    # Property details
    property_type: Optional[PropertyType] = Field(default=None, description="Type of property")
    bedrooms: int = Field(default=0, ge=0, description="Number of bedrooms")
    bathrooms: float = Field(default=0, ge=0, description="Number of bathrooms (allows half)")
    square_feet: Optional[int] = Field(default=None, ge=0, description="Living area in sqft")
    cap_rate: Optional[float] = Field(default=None, description="Cap rate from the data source")

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }


class RatioMetrics(BaseModel):
    """Rent-to-price analysis for a listing."""

    property_id: str = Field(..., description="Reference to PropertyListing.id")
    list_price: float = Field(..., gt=0)
    estimated_rent: float = Field(..., ge=0)

    rent_to_price_pct: float = Field(
        ..., ge=0, description="Annual rent / price * 100, rounded to 2 decimals"
    )
    grade: Grade = Field(..., description="Grade from the rent-to-price threshold table")
    ratio_vs_market_pct: float = Field(
        ..., description="Relative difference to the market baseline ratio, in percent"
    )

    model_config = {
        "validate_assignment": True,
    }

    @computed_field
    @property
    def annual_rent(self) -> float:
        """Calculate annual rent from monthly rent."""
        return self.estimated_rent * 12


class PropertyFilter(BaseModel):
    """Search criteria applied to an in-memory list of listings.

    Unset criteria do not filter. Price bounds are inclusive.

    Example:
        criteria = PropertyFilter(
            zip_code="787",
            max_price=400000,
            min_ratio=6.0,
        )
    """

    zip_code: Optional[str] = None
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)
    min_ratio: Optional[float] = Field(default=None, ge=0)
    property_type: Optional[PropertyType] = None
    bedrooms_min: Optional[int] = Field(default=None, ge=0)

    def matches_listing(self, listing: PropertyListing, metrics: RatioMetrics) -> bool:
        """Check if a listing matches these criteria."""
        if self.zip_code and (listing.zip_code is None or self.zip_code not in listing.zip_code):
            return False

        if self.min_price is not None and listing.list_price < self.min_price:
            return False
        if self.max_price is not None and listing.list_price > self.max_price:
            return False

        if self.min_ratio is not None and metrics.rent_to_price_pct < self.min_ratio:
            return False
        if self.property_type is not None and listing.property_type != self.property_type:
            return False
        if self.bedrooms_min is not None and listing.bedrooms < self.bedrooms_min:
            return False

        return True
