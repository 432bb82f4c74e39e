"""Property ranking and filtering by rent-to-price ratio.

This module ranks, filters and summarizes in-memory property lists the
way the map and heat map views present them.
"""

import csv
import io
import logging
from statistics import mean, median
from typing import Optional

from ..config import Settings, config
from ..models.investment import Grade
from ..models.property import PropertyFilter, PropertyListing, RatioMetrics
from .calculator import InvestmentCalculator
from .grading import classify_ratio

logger = logging.getLogger(__name__)


class PropertyRanker:
    """Rank and filter listings by rent-to-price ratio.

    Example:
        ranker = PropertyRanker()

        # Best ratios first
        for listing, metrics in ranker.get_top_opportunities(listings, n=5):
            print(f"{listing.address}: {metrics.rent_to_price_pct}% ({metrics.grade.value})")

        # Map filters
        deals = ranker.filter_by_criteria(listings, PropertyFilter(min_ratio=6.0))
    """

    def __init__(
        self,
        calculator: Optional[InvestmentCalculator] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize ranker.

        Args:
            calculator: Optional InvestmentCalculator instance.
                       Creates new instance if not provided.
            settings: Optional Settings for the market baseline and top N.
        """
        self.settings = settings or config
        self.calc = calculator or InvestmentCalculator(self.settings)

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze_listing(self, listing: PropertyListing) -> RatioMetrics:
        """Compute rent-to-price metrics for one listing."""
        ratio = round(self.calc.rent_to_price_ratio(listing.list_price, listing.estimated_rent), 2)
        baseline = self.settings.market_ratio_baseline
        return RatioMetrics(
            property_id=listing.id,
            list_price=listing.list_price,
            estimated_rent=listing.estimated_rent,
            rent_to_price_pct=ratio,
            grade=classify_ratio(ratio),
            ratio_vs_market_pct=round((ratio - baseline) / baseline * 100, 1),
        )

    def analyze_batch(
        self,
        listings: list[PropertyListing],
    ) -> list[tuple[PropertyListing, RatioMetrics]]:
        """Analyze multiple listings, skipping any that fail.

        Args:
            listings: List of PropertyListing objects to analyze

        Returns:
            List of (PropertyListing, RatioMetrics) tuples in input order
        """
        results = []
        for listing in listings:
            try:
                results.append((listing, self.analyze_listing(listing)))
            except Exception as e:
                logger.warning(f"Failed to analyze {listing.id}: {e}")
        return results

    # =========================================================================
    # Ranking and Filtering
    # =========================================================================

    def rank_by_ratio(
        self,
        listings: list[PropertyListing],
    ) -> list[tuple[PropertyListing, RatioMetrics]]:
        """Rank listings by rent-to-price ratio (highest first).

        Ties keep their input order.
        """
        analyzed = self.analyze_batch(listings)
        return sorted(analyzed, key=lambda x: x[1].rent_to_price_pct, reverse=True)

    def filter_by_criteria(
        self,
        listings: list[PropertyListing],
        criteria: PropertyFilter,
    ) -> list[tuple[PropertyListing, RatioMetrics]]:
        """Keep listings matching every set criterion, in input order."""
        return [
            (listing, metrics)
            for listing, metrics in self.analyze_batch(listings)
            if criteria.matches_listing(listing, metrics)
        ]

    def get_top_opportunities(
        self,
        listings: list[PropertyListing],
        n: Optional[int] = None,
        criteria: Optional[PropertyFilter] = None,
    ) -> list[tuple[PropertyListing, RatioMetrics]]:
        """Get the top N listings by ratio, optionally filtered first.

        Args:
            listings: Listings to analyze
            n: Number to return (defaults to settings.top_n)
            criteria: Optional filter applied before ranking

        Returns:
            Top N (PropertyListing, RatioMetrics) tuples
        """
        n = n if n is not None else self.settings.top_n
        if criteria is not None:
            candidates = [l for l, _ in self.filter_by_criteria(listings, criteria)]
        else:
            candidates = listings
        return self.rank_by_ratio(candidates)[:n]

    def count_by_grade(self, listings: list[PropertyListing]) -> dict[Grade, int]:
        """Count analyzed listings per grade (every grade present, possibly 0)."""
        counts = {grade: 0 for grade in Grade}
        for _, metrics in self.analyze_batch(listings):
            counts[metrics.grade] += 1
        return counts

    # =========================================================================
    # Report Generation
    # =========================================================================

    def generate_report(
        self,
        listings: list[PropertyListing],
        top_n: Optional[int] = None,
    ) -> str:
        """Generate text summary report of rent-to-price opportunities.

        Args:
            listings: Listings to analyze
            top_n: Number of top listings to highlight

        Returns:
            Formatted text report
        """
        if not listings:
            return "No properties to analyze."

        analyzed = self.rank_by_ratio(listings)

        if not analyzed:
            return "Could not analyze any properties."

        top_n = top_n if top_n is not None else self.settings.top_n
        ratios = [m.rent_to_price_pct for _, m in analyzed]
        prices = [l.list_price for l, _ in analyzed]

        grade_counts = {grade: 0 for grade in Grade}
        for _, metrics in analyzed:
            grade_counts[metrics.grade] += 1

        lines = [
            "=" * 60,
            "RENT-TO-PRICE ANALYSIS REPORT",
            "=" * 60,
            "",
            f"Properties Analyzed: {len(analyzed)}",
            "",
            "Grade Breakdown:",
        ]

        for grade, count in grade_counts.items():
            lines.append(f"  {grade.value} ({grade.label}): {count}")

        lines.extend([
            "",
            "Summary Statistics:",
            f"  Price Range: ${min(prices):,.0f} - ${max(prices):,.0f}",
            f"  Average Ratio: {mean(ratios):.2f}%",
            f"  Median Ratio: {median(ratios):.2f}%",
            f"  Market Baseline: {self.settings.market_ratio_baseline:.2f}%",
            "",
            "-" * 60,
            f"TOP {min(top_n, len(analyzed))} OPPORTUNITIES",
            "-" * 60,
            "",
        ])

        for i, (listing, metrics) in enumerate(analyzed[:top_n], 1):
            lines.extend([
                f"{i}. {listing.address[:40]}",
                f"   {listing.city} {listing.zip_code or ''} | ${listing.list_price:,.0f}".rstrip(),
                f"   Ratio: {metrics.rent_to_price_pct:.2f}% ({metrics.grade.value}) | "
                f"Rent: ${listing.estimated_rent:,.0f}/mo | "
                f"vs Market: {metrics.ratio_vs_market_pct:+.1f}%",
                "",
            ])

        lines.append("=" * 60)

        return "\n".join(lines)

    def generate_csv(self, listings: list[PropertyListing]) -> str:
        """Generate CSV export of analyzed listings, best ratio first."""
        headers = [
            "ID", "Address", "City", "ZIP", "Price", "Rent",
            "Ratio", "Grade", "Vs Market"
        ]

        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(headers)

        for listing, metrics in self.rank_by_ratio(listings):
            row = [
                listing.id,
                listing.address,
                listing.city,
                listing.zip_code or "",
                f"{listing.list_price:.0f}",
                f"{listing.estimated_rent:.0f}",
                f"{metrics.rent_to_price_pct:.2f}",
                metrics.grade.value,
                f"{metrics.ratio_vs_market_pct:.1f}",
            ]
            writer.writerow(row)

        return output.getvalue().rstrip("\n")
