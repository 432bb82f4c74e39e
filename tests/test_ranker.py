"""Tests for PropertyRanker."""

import csv
import io
import logging

import pytest

from roimetrics.analysis import PropertyRanker
from roimetrics.config import Settings
from roimetrics.models import Grade, PropertyFilter, PropertyListing, PropertyType


class TestAnalyzeListing:
    """Test single listing analysis."""

    def test_ratio_and_grade(self, ranker: PropertyRanker, grade_a_listing: PropertyListing):
        metrics = ranker.analyze_listing(grade_a_listing)

        assert metrics.property_id == "grade-a"
        assert metrics.rent_to_price_pct == 9.0
        assert metrics.grade == Grade.A
        assert metrics.annual_rent == 18000
        # (9.0 - 4.5) / 4.5
        assert metrics.ratio_vs_market_pct == 100.0

    def test_ratio_rounded(self, ranker: PropertyRanker):
        listing = PropertyListing(
            id="odd", address="1 Odd St", city="Austin", list_price=333333, estimated_rent=2222
        )
        assert ranker.analyze_listing(listing).rent_to_price_pct == 8.0

    def test_below_market(self, ranker: PropertyRanker, grade_d_listing: PropertyListing):
        metrics = ranker.analyze_listing(grade_d_listing)
        assert metrics.ratio_vs_market_pct == pytest.approx(-33.3)

    def test_custom_baseline(self, grade_a_listing: PropertyListing):
        ranker = PropertyRanker(settings=Settings(_env_file=None, market_ratio_baseline=6.0))
        assert ranker.analyze_listing(grade_a_listing).ratio_vs_market_pct == 50.0


class TestAnalyzeBatch:
    """Test batch analysis."""

    def test_analyze_multiple(
        self, ranker: PropertyRanker, sample_listings: list[PropertyListing]
    ):
        results = ranker.analyze_batch(sample_listings)

        assert len(results) == 4
        for listing, metrics in results:
            assert metrics.property_id == listing.id

    def test_bad_listing_skipped(
        self,
        ranker: PropertyRanker,
        grade_a_listing: PropertyListing,
        caplog: pytest.LogCaptureFixture,
    ):
        """A listing that cannot be analyzed is logged and skipped."""
        broken = PropertyListing.model_construct(
            id="broken", address="0 Nowhere", city="Austin", list_price=0, estimated_rent=1000
        )
        with caplog.at_level(logging.WARNING):
            results = ranker.analyze_batch([broken, grade_a_listing])

        assert [l.id for l, _ in results] == ["grade-a"]
        assert "broken" in caplog.text


class TestRankByRatio:
    """Test ranking."""

    def test_rank_order(self, ranker: PropertyRanker, sample_listings: list[PropertyListing]):
        ranked = ranker.rank_by_ratio(sample_listings)

        assert [l.id for l, _ in ranked] == ["grade-a", "grade-b", "grade-c", "grade-d"]
        ratios = [m.rent_to_price_pct for _, m in ranked]
        assert ratios == sorted(ratios, reverse=True)

    def test_ties_keep_input_order(self, ranker: PropertyRanker):
        first = PropertyListing(
            id="first", address="1 A St", city="Austin", list_price=100000, estimated_rent=500
        )
        second = PropertyListing(
            id="second", address="2 B St", city="Austin", list_price=200000, estimated_rent=1000
        )
        ranked = ranker.rank_by_ratio([first, second])
        assert [l.id for l, _ in ranked] == ["first", "second"]

    def test_top_opportunities(
        self, ranker: PropertyRanker, sample_listings: list[PropertyListing]
    ):
        top = ranker.get_top_opportunities(sample_listings, n=2)
        assert [l.id for l, _ in top] == ["grade-a", "grade-b"]

    def test_top_opportunities_filtered(
        self, ranker: PropertyRanker, sample_listings: list[PropertyListing]
    ):
        top = ranker.get_top_opportunities(
            sample_listings, n=5, criteria=PropertyFilter(min_price=250000)
        )
        assert [l.id for l, _ in top] == ["grade-b", "grade-c", "grade-d"]

    def test_count_by_grade(self, ranker: PropertyRanker, sample_listings: list[PropertyListing]):
        counts = ranker.count_by_grade(sample_listings)
        assert counts == {Grade.A: 1, Grade.B: 1, Grade.C: 1, Grade.D: 1}

    def test_count_by_grade_empty(self, ranker: PropertyRanker):
        assert sum(ranker.count_by_grade([]).values()) == 0


class TestFilterByCriteria:
    """Test map filters."""

    def _ids(self, ranker, listings, **criteria):
        return [l.id for l, _ in ranker.filter_by_criteria(listings, PropertyFilter(**criteria))]

    def test_no_criteria(self, ranker: PropertyRanker, sample_listings: list[PropertyListing]):
        assert len(self._ids(ranker, sample_listings)) == 4

    def test_zip_prefix(self, ranker: PropertyRanker, sample_listings: list[PropertyListing]):
        assert self._ids(ranker, sample_listings, zip_code="78701") == ["grade-a"]
        assert len(self._ids(ranker, sample_listings, zip_code="787")) == 4

    def test_price_bounds_inclusive(
        self, ranker: PropertyRanker, sample_listings: list[PropertyListing]
    ):
        ids = self._ids(ranker, sample_listings, min_price=250000, max_price=300000)
        assert ids == ["grade-c", "grade-b"]

    def test_min_ratio(self, ranker: PropertyRanker, sample_listings: list[PropertyListing]):
        assert self._ids(ranker, sample_listings, min_ratio=6.0) == ["grade-a", "grade-b"]

    def test_property_type(self, ranker: PropertyRanker, sample_listings: list[PropertyListing]):
        ids = self._ids(ranker, sample_listings, property_type=PropertyType.SINGLE_FAMILY)
        assert ids == ["grade-a", "grade-d"]

    def test_bedrooms_min(self, ranker: PropertyRanker, sample_listings: list[PropertyListing]):
        assert self._ids(ranker, sample_listings, bedrooms_min=3) == ["grade-a", "grade-d"]

    def test_missing_zip_excluded(self, ranker: PropertyRanker):
        listing = PropertyListing(
            id="nozip", address="3 C St", city="Austin", list_price=100000, estimated_rent=800
        )
        assert self._ids(ranker, [listing], zip_code="787") == []


class TestReports:
    """Test report generation."""

    def test_report_contents(
        self, ranker: PropertyRanker, sample_listings: list[PropertyListing]
    ):
        report = ranker.generate_report(sample_listings, top_n=2)

        assert "Properties Analyzed: 4" in report
        assert "A (Excellent): 1" in report
        # mean of 9.0, 6.4, 4.8, 3.0
        assert "Average Ratio: 5.80%" in report
        assert "TOP 2 OPPORTUNITIES" in report
        assert "1. 1001 Congress Ave" in report
        assert "1004 Riverside Dr" not in report

    def test_empty_report(self, ranker: PropertyRanker):
        assert ranker.generate_report([]) == "No properties to analyze."

    def test_csv(self, ranker: PropertyRanker, sample_listings: list[PropertyListing]):
        lines = ranker.generate_csv(sample_listings).splitlines()

        assert lines[0].startswith("ID,Address")
        assert len(lines) == 5
        assert lines[1].startswith("grade-a,")
        assert lines[1].endswith(",9.00,A,100.0")

    def test_csv_round_trip_with_commas(self, ranker: PropertyRanker):
        """Commas and quotes in text fields survive a CSV read back."""
        listing = PropertyListing(
            id="unit-4,b",
            address='12 "Old" Mill Rd, Unit 4',
            city="Austin, TX",
            zip_code="78701",
            list_price=200000,
            estimated_rent=1500,
        )
        rows = list(csv.reader(io.StringIO(ranker.generate_csv([listing]))))

        assert len(rows) == 2
        assert len(rows[1]) == len(rows[0])
        assert rows[1][:4] == ["unit-4,b", '12 "Old" Mill Rd, Unit 4', "Austin, TX", "78701"]
        assert rows[1][6:] == ["9.00", "A", "100.0"]
