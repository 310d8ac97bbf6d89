"""Tests for tier tables and layout quotes."""

from decimal import Decimal

import pytest

from gangsheet.core.errors import InvalidConstraintError
from gangsheet.core.models import AssetFootprint, Design
from gangsheet.layout import CopyQueue, LayoutResult, paginate
from gangsheet.pricing import CostTier, RoundingPolicy, TierTable, quote_layout


@pytest.fixture
def custom_table():
    return TierTable.from_pairs([(12, 1), (24, 2), (30, 3), (36, 4)])


class TestTierTable:
    """Tests for tier lookup."""

    @pytest.mark.parametrize("length,price", [
        (1, "5.28"),
        (12, "5.28"),
        (13, "10.56"),
        (33, "15.84"),
        (37, "21.12"),
        (125, "56.32"),
        (200, "75.68"),
    ])
    def test_price_for_when_default_table_then_first_tier_at_least(self, length, price):
        assert TierTable.default().price_for(length) == Decimal(price)

    def test_price_for_when_longer_than_all_tiers_then_saturates(self):
        table = TierTable.default()

        assert table.price_for(500) == table.max_tier.price == Decimal("75.68")

    def test_price_for_when_ceil_to_twelve_then_uses_rounded_tier(self, custom_table):
        """25in: first tier at least 25 is 30; rounded to 36 it is the 36 tier."""
        assert custom_table.price_for(25) == Decimal("3")
        assert custom_table.price_for(25, RoundingPolicy.CEIL_TO_TWELVE) == Decimal("4")

    def test_price_for_when_ceil_to_twelve_without_exact_tier_then_next_above(self):
        table = TierTable.from_pairs([(10, 1), (30, 2), (50, 3)])

        # 13 -> 24, no 24 tier, first tier >= 24 is 30
        assert table.price_for(13, RoundingPolicy.CEIL_TO_TWELVE) == Decimal("2")

    def test_tier_for_when_negative_length_then_raises(self):
        with pytest.raises(InvalidConstraintError):
            TierTable.default().tier_for(-1)

    def test_init_when_empty_then_raises(self):
        with pytest.raises(InvalidConstraintError):
            TierTable([])

    def test_init_when_not_increasing_then_raises(self):
        with pytest.raises(InvalidConstraintError):
            TierTable.from_pairs([(24, 2), (12, 1)])

    def test_cost_tier_when_negative_price_then_raises(self):
        with pytest.raises(InvalidConstraintError):
            CostTier(12, Decimal("-1"))

    def test_default_when_loaded_then_twelve_tiers(self):
        table = TierTable.default()

        assert len(table.tiers) == 12
        assert table.tiers[0].threshold_inches == 12
        assert table.max_tier.threshold_inches == 200


class TestQuoteLayout:
    """Tests for quote_layout()."""

    def test_quote_when_5000_copies_then_per_sheet_prices_summed(self, dtf_constraints):
        # Arrange
        design = Design("logo", AssetFootprint(288, 144), 5000)
        layout = paginate(CopyQueue.from_designs([design]), dtf_constraints)

        # Act
        quote = quote_layout(layout)

        # Assert
        assert len(quote.sheets) == 16
        assert all(q.price == Decimal("75.68") for q in quote.sheets[:15])
        assert quote.sheets[-1].length_inches == 125
        assert quote.sheets[-1].tier_inches == 140
        assert quote.sheets[-1].price == Decimal("56.32")
        assert quote.total == Decimal("1191.52")

    def test_quote_when_sheet_priced_then_carries_filename(self, dtf_constraints):
        design = Design("logo", AssetFootprint(288, 144), 50)
        layout = paginate(CopyQueue.from_designs([design]), dtf_constraints)

        quote = quote_layout(layout, policy=RoundingPolicy.CEIL_TO_TWELVE)

        assert quote.sheets[0].filename == "gangsheet_22x33.pdf"
        assert quote.sheets[0].price == Decimal("15.84")
        assert quote.policy is RoundingPolicy.CEIL_TO_TWELVE

    def test_quote_when_no_sheets_then_zero_total(self):
        quote = quote_layout(LayoutResult(sheets=()))

        assert quote.sheets == ()
        assert quote.total == Decimal("0")
