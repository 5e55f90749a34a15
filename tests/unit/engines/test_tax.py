"""
Income Tax Strategy Unit Tests

Tests for the flat-rate and bracketed withholding approximations.
"""

from decimal import Decimal

import pytest

from payroll_engines.exceptions import ValidationError
from payroll_engines.services.tax import FlatRateTaxStrategy, SimplifiedBracketTaxStrategy


class TestFlatRateTax:
    """Test the 3.3% flat approximation."""

    def test_default_rates(self):
        """Test income tax 3.3% and local tax 10% of income tax."""
        result = FlatRateTaxStrategy().compute_tax(Decimal("2000000"))

        assert result.income_tax == Decimal("66000")
        assert result.local_tax == Decimal("6600")

    def test_custom_rates(self):
        """Test rates can be overridden per strategy."""
        strategy = FlatRateTaxStrategy(income_tax_rate=Decimal("0.05"), local_tax_rate=Decimal("0"))

        result = strategy.compute_tax(Decimal("1000000"))

        assert result.income_tax == Decimal("50000")
        assert result.local_tax == Decimal("0")

    def test_rates_from_settings(self, override_settings):
        """Test configured rates are picked up."""
        override_settings(income_tax_rate="0.03")

        result = FlatRateTaxStrategy().compute_tax(Decimal("1000000"))

        assert result.income_tax == Decimal("30000")

    def test_negative_gross_raises(self):
        """Test negative gross is rejected."""
        with pytest.raises(ValidationError):
            FlatRateTaxStrategy().compute_tax(Decimal("-1"))


class TestSimplifiedBracketTax:
    """Test the bracketed estimate."""

    @pytest.mark.parametrize(
        "gross,dependents,expected",
        [
            # Up to 1M: no tax
            ("800000", 1, "0"),
            ("1000000", 1, "0"),
            # 1.5M: 500,000 x 6% - 10,000
            ("1500000", 1, "20000"),
            # 2.5M: 500,000 x 15% + 60,000 - 15,000
            ("2500000", 1, "120000"),
            # 4M, two dependents: 1,000,000 x 24% + 210,000 - 40,000
            ("4000000", 2, "410000"),
        ],
    )
    def test_brackets(self, gross, dependents, expected):
        """Test each bracket's formula."""
        strategy = SimplifiedBracketTaxStrategy(dependents=dependents)

        result = strategy.compute_tax(Decimal(gross))

        assert result.income_tax == Decimal(expected)
        assert result.local_tax == (Decimal(expected) * Decimal("0.1")).quantize(Decimal("1"))

    def test_dependent_credit_floors_at_zero(self):
        """Test large dependent credits never produce negative tax."""
        result = SimplifiedBracketTaxStrategy(dependents=10).compute_tax(Decimal("1100000"))

        assert result.income_tax == Decimal("0")

    def test_negative_dependents_raise(self):
        """Test negative dependents are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            SimplifiedBracketTaxStrategy(dependents=-1)

        assert exc_info.value.field == "dependents"
