"""
Income Tax Strategies

Withholding is pluggable so the official NTS simplified withholding table
can replace the approximations below without touching the rest of the
payroll pipeline. A strategy takes a monthly gross salary and returns
income tax plus local income tax.
"""

from decimal import Decimal
from typing import Protocol

from payroll_engines.config import get_settings
from payroll_engines.exceptions import ValidationError
from payroll_engines.schemas.payroll import TaxResult
from payroll_engines.services.rounding import require_non_negative, round_won

ZERO = Decimal("0")


class TaxStrategy(Protocol):
    def compute_tax(self, gross_salary: Decimal) -> TaxResult: ...


class FlatRateTaxStrategy:
    """
    Flat-rate stand-in for the withholding table.

    income tax = gross x 3.3%, local tax = income tax x 10%. This is a
    simplification and is labelled as such wherever it is shown.
    """

    def __init__(self, income_tax_rate: Decimal | None = None, local_tax_rate: Decimal | None = None):
        settings = get_settings()
        self.income_tax_rate = (
            settings.income_tax_rate if income_tax_rate is None else income_tax_rate
        )
        self.local_tax_rate = settings.local_tax_rate if local_tax_rate is None else local_tax_rate

    def compute_tax(self, gross_salary: Decimal) -> TaxResult:
        gross = require_non_negative(gross_salary, "gross_salary")
        income_tax = round_won(gross * self.income_tax_rate)
        local_tax = round_won(income_tax * self.local_tax_rate)
        return TaxResult(income_tax=income_tax, local_tax=local_tax)


# (upper bound, base rate applied above the previous bound, fixed amount,
#  deduction per dependent) for monthly gross, KRW
SIMPLIFIED_BRACKETS: list[tuple[Decimal | None, Decimal, Decimal, Decimal]] = [
    (Decimal("1000000"), ZERO, ZERO, ZERO),
    (Decimal("2000000"), Decimal("0.06"), ZERO, Decimal("10000")),
    (Decimal("3000000"), Decimal("0.15"), Decimal("60000"), Decimal("15000")),
    (None, Decimal("0.24"), Decimal("210000"), Decimal("20000")),
]


class SimplifiedBracketTaxStrategy:
    """
    Bracketed approximation of the monthly withholding table.

    Each bracket taxes the amount above the previous bound at its rate, adds
    a fixed amount and subtracts a per-dependent credit. Still an estimate,
    but closer to real withholding than the flat rate for higher salaries.
    """

    def __init__(self, dependents: int = 1, local_tax_rate: Decimal | None = None):
        if dependents < 0:
            raise ValidationError("dependents must not be negative", field="dependents")
        self.dependents = dependents
        self.local_tax_rate = (
            get_settings().local_tax_rate if local_tax_rate is None else local_tax_rate
        )

    def compute_tax(self, gross_salary: Decimal) -> TaxResult:
        gross = require_non_negative(gross_salary, "gross_salary")

        lower = ZERO
        income_tax = ZERO
        for upper, rate, fixed, per_dependent in SIMPLIFIED_BRACKETS:
            if upper is None or gross <= upper:
                if rate:
                    income_tax = (gross - lower) * rate + fixed - per_dependent * self.dependents
                break
            lower = upper

        income_tax = round_won(max(income_tax, ZERO))
        local_tax = round_won(income_tax * self.local_tax_rate)
        return TaxResult(income_tax=income_tax, local_tax=local_tax)
