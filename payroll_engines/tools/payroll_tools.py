"""
Payroll MCP Tools

Korean payroll calculation exposed as MCP tools.
"""

from decimal import Decimal
from typing import Literal

from fastmcp import FastMCP

from payroll_engines.config import get_settings
from payroll_engines.schemas.schedule import ShiftEntry
from payroll_engines.services.payroll_calculator import calculate_full_payroll, calculate_payroll
from payroll_engines.services.tax import (
    FlatRateTaxStrategy,
    SimplifiedBracketTaxStrategy,
    TaxStrategy,
)
from payroll_engines.services.work_hours import calculate_daily_hours

# Initialize MCP server (will be started from server.py)
mcp = FastMCP(
    get_settings().app_name,
    instructions="""
ShiftPay payroll and schedule-cost engines for Korean small businesses (2025 rules).

1. **Payroll** (calculate_monthly_payroll, calculate_shift_payroll)
   - Monthly salary from weekly hours (4.33 weeks/month)
   - Weekly holiday pay (주휴수당) from 15 hours a week
   - Four major social insurances, employee and employer shares
   - Simplified income and local tax (not the official withholding table)

2. **Schedule** (analyze_weekly_template, optimize_weekly_template)
   - Per-worker hours from a weekly template's slot assignments
   - Cost-reduction suggestions ranked by savings, with risk and legal flags
""",
)


def _tax_strategy(tax_method: str, dependents: int) -> TaxStrategy:
    if tax_method == "bracket":
        return SimplifiedBracketTaxStrategy(dependents=dependents)
    return FlatRateTaxStrategy()


@mcp.tool()
async def calculate_monthly_payroll(
    weekly_hours: float,
    hourly_wage: float | None = None,
    include_holiday_pay: bool = False,
    tax_method: Literal["flat", "bracket"] = "flat",
    dependents: int = 1,
) -> dict:
    """
    Calculate a monthly payroll statement from weekly working hours.

    Applies 2025 Korean rules: 4.33 average weeks per month, weekly holiday
    pay from 15 hours a week, social insurance (national pension, health,
    long-term care, employment, and on the employer side employment
    stability and industrial accident) and simplified income/local tax.

    Args:
        weekly_hours: Contracted hours per week
        hourly_wage: Hourly wage in KRW; defaults to the minimum wage (10,030 in 2025)
        include_holiday_pay: Add weekly holiday pay (주휴수당) to gross salary
        tax_method: "flat" (3.3% approximation) or "bracket" (bracketed estimate)
        dependents: Dependents for the bracket method

    Returns:
        Dictionary with gross salary, deductions, net salary and employer cost

    Example:
        40 hours/week at 10,030 KRW:
        - Monthly hours: 40 x 4.33 = 173.2
        - Gross: 1,737,196 KRW
    """
    statement = calculate_full_payroll(
        Decimal(str(weekly_hours)),
        None if hourly_wage is None else Decimal(str(hourly_wage)),
        include_holiday_pay=include_holiday_pay,
        strategy=_tax_strategy(tax_method, dependents),
    )
    monthly = statement.monthly_salary

    return {
        "weekly_hours": float(monthly.weekly_hours),
        "hourly_wage": float(monthly.hourly_wage),
        "monthly_working_hours": float(monthly.monthly_working_hours),
        "holiday_hours": float(monthly.holiday_hours),
        "holiday_pay": float(monthly.holiday_pay),
        "gross_salary": float(monthly.gross_salary),
        "employee_insurance": {
            "national_pension": float(statement.insurance.employee.national_pension),
            "health_insurance": float(statement.insurance.employee.health_insurance),
            "long_term_care": float(statement.insurance.employee.long_term_care),
            "employment": float(statement.insurance.employee.employment),
            "total": float(statement.insurance.employee.total),
        },
        "employer_insurance": {
            "national_pension": float(statement.insurance.employer.national_pension),
            "health_insurance": float(statement.insurance.employer.health_insurance),
            "long_term_care": float(statement.insurance.employer.long_term_care),
            "employment": float(statement.insurance.employer.employment),
            "employment_stability": float(statement.insurance.employer.employment_stability),
            "workers_compensation": float(statement.insurance.employer.workers_compensation),
            "total": float(statement.insurance.employer.total),
        },
        "income_tax": float(statement.tax.income_tax),
        "local_tax": float(statement.tax.local_tax),
        "total_deductions": float(statement.net_salary.total_deductions),
        "net_salary": float(statement.net_salary.net_salary),
        "employer_total_cost": float(statement.employer_cost.total_cost),
        "minimum_wage_violation": monthly.minimum_wage_violation,
        "calculation_notes": statement.calculation_notes,
    }


@mcp.tool()
async def calculate_shift_payroll(
    employee_id: int,
    start_time: str,
    end_time: str,
    hourly_wage: float,
    break_minutes: int = 0,
    weekly_hours: float = 0.0,
) -> dict:
    """
    Calculate pay for a single shift.

    Splits the shift into regular (first 8h), overtime and night hours, then
    prices each bucket. Holiday pay is included when the worker's weekly
    hours reach 15.

    Args:
        employee_id: Employee ID
        start_time: Shift start (HH:MM)
        end_time: Shift end (HH:MM); earlier than start means past midnight
        hourly_wage: Hourly wage in KRW
        break_minutes: Unpaid break minutes within the shift
        weekly_hours: The worker's weekly total, for holiday-pay eligibility

    Returns:
        Dictionary with hour buckets and pay components
    """
    shift = ShiftEntry(
        employee_id=employee_id,
        start_time=start_time,
        end_time=end_time,
        break_minutes=break_minutes,
    )
    hours = calculate_daily_hours(shift)
    eligible = Decimal(str(weekly_hours)) >= get_settings().holiday_pay_threshold_hours

    payroll = calculate_payroll(
        hours.total_hours,
        hours.regular_hours,
        hours.overtime_hours,
        hours.night_hours,
        Decimal(str(hourly_wage)),
        eligible,
    )

    return {
        "employee_id": employee_id,
        "total_hours": float(hours.total_hours),
        "regular_hours": float(hours.regular_hours),
        "overtime_hours": float(hours.overtime_hours),
        "night_hours": float(hours.night_hours),
        "is_night_shift": hours.is_night_shift,
        "regular_pay": float(payroll.regular_pay),
        "overtime_pay": float(payroll.overtime_pay),
        "night_pay": float(payroll.night_pay),
        "holiday_pay": float(payroll.holiday_pay),
        "total_pay": float(payroll.total_pay),
        "is_eligible_for_holiday_pay": payroll.is_eligible_for_holiday_pay,
    }
