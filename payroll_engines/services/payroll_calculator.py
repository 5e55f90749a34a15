"""
Payroll Calculator

Korean payroll arithmetic (2025 rules): monthly salary from weekly hours,
weekly holiday pay (주휴수당), the employee and employer shares of social
insurance, simplified income tax, net pay and employer cost.

All amounts are KRW Decimals rounded to whole won with ROUND_HALF_UP.
"""

from decimal import Decimal

from payroll_engines.config import get_settings
from payroll_engines.schemas.payroll import (
    EmployeeInsurance,
    EmployerCostResult,
    EmployerInsurance,
    InsuranceResult,
    MonthlySalaryResult,
    NetSalaryResult,
    PayrollResult,
    PayrollStatement,
    TaxResult,
)
from payroll_engines.services.rounding import (
    require_non_negative,
    round_hours,
    round_won,
)
from payroll_engines.services.tax import FlatRateTaxStrategy, TaxStrategy
from payroll_engines.services.work_hours import is_eligible_for_holiday_pay

ZERO = Decimal("0")


def calculate_holiday_hours(weekly_hours: Decimal | int | float) -> Decimal:
    """
    Paid weekly-holiday hours for a week.

    Zero below the 15h threshold, a full 8 hours from 40 hours a week, and
    proportional (weekly / 40 x 8) in between.
    """
    settings = get_settings()
    hours = require_non_negative(weekly_hours, "weekly_hours")

    if not is_eligible_for_holiday_pay(hours):
        return ZERO
    if hours >= settings.full_time_weekly_hours:
        return settings.holiday_hours_full_time
    return hours / settings.full_time_weekly_hours * settings.holiday_hours_full_time


def calculate_monthly_salary(
    weekly_hours: Decimal | int | float,
    hourly_wage: Decimal | int | float | None = None,
    *,
    include_holiday_pay: bool = False,
) -> MonthlySalaryResult:
    """
    Convert weekly hours to a monthly gross salary.

    Monthly hours are weekly hours x 4.33 average weeks, and the wage
    defaults to the configured minimum wage. The holiday-pay component
    (holiday hours x 4.33 x wage) is always reported; it is added to
    ``gross_salary`` only when ``include_holiday_pay`` is set.

    Example:
        40 hours/week at 10,030 KRW:
        - 40 x 4.33 = 173.2 monthly hours
        - 173.2 x 10,030 = 1,737,196 KRW gross
    """
    settings = get_settings()
    hours = require_non_negative(weekly_hours, "weekly_hours")
    wage = require_non_negative(
        settings.minimum_wage if hourly_wage is None else hourly_wage, "hourly_wage"
    )

    weeks = settings.monthly_average_weeks
    monthly_working_hours = hours * weeks
    holiday_hours = calculate_holiday_hours(hours) * weeks

    base_salary = round_won(monthly_working_hours * wage)
    holiday_pay = round_won(holiday_hours * wage)
    gross_salary = base_salary + holiday_pay if include_holiday_pay else base_salary

    return MonthlySalaryResult(
        weekly_hours=hours,
        hourly_wage=wage,
        monthly_working_hours=round_hours(monthly_working_hours),
        holiday_hours=round_hours(holiday_hours),
        total_working_hours=round_hours(monthly_working_hours + holiday_hours),
        base_salary=base_salary,
        holiday_pay=holiday_pay,
        gross_salary=gross_salary,
        includes_holiday_pay=include_holiday_pay,
        minimum_wage_violation=wage < settings.minimum_wage,
    )


def calculate_insurance(gross_salary: Decimal | int | float) -> InsuranceResult:
    """
    Social insurance contributions on a monthly gross salary.

    Employee: national pension 4.5%, health 3.545%, employment 0.9%.
    Employer: national pension 4.5%, health 3.545%, employment 1.55%,
    employment stability 0.25% and industrial accident 0.7%.
    Long-term care is 12.95% of each side's rounded health premium.
    Each item is rounded to the won before totalling.
    """
    settings = get_settings()
    gross = require_non_negative(gross_salary, "gross_salary")

    employee_pension = round_won(gross * settings.employee_national_pension_rate)
    employee_health = round_won(gross * settings.employee_health_insurance_rate)
    employee_care = round_won(employee_health * settings.long_term_care_rate)
    employee_employment = round_won(gross * settings.employee_employment_insurance_rate)

    employer_pension = round_won(gross * settings.employer_national_pension_rate)
    employer_health = round_won(gross * settings.employer_health_insurance_rate)
    employer_care = round_won(employer_health * settings.long_term_care_rate)
    employer_employment = round_won(gross * settings.employer_employment_insurance_rate)
    employer_stability = round_won(gross * settings.employment_stability_rate)
    employer_accident = round_won(gross * settings.workers_compensation_rate)

    return InsuranceResult(
        employee=EmployeeInsurance(
            national_pension=employee_pension,
            health_insurance=employee_health,
            long_term_care=employee_care,
            employment=employee_employment,
            total=employee_pension + employee_health + employee_care + employee_employment,
        ),
        employer=EmployerInsurance(
            national_pension=employer_pension,
            health_insurance=employer_health,
            long_term_care=employer_care,
            employment=employer_employment,
            employment_stability=employer_stability,
            workers_compensation=employer_accident,
            total=(
                employer_pension
                + employer_health
                + employer_care
                + employer_employment
                + employer_stability
                + employer_accident
            ),
        ),
    )


def calculate_income_tax(
    gross_salary: Decimal | int | float, strategy: TaxStrategy | None = None
) -> TaxResult:
    """Income and local tax; flat-rate approximation unless a strategy is given."""
    gross = require_non_negative(gross_salary, "gross_salary")
    return (strategy or FlatRateTaxStrategy()).compute_tax(gross)


def calculate_net_salary(
    gross_salary: Decimal | int | float, strategy: TaxStrategy | None = None
) -> NetSalaryResult:
    """Gross minus employee insurance and taxes, never below zero."""
    gross = require_non_negative(gross_salary, "gross_salary")
    insurance = calculate_insurance(gross)
    tax = calculate_income_tax(gross, strategy)

    total_deductions = insurance.employee.total + tax.income_tax + tax.local_tax

    return NetSalaryResult(
        gross_salary=gross,
        employee_insurance=insurance.employee.total,
        income_tax=tax.income_tax,
        local_tax=tax.local_tax,
        total_deductions=total_deductions,
        net_salary=max(gross - total_deductions, ZERO),
    )


def calculate_employer_cost(gross_salary: Decimal | int | float) -> EmployerCostResult:
    """Gross salary plus the employer's insurance contributions."""
    gross = require_non_negative(gross_salary, "gross_salary")
    insurance = calculate_insurance(gross)

    return EmployerCostResult(
        gross_salary=gross,
        employer_insurance=insurance.employer.total,
        total_cost=gross + insurance.employer.total,
    )


def calculate_payroll(
    total_hours: Decimal | int | float,
    regular_hours: Decimal | int | float,
    overtime_hours: Decimal | int | float,
    night_hours: Decimal | int | float,
    hourly_wage: Decimal | int | float,
    is_holiday_eligible: bool,
) -> PayrollResult:
    """
    Pay for an hour breakdown.

    regular x wage, overtime x wage x 1.5, night x wage x night multiplier,
    plus holiday pay of (regular + overtime pay) / 5 when eligible. Used by
    the optimizer to compare current and hypothetical schedules.
    """
    settings = get_settings()
    require_non_negative(total_hours, "total_hours")
    regular = require_non_negative(regular_hours, "regular_hours")
    overtime = require_non_negative(overtime_hours, "overtime_hours")
    night = require_non_negative(night_hours, "night_hours")
    wage = require_non_negative(hourly_wage, "hourly_wage")

    regular_pay = regular * wage
    overtime_pay = overtime * wage * settings.overtime_multiplier
    night_pay = night * wage * settings.night_multiplier
    holiday_pay = (regular_pay + overtime_pay) / 5 if is_holiday_eligible else ZERO

    return PayrollResult(
        regular_pay=round_won(regular_pay),
        overtime_pay=round_won(overtime_pay),
        night_pay=round_won(night_pay),
        holiday_pay=round_won(holiday_pay),
        total_pay=round_won(regular_pay + overtime_pay + night_pay + holiday_pay),
        is_eligible_for_holiday_pay=is_holiday_eligible,
    )


def calculate_full_payroll(
    weekly_hours: Decimal | int | float,
    hourly_wage: Decimal | int | float | None = None,
    *,
    include_holiday_pay: bool = False,
    strategy: TaxStrategy | None = None,
) -> PayrollStatement:
    """Monthly salary, insurance, tax, net pay and employer cost together."""
    notes: list[str] = []

    monthly = calculate_monthly_salary(
        weekly_hours, hourly_wage, include_holiday_pay=include_holiday_pay
    )
    gross = monthly.gross_salary

    if monthly.minimum_wage_violation:
        notes.append(
            f"Hourly wage {monthly.hourly_wage} is below the minimum wage "
            f"{get_settings().minimum_wage}"
        )
    if monthly.holiday_pay > 0 and not include_holiday_pay:
        notes.append(f"Weekly holiday pay of {monthly.holiday_pay} KRW not included in gross")
    if strategy is None:
        notes.append("Income tax uses the flat-rate approximation, not the official table")

    return PayrollStatement(
        monthly_salary=monthly,
        insurance=calculate_insurance(gross),
        tax=calculate_income_tax(gross, strategy),
        net_salary=calculate_net_salary(gross, strategy),
        employer_cost=calculate_employer_cost(gross),
        calculation_notes=notes,
    )
