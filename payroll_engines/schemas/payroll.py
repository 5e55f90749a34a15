"""
Payroll Schemas

Output models for work-hour aggregation and Korean payroll calculation.
Hours are Decimals with two decimal places; money is whole won.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class WorkHoursResult(BaseModel):
    """Hour buckets for a single shift/day."""

    total_hours: Decimal = Field(..., ge=0, description="Paid hours after breaks")
    regular_hours: Decimal = Field(..., ge=0, description="Hours up to the daily limit (8h)")
    overtime_hours: Decimal = Field(..., ge=0, description="Hours beyond the daily limit")
    night_hours: Decimal = Field(..., ge=0, description="Hours credited to 22:00-06:00")
    is_night_shift: bool = False


class WeeklyHoursResult(WorkHoursResult):
    """Daily buckets summed over a week."""

    eligible_for_holiday_pay: bool = Field(
        ...,
        description="True when the weekly total meets the 15h threshold",
    )
    shift_count: int = Field(default=0, ge=0)


class PayrollResult(BaseModel):
    """Pay components for an hour breakdown."""

    regular_pay: Decimal
    overtime_pay: Decimal
    night_pay: Decimal
    holiday_pay: Decimal
    total_pay: Decimal
    is_eligible_for_holiday_pay: bool


class MonthlySalaryResult(BaseModel):
    """Monthly gross salary converted from weekly hours."""

    weekly_hours: Decimal
    hourly_wage: Decimal
    monthly_working_hours: Decimal = Field(..., description="Weekly hours x average weeks")
    holiday_hours: Decimal = Field(..., description="Monthly paid weekly-holiday hours")
    total_working_hours: Decimal = Field(..., description="Working plus holiday hours")
    base_salary: Decimal = Field(..., description="Monthly working hours x wage")
    holiday_pay: Decimal = Field(..., description="Holiday hours x wage")
    gross_salary: Decimal = Field(..., description="Pre-deduction monthly salary")
    includes_holiday_pay: bool = False
    minimum_wage_violation: bool = Field(
        default=False,
        description="True if the hourly wage is below the statutory minimum",
    )


class EmployeeInsurance(BaseModel):
    """Employee share of the four major social insurances."""

    national_pension: Decimal
    health_insurance: Decimal
    long_term_care: Decimal = Field(..., description="Share of the health premium")
    employment: Decimal
    total: Decimal


class EmployerInsurance(EmployeeInsurance):
    """
    Employer share of the four major social insurances.

    Adds the employer-only employment stability levy and industrial accident
    insurance (산재보험).
    """

    employment_stability: Decimal
    workers_compensation: Decimal


class InsuranceResult(BaseModel):
    employee: EmployeeInsurance
    employer: EmployerInsurance


class TaxResult(BaseModel):
    income_tax: Decimal = Field(..., ge=0)
    local_tax: Decimal = Field(..., ge=0)


class NetSalaryResult(BaseModel):
    """Take-home pay after employee-side deductions."""

    gross_salary: Decimal
    employee_insurance: Decimal
    income_tax: Decimal
    local_tax: Decimal
    total_deductions: Decimal
    net_salary: Decimal


class EmployerCostResult(BaseModel):
    """Total employer outlay for a gross salary."""

    gross_salary: Decimal
    employer_insurance: Decimal
    total_cost: Decimal


class PayrollStatement(BaseModel):
    """Monthly salary, deductions and employer cost in one statement."""

    monthly_salary: MonthlySalaryResult
    insurance: InsuranceResult
    tax: TaxResult
    net_salary: NetSalaryResult
    employer_cost: EmployerCostResult
    calculation_notes: list[str] = Field(default_factory=list)
