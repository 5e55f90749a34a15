"""
Schedule MCP Tools

Weekly template analysis and cost optimization exposed as MCP tools.
"""

from payroll_engines.schemas.schedule import WeeklyTemplate, Worker
from payroll_engines.services.payroll_calculator import calculate_payroll
from payroll_engines.services.schedule_optimizer import optimize_template
from payroll_engines.services.work_hours import calculate_template_hours

# Use the same MCP instance as payroll_tools
from payroll_engines.tools.payroll_tools import mcp


@mcp.tool()
async def analyze_weekly_template(
    schedule_data: dict,
    workers: list[dict],
    slot_minutes: int | None = None,
) -> dict:
    """
    Compute weekly hours and pay per worker from a weekly template.

    The template is the stored ``schedule_data`` blob: one entry per weekday
    with is_open, open_time, close_time, break_periods and time_slots (slot
    label -> list of employee IDs).

    Args:
        schedule_data: Weekly template blob keyed by weekday
        workers: Employee records with id, name, hourly_wage and position
        slot_minutes: Slot width used by the template; defaults to the configured width

    Returns:
        Dictionary with per-worker hours, holiday-pay eligibility and weekly pay
    """
    template = WeeklyTemplate.from_schedule_data(schedule_data, slot_minutes=slot_minutes)
    roster = [Worker.model_validate(worker) for worker in workers]
    hours_by_worker = calculate_template_hours(template, roster)

    results = []
    for worker in roster:
        hours = hours_by_worker[worker.id]
        payroll = calculate_payroll(
            hours.total_hours,
            hours.regular_hours,
            hours.overtime_hours,
            hours.night_hours,
            worker.hourly_wage,
            hours.eligible_for_holiday_pay,
        )
        results.append(
            {
                "employee_id": worker.id,
                "name": worker.name,
                "total_hours": float(hours.total_hours),
                "regular_hours": float(hours.regular_hours),
                "overtime_hours": float(hours.overtime_hours),
                "night_hours": float(hours.night_hours),
                "shift_count": hours.shift_count,
                "eligible_for_holiday_pay": hours.eligible_for_holiday_pay,
                "weekly_pay": float(payroll.total_pay),
                "holiday_pay": float(payroll.holiday_pay),
            }
        )

    return {
        "workers": results,
        "total_weekly_pay": float(sum(r["weekly_pay"] for r in results)),
    }


@mcp.tool()
async def optimize_weekly_template(
    schedule_data: dict,
    workers: list[dict],
    slot_minutes: int | None = None,
) -> dict:
    """
    Suggest schedule changes that reduce payroll cost for a weekly template.

    Looks for weeks at or above the 15h holiday-pay threshold, days over 8
    hours and night hours. Each suggestion carries its savings, a risk level
    and a legal-compliance flag. A compliant suggestion is lawful, which is
    not the same as advisable: read the caveats.

    Args:
        schedule_data: Weekly template blob keyed by weekday
        workers: Employee records with id, name, hourly_wage and position
        slot_minutes: Slot width used by the template; defaults to the configured width

    Returns:
        Dictionary with current and optimized cost, suggestions and risk assessment
    """
    template = WeeklyTemplate.from_schedule_data(schedule_data, slot_minutes=slot_minutes)
    roster = [Worker.model_validate(worker) for worker in workers]
    result = optimize_template(template, roster)

    return {
        "current_total_cost": float(result.current_total_cost),
        "optimized_total_cost": float(result.optimized_total_cost),
        "total_savings": float(result.total_savings),
        "total_savings_percentage": float(result.total_savings_percentage),
        "suggestions": [
            {
                "id": s.id,
                "type": s.type.value,
                "title": s.title,
                "description": s.description,
                "current_cost": float(s.current_cost),
                "optimized_cost": float(s.optimized_cost),
                "savings": float(s.savings),
                "savings_percentage": float(s.savings_percentage),
                "risk_level": s.risk_level.value,
                "legal_compliance": s.legal_compliance,
                "affected_employees": s.affected_employees,
                "implementation": s.implementation,
                "caveats": s.caveats,
            }
            for s in result.suggestions
        ],
        "risk_assessment": {
            "overall_risk": result.risk_assessment.overall_risk.value,
            "compliance_score": result.risk_assessment.compliance_score,
            "operational_impact": result.risk_assessment.operational_impact,
        },
    }
