"""
Schedule Cost Optimizer

Rule-based scan of a roster's shifts for cost-reduction opportunities:

1. Holiday-pay avoidance: weeks at or above 15h are trimmed to 14h.
2. Overtime avoidance: days above 8h are capped at 8h.
3. Night avoidance: night hours are moved to daytime.

Every suggestion is priced with ``calculate_payroll`` (current vs. proposed)
and tagged with a risk level. Suggestions marked ``legal_compliance`` are
lawful schedule designs; that is a statement about legality only, and the
holiday-pay trim in particular carries a caveat saying so.

The scan is pure: the same roster and shifts always give the same result,
including suggestion IDs.
"""

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from payroll_engines.config import get_settings
from payroll_engines.schemas.optimization import (
    OptimizationResult,
    OptimizationSuggestion,
    RiskAssessment,
    RiskLevel,
    SuggestionType,
    WorkerCost,
)
from payroll_engines.schemas.payroll import PayrollResult, WorkHoursResult
from payroll_engines.schemas.schedule import ShiftEntry, WeeklyTemplate, Worker
from payroll_engines.services.payroll_calculator import calculate_payroll
from payroll_engines.services.rounding import PERCENT
from payroll_engines.services.template_editor import template_to_shifts
from payroll_engines.services.work_hours import calculate_daily_hours, calculate_weekly_hours

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

HOLIDAY_PAY_CAVEAT = (
    "Trimming hours below the weekly holiday-pay threshold is lawful schedule "
    "design, but it removes an entitlement the worker would otherwise earn. "
    "Review it against staffing needs and employee relations before acting."
)

WeekKey = tuple[int, int] | None


def _week_key(shift: ShiftEntry) -> WeekKey:
    """ISO (year, week) of a dated shift; undated shifts share one week."""
    if shift.work_date is None:
        return None
    iso = shift.work_date.isocalendar()
    return (iso[0], iso[1])


def _week_label(key: WeekKey) -> str:
    return "template" if key is None else f"{key[0]}-W{key[1]:02d}"


def group_shifts_by_worker_week(
    schedules: Iterable[ShiftEntry],
) -> dict[int, dict[WeekKey, list[ShiftEntry]]]:
    """Shifts grouped per worker, then per ISO week, in input order."""
    grouped: dict[int, dict[WeekKey, list[ShiftEntry]]] = {}
    for shift in schedules:
        weeks = grouped.setdefault(shift.employee_id, {})
        weeks.setdefault(_week_key(shift), []).append(shift)
    return grouped


def _payroll_for(hours: WorkHoursResult, hourly_wage: Decimal, is_holiday_eligible: bool) -> PayrollResult:
    return calculate_payroll(
        hours.total_hours,
        hours.regular_hours,
        hours.overtime_hours,
        hours.night_hours,
        hourly_wage,
        is_holiday_eligible,
    )


def _savings_percentage(savings: Decimal, current_cost: Decimal) -> Decimal:
    if current_cost <= 0:
        return ZERO
    return (savings / current_cost * 100).quantize(PERCENT)


def _roster(workers: Iterable[Worker]) -> dict[int, Worker]:
    return {worker.id: worker for worker in workers}


def calculate_current_cost(
    workers: Sequence[Worker], schedules: Sequence[ShiftEntry]
) -> tuple[Decimal, list[WorkerCost]]:
    """
    Payroll cost of the schedules as they stand.

    Each worker-week is priced with holiday pay when it reaches the 15h
    threshold. Workers without shifts cost zero.
    """
    grouped = group_shifts_by_worker_week(schedules)
    total_cost = ZERO
    worker_costs: list[WorkerCost] = []

    for worker in workers:
        worker_hours = ZERO
        worker_cost = ZERO
        for week_shifts in grouped.get(worker.id, {}).values():
            weekly = calculate_weekly_hours(week_shifts)
            payroll = _payroll_for(weekly, worker.hourly_wage, weekly.eligible_for_holiday_pay)
            worker_hours += weekly.total_hours
            worker_cost += payroll.total_pay

        worker_costs.append(
            WorkerCost(
                employee_id=worker.id,
                employee_name=worker.name,
                total_hours=worker_hours,
                total_cost=worker_cost,
            )
        )
        total_cost += worker_cost

    return total_cost, worker_costs


def generate_holiday_pay_suggestions(
    workers: Sequence[Worker], schedules: Sequence[ShiftEntry]
) -> list[OptimizationSuggestion]:
    """REDUCE_HOURS for every worker-week at or above the holiday-pay threshold."""
    settings = get_settings()
    target = settings.optimal_weekly_hours
    roster = _roster(workers)
    suggestions: list[OptimizationSuggestion] = []

    for employee_id, weeks in group_shifts_by_worker_week(schedules).items():
        worker = roster.get(employee_id)
        if worker is None:
            continue

        for week_key, week_shifts in weeks.items():
            weekly = calculate_weekly_hours(week_shifts)
            if not weekly.eligible_for_holiday_pay:
                continue

            current = _payroll_for(weekly, worker.hourly_wage, True)
            optimized = calculate_payroll(
                target,
                min(target, weekly.regular_hours),
                max(ZERO, target - weekly.regular_hours),
                min(weekly.night_hours, target),
                worker.hourly_wage,
                False,
            )
            savings = current.total_pay - optimized.total_pay

            suggestions.append(
                OptimizationSuggestion(
                    id=f"holiday-pay-{worker.id}-{_week_label(week_key)}",
                    type=SuggestionType.REDUCE_HOURS,
                    title=f"Keep {worker.name} under the holiday-pay threshold",
                    description=(
                        f"Reduce weekly hours from {weekly.total_hours} to {target} so "
                        f"the week stays below {settings.holiday_pay_threshold_hours} hours."
                    ),
                    current_cost=current.total_pay,
                    optimized_cost=optimized.total_pay,
                    savings=savings,
                    savings_percentage=_savings_percentage(savings, current.total_pay),
                    risk_level=RiskLevel.LOW,
                    legal_compliance=True,
                    affected_employees=[worker.id],
                    implementation=(
                        f"Schedule at most {target} hours this week. Cover the gap by "
                        "sharing work with other staff or adding part-time hours."
                    ),
                    caveats=[HOLIDAY_PAY_CAVEAT],
                )
            )

    return suggestions


def generate_overtime_suggestions(
    workers: Sequence[Worker], schedules: Sequence[ShiftEntry]
) -> list[OptimizationSuggestion]:
    """SPLIT_SHIFT for every day longer than the daily regular limit."""
    settings = get_settings()
    cap = settings.max_regular_daily_hours
    roster = _roster(workers)
    suggestions: list[OptimizationSuggestion] = []

    for shift in schedules:
        daily = calculate_daily_hours(shift)
        if daily.total_hours <= cap:
            continue
        worker = roster.get(shift.employee_id)
        if worker is None:
            continue

        current = _payroll_for(daily, worker.hourly_wage, False)
        optimized = calculate_payroll(
            cap, cap, ZERO, min(daily.night_hours, cap), worker.hourly_wage, False
        )
        savings = current.total_pay - optimized.total_pay

        suggestions.append(
            OptimizationSuggestion(
                id=f"overtime-{worker.id}-{shift.label}",
                type=SuggestionType.SPLIT_SHIFT,
                title=f"Split {worker.name}'s long shift",
                description=(
                    f"Shorten the {shift.label} shift from {daily.total_hours} to {cap} "
                    "hours to avoid overtime premiums."
                ),
                current_cost=current.total_pay,
                optimized_cost=optimized.total_pay,
                savings=savings,
                savings_percentage=_savings_percentage(savings, current.total_pay),
                risk_level=RiskLevel.MEDIUM,
                legal_compliance=True,
                affected_employees=[worker.id],
                implementation=(
                    "Split the shift in two or reassign the excess hours to another "
                    "worker. Check service continuity at the handover."
                ),
            )
        )

    return suggestions


def generate_night_shift_suggestions(
    workers: Sequence[Worker], schedules: Sequence[ShiftEntry]
) -> list[OptimizationSuggestion]:
    """AVOID_NIGHT for every shift with hours in the night window."""
    roster = _roster(workers)
    suggestions: list[OptimizationSuggestion] = []

    for shift in schedules:
        daily = calculate_daily_hours(shift)
        if daily.night_hours <= 0:
            continue
        worker = roster.get(shift.employee_id)
        if worker is None:
            continue

        current = _payroll_for(daily, worker.hourly_wage, False)
        optimized = calculate_payroll(
            daily.total_hours,
            daily.regular_hours,
            daily.overtime_hours,
            ZERO,
            worker.hourly_wage,
            False,
        )
        savings = current.total_pay - optimized.total_pay

        suggestions.append(
            OptimizationSuggestion(
                id=f"night-shift-{worker.id}-{shift.label}",
                type=SuggestionType.AVOID_NIGHT,
                title=f"Move {worker.name}'s night hours to daytime",
                description=(
                    f"Move {daily.night_hours} night hours on {shift.label} into the "
                    "daytime to avoid the night premium."
                ),
                current_cost=current.total_pay,
                optimized_cost=optimized.total_pay,
                savings=savings,
                savings_percentage=_savings_percentage(savings, current.total_pay),
                risk_level=RiskLevel.HIGH,
                legal_compliance=True,
                affected_employees=[worker.id],
                implementation=(
                    "Reschedule night work into daytime hours. Stores that must stay "
                    "open overnight need extra shift staff instead."
                ),
            )
        )

    return suggestions


def assess_overall_risk(suggestions: Sequence[OptimizationSuggestion]) -> RiskLevel:
    """HIGH if any suggestion is HIGH, MEDIUM if more than two are MEDIUM."""
    if any(s.risk_level == RiskLevel.HIGH for s in suggestions):
        return RiskLevel.HIGH
    if sum(1 for s in suggestions if s.risk_level == RiskLevel.MEDIUM) > 2:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def _operational_impact(risk: RiskLevel, suggestion_count: int) -> str:
    if risk == RiskLevel.HIGH:
        return (
            f"{suggestion_count} suggestions include high-risk changes that may "
            "significantly affect store operations."
        )
    if risk == RiskLevel.MEDIUM:
        return f"{suggestion_count} suggestions require moderate operational adjustments."
    return f"{suggestion_count} suggestions reduce cost with minimal operational impact."


def optimize_schedule(
    workers: Sequence[Worker], schedules: Sequence[ShiftEntry]
) -> OptimizationResult:
    """
    Full cost analysis of a roster's schedules.

    Suggestions are ordered by savings, largest first. Savings of separate
    suggestions are summed as-is, so overlapping suggestions for the same
    worker can overstate the combined saving.
    """
    known_ids = {worker.id for worker in workers}
    unknown = sorted({shift.employee_id for shift in schedules} - known_ids)
    if unknown:
        logger.warning(f"Skipping shifts for workers not on the roster: {unknown}")

    current_total_cost, worker_costs = calculate_current_cost(workers, schedules)

    suggestions = [
        *generate_holiday_pay_suggestions(workers, schedules),
        *generate_overtime_suggestions(workers, schedules),
        *generate_night_shift_suggestions(workers, schedules),
    ]
    suggestions.sort(key=lambda s: s.savings, reverse=True)

    total_savings = sum((s.savings for s in suggestions), ZERO)
    overall_risk = assess_overall_risk(suggestions)
    compliance_score = (
        sum(1 for s in suggestions if s.legal_compliance) / len(suggestions)
        if suggestions
        else 1.0
    )

    logger.info(
        f"Optimization analysed {len(schedules)} shifts for {len(workers)} workers: "
        f"{len(suggestions)} suggestions, savings {total_savings} KRW, risk {overall_risk.value}"
    )

    return OptimizationResult(
        current_total_cost=current_total_cost,
        optimized_total_cost=current_total_cost - total_savings,
        total_savings=total_savings,
        total_savings_percentage=_savings_percentage(total_savings, current_total_cost),
        suggestions=suggestions,
        worker_costs=worker_costs,
        risk_assessment=RiskAssessment(
            overall_risk=overall_risk,
            compliance_score=compliance_score,
            operational_impact=_operational_impact(overall_risk, len(suggestions)),
        ),
    )


def optimize_template(template: WeeklyTemplate, workers: Sequence[Worker]) -> OptimizationResult:
    """Optimize the shifts implied by a weekly template's slot assignments."""
    return optimize_schedule(workers, template_to_shifts(template))
