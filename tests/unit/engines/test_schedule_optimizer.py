"""
Schedule Optimizer Unit Tests

Tests for cost-reduction suggestions, their pricing and the overall
risk assessment.
"""

import logging
from datetime import date
from decimal import Decimal

from payroll_engines.schemas.optimization import RiskLevel, SuggestionType
from payroll_engines.schemas.schedule import DayOfWeek
from payroll_engines.services.schedule_optimizer import (
    HOLIDAY_PAY_CAVEAT,
    assess_overall_risk,
    calculate_current_cost,
    generate_holiday_pay_suggestions,
    generate_night_shift_suggestions,
    generate_overtime_suggestions,
    optimize_schedule,
    optimize_template,
)
from tests.factories import make_shift, make_template, make_week_shifts, make_worker


class TestHolidayPaySuggestions:
    """Test trimming weeks below the holiday-pay threshold."""

    def test_sixteen_hour_week(self, worker):
        """
        Test a 16h week at minimum wage:
        - Current: 160,480 + 32,096 holiday pay = 192,576
        - Optimized: 14h x 10,030 = 140,420
        - Savings: 52,156
        """
        suggestions = generate_holiday_pay_suggestions([worker], make_week_shifts(days=2))

        assert len(suggestions) == 1
        suggestion = suggestions[0]
        assert suggestion.type == SuggestionType.REDUCE_HOURS
        assert suggestion.current_cost == Decimal("192576")
        assert suggestion.optimized_cost == Decimal("140420")
        assert suggestion.savings == Decimal("52156")
        assert suggestion.risk_level == RiskLevel.LOW
        assert suggestion.legal_compliance is True
        assert suggestion.affected_employees == [worker.id]
        assert suggestion.caveats == [HOLIDAY_PAY_CAVEAT]

    def test_below_threshold_no_suggestion(self, worker):
        """Test a 14h week is left alone."""
        shifts = [
            make_shift(start_time="09:00", end_time="16:00", work_date=date(2025, 3, 3)),
            make_shift(start_time="09:00", end_time="16:00", work_date=date(2025, 3, 4)),
        ]

        assert generate_holiday_pay_suggestions([worker], shifts) == []

    def test_each_iso_week_separately(self, worker):
        """Test shifts in different weeks are not summed together."""
        shifts = [
            *make_week_shifts(days=2),
            make_shift(work_date=date(2025, 3, 10)),
        ]

        suggestions = generate_holiday_pay_suggestions([worker], shifts)

        assert [s.id for s in suggestions] == ["holiday-pay-1-2025-W10"]

    def test_unknown_worker_skipped(self):
        """Test shifts for workers off the roster produce nothing."""
        shifts = make_week_shifts(employee_id=99, days=3)

        assert generate_holiday_pay_suggestions([make_worker()], shifts) == []


class TestOvertimeSuggestions:
    """Test splitting days above 8 hours."""

    def test_long_day(self, worker):
        """Test a 10h day is capped at 8h."""
        shift = make_shift(start_time="09:00", end_time="20:00", break_minutes=60)

        suggestions = generate_overtime_suggestions([worker], [shift])

        assert len(suggestions) == 1
        suggestion = suggestions[0]
        assert suggestion.type == SuggestionType.SPLIT_SHIFT
        assert suggestion.risk_level == RiskLevel.MEDIUM
        assert suggestion.current_cost == Decimal("110330")
        assert suggestion.optimized_cost == Decimal("80240")
        assert suggestion.savings == Decimal("30090")
        assert suggestion.id == "overtime-1-2025-03-03"

    def test_eight_hour_day_no_suggestion(self, worker):
        """Test exactly 8 hours is not overtime."""
        assert generate_overtime_suggestions([worker], [make_shift()]) == []


class TestNightShiftSuggestions:
    """Test moving night hours to daytime."""

    def test_overnight_shift(self, worker):
        """Test the whole night premium is the saving."""
        shift = make_shift(start_time="22:00", end_time="06:00")

        suggestions = generate_night_shift_suggestions([worker], [shift])

        assert len(suggestions) == 1
        suggestion = suggestions[0]
        assert suggestion.type == SuggestionType.AVOID_NIGHT
        assert suggestion.risk_level == RiskLevel.HIGH
        # 8h x 10,030 x 1.5
        assert suggestion.savings == Decimal("120360")

    def test_day_shift_no_suggestion(self, worker):
        """Test daytime shifts produce nothing."""
        assert generate_night_shift_suggestions([worker], [make_shift()]) == []


class TestCurrentCost:
    """Test pricing the schedules as they stand."""

    def test_per_worker_costs(self, roster):
        """Test each worker-week is priced with holiday pay when eligible."""
        shifts = make_week_shifts(employee_id=1, days=2)

        total, worker_costs = calculate_current_cost(roster, shifts)

        assert total == Decimal("192576")
        assert [c.employee_id for c in worker_costs] == [1, 2]
        assert worker_costs[0].total_hours == Decimal("16.00")
        assert worker_costs[1].total_cost == Decimal("0")


class TestRiskAssessment:
    """Test the overall risk rule."""

    def test_no_suggestions_is_low(self):
        """Test an empty list is low risk."""
        assert assess_overall_risk([]) == RiskLevel.LOW

    def test_any_high_is_high(self, worker):
        """Test one high-risk suggestion makes the whole plan high risk."""
        night = generate_night_shift_suggestions(
            [worker], [make_shift(start_time="22:00", end_time="06:00")]
        )

        assert assess_overall_risk(night) == RiskLevel.HIGH

    def test_more_than_two_medium_is_medium(self, worker):
        """Test three overtime suggestions raise the risk to medium."""
        long_days = make_week_shifts(days=3, end_time="19:00")
        suggestions = generate_overtime_suggestions([worker], long_days)

        assert len(suggestions) == 3
        assert assess_overall_risk(suggestions) == RiskLevel.MEDIUM
        assert assess_overall_risk(suggestions[:2]) == RiskLevel.LOW


class TestOptimizeSchedule:
    """Test the full analysis."""

    def test_sixteen_hour_week_single_suggestion(self, worker):
        """Test a plain 16h week yields exactly one REDUCE_HOURS suggestion."""
        result = optimize_schedule([worker], make_week_shifts(days=2))

        assert len(result.suggestions) == 1
        assert result.suggestions[0].type == SuggestionType.REDUCE_HOURS
        assert result.total_savings > 0
        assert result.current_total_cost == Decimal("192576")
        assert result.optimized_total_cost == Decimal("140420")
        assert result.risk_assessment.overall_risk == RiskLevel.LOW
        assert result.risk_assessment.compliance_score == 1.0

    def test_sorted_by_savings(self, worker):
        """Test suggestions come back largest saving first."""
        shifts = [
            *make_week_shifts(days=2),
            make_shift(start_time="22:00", end_time="06:00", work_date=date(2025, 3, 5)),
            make_shift(start_time="09:00", end_time="19:00", work_date=date(2025, 3, 6)),
        ]

        result = optimize_schedule([worker], shifts)

        savings = [s.savings for s in result.suggestions]
        assert savings == sorted(savings, reverse=True)
        assert {s.type for s in result.suggestions} == {
            SuggestionType.REDUCE_HOURS,
            SuggestionType.SPLIT_SHIFT,
            SuggestionType.AVOID_NIGHT,
        }

    def test_empty_schedule(self, worker):
        """Test no shifts means no cost and nothing to suggest."""
        result = optimize_schedule([worker], [])

        assert result.suggestions == []
        assert result.total_savings == Decimal("0")
        assert result.total_savings_percentage == Decimal("0")
        assert result.risk_assessment.compliance_score == 1.0

    def test_deterministic(self, roster):
        """Test the same input always gives the same result."""
        shifts = [
            *make_week_shifts(employee_id=1, days=3),
            *make_week_shifts(employee_id=2, days=2, start_time="18:00", end_time="23:00"),
        ]

        assert optimize_schedule(roster, shifts) == optimize_schedule(roster, shifts)

    def test_unknown_workers_logged(self, worker, caplog):
        """Test shifts for unknown workers are reported and skipped."""
        with caplog.at_level(logging.WARNING):
            result = optimize_schedule([worker], make_week_shifts(employee_id=42, days=3))

        assert result.suggestions == []
        assert "[42]" in caplog.text

    def test_from_template(self, roster):
        """Test a template with a 15h worker gets a holiday-pay suggestion."""
        template = make_template(
            {
                DayOfWeek.MONDAY: [("13:00", "18:00", 1)],
                DayOfWeek.TUESDAY: [("13:00", "18:00", 1), ("09:00", "12:00", 2)],
                DayOfWeek.THURSDAY: [("13:00", "18:00", 1)],
            }
        )

        result = optimize_template(template, roster)

        assert [s.id for s in result.suggestions] == ["holiday-pay-1-template"]
        assert result.worker_costs[1].total_hours == Decimal("3.00")
