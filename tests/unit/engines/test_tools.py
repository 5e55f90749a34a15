"""
MCP Tool Unit Tests

Tests the tools through an in-memory FastMCP client.
"""

import pytest
from fastmcp import Client

from payroll_engines.server import mcp
from payroll_engines.services.template_editor import create_default_week_template
from tests.factories import make_template


@pytest.mark.asyncio
class TestPayrollTools:
    """Test the payroll tools."""

    async def test_tools_registered(self):
        """Test every tool is exposed by the server."""
        async with Client(mcp) as client:
            tools = await client.list_tools()

        assert {tool.name for tool in tools} == {
            "calculate_monthly_payroll",
            "calculate_shift_payroll",
            "analyze_weekly_template",
            "optimize_weekly_template",
        }

    async def test_monthly_payroll(self):
        """Test the 40h minimum-wage reference statement."""
        async with Client(mcp) as client:
            result = await client.call_tool(
                "calculate_monthly_payroll", {"weekly_hours": 40, "hourly_wage": 10030}
            )

        assert result.data["gross_salary"] == 1737196
        assert result.data["net_salary"] == 1510768
        assert result.data["employer_total_cost"] == 1928359

    async def test_monthly_payroll_insurance_items(self):
        """Test every insurance item is reported on its side."""
        async with Client(mcp) as client:
            result = await client.call_tool("calculate_monthly_payroll", {"weekly_hours": 40})

        employee = result.data["employee_insurance"]
        employer = result.data["employer_insurance"]
        assert employee["long_term_care"] == 7975
        assert "workers_compensation" not in employee
        assert employer["employment_stability"] == 4343
        assert employer["workers_compensation"] == 12160
        assert employer["total"] == 191163

    async def test_monthly_payroll_default_wage_from_settings(self, override_settings):
        """Test an omitted wage uses the configured minimum wage."""
        override_settings(minimum_wage="11000")

        async with Client(mcp) as client:
            result = await client.call_tool("calculate_monthly_payroll", {"weekly_hours": 40})

        assert result.data["hourly_wage"] == 11000
        assert result.data["minimum_wage_violation"] is False

    async def test_shift_payroll(self):
        """Test a 10-hour shift with overtime."""
        async with Client(mcp) as client:
            result = await client.call_tool(
                "calculate_shift_payroll",
                {
                    "employee_id": 1,
                    "start_time": "09:00",
                    "end_time": "20:00",
                    "hourly_wage": 10030,
                    "break_minutes": 60,
                },
            )

        assert result.data["overtime_hours"] == 2
        assert result.data["total_pay"] == 110330


@pytest.mark.asyncio
class TestScheduleTools:
    """Test the template tools."""

    async def test_analyze_template(self):
        """Test per-worker hours from a stored template blob."""
        template = make_template({"monday": [("09:00", "17:00", 1)]})

        async with Client(mcp) as client:
            result = await client.call_tool(
                "analyze_weekly_template",
                {
                    "schedule_data": template.to_schedule_data(),
                    "workers": [{"id": 1, "name": "김민수", "hourly_wage": 10030}],
                },
            )

        worker = result.data["workers"][0]
        assert worker["total_hours"] == 7
        assert worker["weekly_pay"] == 70210

    async def test_analyze_template_slot_width_from_settings(self, override_settings):
        """Test an omitted slot width falls back to the configured one."""
        override_settings(default_slot_minutes=60)
        template = make_template({"monday": [("09:00", "11:00", 1)]}, slot_minutes=60)

        async with Client(mcp) as client:
            result = await client.call_tool(
                "analyze_weekly_template",
                {
                    "schedule_data": template.to_schedule_data(),
                    "workers": [{"id": 1, "name": "김민수", "hourly_wage": 10030}],
                },
            )

        assert result.data["workers"][0]["total_hours"] == 2

    async def test_optimize_empty_template(self):
        """Test an unstaffed template has nothing to optimize."""
        async with Client(mcp) as client:
            result = await client.call_tool(
                "optimize_weekly_template",
                {
                    "schedule_data": create_default_week_template().to_schedule_data(),
                    "workers": [{"id": 1, "name": "김민수", "hourly_wage": 10030}],
                },
            )

        assert result.data["suggestions"] == []
        assert result.data["risk_assessment"]["overall_risk"] == "LOW"
