"""
ShiftPay Payroll Engines - MCP Server

FastMCP server exposing the payroll and schedule-cost tools:
- Payroll: monthly statement and single-shift pay
- Schedule: weekly template analysis and cost optimization
"""

import logging

from payroll_engines.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Import the MCP instance and tools from tool modules
# This registers all the tools with the MCP server
from payroll_engines.tools.payroll_tools import mcp  # noqa: E402
from payroll_engines.tools.schedule_tools import *  # noqa: E402, F401, F403


def main():
    """Run the MCP server."""
    logger.info(f"Starting {settings.app_name} MCP Server v{settings.app_version}")
    mcp.run()


if __name__ == "__main__":
    main()
