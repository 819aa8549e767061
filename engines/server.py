"""
Labor & Payroll Calculation Engines - MCP Server

FastMCP server exposing the calculation tools:
- Payroll Engine: punch parsing, employee pay, payroll runs, labor cost
- Tip Engine: tip splits, rebalancing, percentage contribution pools
"""

import logging

from backend.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Import the MCP instance and tools from tool modules
# This registers all the tools with the MCP server
from engines.tools.payroll_engine import mcp  # noqa: E402
from engines.tools.tip_engine import *  # noqa: E402, F401, F403


def main():
    """Run the MCP server."""
    logger.info("Starting %s MCP server", mcp.name)
    mcp.run()


if __name__ == "__main__":
    main()
