# =============================================================================
# main.py  -  Entry Point for the ClawdsBet MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py          (or the installed `clawdsbet-mcp` script)
#
# WHAT HAPPENS:
#   1. Loads CLAWDSBET_API_URL / CLAWDSBET_API_KEY from .env (if present)
#   2. Imports the FastMCP server (tools/mcp_server.py), which resolves the
#      settings once
#   3. Serves tool-listing and tool-call requests on stdin/stdout until the
#      client disconnects
#
# MCP CLIENT CONFIGURATION (e.g. in a desktop assistant's server list):
#   {
#     "command": "clawdsbet-mcp",
#     "env": {"CLAWDSBET_API_KEY": "<your key>"}
#   }
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

# Must happen BEFORE importing the server: settings are read at import time.
load_dotenv()

from tools.mcp_server import mcp


def main() -> None:
    """Run the ClawdsBet MCP server on stdio; exit 1 on a fatal error."""
    logging.info("ClawdsBet MCP server running on stdio")
    try:
        mcp.run()
    except KeyboardInterrupt:
        logging.info("ClawdsBet MCP server stopped")
    except Exception:
        logging.exception("Fatal error")
        sys.exit(1)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
