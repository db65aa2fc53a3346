# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains everything needed to talk to the ClawdsBet API:
# settings, the HTTP fetch wrapper, request shapes and one function per
# endpoint.
#
# Nothing in this package imports FastMCP or any protocol framework.  The
# MCP server in tools/ is a wrapper around it.
# =============================================================================
