# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the MCP protocol and the
#   ClawdsBet endpoint functions in core/.  mcp_server.py:
#     1. Declares each tool with a typed signature (the schema source)
#     2. Calls the matching core/arena.py function
#     3. Serializes the upstream JSON into a text block
#     4. Converts every failure into an error result
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build URLs or talk HTTP (that's core/client.py)
#   - They do NOT retry, cache, or page through results
# =============================================================================
