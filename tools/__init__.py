# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP wiring for the bridge.
#
# tools/mcp_server.py registers the chat, quick_test and health_check tools
# and the config/instructions resources.  Each tool wrapper:
#   1. Declares typed, bounded parameters (this becomes the MCP input schema)
#   2. Delegates to LibreModelTools (validate -> call core/ -> format)
#   3. Returns the text, or raises ToolError so the client sees isError=true
# =============================================================================
