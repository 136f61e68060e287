# =============================================================================
# core/__init__.py
# =============================================================================
# Bridge logic: configuration, argument contracts, the llama-server client,
# output formatting and resource rendering.
#
# Nothing in this package imports FastMCP.  The MCP wiring lives in tools/;
# everything here can be exercised with a plain httpx mock transport.
# =============================================================================
