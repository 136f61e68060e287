# =============================================================================
# main.py  -  Entry Point for the LibreModel MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
#   Normally you don't run this by hand: Claude Desktop (or another MCP
#   client) launches it and talks to it over stdin/stdout.
#
# WHAT HAPPENS:
#   1. Loads .env (LLAMA_SERVER_URL, LIBREMODEL_LOG_LEVEL)
#   2. Configures logging to STDERR
#   3. Builds the ServerConfig and the FastMCP server (tools/mcp_server.py)
#   4. Installs SIGINT/SIGTERM handlers that exit immediately
#   5. Serves MCP over stdio until the client disconnects
#
# A failure before the transport is up is fatal: it is logged and the
# process exits with status 1.
# =============================================================================

import logging
import os
import signal
import sys

from dotenv import load_dotenv

# Load environment variables from .env BEFORE reading the config.
load_dotenv()

from core.config import load_config
from tools.mcp_server import build_server


logger = logging.getLogger("libremodel")


def configure_logging() -> None:
    level = os.environ.get("LIBREMODEL_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _shutdown(signum, frame) -> None:
    # In-flight tool calls are abandoned; there is nothing to flush.
    logger.info("🛑 Shutting down LibreModel MCP Server...")
    logging.shutdown()
    os._exit(0)


def main() -> int:
    configure_logging()
    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    try:
        config = load_config()
        server = build_server(config)
    except Exception:
        logger.exception("💥 Failed to start LibreModel MCP Server")
        return 1

    logger.info("🚀 LibreModel MCP Server starting")
    logger.info(f"📡 Using llama-server at: {config.url}")
    logger.info("💬 Ready to bridge Claude Desktop ↔ LibreModel!")

    try:
        server.run(transport="stdio")
    except Exception:
        logger.exception("💥 LibreModel MCP Server stopped with an error")
        return 1
    return 0


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    sys.exit(main())
