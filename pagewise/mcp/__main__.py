import logging
import subprocess
import sys
from pathlib import Path

from httpx import ASGITransport, AsyncClient

from pagewise.app import create_app
from pagewise.config import API_URL, DB_PATH, LOG_LEVEL
from pagewise.mcp.client import PagewiseClient
from pagewise.mcp.server import create_mcp_server

logger = logging.getLogger("pagewise.mcp")


def run_migrations():
    """Bring the reading plan database up to the latest Alembic revision."""
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)

    result = subprocess.run([sys.executable, "-m", "alembic", "upgrade", "head"], stdout=sys.stderr)
    if result.returncode != 0:
        logger.error("Migrations failed for %s", DB_PATH)
        sys.exit(1)


def main():
    # stdout carries the MCP stdio protocol
    logging.basicConfig(stream=sys.stderr, level=LOG_LEVEL)
    run_migrations()

    transport = ASGITransport(app=create_app())
    client = PagewiseClient(AsyncClient(transport=transport, base_url=API_URL))
    logger.info("Serving pagewise tools over stdio with database %s", DB_PATH)
    create_mcp_server(client).run(transport="stdio")


if __name__ == "__main__":
    main()
