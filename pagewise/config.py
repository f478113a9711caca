import os
from pathlib import Path

DB_PATH = os.environ.get("PAGEWISE_DB_PATH", str(Path.cwd() / "pagewise.db"))
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"

LOG_LEVEL = os.environ.get("PAGEWISE_LOG_LEVEL", "INFO").upper()

# Dashboard and history settings
UPCOMING_TASKS = int(os.environ.get("PAGEWISE_UPCOMING_TASKS", "5"))
HISTORY_LIMIT = int(os.environ.get("PAGEWISE_HISTORY_LIMIT", "90"))

# Base URL of the in-process API the MCP server talks to
API_URL = os.environ.get("PAGEWISE_API_URL", "http://localhost")
