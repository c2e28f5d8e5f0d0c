"""
ASOCDB - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("ASOCDB_DB", f"sqlite:///{BASE_DIR / 'asocdb.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("ASOCDB_HOST", "0.0.0.0")
PORT   = int(os.environ.get("ASOCDB_PORT", "5000"))
DEBUG  = os.environ.get("ASOCDB_DEBUG", "0") == "1"
SECRET = os.environ.get("ASOCDB_SECRET", "asocdb-dev-key-change-in-prod")

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("ASOCDB_LOG_LEVEL", "INFO").upper()

# ── First administrator (created only when the users table is empty) ──
ADMIN_EMAIL    = os.environ.get("ASOCDB_ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.environ.get("ASOCDB_ADMIN_PASSWORD", "")
ADMIN_NAME     = os.environ.get("ASOCDB_ADMIN_NAME", "Administrador")

# ── Pagination ─────────────────────────────────────────────────────────
DEFAULT_PAGE_SIZE = 10
API_MAX_LIMIT     = 500
