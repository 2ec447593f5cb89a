"""Root conftest — shared test configuration."""

import os

# Settings are read at import time by supportdesk.main
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("COOKIE_SECURE", "false")
os.environ.setdefault("BREVO_API_KEY", "")
