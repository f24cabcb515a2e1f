"""
Register pytest plugins, fixtures, and hooks to be used during test execution.

Settings are read from the environment at import time, so the test
environment is fixed here before any ``qto`` module is imported.
"""

import os
import sys
from pathlib import Path

THIS_DIR = Path(__file__).parent
TESTS_DIR_PARENT = (THIS_DIR / "..").resolve()

# add the parent directory of tests/ to PYTHONPATH
sys.path.insert(0, str(TESTS_DIR_PARENT))

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

pytest_plugins = [
    # Database engine, session and repositories
    "tests.fixtures.db_fixtures",
    # Users and session actors
    "tests.fixtures.user_fixtures",
    # FastAPI test client
    "tests.fixtures.app_fixtures",
    # Spreadsheet builders
    "tests.fixtures.spreadsheet_fixtures",
]
