"""Root conftest — shared test configuration."""

import os

# Never talk to a real database or chain node from the test suite
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("CHAIN_RPC_URL", "http://127.0.0.1:1")
os.environ.setdefault("PUBLIC_BASE_URL", "http://portal.test")
# Cheap bcrypt cost so registration tests stay fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")
