"""Settings builder shared by the test suite."""

from config import Settings


def make_settings(**overrides) -> Settings:
    """Settings for tests: fast retries, plain-text logs, schema auto-create."""
    values = {
        "STORAGE_BACKEND": "memory",
        "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
        "DB_AUTO_CREATE": True,
        "DB_POOL_TIMEOUT": 30,
        "NUMBER_ALLOCATION_ATTEMPTS": 20,
        "NUMBER_ALLOCATION_BACKOFF": 0.001,
        "LOG_JSON": False,
        "LOG_LEVEL": "INFO",
    }
    values.update(overrides)
    return Settings(**values)
