import asyncio
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Avoid startup validation errors when importing the app
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
os.environ.setdefault("ALLOW_CREDENTIALS", "false")

from bowling_tracker.services.store import games  # noqa: E402


@pytest.fixture(autouse=True)
def reset_games():
    """Start every test with an empty in-memory game registry."""
    asyncio.run(games.clear())
    yield
    asyncio.run(games.clear())
