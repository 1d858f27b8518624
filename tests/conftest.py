"""Root conftest — shared test configuration."""

import os

# Keep the app's own gateway fast in case a test goes through lifespan
os.environ.setdefault("CONNECT_DELAY_MS", "20")
os.environ.setdefault("LOG_FORMAT", "text")
