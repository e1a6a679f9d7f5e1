"""
Application settings.

Read once from the environment at import time. Defaults are good enough for local development and tests.
"""

import os

DATABASE_URL: str = os.getenv("CHESS_DATABASE_URL", "sqlite:///./chess.db")
DATABASE_ECHO: bool = os.getenv("CHESS_DATABASE_ECHO", "false").lower() in (
    "1",
    "true",
    "yes",
)
LOG_LEVEL: str = os.getenv("CHESS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
