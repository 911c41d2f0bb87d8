from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """Portal settings, read once from the environment at import time.

    Tests override individual attributes with monkeypatch.
    """

    # Secret used to sign the session cookie. Must be overridden outside of
    # local development.
    session_secret: str = os.getenv("SESSION_SECRET", "dev-only-secret-change-me")
    session_cookie: str = os.getenv("SESSION_COOKIE", "talent_session")

    # Root directory for uploaded documents. Clinic and candidate documents are
    # stored in "clinic/" and "candidate/" below it.
    upload_dir: Path = Path(os.getenv("UPLOAD_DIR", "uploads"))
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(15 * 1024 * 1024)))

    # Optional database configuration for SQL-backed repositories.
    database_url: Optional[str] = os.getenv("DATABASE_URL")
    use_sql_repos: bool = os.getenv("USE_SQL_REPOS", "false").lower() == "true"

    # Create the demo owner, clinic and candidate on startup.
    seed_demo_data: bool = os.getenv("SEED_DEMO_DATA", "false").lower() == "true"

    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Comma-separated allowed origins for the portal frontend; "*" allows all.
    cors_allow_origins: str = os.getenv("CORS_ALLOW_ORIGINS", "*")


settings = Settings()
