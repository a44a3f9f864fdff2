"""
Configuration management for the TV catalog.

Loads configuration from environment variables and provides
a centralized Config dataclass for all settings.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, str(default)).strip()
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, str(default)).strip()
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass
class Config:
    """Centralized configuration from environment variables."""

    # Database
    db_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "tvdb"
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Transient store errors
    db_retry_attempts: int = 3
    db_retry_base_delay: float = 0.5

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    api_debug: bool = False
    api_token: str = ""

    # Deployment metadata
    app_version: str = ""
    build_number: str = ""

    # Query jobs
    job_min_delay_ms: int = 500
    job_max_delay_ms: int = 60000
    job_default_delay_ms: int = 2000
    job_delay_jitter_ms: int = 6000
    job_workers: int = 4

    # Seeding client
    api_base_url: str = "http://localhost:3000"
    seed_max_retries: int = 10
    seed_retry_delay: float = 2.0

    # Paths
    log_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")

    # CORS settings
    allowed_origins: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "Config":
        """
        Load configuration from environment variables.

        Args:
            env_path: Optional path to .env file. If not provided,
                     looks for .env in the current directory.

        Returns:
            Config instance with loaded values.

        Raises:
            ValueError: If a variable is malformed or the database is unset.
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        # Database config
        db_url = os.getenv("DATABASE_URL") or None
        db_name = os.getenv("DB_NAME", "tvdb")
        if not db_url and not db_name:
            raise ValueError("DB_NAME or DATABASE_URL environment variable is required")

        # CORS settings
        origins_str = os.getenv("ALLOWED_ORIGINS", "")
        allowed_origins = [o.strip() for o in origins_str.split(",") if o.strip()]

        job_min_delay_ms = _env_int("JOB_MIN_DELAY_MS", 500)
        job_max_delay_ms = _env_int("JOB_MAX_DELAY_MS", 60000)
        if job_min_delay_ms < 0 or job_max_delay_ms < job_min_delay_ms:
            raise ValueError("JOB_MIN_DELAY_MS must be >= 0 and <= JOB_MAX_DELAY_MS")

        return cls(
            db_url=db_url,
            db_host=os.getenv("DB_HOST", "localhost"),
            db_port=_env_int("DB_PORT", 3306),
            db_user=os.getenv("DB_USER", "root"),
            db_password=os.getenv("DB_PASSWORD", ""),
            db_name=db_name,
            db_pool_size=_env_int("DB_POOL_SIZE", 5),
            db_max_overflow=_env_int("DB_MAX_OVERFLOW", 10),
            db_retry_attempts=_env_int("DB_RETRY_ATTEMPTS", 3),
            db_retry_base_delay=_env_float("DB_RETRY_BASE_DELAY", 0.5),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=_env_int("PORT", 3000),
            api_debug=os.getenv("API_DEBUG", "false").lower() == "true",
            api_token=os.getenv("API_TOKEN", ""),
            app_version=os.getenv("APP_VERSION", ""),
            build_number=os.getenv("BUILD_NUMBER", ""),
            job_min_delay_ms=job_min_delay_ms,
            job_max_delay_ms=job_max_delay_ms,
            job_default_delay_ms=_env_int("JOB_DEFAULT_DELAY_MS", 2000),
            job_delay_jitter_ms=_env_int("JOB_DELAY_JITTER_MS", 6000),
            job_workers=_env_int("JOB_WORKERS", 4),
            api_base_url=os.getenv("API", "http://localhost:3000").rstrip("/"),
            seed_max_retries=_env_int("SEED_MAX_RETRIES", 10),
            seed_retry_delay=_env_float("SEED_RETRY_DELAY", 2.0),
            log_dir=Path(os.getenv("LOG_DIR", str(Path.cwd() / "logs"))),
            allowed_origins=allowed_origins,
        )

    def get_db_url(self) -> str:
        """Get SQLAlchemy database URL."""
        if self.db_url:
            return self.db_url
        return (
            f"mysql+pymysql://{quote_plus(self.db_user)}:{quote_plus(self.db_password)}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}?charset=utf8mb4"
        )

    def get_headers(self) -> dict:
        """Get headers for catalog API requests."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.api_token:
            headers["x-api-token"] = self.api_token
        return headers
