import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///jobboard.db"
DEFAULT_LOG_LEVEL = "INFO"


def load_env() -> None:
    """Load .env from the working directory if present.
    Variables already set in the environment win.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def get_database_url() -> str:
    return os.environ.get("JOBBOARD_DATABASE_URL", DEFAULT_DATABASE_URL)


def get_log_level() -> str:
    return os.environ.get("JOBBOARD_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def get_echo_sql() -> bool:
    return os.environ.get("JOBBOARD_ECHO_SQL", "").strip().lower() in ("1", "true", "yes")
