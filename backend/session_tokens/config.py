import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from backend directory
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


class Settings:
    def __init__(self):
        # Strip whitespace to handle Windows line endings (\r\n) in .env file
        self.JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret").strip()
        self.JWT_ALGO = os.getenv("JWT_ALGO", "HS256").strip()

        # Seconds; 24 hours by default
        self.SESSION_TTL_SECONDS = _int_from_env("SESSION_TTL_SECONDS", 24 * 60 * 60)
        self.CLOCK_SKEW_SECONDS = _int_from_env("CLOCK_SKEW_SECONDS", 60)

settings = Settings()
