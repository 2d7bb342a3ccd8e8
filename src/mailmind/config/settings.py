import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

# Load .env once, globally
load_dotenv()

# Project root (independent of current working directory).
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def resolve_dir(env_key: str, default: str) -> Path:
    """
    Resolve a directory path from ENV.
    Relative paths are resolved against PROJECT_ROOT.
    """
    value = os.getenv(env_key, default)
    path = Path(value)

    if not path.is_absolute():
        path = PROJECT_ROOT / path

    path.mkdir(parents=True, exist_ok=True)
    return path


def _env_int(env_key: str, default: int) -> int:
    value = os.getenv(env_key)
    if value is None or not value.strip():
        return default
    return int(value)


def _env_float(env_key: str, default: float) -> float:
    value = os.getenv(env_key)
    if value is None or not value.strip():
        return default
    return float(value)


LOGS_DIR = resolve_dir("MAILMIND_LOGS_DIR", "logs")

MAX_ROWS            = _env_int("MAILMIND_MAX_ROWS", 50)
READY_POLL_INTERVAL = _env_float("MAILMIND_READY_POLL_INTERVAL", 0.5)
READY_MAX_POLLS     = _env_int("MAILMIND_READY_MAX_POLLS", 30)
READY_RETRIES       = _env_int("MAILMIND_READY_RETRIES", 5)
READY_BACKOFF_STEP  = _env_float("MAILMIND_READY_BACKOFF_STEP", 1.0)
EMPTY_RETRY_DELAY   = _env_float("MAILMIND_EMPTY_RETRY_DELAY", 1.0)


@dataclass(frozen=True)
class EngineConfig:
    # Rows beyond this are dropped after locating.
    max_rows: int = MAX_ROWS
    # Inner readiness poll: fixed interval, bounded count.
    ready_poll_interval: float = READY_POLL_INTERVAL
    ready_max_polls: int = READY_MAX_POLLS
    # Outer readiness loop: linear backoff between attempts.
    ready_retries: int = READY_RETRIES
    ready_backoff_step: float = READY_BACKOFF_STEP
    # Pause before the single re-scan when no rows were found.
    empty_retry_delay: float = EMPTY_RETRY_DELAY

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            max_rows=_env_int("MAILMIND_MAX_ROWS", MAX_ROWS),
            ready_poll_interval=_env_float("MAILMIND_READY_POLL_INTERVAL", READY_POLL_INTERVAL),
            ready_max_polls=_env_int("MAILMIND_READY_MAX_POLLS", READY_MAX_POLLS),
            ready_retries=_env_int("MAILMIND_READY_RETRIES", READY_RETRIES),
            ready_backoff_step=_env_float("MAILMIND_READY_BACKOFF_STEP", READY_BACKOFF_STEP),
            empty_retry_delay=_env_float("MAILMIND_EMPTY_RETRY_DELAY", EMPTY_RETRY_DELAY),
        )

    @classmethod
    def snapshot(cls, max_rows: int = MAX_ROWS) -> "EngineConfig":
        """Single-shot settings for saved pages that will never change."""
        return cls(
            max_rows=max_rows,
            ready_poll_interval=0.0,
            ready_max_polls=1,
            ready_retries=1,
            ready_backoff_step=0.0,
            empty_retry_delay=0.0,
        )
