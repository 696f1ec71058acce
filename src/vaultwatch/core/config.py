# Core - Configuration
#
# Settings are read from the environment after loading an optional .env
# file from the working directory.

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

STORAGE_MEMORY = "memory"
STORAGE_SQLITE = "sqlite"
STORAGE_KINDS = (STORAGE_MEMORY, STORAGE_SQLITE)

# Password generator bounds
GENERATOR_MIN_LENGTH = 8
GENERATOR_MAX_LENGTH = 128


@dataclass(frozen=True)
class Settings:
    """Runtime settings for VaultWatch."""

    auth_url: str = "http://localhost:8000"
    auth_timeout: float = 10.0
    storage: str = STORAGE_MEMORY
    db_path: Path = Path("data/vault.db")
    audit_dir: Path = Path("./audit_logs")
    generator_length: int = 16


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def load_settings(dotenv_path: Optional[Path] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        dotenv_path: Optional explicit .env file (default: search cwd)

    Raises:
        ValueError: On malformed numbers or an unknown storage kind
    """
    load_dotenv(dotenv_path=dotenv_path)

    storage = os.getenv("VAULTWATCH_STORAGE", STORAGE_MEMORY).strip().lower()
    if storage not in STORAGE_KINDS:
        raise ValueError(
            f"VAULTWATCH_STORAGE must be one of {', '.join(STORAGE_KINDS)}, got {storage!r}"
        )

    generator_length = _env_int("VAULTWATCH_GENERATOR_LENGTH", 16)
    if not GENERATOR_MIN_LENGTH <= generator_length <= GENERATOR_MAX_LENGTH:
        raise ValueError(
            f"VAULTWATCH_GENERATOR_LENGTH must be between "
            f"{GENERATOR_MIN_LENGTH} and {GENERATOR_MAX_LENGTH}"
        )

    return Settings(
        auth_url=os.getenv("VAULTWATCH_AUTH_URL", "http://localhost:8000").rstrip("/"),
        auth_timeout=_env_float("VAULTWATCH_AUTH_TIMEOUT", 10.0),
        storage=storage,
        db_path=Path(os.getenv("VAULTWATCH_DB_PATH", "data/vault.db")),
        audit_dir=Path(os.getenv("VAULTWATCH_AUDIT_DIR", "./audit_logs")),
        generator_length=generator_length,
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get global settings (loaded once)."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
