"""Configuration management for Nourish."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def load_dotenv_file(dotenv_path: Optional[Path] = None) -> Optional[Path]:
    """Load KEY=VALUE lines into the environment without overriding it.

    Without an explicit path, looks for ``.env`` in the working directory,
    the project root and the package directory. Returns the file used.
    """
    if dotenv_path is None:
        project_root = Path(__file__).parent.parent / ".env"
        package_dir = Path(__file__).parent / ".env"
        cwd = Path.cwd() / ".env"

        for path in [cwd, project_root, package_dir]:
            if path.exists():
                dotenv_path = path
                break

    if not dotenv_path or not dotenv_path.exists():
        return None

    with open(dotenv_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                os.environ.setdefault(key.strip(), value.strip().strip("\"'"))
    return dotenv_path


@dataclass
class Config:
    """Main application configuration."""
    recipes_path: Path
    meals_per_day: int = 6
    log_level: str = "WARNING"
    result_limit: int = 10

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "Config":
        """Load configuration from environment variables."""
        load_dotenv_file(dotenv_path)

        recipes_path = Path(os.environ.get("NOURISH_RECIPES_PATH", Path.cwd() / "recipes"))

        return cls(
            recipes_path=recipes_path.expanduser(),
            meals_per_day=_env_int("NOURISH_MEALS_PER_DAY", 6),
            log_level=os.environ.get("NOURISH_LOG_LEVEL", "WARNING").strip().upper(),
            result_limit=_env_int("NOURISH_RESULT_LIMIT", 10),
        )

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.recipes_path.exists():
            errors.append(f"Recipes path does not exist: {self.recipes_path}")

        if self.meals_per_day < 1:
            errors.append(f"NOURISH_MEALS_PER_DAY must be positive, got {self.meals_per_day}")

        if self.result_limit < 1:
            errors.append(f"NOURISH_RESULT_LIMIT must be positive, got {self.result_limit}")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Unknown NOURISH_LOG_LEVEL {self.log_level!r}")

        return errors
