"""Configuration for Dilemma.

Defaults can be overridden via environment variables:
    DILEMMA_ROUNDS: Default number of rounds per match (default: 100)
    DILEMMA_LOG_LEVEL: Logging level for configure_logging() (default: "WARNING")
"""

import logging
import os

from pydantic import BaseModel, ConfigDict, Field

from dilemma.errors import InvalidArgument

DEFAULT_ROUNDS = 100
DEFAULT_LOG_LEVEL = "WARNING"


def get_default_rounds() -> int:
    """Get configured default round limit from environment.

    Raises:
        InvalidArgument: If DILEMMA_ROUNDS is not a positive integer
    """
    raw = os.environ.get("DILEMMA_ROUNDS")
    if raw is None or not raw.strip():
        return DEFAULT_ROUNDS
    try:
        rounds = int(raw)
    except ValueError:
        raise InvalidArgument(f"DILEMMA_ROUNDS must be a positive integer, got {raw!r}") from None
    if rounds <= 0:
        raise InvalidArgument(f"DILEMMA_ROUNDS must be a positive integer, got {raw!r}")
    return rounds


def get_log_level() -> str:
    """Get configured log level name from environment."""
    return os.environ.get("DILEMMA_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


class MatchConfig(BaseModel):
    """Settings shared by every match of a tournament."""

    model_config = ConfigDict(frozen=True)

    rounds: int = Field(default_factory=get_default_rounds, gt=0)


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging for scripts and interactive use.

    Args:
        level: Level name or number (default: DILEMMA_LOG_LEVEL)
    """
    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
