"""Configuration for Mugard."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Config:
    """Application configuration."""

    world_path: Path | None = None
    event_delay: float = 0.5
    cue_language: str = "mugard"
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    log_text_limit: int = 80

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        world_path = os.getenv("MUGARD_WORLD_PATH")
        log_file = os.getenv("MUGARD_LOG_FILE")

        return cls(
            world_path=Path(world_path) if world_path else None,
            event_delay=float(os.getenv("MUGARD_EVENT_DELAY", str(cls.event_delay))),
            cue_language=os.getenv("MUGARD_CUE_LANGUAGE", cls.cue_language),
            log_level=os.getenv("MUGARD_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=os.getenv("MUGARD_JSON_LOGS", "").lower()
            in ("true", "1", "yes"),
            log_text_limit=int(
                os.getenv("MUGARD_LOG_TEXT_LIMIT", str(cls.log_text_limit))
            ),
        )
