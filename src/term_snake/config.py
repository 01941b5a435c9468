"""Gameplay tuning configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Speed curve, board and input settings.

    Supports JSON serialization so a tuned setup can be replayed.
    """

    # Speed
    traversal_time_ms: float = 8000.0
    acceleration_base: float = 0.95
    max_speed_level: int = 25
    vertical_stretch: float = 1.5

    # Board
    initial_length: int = 6
    wall_percentage: float = 1.0

    # Input
    input_capacity: int = 2
    poll_timeout_ms: int = 1

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.traversal_time_ms <= 0:
            raise ValueError("traversal_time_ms must be positive.")
        if not 0 < self.acceleration_base <= 1:
            raise ValueError("acceleration_base must be in (0, 1].")
        if self.max_speed_level < 0:
            raise ValueError("max_speed_level must be non-negative.")
        if self.vertical_stretch <= 0:
            raise ValueError("vertical_stretch must be positive.")
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if not 0 <= self.wall_percentage < 100:
            raise ValueError("wall_percentage must be in [0, 100).")
        if self.input_capacity < 1:
            raise ValueError("input_capacity must be at least 1.")
        if self.poll_timeout_ms < 0:
            raise ValueError("poll_timeout_ms must be non-negative.")

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
