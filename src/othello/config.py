"""
Configuration parameters for the Othello game.
"""
import os
from dataclasses import dataclass, asdict, field
from typing import Dict, Any, Optional
import json

from .game.types import MIN_LEVEL, MAX_LEVEL, DEFAULT_LEVEL, Player

@dataclass
class GameConfig:
    """Configuration for a game against the AI."""
    level: int = DEFAULT_LEVEL  # AI look-ahead depth
    first_player: str = "human"  # "human" or "ai"

    def first_mover(self) -> Player:
        """Player with the opening move."""
        try:
            return {"human": Player.HUMAN, "ai": Player.AI}[self.first_player.lower()]
        except KeyError:
            raise ValueError(f"Unknown first player: {self.first_player!r}") from None

@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_dir: Optional[str] = None  # None logs to the console only
    log_level: str = "WARNING"
    log_search_stats: bool = True

@dataclass
class Config:
    """Main configuration class."""
    project_name: str = "Othello"
    game: GameConfig = field(default_factory=GameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> 'Config':
        """Check value ranges; raises ValueError on the first bad value."""
        if not MIN_LEVEL <= self.game.level <= MAX_LEVEL:
            raise ValueError(f"Level must be between {MIN_LEVEL} and {MAX_LEVEL}, got {self.game.level}")
        self.game.first_mover()
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save(self, filepath: str):
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        return cls(
            project_name=config_dict.get('project_name', 'Othello'),
            game=GameConfig(**config_dict.get('game', {})),
            logging=LoggingConfig(**config_dict.get('logging', {}))
        ).validate()

    @classmethod
    def load(cls, filepath: str) -> 'Config':
        """Load config from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)

def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
