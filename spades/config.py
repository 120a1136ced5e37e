"""Application configuration using Pydantic settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Environment")
    log_level: str = Field(default="INFO", description="Log level for command-line tools")

    # Game defaults (per-game settings fall back to these)
    default_win_target: int = Field(default=500, description="Score that ends the game")
    default_book_threshold: int = Field(default=10, description="Books per penalty")
    default_blind_nil: bool = Field(default=False, description="Allow blind nil bids")
    default_moonshot: bool = Field(default=True, description="Bid and take every trick to win")
    default_ten_bid_bonus: bool = Field(default=True, description="Bonus for 10+ team tricks")
    default_double_nil: bool = Field(default=False, description="Allow both partners to bid nil")
    default_game_mode: int = Field(default=4, description="Default player count")

    # Bot simulation
    simulation_seed: Optional[int] = Field(default=None, description="Seed for simulated games")
    simulation_max_rounds: int = Field(default=200, description="Round cap for simulated games")


# Global settings instance
settings = Settings()
