"""
Configuration management using environment variables.
Handles bookshelf store and logging settings with validation and defaults.
"""

from typing import Optional
from pathlib import Path

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class ShelfConfig(BaseSettings):
    """
    Configuration class for the book store.
    Uses pydantic BaseSettings for environment variable management.
    """

    # Store Configuration
    id_size: int = Field(default=16, description="Entropy bytes used for generated book ids")
    recompute_finished_on_update: bool = Field(
        default=True,
        description="Recompute 'finished' from the merged record on update",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")
    log_file: Optional[str] = Field(default=None)

    # Development
    debug: bool = Field(default=False)

    @validator('id_size')
    def validate_id_size(cls, v):
        """Ensure generated ids stay short but collision-free in practice."""
        if v < 8 or v > 64:
            raise ValueError('id_size must be between 8 and 64')
        return v

    @validator('log_level')
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of: {valid_levels}')
        return v.upper()

    @validator('log_format')
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ['json', 'console']
        if v.lower() not in valid_formats:
            raise ValueError(f'log_format must be one of: {valid_formats}')
        return v.lower()

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def get_log_file_path(self) -> Optional[Path]:
        """Get log file path as Path object."""
        if self.log_file:
            return Path(self.log_file)
        return None


# Global configuration instance
config = ShelfConfig()
