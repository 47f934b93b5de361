from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Seat Selection'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    LOG_TIMEZONE: str = 'UTC'

    # Seat API (the ticketing backend)
    SEAT_API_BASE_URL: str = 'http://localhost:8080'
    SEAT_API_TIMEOUT_SECONDS: float = 10.0
    SEAT_API_TOKEN: SecretStr = SecretStr('')

    @field_validator('SEAT_API_BASE_URL', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip('/')
        return v

    # Reservation hold
    SEAT_HOLD_DURATION_SECONDS: int = 300  # 5 minutes
    COUNTDOWN_TICK_SECONDS: float = 1.0

    # Seat allocation
    SEAT_CENTER_COLUMN: int = 10  # Venue-layout specific, see DESIGN.md
    SEAT_MAX_QUANTITY: int = 10
    SEAT_SUGGESTION_LIMIT: int = 5


settings = Settings()  # type: ignore
