from pydantic import field_validator
from pydantic_settings import BaseSettings

from goalstack.deck.models import parse_hhmm


class Settings(BaseSettings):
    log_level: str = "INFO"

    # Deadline rules (local wall clock, "HH:MM")
    end_of_day: str = "23:00"  # DAILY_EOD deadline
    default_at_time: str = "21:00"  # AT_TIME goals without a deadline_time

    # Deck timing
    swipe_duration_ms: int = 450  # exit delay before a swiped card leaves the deck
    undo_duration_ms: int = 3000  # undo window after a swipe
    refresh_interval_s: float = 60.0  # countdown refresh tick

    model_config = {"env_file": ".env", "extra": "ignore"}

    @field_validator("end_of_day", "default_at_time")
    @classmethod
    def _valid_time(cls, v: str) -> str:
        parse_hhmm(v)
        return v


settings = Settings()
