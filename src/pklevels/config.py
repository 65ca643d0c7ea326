from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PKLEVELS_", env_file=".env", extra="ignore")

    # Snapshot files written by the app's local store
    dose_log_path: Path = Path("doses.json")
    profiles_path: Path = Path("pharmacokinetics.json")

    # Decay chart sampling
    chart_points: int = 10
    chart_half_lives: float = 5.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
