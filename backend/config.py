"""Backend configuration."""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_prefix="WINDANALYSIS_")

    # Data paths
    project_root: Path = Path(__file__).parent.parent
    data_dir: Path = project_root / "data"
    sites_file: Path = data_dir / "nz_wind_farms.json"

    # API settings
    api_title: str = "Strong Wind Analysis API"
    api_version: str = "1.0.0"
    cors_origins: list = ["http://localhost:5173", "http://localhost:3000"]
    debug: bool = False

    # Analysis defaults (km/h, hours)
    strong_wind_threshold: float = 60.0
    extreme_wind_threshold: float = 100.0
    minimum_duration_hours: float = 6.0
    default_recent_days: int = 7
    history_days: int = 365

    # Reading source
    open_meteo_timezone: str = "Pacific/Auckland"
    request_timeout: float = 30.0
    max_workers: int = 4


settings = Settings()
