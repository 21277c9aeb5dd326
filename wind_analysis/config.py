"""Configuration constants for wind analysis."""
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
SITES_FILE = DATA_DIR / "nz_wind_farms.json"

# Thresholds (km/h)
STRONG_WIND_THRESHOLD = 60.0
EXTREME_WIND_THRESHOLD = 100.0
MINIMUM_DURATION_HOURS = 6.0

# Compass sectors for the wind rose, clockwise from north
COMPASS_SECTORS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]
SECTOR_WIDTH_DEGREES = 360.0 / len(COMPASS_SECTORS)  # 22.5

HOURS_PER_DAY = 24

# Open-Meteo configuration
OPEN_METEO_ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"
OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
OPEN_METEO_TIMEZONE = "Pacific/Auckland"
OPEN_METEO_HOURLY_VARIABLES = [
    "wind_speed_10m",
    "wind_speed_100m",
    "wind_direction_10m",
    "wind_direction_100m",
    "wind_gusts_10m",
    "temperature_2m",
    "relative_humidity_2m",
    "pressure_msl",
]

# Provider variable -> Reading field
HOURLY_FIELD_MAP = {
    "wind_speed_10m": "speed_ref",
    "wind_speed_100m": "speed_hub",
    "wind_gusts_10m": "gust",
    "wind_direction_10m": "direction",
    "temperature_2m": "temperature",
    "relative_humidity_2m": "humidity",
    "pressure_msl": "pressure",
}
TIME_KEY = "time"

# Text form of an analysis window: "YYYY-MM-DD HH:MM - YYYY-MM-DD HH:MM"
TIME_WINDOW_PATTERN = (
    r"^\s*(\d{4}-\d{2}-\d{2}) (\d{2}:\d{2}) - (\d{4}-\d{2}-\d{2}) (\d{2}:\d{2})\s*$"
)
TIME_WINDOW_FORMAT = "%Y-%m-%d %H:%M"
