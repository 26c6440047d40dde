from pydantic_settings import BaseSettings
from pydantic import BaseModel, ConfigDict, field_validator

from runmetrics.core import constants


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # Preferences supplied by the host app
    week_starts_on_monday: bool = False  # False = Sunday-first weeks
    measurement_system: str = "imperial"  # imperial or metric (display only)
    weight_unit: str = "lb"

    # Accuracy (m) assigned to imported GPX/FIT fixes that carry none
    import_accuracy_m: float = 5.0

    # Noise thresholds (see core/constants.py)
    min_segment_m: float = constants.MIN_SEGMENT_M
    max_segment_m: float = constants.MAX_SEGMENT_M
    max_accuracy_m: float = constants.MAX_ACCURACY_M
    moving_speed_mps: float = constants.MOVING_SPEED_MPS
    moving_distance_m: float = constants.MOVING_DISTANCE_M
    elevation_window: int = constants.ELEVATION_WINDOW
    elevation_max_points: int = constants.ELEVATION_MAX_POINTS

    @field_validator("measurement_system", mode="before")
    @classmethod
    def _normalize_system(cls, v):
        v = (v or "imperial").strip().lower()
        if v not in ("imperial", "metric"):
            raise ValueError("measurement_system must be 'imperial' or 'metric'")
        return v

    @field_validator("log_level", "log_format", mode="before")
    @classmethod
    def _empty_to_default(cls, v, info):
        if v in ("", None, "null", "None"):
            return "INFO" if info.field_name == "log_level" else "text"
        return v

    class Config:
        env_file = ".env"


settings = Settings()


class Thresholds(BaseModel):
    """Noise thresholds handed to the engine; defaults match core/constants.py."""

    model_config = ConfigDict(frozen=True)

    min_segment_m: float = constants.MIN_SEGMENT_M
    max_segment_m: float = constants.MAX_SEGMENT_M
    max_accuracy_m: float = constants.MAX_ACCURACY_M
    moving_speed_mps: float = constants.MOVING_SPEED_MPS
    moving_distance_m: float = constants.MOVING_DISTANCE_M
    elevation_window: int = constants.ELEVATION_WINDOW
    elevation_max_points: int = constants.ELEVATION_MAX_POINTS

    @classmethod
    def from_settings(cls, s: Settings) -> "Thresholds":
        return cls(
            min_segment_m=s.min_segment_m,
            max_segment_m=s.max_segment_m,
            max_accuracy_m=s.max_accuracy_m,
            moving_speed_mps=s.moving_speed_mps,
            moving_distance_m=s.moving_distance_m,
            elevation_window=s.elevation_window,
            elevation_max_points=s.elevation_max_points,
        )
