from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from runmetrics.core.constants import MILE_M


class RunMode(str, Enum):
    manual = "manual"
    gps = "gps"


class DistanceSource(str, Enum):
    manual = "manual"
    gps = "gps"
    estimated = "estimated"  # GPS session without a usable route


class CoordinatePoint(BaseModel):
    """One fix from a location source."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    timestamp_sec: float  # epoch seconds
    altitude_m: Optional[float] = None
    horizontal_accuracy_m: float
    speed_mps: Optional[float] = None


class RouteDistanceProfile(BaseModel):
    """Points sorted by timestamp plus the running filtered distance at each one."""

    model_config = ConfigDict(frozen=True)

    points: tuple[CoordinatePoint, ...]
    cumulative_meters: tuple[float, ...]

    @property
    def total_meters(self) -> float:
        return self.cumulative_meters[-1] if self.cumulative_meters else 0.0

    @property
    def total_miles(self) -> float:
        return self.total_meters / MILE_M

    @property
    def start_time(self) -> float:
        return self.points[0].timestamp_sec

    @property
    def end_time(self) -> float:
        return self.points[-1].timestamp_sec

    @property
    def span_seconds(self) -> float:
        return max(0.0, self.end_time - self.start_time)

    def segment_meters(self, i: int) -> float:
        """Filtered distance between point i-1 and point i."""
        return self.cumulative_meters[i] - self.cumulative_meters[i - 1]


class RunSplit(BaseModel):
    model_config = ConfigDict(frozen=True)

    split_index: int = Field(ge=1)
    start_mile: float = Field(ge=0)
    end_mile: float = Field(ge=0)
    split_seconds: int = Field(ge=0)
    split_pace_sec_per_mile: int = Field(ge=0)

    @property
    def distance_miles(self) -> float:
        return self.end_mile - self.start_mile


class ElevationPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    mile: float
    elevation_ft: float


class ElevationSummary(BaseModel):
    """Gain/loss/min/max in feet; all None (and no series) without altitude data.

    Gain, loss, min and max come from the smoothed altitudes. The series plots
    the raw altitude of each sample, so a spike can sit above max_ft or below
    min_ft.
    """

    model_config = ConfigDict(frozen=True)

    gain_ft: Optional[float] = None
    loss_ft: Optional[float] = None
    min_ft: Optional[float] = None
    max_ft: Optional[float] = None
    series: tuple[ElevationPoint, ...] = ()

    @property
    def has_data(self) -> bool:
        return self.gain_ft is not None


class RawRun(BaseModel):
    """Run as handed over by the session layer, before finalization.

    Distance and duration may come from the stopped-run summary or from the
    live tracker counters; the summary wins when both are present.
    """

    model_config = ConfigDict(frozen=True)

    mode: RunMode = RunMode.manual
    distance_miles: Optional[float] = None
    duration_seconds: Optional[float] = None  # fractional live counters are rounded half-up
    live_distance_miles: Optional[float] = None
    live_elapsed_seconds: Optional[float] = None
    route: Optional[tuple[CoordinatePoint, ...]] = None
    notes: str = ""


class RunEntry(BaseModel):
    """Canonical finalized run."""

    model_config = ConfigDict(frozen=True)

    mode: RunMode
    distance_miles: float = Field(ge=0)
    elapsed_seconds: int = Field(ge=0)
    moving_seconds: int = Field(ge=0)
    duration_seconds: int = Field(ge=0)  # mirrors elapsed_seconds
    splits: tuple[RunSplit, ...] = ()
    elevation_gain_ft: Optional[float] = None
    elevation_loss_ft: Optional[float] = None
    elevation_min_ft: Optional[float] = None
    elevation_max_ft: Optional[float] = None
    elevation_series: tuple[ElevationPoint, ...] = ()
    avg_pace_sec_per_mile: Optional[int] = None
    avg_moving_pace_sec_per_mile: Optional[int] = None
    distance_source: DistanceSource
    notes: str = ""
    route: Optional[tuple[CoordinatePoint, ...]] = None
