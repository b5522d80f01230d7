"""Modelos tipados para corridas y las distancias con que se cargan."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

KM_TO_MILES = 0.621371
FEET_PER_MILE = 5280.0
FEET_PER_METER = 3.28084
STANDARD_OUTDOOR_TRACK_FT = 1320.0
STANDARD_INDOOR_TRACK_M = 200.0


class InputType(str, Enum):
    """How the distance of a run was originally entered."""

    MILES = "MILES"
    KM = "KM"
    LAPS = "LAPS"


@dataclass(frozen=True)
class Miles:
    """Distance entered in miles."""

    value: float

    @property
    def input_type(self) -> InputType:
        return InputType.MILES

    def to_miles(self) -> float:
        return self.value


@dataclass(frozen=True)
class Kilometers:
    """Distance entered in kilometers."""

    value: float

    @property
    def input_type(self) -> InputType:
        return InputType.KM

    def to_miles(self) -> float:
        return self.value * KM_TO_MILES


@dataclass(frozen=True)
class Laps:
    """Distance entered as laps of a track of known length (feet)."""

    count: int
    track_ft: float = STANDARD_OUTDOOR_TRACK_FT

    @property
    def input_type(self) -> InputType:
        return InputType.LAPS

    def to_miles(self) -> float:
        return (self.count * self.track_ft) / FEET_PER_MILE


DistanceInput = Miles | Kilometers | Laps


@dataclass(frozen=True)
class Run:
    """One logged running session.

    Distance is stored only in miles; ``duration_s == 0`` means the duration
    was not recorded.
    """

    day: date
    distance_mi: float
    duration_s: int = 0
    input_type: InputType = InputType.MILES

    @classmethod
    def create(cls, day: date, distance: DistanceInput, duration_s: int = 0) -> Run:
        """Build a run from any distance input, normalizing to miles.

        Values are not validated here; callers are expected to pass
        non-negative distances and durations.
        """
        return cls(
            day=day,
            distance_mi=distance.to_miles(),
            duration_s=duration_s,
            input_type=distance.input_type,
        )

    @classmethod
    def from_miles(cls, day: date, miles: float, duration_s: int = 0) -> Run:
        return cls.create(day, Miles(miles), duration_s)

    @classmethod
    def from_kilometers(cls, day: date, km: float, duration_s: int = 0) -> Run:
        return cls.create(day, Kilometers(km), duration_s)

    @classmethod
    def from_laps(
        cls, day: date, laps: int, track_ft: float, duration_s: int = 0
    ) -> Run:
        return cls.create(day, Laps(laps, track_ft), duration_s)

    @property
    def distance_km(self) -> float:
        return self.distance_mi / KM_TO_MILES

    @property
    def pace_min_per_mile(self) -> float:
        """Minutes per mile, or 0.0 when duration or distance is unknown."""
        if self.duration_s == 0 or self.distance_mi == 0:
            return 0.0
        return (self.duration_s / 60.0) / self.distance_mi


def standard_outdoor_track_length_ft() -> float:
    """Length of a standard quarter-mile outdoor track in feet."""
    return STANDARD_OUTDOOR_TRACK_FT
