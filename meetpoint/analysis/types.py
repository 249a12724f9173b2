# meetpoint/analysis/types.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class RecommendationMode(str, Enum):
    """
    Objective used to pick the meeting point.

    MEAN
        Weighted centroid of the participants.
    MEDIAN
        Weighted geometric median: minimizes total weighted travel distance.
    MINIMAX
        Minimizes the largest weighted distance any one participant travels.
    """
    MEAN = "mean"
    MEDIAN = "median"
    MINIMAX = "minimax"

    @classmethod
    def parse(cls, value: str | RecommendationMode | None) -> RecommendationMode:
        """Map a mode name to a member; anything unrecognized is MEDIAN."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.MEDIAN


DEFAULT_MODE = RecommendationMode.MEDIAN


@dataclass(frozen=True)
class GeoPoint:
    """
    Geographic coordinate.

    Parameters
    ----------
    latitude : float
        Latitude in decimal degrees, [-90, 90].
    longitude : float
        Longitude in decimal degrees, [-180, 180].
    """
    latitude: float
    longitude: float


@dataclass(frozen=True)
class WeightedPoint:
    """
    Location with a relative importance.

    Parameters
    ----------
    location : GeoPoint
        Where the point is.
    weight : float
        Non-negative pull on the center; zero means the point is ignored.
    """
    location: GeoPoint
    weight: float = 1.0


@dataclass(frozen=True)
class Participant:
    """
    One person taking part in the meeting.

    Parameters
    ----------
    name : str
        Display name; may be empty.
    location : GeoPoint
        Starting location.
    weight : float
        Importance weight, 1.0 by default.
    """
    name: str
    location: GeoPoint
    weight: float = 1.0


@dataclass(frozen=True)
class DistanceItem:
    label: str
    distance_km: float


@dataclass(frozen=True)
class Recommendation:
    """
    Recommended meeting point with per-participant distances.

    Parameters
    ----------
    center : GeoPoint
        Meeting point, rounded to 6 decimals.
    total_distance_km : float
        Sum of the rounded per-participant distances.
    min_distance_km : float
        Smallest rounded per-participant distance.
    max_distance_km : float
        Largest rounded per-participant distance.
    per_person : Tuple[DistanceItem, ...]
        One entry per participant, in input order, rounded to 2 decimals.
    """
    center: GeoPoint
    total_distance_km: float
    min_distance_km: float
    max_distance_km: float
    per_person: Tuple[DistanceItem, ...] = ()
