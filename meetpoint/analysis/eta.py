"""
Rough travel-time estimates from straight-line distance and an assumed speed.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from meetpoint.analysis.types import GeoPoint
from meetpoint.utils.geo import distance_km


class TravelMode(str, Enum):
    WALK = "walk"
    CAR = "car"
    BIKE = "bike"
    TRANSIT = "transit"


# average speeds in km/h; transit has no meaningful straight-line speed
SPEEDS_KMH: dict[TravelMode, float] = {
    TravelMode.WALK: 4.5,
    TravelMode.CAR: 30.0,
    TravelMode.BIKE: 15.0,
}

NO_ETA = "—"


def estimate_eta_minutes(
    origin: GeoPoint,
    destination: GeoPoint,
    mode: TravelMode | str,
) -> Optional[int]:
    """
    Estimated travel time in whole minutes, never less than 1.

    Returns None for modes without an assumed speed (transit).
    """
    speed = SPEEDS_KMH.get(TravelMode(mode))
    if not speed:
        return None
    km = distance_km(origin, destination)
    if not math.isfinite(km):
        return None
    minutes = km / speed * 60
    return max(1, math.floor(minutes + 0.5))


def format_eta(minutes: Optional[int]) -> str:
    """Human-readable ETA, e.g. "12 min"; a dash when unknown."""
    if minutes is None:
        return NO_ETA
    return f"{minutes} min"
