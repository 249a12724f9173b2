# meetpoint/utils/geo.py

"""
Geospatial utility functions: great-circle distance and the weighted
point aggregations used to pick a meeting point.
"""

import math
from typing import Sequence

from meetpoint.analysis.types import GeoPoint, WeightedPoint

EARTH_RADIUS_KM = 6371.0
KM_PER_DEG_LAT = 110.574
KM_PER_DEG_LNG_EQUATOR = 111.320

ORIGIN = GeoPoint(0.0, 0.0)


def _to_rad(deg: float) -> float:
    return deg * math.pi / 180


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    Compute the great-circle distance between two points on the Earth.

    Parameters
    ----------
    a
        Point A, in decimal degrees.
    b
        Point B, in decimal degrees.

    Returns
    -------
    float
        Distance between A and B in kilometres. A non-finite result
        (invalid input) is reported as 0.
    """
    d_phi = _to_rad(b.latitude - a.latitude)
    d_lam = _to_rad(b.longitude - a.longitude)
    phi1, phi2 = _to_rad(a.latitude), _to_rad(b.latitude)
    try:
        sin_dphi = math.sin(d_phi / 2)
        sin_dlam = math.sin(d_lam / 2)
        h = sin_dphi * sin_dphi + math.cos(phi1) * math.cos(phi2) * sin_dlam * sin_dlam
        # rounding can push h a hair below zero for coincident points
        d = 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(max(0.0, h)))
    except ValueError:
        # infinite input, or h a hair above 1
        return 0.0
    return d if math.isfinite(d) else 0.0


def weighted_mean(points: Sequence[WeightedPoint]) -> GeoPoint:
    """
    Weighted centroid of the points; (0, 0) when the total weight is zero.
    """
    total_w = 0.0
    for p in points:
        total_w += p.weight or 0.0
    if total_w == 0:
        return ORIGIN

    sum_lat = sum_lng = 0.0
    for p in points:
        w = p.weight or 0.0
        sum_lat += p.location.latitude * w
        sum_lng += p.location.longitude * w
    return GeoPoint(sum_lat / total_w, sum_lng / total_w)


def geometric_median(
    points: Sequence[WeightedPoint],
    eps: float = 1e-6,
    max_iter: int = 200,
) -> GeoPoint:
    """
    Compute the weighted geometric median of the points (Weiszfeld's algorithm
    on the haversine metric).

    The search starts at the weighted centroid. As soon as the estimate lands
    exactly on an input point it is returned as-is; otherwise iteration stops
    when a step moves less than ``eps`` km or after ``max_iter`` steps, in
    which case the last estimate is returned.
    """
    if not points:
        return ORIGIN

    current = weighted_mean(points)
    # zero-weight points carry no pull and must not stop the iteration
    active = [p for p in points if p.weight]

    for _ in range(max_iter):
        num_lat = num_lng = denom = 0.0
        coincident = False
        for p in active:
            d = distance_km(current, p.location)
            if d == 0:
                coincident = True
                continue
            inv = p.weight / d
            num_lat += p.location.latitude * inv
            num_lng += p.location.longitude * inv
            denom += inv

        if coincident or denom == 0:
            return current

        nxt = GeoPoint(num_lat / denom, num_lng / denom)
        if distance_km(current, nxt) < eps:
            return nxt
        current = nxt
    return current


def km_to_lat_delta(km: float) -> float:
    """Approximate degrees of latitude spanned by ``km``."""
    return km / KM_PER_DEG_LAT


def km_to_lng_delta(km: float, latitude: float) -> float:
    """Approximate degrees of longitude spanned by ``km`` at ``latitude``."""
    denom = KM_PER_DEG_LNG_EQUATOR * math.cos(_to_rad(latitude))
    return km / (denom or 1)


def minimax_center(
    points: Sequence[WeightedPoint],
    step_km: float = 1.0,
    radius_km: float = 6.0,
) -> GeoPoint:
    """
    Grid-search the point minimizing the largest weighted distance to any input.

    The grid is a square of half-width ``radius_km`` around the weighted
    centroid with ``step_km`` spacing, scanned latitude-major in ascending
    order. The first candidate with the strictly smallest score wins.
    """
    if not points:
        return ORIGIN

    base = weighted_mean(points)
    if not step_km > 0:
        return base
    lat_step = km_to_lat_delta(step_km)
    lng_step = km_to_lng_delta(step_km, base.latitude)
    lat_radius = km_to_lat_delta(radius_km)
    lng_radius = km_to_lng_delta(radius_km, base.latitude)

    best = base
    best_score = math.inf

    lat = base.latitude - lat_radius
    while lat <= base.latitude + lat_radius:
        lng = base.longitude - lng_radius
        while lng <= base.longitude + lng_radius:
            cand = GeoPoint(lat, lng)
            score = 0.0
            for p in points:
                wd = distance_km(cand, p.location) * (p.weight or 0.0)
                if wd > score:
                    score = wd
            if score < best_score:
                best_score = score
                best = cand
            lng += lng_step
        lat += lat_step
    return best
