"""
Recommend a meeting point for a group of participants.

- Pass 1: participants -> weighted points
- Pass 2: solve for the center with the selected mode
- Pass 3: per-participant distances and summary statistics
"""

from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from meetpoint.analysis.config import SolverConfig
from meetpoint.analysis.types import (
    DistanceItem,
    GeoPoint,
    Participant,
    Recommendation,
    RecommendationMode,
    WeightedPoint,
)
from meetpoint.utils.geo import distance_km, geometric_median, minimax_center, weighted_mean
from meetpoint.utils.log import get_logger

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
CENTER_DECIMALS   = 6   # ~0.11 m
DISTANCE_DECIMALS = 2   # 10 m
# -----------------------------------------------------------------------------


def round_half_up(value: float, places: int) -> float:
    """
    Round the exact binary value of ``value`` to ``places`` decimals, ties away
    from zero.

    Unlike the builtin ``round`` this never rounds half to even, so 0.125 -> 0.13.
    """
    if not math.isfinite(value):
        return value
    q = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(q, rounding=ROUND_HALF_UP))


def participant_label(participant: Participant, index: int) -> str:
    """Display name, or a 1-indexed placeholder for unnamed participants."""
    return participant.name or f"Participant {index + 1}"


class Recommender:
    """
    Computes meeting-point recommendations with a fixed solver configuration.
    """
    def __init__(self, cfg: SolverConfig | None = None) -> None:
        self.cfg = cfg or SolverConfig.default()

    def run(
        self,
        participants: Sequence[Participant],
        mode: RecommendationMode | str | None = None,
    ) -> Optional[Recommendation]:
        """
        Recommend a meeting point; None when there are no participants.
        """
        if not participants:
            return None
        mode = RecommendationMode.parse(mode)
        points = self._weighted_points(participants)
        center = self.solve(points, mode)
        rec = self._summarize(participants, center)
        logger.debug(
            "Recommended %s center for %d participants: (%s, %s), total=%.2f km",
            mode.value, len(participants),
            rec.center.latitude, rec.center.longitude, rec.total_distance_km,
        )
        return rec

    def solve(self, points: Sequence[WeightedPoint], mode: RecommendationMode) -> GeoPoint:
        """
        Unrounded center of the weighted points for the given mode.
        """
        match mode:
            case RecommendationMode.MEAN:
                return weighted_mean(points)
            case RecommendationMode.MINIMAX:
                return minimax_center(points, self.cfg.step_km, self.cfg.radius_km)
            case _:
                return geometric_median(points, self.cfg.epsilon, self.cfg.max_iterations)

    @staticmethod
    def _weighted_points(participants: Sequence[Participant]) -> list[WeightedPoint]:
        return [WeightedPoint(p.location, p.weight) for p in participants]

    @staticmethod
    def _summarize(participants: Sequence[Participant], center: GeoPoint) -> Recommendation:
        """
        Per-participant distances (input order) plus total/min/max, all taken
        over the rounded distances.
        """
        per_person = tuple(
            DistanceItem(
                participant_label(p, i),
                round_half_up(distance_km(center, p.location), DISTANCE_DECIMALS),
            )
            for i, p in enumerate(participants)
        )
        distances = [item.distance_km for item in per_person]

        total = 0.0
        for d in distances:
            total += d

        return Recommendation(
            center=GeoPoint(
                round_half_up(center.latitude, CENTER_DECIMALS),
                round_half_up(center.longitude, CENTER_DECIMALS),
            ),
            total_distance_km=round_half_up(total, DISTANCE_DECIMALS),
            min_distance_km=min(distances),
            max_distance_km=max(distances),
            per_person=per_person,
        )


def compute_recommendation(
    participants: Sequence[Participant],
    mode: RecommendationMode | str | None = None,
    cfg: SolverConfig | None = None,
) -> Optional[Recommendation]:
    """
    Recommend a meeting point for ``participants`` using ``mode``.

    Parameters
    ----------
    participants
        People to meet, in display order.
    mode
        Recommendation mode; unrecognized values fall back to median.
    cfg
        Solver tunables, defaults to ``SolverConfig.default()``.

    Returns
    -------
    Optional[Recommendation]
        The recommendation, or None for an empty participant list.
    """
    return Recommender(cfg).run(participants, mode)
