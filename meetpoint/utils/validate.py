"""
Pydantic schemas validating participant input and API payloads.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from meetpoint.analysis.eta import TravelMode
from meetpoint.analysis.types import (
    GeoPoint,
    Participant,
    Recommendation,
    RecommendationMode,
)


class LatLng(BaseModel):
    """
    Coordinate pair in decimal degrees.
    """
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    def to_point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)


class PointOut(BaseModel):
    """
    Computed coordinate; unbounded since grid candidates may sit just past a pole.
    """
    lat: float
    lng: float

    @classmethod
    def from_point(cls, point: GeoPoint) -> "PointOut":
        return cls(lat=point.latitude, lng=point.longitude)


class ParticipantRecord(BaseModel):
    """
    Normalized record for a single participant read from a file.
    """
    name: str = ""
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    weight: float = Field(default=1.0, ge=0)

    def to_participant(self) -> Participant:
        return Participant(self.name.strip(), GeoPoint(self.lat, self.lng), self.weight)


class ParticipantIn(BaseModel):
    """
    Participant as posted to the API.
    """
    name: str = ""
    loc: LatLng
    weight: float = Field(default=1.0, ge=0)

    def to_participant(self) -> Participant:
        return Participant(self.name.strip(), self.loc.to_point(), self.weight)


class RecommendRequest(BaseModel):
    participants: list[ParticipantIn]
    # free-form on purpose: unknown modes fall back to median
    mode: Optional[str] = RecommendationMode.MEDIAN.value


class DistanceItemOut(BaseModel):
    name: str
    distance_km: float


class RecommendationOut(BaseModel):
    """
    Recommended meeting point with per-participant distances.
    """
    center: PointOut
    total_distance_km: float
    min_distance_km: float
    max_distance_km: float
    per_person: list[DistanceItemOut]

    @classmethod
    def from_recommendation(cls, rec: Recommendation) -> "RecommendationOut":
        return cls(
            center=PointOut.from_point(rec.center),
            total_distance_km=rec.total_distance_km,
            min_distance_km=rec.min_distance_km,
            max_distance_km=rec.max_distance_km,
            per_person=[
                DistanceItemOut(name=item.label, distance_km=item.distance_km)
                for item in rec.per_person
            ],
        )


class EtaRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    origin: LatLng = Field(alias="from")
    destination: LatLng = Field(alias="to")
    mode: TravelMode = TravelMode.WALK


class EtaOut(BaseModel):
    minutes: Optional[int]
    label: str
