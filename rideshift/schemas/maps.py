from pydantic import BaseModel
from typing import List, Optional


class Coordinates(BaseModel):
    lat: float
    lng: float


class GeocodeResponse(BaseModel):
    address: str
    coordinates: Coordinates


class RouteInfo(BaseModel):
    distance: float  # km
    duration: int  # minutes
    waypoints: List[Coordinates]


class RouteResponse(BaseModel):
    pickup: GeocodeResponse
    destination: GeocodeResponse
    route: RouteInfo


class NearbyDriver(BaseModel):
    id: str
    lat: float
    lng: float
    distance: float


class NearbyResponse(BaseModel):
    center: Coordinates
    radius: float
    drivers: List[NearbyDriver]


class MapsActionRequest(BaseModel):
    action: str
    address: Optional[str] = None
    addresses: Optional[List[str]] = None


class BatchGeocodeResponse(BaseModel):
    results: List[GeocodeResponse]
