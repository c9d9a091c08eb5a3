import asyncio
import logging
import math
from typing import Dict, List, Any

from ..config import settings
from ..utils.clock import simulate_latency

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

# Simplified geocoding table; in reality this is a mapping provider
KNOWN_LOCATIONS: Dict[str, Dict[str, float]] = {
    "Times Square, New York": {"lat": 40.7580, "lng": -73.9855},
    "Central Park, New York": {"lat": 40.7829, "lng": -73.9654},
    "Brooklyn Bridge, New York": {"lat": 40.7061, "lng": -73.9969},
    "Wall Street, New York": {"lat": 40.7060, "lng": -74.0088},
    "Empire State Building, New York": {"lat": 40.7484, "lng": -73.9857},
}
DEFAULT_LOCATION = {"lat": 40.7128, "lng": -74.0060}  # NYC centre

MOCK_DRIVERS = [
    {"id": "driver1", "lat": 40.7580, "lng": -73.9855, "distance": 0.5},
    {"id": "driver2", "lat": 40.7829, "lng": -73.9654, "distance": 2.1},
    {"id": "driver3", "lat": 40.7061, "lng": -73.9969, "distance": 3.2},
]


def haversine_km(origin: Dict[str, float], destination: Dict[str, float]) -> float:
    """Great-circle distance between two lat/lng points"""
    d_lat = math.radians(destination["lat"] - origin["lat"])
    d_lng = math.radians(destination["lng"] - origin["lng"])
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin["lat"]))
        * math.cos(math.radians(destination["lat"]))
        * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def estimate_travel_minutes(distance_km: float) -> int:
    """ETA at a constant average city speed"""
    return round(distance_km / settings.average_city_speed_kmh * 60)


class MapsService:

    async def geocode(self, address: str) -> Dict[str, float]:
        """Coordinates for an address, NYC centre when unknown"""
        await simulate_latency(settings.geocode_delay)
        coordinates = KNOWN_LOCATIONS.get(address)
        if coordinates is None:
            logger.info(f"No coordinates for {address!r}, using default")
            coordinates = DEFAULT_LOCATION
        return dict(coordinates)

    async def batch_geocode(self, addresses: List[str]) -> List[Dict[str, Any]]:
        coordinates = await asyncio.gather(*(self.geocode(address) for address in addresses))
        return [
            {"address": address, "coordinates": coords}
            for address, coords in zip(addresses, coordinates)
        ]

    async def route(self, pickup: str, destination: str) -> Dict[str, Any]:
        pickup_coords = await self.geocode(pickup)
        destination_coords = await self.geocode(destination)
        distance = haversine_km(pickup_coords, destination_coords)

        return {
            "pickup": {"address": pickup, "coordinates": pickup_coords},
            "destination": {"address": destination, "coordinates": destination_coords},
            "route": {
                "distance": distance,
                "duration": estimate_travel_minutes(distance),
                "waypoints": [pickup_coords, destination_coords],
            },
        }

    def nearby_drivers(self, lat: float, lng: float, radius_km: float) -> Dict[str, Any]:
        drivers = [driver for driver in MOCK_DRIVERS if driver["distance"] <= radius_km]
        return {
            "center": {"lat": lat, "lng": lng},
            "radius": radius_km,
            "drivers": drivers,
        }
