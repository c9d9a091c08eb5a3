from fastapi import APIRouter, HTTPException, status
from typing import Optional, Union
import logging

from ..errors import RideShiftError, ValidationError
from ..schemas.maps import (
    GeocodeResponse,
    RouteResponse,
    NearbyResponse,
    MapsActionRequest,
    BatchGeocodeResponse,
)
from ..services.maps_service import MapsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/maps", tags=["maps"])
maps_service = MapsService()

DEFAULT_SEARCH_RADIUS_KM = 5.0


@router.get("", response_model=Union[GeocodeResponse, RouteResponse, NearbyResponse])
async def maps_query(
    action: Optional[str] = None,
    address: Optional[str] = None,
    pickup: Optional[str] = None,
    destination: Optional[str] = None,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    radius: float = DEFAULT_SEARCH_RADIUS_KM,
):
    """Geocode an address, route between two, or list nearby drivers"""
    try:
        if action == "geocode":
            if not address:
                raise ValidationError("Address parameter is required for geocoding")
            coordinates = await maps_service.geocode(address)
            return GeocodeResponse(address=address, coordinates=coordinates)

        if action == "route":
            if not pickup or not destination:
                raise ValidationError(
                    "Pickup and destination parameters are required for routing"
                )
            return RouteResponse(**await maps_service.route(pickup, destination))

        if action == "nearby":
            if lat is None or lng is None:
                raise ValidationError("Latitude and longitude parameters are required")
            return NearbyResponse(**maps_service.nearby_drivers(lat, lng, radius))

        raise ValidationError('Invalid action. Use "geocode", "route", or "nearby"')

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Error in maps API: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.post("", response_model=Union[GeocodeResponse, BatchGeocodeResponse])
async def maps_command(request: MapsActionRequest):
    try:
        if request.action == "geocode":
            if not request.address:
                raise ValidationError("Address is required for geocoding")
            coordinates = await maps_service.geocode(request.address)
            return GeocodeResponse(address=request.address, coordinates=coordinates)

        if request.action == "batch-geocode":
            if request.addresses is None:
                raise ValidationError("Addresses array is required for batch geocoding")
            results = await maps_service.batch_geocode(request.addresses)
            return BatchGeocodeResponse(results=results)

        raise ValidationError("Invalid action for POST request")

    except RideShiftError:
        raise
    except Exception as e:
        logger.error(f"Error in maps API: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )
