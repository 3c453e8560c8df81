"""Great-circle distance on a spherical Earth."""

import math

from tutormatch.domain.models import GeoPoint

EARTH_RADIUS_KM = 6371.0


def great_circle_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute the haversine distance between two points in kilometres.

    Inputs are decimal degrees. Ranges are not validated: latitudes outside
    [-90, 90] or longitudes outside [-180, 180] produce a number, but not a
    meaningful one.

    Args:
        lat1: Latitude of the first point
        lon1: Longitude of the first point
        lat2: Latitude of the second point
        lon2: Longitude of the second point

    Returns:
        Distance in kilometres, never negative

    Example:
        >>> round(great_circle_distance_km(-17.8292, 31.0522, -20.15, 28.5833))
        366
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    # Float rounding can leave `a` slightly outside [0, 1] near antipodal points
    a = min(1.0, max(0.0, a))

    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_between(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance in kilometres between two GeoPoints."""
    return great_circle_distance_km(a.latitude, a.longitude, b.latitude, b.longitude)
