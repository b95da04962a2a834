"""Great-circle distance and the viewer-location boundary."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Tuple

from pydantic import ValidationError

from core import UNKNOWN_DISTANCE, GeoPoint


logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

LOCATION_UNAVAILABLE_NOTICE = (
    "Could not get your location. Showing the global feed; enable location services to see nearby posts."
)


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Haversine distance in kilometers between two points given in degrees.

    Only finiteness is checked; coordinate ranges are the caller's concern.
    """
    values = [float(lat1), float(lng1), float(lat2), float(lng2)]
    if not all(math.isfinite(v) for v in values):
        raise ValueError(f"coordinates must be finite numbers: {values}")
    lat1, lng1, lat2, lng2 = values
    if lat1 == lat2 and lng1 == lng2:
        return 0.0

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_between(viewer: Optional[GeoPoint], point: Optional[GeoPoint]) -> float:
    """Distance from viewer to point, or ``UNKNOWN_DISTANCE`` when either is missing."""
    if viewer is None or point is None:
        return UNKNOWN_DISTANCE
    return distance_km(viewer.latitude, viewer.longitude, point.latitude, point.longitude)


def parse_viewer_location(latitude: Any, longitude: Any) -> Tuple[Optional[GeoPoint], Optional[str]]:
    """Translate raw location-provider input into a point or an absent location.

    Returns ``(point, notice)``. Nothing provided means no location and no
    notice; partial or unusable input means no location plus a viewer notice.
    Never raises.
    """
    if latitude in (None, "") and longitude in (None, ""):
        return None, None
    if latitude in (None, "") or longitude in (None, ""):
        logger.info("Partial viewer location (lat=%r, lng=%r); using global feed", latitude, longitude)
        return None, LOCATION_UNAVAILABLE_NOTICE
    try:
        return GeoPoint(latitude=latitude, longitude=longitude), None
    except (ValidationError, TypeError, ValueError) as exc:
        logger.info("Unusable viewer location (lat=%r, lng=%r): %s", latitude, longitude, exc)
        return None, LOCATION_UNAVAILABLE_NOTICE
