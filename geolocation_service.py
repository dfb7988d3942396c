import logging
from dataclasses import dataclass
from math import atan2, cos, radians, sin, sqrt

from errors import InvalidInput
from models import TrafficLevel
from temporal_model import round_half_up

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3959.0

# City driving speeds (mph) by congestion tier.
_SPEED_BY_TRAFFIC = {
    TrafficLevel.LOW: 30,
    TrafficLevel.MODERATE: 20,
    TrafficLevel.HEAVY: 15,
    TrafficLevel.SEVERE: 10,  # Atlanta rush hour
}
DEFAULT_SPEED_MPH = 25


@dataclass(frozen=True)
class TravelEstimate:
    distance_miles: float
    minutes: int

    @property
    def is_sentinel(self):
        return self.distance_miles == 0.0 and self.minutes == 0

    def to_dict(self):
        return {
            "distance": f"{self.distance_miles:.1f}",
            "distanceMiles": round(self.distance_miles, 2),
            "time": self.minutes,
        }


UNKNOWN_TRAVEL = TravelEstimate(0.0, 0)


def haversine_distance_miles(lat1, lon1, lat2, lon2):
    d_lat = radians(lat2 - lat1)
    d_lon = radians(lon2 - lon1)

    a = (
        sin(d_lat / 2) ** 2
        + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lon / 2) ** 2
    )
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def speed_for_traffic(level):
    return _SPEED_BY_TRAFFIC.get(level, DEFAULT_SPEED_MPH)


def _coerce_point(point):
    """Return (lat, lng) floats or None when the point is unusable."""
    if point is None:
        return None
    if isinstance(point, dict):
        lat = point.get("lat")
        lng = point.get("lng", point.get("lon"))
    else:
        try:
            lat, lng = point
        except (TypeError, ValueError):
            return None
    if lat is None or lng is None or isinstance(lat, bool) or isinstance(lng, bool):
        return None
    try:
        lat, lng = float(lat), float(lng)
    except (TypeError, ValueError):
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        return None
    return lat, lng


def parse_origin(value, default=None):
    """Validate request-level origin coordinates.

    Unlike `estimate_travel`, a malformed origin here is the caller's error.
    """
    if value is None:
        if default is None:
            raise InvalidInput("Origin coordinates are required")
        value = default
    point = _coerce_point(value)
    if point is None:
        raise InvalidInput(f"Malformed origin coordinates: {value!r}")
    return point


def estimate_travel(origin, destination, traffic):
    """Straight-line distance and traffic-adjusted drive time.

    Missing or malformed coordinates give the zero sentinel instead of an
    error, since the estimate only feeds display and ranking.
    """
    start = _coerce_point(origin)
    end = _coerce_point(destination)
    if start is None or end is None:
        logger.warning("Cannot estimate travel from %r to %r", origin, destination)
        return UNKNOWN_TRAVEL

    distance = haversine_distance_miles(start[0], start[1], end[0], end[1])
    speed = speed_for_traffic(traffic)
    minutes = max(1, round_half_up(distance / speed * 60))
    return TravelEstimate(distance_miles=distance, minutes=minutes)
