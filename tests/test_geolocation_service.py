"""Tests for the travel estimator."""

import pytest

from errors import InvalidInput
from geolocation_service import (
    DEFAULT_SPEED_MPH,
    UNKNOWN_TRAVEL,
    estimate_travel,
    haversine_distance_miles,
    parse_origin,
    speed_for_traffic,
)
from models import TrafficLevel

GRADY = (33.7557, -84.3816)
EMORY = (33.7806, -84.3722)


class TestHaversine:
    """Test great-circle distance."""

    def test_same_point_is_zero(self, origin):
        """Distance from a point to itself is 0."""
        assert haversine_distance_miles(*origin, *origin) == 0.0

    def test_reference_to_grady(self, origin):
        """Klaus Building to Grady is about 1.72 miles."""
        assert haversine_distance_miles(*origin, *GRADY) == pytest.approx(1.7236, abs=0.001)

    def test_symmetric(self, origin):
        """Distance does not depend on direction."""
        assert haversine_distance_miles(*origin, *EMORY) == pytest.approx(
            haversine_distance_miles(*EMORY, *origin)
        )


class TestSpeed:
    """Test traffic speed lookup."""

    def test_speeds(self):
        """Documented mph per traffic level."""
        assert speed_for_traffic(TrafficLevel.LOW) == 30
        assert speed_for_traffic(TrafficLevel.MODERATE) == 20
        assert speed_for_traffic(TrafficLevel.HEAVY) == 15
        assert speed_for_traffic(TrafficLevel.SEVERE) == 10

    def test_unknown_level_defaults(self):
        """Unset or unknown traffic uses 25 mph."""
        assert speed_for_traffic(None) == DEFAULT_SPEED_MPH == 25
        assert speed_for_traffic("gridlock") == 25


class TestEstimateTravel:
    """Test travel estimates."""

    def test_same_point_clamps_to_one_minute(self, origin):
        """Zero distance still takes 1 minute, never 0."""
        travel = estimate_travel(origin, origin, TrafficLevel.LOW)
        assert travel.distance_miles == 0.0
        assert travel.minutes == 1

    @pytest.mark.parametrize(
        "traffic,expected",
        [
            (TrafficLevel.LOW, 3),
            (TrafficLevel.MODERATE, 5),
            (TrafficLevel.HEAVY, 7),
            (TrafficLevel.SEVERE, 10),
            (None, 4),
        ],
    )
    def test_grady_minutes_by_traffic(self, origin, traffic, expected):
        """Drive time to Grady slows down with congestion."""
        assert estimate_travel(origin, GRADY, traffic).minutes == expected

    def test_dict_origin_accepted(self):
        """Origins may be {lat, lng} dicts."""
        travel = estimate_travel({"lat": 33.777525, "lng": -84.396128}, EMORY, TrafficLevel.LOW)
        assert travel.minutes == 3

    @pytest.mark.parametrize(
        "bad",
        [None, (), ("a", "b"), {"lat": 33.7}, (123.0, 0.0), "33.7,-84.3", (None, -84.0)],
    )
    def test_malformed_coordinates_give_sentinel(self, origin, bad):
        """Bad coordinates return the zero sentinel instead of raising."""
        assert estimate_travel(bad, GRADY, TrafficLevel.LOW) == UNKNOWN_TRAVEL
        assert estimate_travel(origin, bad, TrafficLevel.LOW) == UNKNOWN_TRAVEL

    def test_sentinel_flag(self):
        """The sentinel is recognizable."""
        assert UNKNOWN_TRAVEL.is_sentinel
        assert UNKNOWN_TRAVEL.minutes == 0

    def test_to_dict(self, origin):
        """Display format keeps one decimal for distance."""
        payload = estimate_travel(origin, GRADY, TrafficLevel.LOW).to_dict()
        assert payload["distance"] == "1.7"
        assert payload["time"] == 3


class TestParseOrigin:
    """Test request-level origin validation."""

    def test_default_used_when_missing(self, origin):
        """Missing origin falls back to the default point."""
        assert parse_origin(None, default=origin) == origin

    def test_lon_alias(self):
        """'lon' is accepted in place of 'lng'."""
        assert parse_origin({"lat": "33.7", "lon": "-84.4"}) == (33.7, -84.4)

    @pytest.mark.parametrize("bad", [None, {"lat": "north"}, (91.0, 0.0), [1, 2, 3]])
    def test_malformed_origin_rejected(self, bad):
        """Malformed origins are the caller's error."""
        with pytest.raises(InvalidInput):
            parse_origin(bad)
