from dataclasses import dataclass

from models import ALWAYS_OPEN, FacilityCategory, list_facilities
from temporal_model import current_wait_minutes, simulation_note, traffic_level, validate_hour

CLOSED_DISPLAY = "Closed"


@dataclass(frozen=True)
class FacilityView:
    """A facility's state at one hour. Rebuilt for every request."""
    facility: object
    current_wait_minutes: int
    is_open: bool
    capacity_tier: str = None

    @property
    def id(self):
        return self.facility.id

    @property
    def name(self):
        return self.facility.name

    @property
    def category(self):
        return self.facility.category

    @property
    def location(self):
        return self.facility.location

    @property
    def status(self):
        return "Open" if self.is_open else "Closed"

    @property
    def wait_display(self):
        if not self.is_open:
            return CLOSED_DISPLAY
        return f"{self.current_wait_minutes} min"

    @property
    def capacity_radius_m(self):
        # Larger circle = shorter wait (more available).
        if not self.is_open:
            return 100
        return max(100, 400 - self.current_wait_minutes * 5)

    def to_dict(self):
        payload = self.facility.to_dict()
        payload.update(
            {
                "currentWaitTime": self.current_wait_minutes if self.is_open else None,
                "waitTimeDisplay": self.wait_display,
                "status": self.status,
                "capacity": self.capacity_tier,
                "capacityRadius": self.capacity_radius_m,
            }
        )
        return payload


def capacity_tier_for_wait(wait_minutes):
    if wait_minutes < 20:
        return "High"
    if wait_minutes < 40:
        return "Medium"
    return "Low"


def is_open(facility, hour):
    validate_hour(hour)
    if facility.is_emergency_room:
        return True
    open_hour, close_hour = facility.effective_hours
    if (open_hour, close_hour) == ALWAYS_OPEN:
        return True
    return open_hour <= hour < close_hour


def project_facility(facility, hour):
    wait = current_wait_minutes(facility.base_wait_minutes, facility.category, hour)
    open_now = is_open(facility, hour)
    return FacilityView(
        facility=facility,
        current_wait_minutes=wait,
        is_open=open_now,
        capacity_tier=capacity_tier_for_wait(wait) if open_now else None,
    )


def project(catalog, hour):
    validate_hour(hour)
    return [project_facility(facility, hour) for facility in catalog]


def open_views(views, category=None):
    return [
        view
        for view in views
        if view.is_open and (category is None or view.category is category)
    ]


def find_view(views, facility_id):
    for view in views:
        if view.id == facility_id:
            return view
    return None


def facility_snapshot(hour, simulated=False, catalog=None):
    """Current view of every facility plus ambient traffic, for map rendering."""
    catalog = list_facilities() if catalog is None else catalog
    views = project(catalog, hour)
    return {
        "hour": hour,
        "simulated": simulated,
        "facilities": views,
        "traffic_level": traffic_level(hour),
        "simulation_note": simulation_note(hour, simulated),
        "open_er_count": len(open_views(views, FacilityCategory.EMERGENCY_ROOM)),
        "open_urgent_care_count": len(open_views(views, FacilityCategory.URGENT_CARE)),
    }
