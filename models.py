"""Static facility catalog and the shared enums used across the engine.

The catalog is built once at import time and never mutated. Every record is
a frozen dataclass so views and recommendations can hold references to it
safely.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

from errors import InvalidInput


class FacilityCategory(Enum):
    EMERGENCY_ROOM = "ER"
    URGENT_CARE = "Urgent Care"

    @property
    def display(self):
        return self.value


class Severity(IntEnum):
    """Patient-reported urgency tier. Higher value = more urgent."""
    MILD = 1
    MODERATE = 2
    SEVERE = 3

    @property
    def label(self):
        return self.name.title()

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().upper()
        if normalized not in cls.__members__:
            raise InvalidInput(f"Unknown severity: {value!r}")
        return cls[normalized]


class TrafficLevel(IntEnum):
    """Road congestion tier derived from hour of day."""
    LOW = 1
    MODERATE = 2
    HEAVY = 3
    SEVERE = 4

    @property
    def label(self):
        return self.name.lower()


def traffic_label(level):
    """Lowercase label, or "unknown" when the level is unset."""
    return level.label if level is not None else "unknown"


class ActionCategory(Enum):
    STAY = "Stay"        # Ambulance dispatch
    MOVE = "Move"        # Self or companion transport
    HYBRID = "Hybrid"    # Combined approach


ALWAYS_OPEN = (0, 24)
URGENT_CARE_DEFAULT_HOURS = (8, 20)


@dataclass(frozen=True)
class Facility:
    id: int
    name: str
    category: FacilityCategory
    location: tuple
    base_wait_minutes: int
    accepted_insurance: frozenset = frozenset({"All"})
    specialties: tuple = ()
    operating_hours: tuple = None
    trauma_center: bool = False
    description: str = ""
    hours_label: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("Facility name is required")
        if not isinstance(self.category, FacilityCategory):
            raise ValueError(f"Unknown facility category: {self.category!r}")
        if int(self.base_wait_minutes) < 0:
            raise ValueError(f"base_wait_minutes must be >= 0, got {self.base_wait_minutes}")
        if self.operating_hours is not None:
            open_hour, close_hour = self.operating_hours
            if not (0 <= open_hour < close_hour <= 24):
                raise ValueError(
                    f"operating_hours must satisfy 0 <= open < close <= 24, got {self.operating_hours}"
                )
        # Normalize containers so records stay hashable.
        object.__setattr__(self, "accepted_insurance", frozenset(self.accepted_insurance))
        object.__setattr__(self, "specialties", tuple(self.specialties))
        object.__setattr__(self, "location", tuple(self.location))

    @property
    def is_emergency_room(self):
        return self.category is FacilityCategory.EMERGENCY_ROOM

    @property
    def effective_hours(self):
        if self.operating_hours is not None:
            return self.operating_hours
        if self.is_emergency_room:
            return ALWAYS_OPEN
        return URGENT_CARE_DEFAULT_HOURS

    def to_dict(self):
        lat, lng = self.location
        return {
            "id": self.id,
            "name": self.name,
            "type": self.category.display,
            "position": {"lat": lat, "lng": lng},
            "baseWaitTime": self.base_wait_minutes,
            "insurance": sorted(self.accepted_insurance),
            "specialties": list(self.specialties),
            "traumaCenter": self.trauma_center,
            "description": self.description,
            "hours": self.hours_label or None,
        }


# Midtown Atlanta facilities with base wait times. Current waits are derived
# per request from the temporal model.
FACILITY_CATALOG = (
    Facility(
        id=1,
        name="Grady Memorial Hospital",
        category=FacilityCategory.EMERGENCY_ROOM,
        location=(33.7557, -84.3816),
        base_wait_minutes=45,
        accepted_insurance={"All"},
        specialties=("Emergency", "Trauma", "Cardiac"),
        trauma_center=True,
        description="Level I Trauma Center - Handles most severe emergencies",
    ),
    Facility(
        id=2,
        name="Emory Midtown Hospital",
        category=FacilityCategory.EMERGENCY_ROOM,
        location=(33.7806, -84.3722),
        base_wait_minutes=30,
        accepted_insurance={"Most major"},
        specialties=("Emergency", "Cardiac", "Orthopedic"),
        description="Well-equipped ER with cardiac specialists",
    ),
    Facility(
        id=3,
        name="Piedmont Hospital",
        category=FacilityCategory.EMERGENCY_ROOM,
        location=(33.8048, -84.3685),
        base_wait_minutes=50,
        accepted_insurance={"All"},
        specialties=("Emergency", "Trauma", "Stroke"),
        description="Comprehensive ER with stroke center",
    ),
    Facility(
        id=4,
        name="WellStreet Urgent Care - Midtown",
        category=FacilityCategory.URGENT_CARE,
        location=(33.7712, -84.3850),
        base_wait_minutes=15,
        accepted_insurance={"Most major"},
        specialties=("Urgent Care", "X-Ray"),
        operating_hours=(8, 20),
        description="Quick walk-in care for minor injuries",
        hours_label="8am-8pm daily",
    ),
    Facility(
        id=5,
        name="Peachtree Immediate Care",
        category=FacilityCategory.URGENT_CARE,
        location=(33.7890, -84.3840),
        base_wait_minutes=18,
        accepted_insurance={"Most major"},
        specialties=("Urgent Care", "Lab Services"),
        operating_hours=(8, 20),
        description="Full-service urgent care with lab",
        hours_label="8am-8pm daily",
    ),
)


def list_facilities():
    return FACILITY_CATALOG


def list_emergency_rooms(catalog=FACILITY_CATALOG):
    return tuple(f for f in catalog if f.is_emergency_room)


def get_facility(facility_id, catalog=FACILITY_CATALOG):
    for facility in catalog:
        if facility.id == facility_id:
            return facility
    return None
