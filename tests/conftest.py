"""Pytest fixtures for EVAC+ tests."""

import pytest

from models import FACILITY_CATALOG, Facility, FacilityCategory

# Klaus Advanced Computing Building, Georgia Tech
REFERENCE_ORIGIN = (33.777525, -84.396128)


@pytest.fixture
def origin():
    """Reference requester location."""
    return REFERENCE_ORIGIN


@pytest.fixture
def catalog():
    """The static Midtown Atlanta catalog."""
    return FACILITY_CATALOG


@pytest.fixture
def catalog_without_ers():
    """Catalog with every emergency room removed."""
    return tuple(f for f in FACILITY_CATALOG if not f.is_emergency_room)


@pytest.fixture
def catalog_without_trauma_center():
    """Catalog with the trauma center (Grady) removed."""
    return tuple(f for f in FACILITY_CATALOG if not f.trauma_center)


def make_facility(
    facility_id,
    category=FacilityCategory.EMERGENCY_ROOM,
    location=REFERENCE_ORIGIN,
    base_wait_minutes=30,
    **kwargs,
):
    """Build a test facility with sensible defaults."""
    return Facility(
        id=facility_id,
        name=kwargs.pop("name", f"Facility {facility_id}"),
        category=category,
        location=location,
        base_wait_minutes=base_wait_minutes,
        **kwargs,
    )
