"""Time-of-day simulation of facility wait times and road traffic.

Based on Midtown Atlanta patterns:
- Morning (6-10am): moderate traffic, fewer patients
- Midday (10am-2pm): lower traffic, steady patients
- Afternoon rush (2-7pm): heavy traffic, more patients
- Evening (7pm-midnight): moderate traffic, moderate patients
- Night (midnight-6am): low traffic, fewer patients

Every function takes the hour explicitly. `resolve_hour` is the only place
the wall clock is read.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from zoneinfo import ZoneInfo

from errors import InvalidInput
from models import FacilityCategory, TrafficLevel

# (start, end, value) windows, first match wins.
_TRAFFIC_WINDOWS = (
    (7, 10, TrafficLevel.SEVERE),
    (16, 19, TrafficLevel.SEVERE),
    (6, 7, TrafficLevel.HEAVY),
    (10, 12, TrafficLevel.HEAVY),
    (14, 16, TrafficLevel.HEAVY),
    (12, 14, TrafficLevel.MODERATE),
)

_ER_MULTIPLIERS = (
    (18, 23, Decimal("1.8")),  # Peak ER time
    (14, 18, Decimal("1.5")),  # Afternoon rush
    (10, 14, Decimal("1.0")),
    (6, 10, Decimal("1.2")),   # Morning moderate
)
_ER_NIGHT_MULTIPLIER = Decimal("0.7")

_URGENT_CARE_MULTIPLIERS = (
    (9, 12, Decimal("1.6")),   # Morning rush
    (12, 14, Decimal("1.3")),  # Lunch time
    (14, 18, Decimal("1.8")),  # After-work rush
    (18, 20, Decimal("1.4")),  # Early evening
    (20, 24, Decimal("0")),    # Closed window signal
    (0, 8, Decimal("0")),
)
_URGENT_CARE_DEFAULT_MULTIPLIER = Decimal("1.0")


def validate_hour(hour):
    if isinstance(hour, bool) or not isinstance(hour, int):
        raise InvalidInput(f"Hour must be an integer in 0-23, got {hour!r}")
    if not 0 <= hour <= 23:
        raise InvalidInput(f"Hour must be in 0-23, got {hour}")
    return hour


def _lookup(windows, hour, default):
    for start, end, value in windows:
        if start <= hour < end:
            return value
    return default


def traffic_level(hour):
    return _lookup(_TRAFFIC_WINDOWS, validate_hour(hour), TrafficLevel.LOW)


def wait_multiplier(category, hour):
    validate_hour(hour)
    if category is FacilityCategory.EMERGENCY_ROOM:
        return _lookup(_ER_MULTIPLIERS, hour, _ER_NIGHT_MULTIPLIER)
    if category is FacilityCategory.URGENT_CARE:
        return _lookup(_URGENT_CARE_MULTIPLIERS, hour, _URGENT_CARE_DEFAULT_MULTIPLIER)
    raise InvalidInput(f"Unknown facility category: {category!r}")


def round_half_up(value):
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def current_wait_minutes(base_wait_minutes, category, hour):
    multiplier = wait_multiplier(category, hour)
    return round_half_up(Decimal(int(base_wait_minutes)) * multiplier)


def parse_hour(value):
    """Parse an optional simulated hour from request input.

    Returns None when no hour was supplied, so the caller falls back to the
    wall clock.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise InvalidInput(f"Invalid simulated hour: {value!r}")
    try:
        hour = int(str(value).strip())
    except ValueError:
        raise InvalidInput(f"Invalid simulated hour: {value!r}") from None
    return validate_hour(hour)


def resolve_hour(simulated_hour=None, now=None, timezone=None):
    """Return (hour, simulated) for one request.

    `now` lets callers pin the clock; otherwise the wall clock is read once
    here, in `timezone` when one is configured.
    """
    if simulated_hour is not None:
        return validate_hour(simulated_hour), True
    if now is None:
        if timezone:
            now = datetime.now(ZoneInfo(timezone))
        else:
            now = datetime.now()
    return now.hour, False


def format_hour(hour):
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}{suffix}"


def simulation_note(hour, simulated):
    if not simulated:
        return "Using current time"
    return f"Simulating {hour}:00 ({format_hour(hour)})"
