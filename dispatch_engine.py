from errors import InvalidInput
from facility_service import open_views
from models import ActionCategory, FacilityCategory
from scoring_engine import build_candidates

HEALTH_STATUSES = ("mild", "moderate", "critical")
ELDERLY_AGE = 65


def _parse_age(age):
    if age is None or isinstance(age, bool):
        raise InvalidInput(f"Invalid age: {age!r}")
    try:
        value = float(age)
    except (TypeError, ValueError):
        raise InvalidInput(f"Invalid age: {age!r}") from None
    if value < 0:
        raise InvalidInput(f"Invalid age: {age!r}")
    return value


def quick_dispatch_decision(age, health_status, mobility=None):
    """
    Quick triage without a persona:
    - age over 65, critical health or limited mobility -> STAY (ambulance)
    - moderate health -> HYBRID
    - otherwise -> MOVE
    """
    age_value = _parse_age(age)
    status = str(health_status or "").strip().lower()
    if status not in HEALTH_STATUSES:
        raise InvalidInput(f"Unknown health status: {health_status!r}")
    normalized_mobility = str(mobility or "full").strip().lower()

    if age_value > ELDERLY_AGE or status == "critical" or normalized_mobility == "limited":
        return {
            "action": ActionCategory.STAY,
            "reasoning": ["Age, health status, or mobility suggests ambulance dispatch"],
        }
    if status == "moderate":
        return {
            "action": ActionCategory.HYBRID,
            "reasoning": ["Moderate condition suggests hybrid approach"],
        }
    return {
        "action": ActionCategory.MOVE,
        "reasoning": ["User can safely travel to nearest facility"],
    }


def suggest_facility(action, views, origin, traffic):
    """Closest open facility by travel time for the dispatch action.

    Stay and Hybrid only consider ERs. Returns (view, travel) or None.
    """
    if action is ActionCategory.MOVE:
        candidates = open_views(views)
    else:
        candidates = open_views(views, FacilityCategory.EMERGENCY_ROOM)
    if not candidates:
        return None

    pairs = build_candidates(candidates, origin, traffic)
    pairs.sort(key=lambda pair: (pair[1].minutes, pair[0].id))
    return pairs[0]
