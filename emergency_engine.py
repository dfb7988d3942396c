"""Stay / Move / Hybrid decision engine.

The decision is a table indexed by (persona, severity):

- Severe: ambulance dispatch to the trauma center (or shortest-wait ER),
  except for personas whose policy is companion transport.
- Moderate: weighted wait/travel score over the persona's eligible
  categories.
- Mild: shortest total time at Urgent Care, falling back to an ER when all
  Urgent Care centers are closed or the persona is ER-only.

`recommend` is pure. `run_recommendation` resolves the hour once, projects
the catalog and calls `recommend`.
"""

import logging
from dataclasses import dataclass

import config
from errors import NoAvailableFacility
from explanation_engine import (
    explain_ambulance,
    explain_companion,
    explain_mild_er,
    explain_mild_urgent_care,
    explain_moderate,
)
from facility_service import facility_snapshot, open_views
from financial_engine import cost_estimate
from geolocation_service import parse_origin
from models import ActionCategory, FacilityCategory, Severity, TrafficLevel, traffic_label
from personas import MildPolicy, SeverePolicy, get_persona
from scoring_engine import (
    build_candidates,
    rank_by_total_time,
    rank_by_wait,
    rank_companion,
    rank_moderate,
)
from temporal_model import resolve_hour

logger = logging.getLogger(__name__)

ER = FacilityCategory.EMERGENCY_ROOM
URGENT_CARE = FacilityCategory.URGENT_CARE

DECISION_STAY = "Stay - Call 911"
DECISION_COMPANION = "Move to ER with companion"
DECISION_ER_UC_CLOSED = "Move to ER (Urgent Care closed)"


def move_to(category):
    return f"Move to {category.display}"


@dataclass(frozen=True)
class Recommendation:
    action_category: ActionCategory
    decision: str
    facility: object
    travel: object
    reasoning: tuple
    persona_id: str
    severity: Severity
    traffic_level: TrafficLevel
    score: float = None
    hour: int = None

    @property
    def cost_estimate(self):
        return cost_estimate(self.facility.category)

    def to_dict(self):
        return {
            "actionCategory": self.action_category.value,
            "decision": self.decision,
            "facility": self.facility.to_dict(),
            "travelTime": self.travel.to_dict(),
            "reasoning": list(self.reasoning),
            "persona": self.persona_id,
            "severity": self.severity.label,
            "trafficLevel": traffic_label(self.traffic_level),
            "score": self.score,
            "hour": self.hour,
            "costEstimate": self.cost_estimate,
        }


def _parse_traffic(value):
    """TrafficLevel, or None when unset or unrecognized (default speed applies)."""
    if isinstance(value, TrafficLevel):
        return value
    normalized = str(value or "").strip().upper()
    if not normalized:
        return None
    if normalized not in TrafficLevel.__members__:
        logger.warning("Unknown traffic level %r, using default speed", value)
        return None
    return TrafficLevel[normalized]


def _required_label(categories):
    return " or ".join(sorted(category.display for category in categories))


def _recommend_severe(persona, severity, open_ers, origin, traffic, hour, insurance):
    if not open_ers:
        raise NoAvailableFacility(ER.display, hour)
    candidates = build_candidates(open_ers, origin, traffic)

    if persona.severe_policy is SeverePolicy.COMPANION:
        best = rank_companion(candidates)[0]
        reasoning = explain_companion(persona, severity, best, traffic, insurance)
        return ActionCategory.MOVE, DECISION_COMPANION, best, reasoning

    trauma_centers = [pair for pair in candidates if pair[0].facility.trauma_center]
    best = rank_by_wait(trauma_centers or candidates)[0]
    reasoning = explain_ambulance(
        persona, severity, best, traffic, bool(trauma_centers), insurance
    )
    return ActionCategory.STAY, DECISION_STAY, best, reasoning


def _recommend_moderate(persona, severity, views, origin, traffic, hour, insurance):
    eligible = [view for view in open_views(views) if view.category in persona.moderate_categories]
    if not eligible:
        raise NoAvailableFacility(_required_label(persona.moderate_categories), hour)

    ranked = rank_moderate(build_candidates(eligible, origin, traffic), persona)
    best = ranked[0]
    runner_up = ranked[1] if len(ranked) > 1 else None
    reasoning = explain_moderate(persona, severity, best, traffic, runner_up, insurance)
    return ActionCategory.MOVE, move_to(best["view"].category), best, reasoning


def _recommend_mild(persona, severity, open_ers, open_urgent_care, origin, traffic, hour, insurance):
    if persona.mild_policy is MildPolicy.URGENT_CARE and open_urgent_care:
        best = rank_by_total_time(build_candidates(open_urgent_care, origin, traffic))[0]
        reasoning = explain_mild_urgent_care(persona, severity, best, traffic, insurance)
        return ActionCategory.MOVE, move_to(URGENT_CARE), best, reasoning

    urgent_care_closed = persona.mild_policy is MildPolicy.URGENT_CARE
    if not open_ers:
        required = _required_label({ER, URGENT_CARE}) if urgent_care_closed else ER.display
        raise NoAvailableFacility(required, hour)

    best = rank_by_total_time(build_candidates(open_ers, origin, traffic))[0]
    reasoning = explain_mild_er(persona, severity, best, traffic, urgent_care_closed, insurance)
    decision = DECISION_ER_UC_CLOSED if urgent_care_closed else move_to(ER)
    return ActionCategory.MOVE, decision, best, reasoning


def recommend(persona, severity, facility_views, origin, traffic_level, insurance=None, hour=None):
    """Pick an action and a facility for one patient.

    Raises InvalidInput for an unknown persona or severity or a malformed
    origin, and NoAvailableFacility when every facility of the required
    category is closed. An unset traffic level travels at the default speed.
    """
    persona = get_persona(persona)
    severity = Severity.parse(severity)
    origin = parse_origin(origin)
    traffic = _parse_traffic(traffic_level)

    open_ers = open_views(facility_views, ER)
    open_urgent_care = open_views(facility_views, URGENT_CARE)

    if severity is Severity.SEVERE:
        action, decision, best, reasoning = _recommend_severe(
            persona, severity, open_ers, origin, traffic, hour, insurance
        )
    elif severity is Severity.MODERATE:
        action, decision, best, reasoning = _recommend_moderate(
            persona, severity, facility_views, origin, traffic, hour, insurance
        )
    else:
        action, decision, best, reasoning = _recommend_mild(
            persona, severity, open_ers, open_urgent_care, origin, traffic, hour, insurance
        )

    logger.info(
        "Recommendation for %s/%s at traffic=%s: %s -> %s",
        persona.id,
        severity.label,
        traffic_label(traffic),
        decision,
        best["view"].name,
    )
    return Recommendation(
        action_category=action,
        decision=decision,
        facility=best["view"],
        travel=best["travel"],
        reasoning=reasoning,
        persona_id=persona.id,
        severity=severity,
        traffic_level=traffic,
        score=best["score"],
        hour=hour,
    )


def run_recommendation(
    persona_id,
    severity,
    simulated_hour=None,
    origin=None,
    catalog=None,
    insurance=None,
    now=None,
):
    """Evaluate one request end to end.

    Returns the recommendation together with the facility views and traffic
    level for the same hour, for map rendering.
    """
    persona = get_persona(persona_id)
    severity = Severity.parse(severity)
    origin = parse_origin(origin, default=config.DEFAULT_ORIGIN)

    hour, simulated = resolve_hour(simulated_hour, now=now, timezone=config.TIMEZONE)
    snapshot = facility_snapshot(hour, simulated, catalog)
    recommendation = recommend(
        persona,
        severity,
        snapshot["facilities"],
        origin,
        snapshot["traffic_level"],
        insurance=insurance,
        hour=hour,
    )
    return dict(snapshot, recommendation=recommendation)
