"""Reference patient personas.

Each persona is one configuration record: scoring weights, which facility
categories it may use at each severity, and how Severe cases are handled.
Adding a persona means adding a record here.
"""

from dataclasses import dataclass, field
from enum import Enum

from errors import InvalidInput
from models import FacilityCategory, Severity

ER = FacilityCategory.EMERGENCY_ROOM
URGENT_CARE = FacilityCategory.URGENT_CARE


class MildPolicy(Enum):
    URGENT_CARE = "urgent_care"  # Urgent Care first, ER when all are closed
    ER_ONLY = "er_only"


class SeverePolicy(Enum):
    AMBULANCE = "ambulance"  # Stay and call 911
    COMPANION = "companion"  # Companion drives to the best-scoring ER


@dataclass(frozen=True)
class Persona:
    id: str
    name: str
    description: str
    risk_profile: str
    severity_vocabulary: dict
    weights: tuple
    category_bonus: dict = field(default_factory=dict)
    moderate_categories: frozenset = frozenset({ER})
    mild_policy: MildPolicy = MildPolicy.URGENT_CARE
    severe_policy: SeverePolicy = SeverePolicy.AMBULANCE
    care_notes: dict = field(default_factory=dict)
    safety_note: str = ""

    def __post_init__(self):
        w_wait, w_travel = self.weights
        if w_wait < 0 or w_travel < 0 or w_wait + w_travel > 1.0 + 1e-9:
            raise ValueError(f"Persona {self.id} weights must be >= 0 and sum to <= 1, got {self.weights}")
        if not self.moderate_categories:
            raise ValueError(f"Persona {self.id} needs at least one moderate category")

    @property
    def wait_weight(self):
        return self.weights[0]

    @property
    def travel_weight(self):
        return self.weights[1]

    def bonus_for(self, category):
        return self.category_bonus.get(category, 0.0)

    def severity_label(self, severity):
        return self.severity_vocabulary.get(severity, severity.label)

    def care_note(self, severity):
        return self.care_notes.get(severity, "")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "riskProfile": self.risk_profile,
            "severityLabels": {
                severity.label: self.severity_label(severity) for severity in Severity
            },
            "weights": {"wait": self.wait_weight, "travel": self.travel_weight},
            "moderateCategories": sorted(c.display for c in self.moderate_categories),
            "mildPolicy": self.mild_policy.value,
            "severePolicy": self.severe_policy.value,
        }


BURN_INJURY = Persona(
    id="burn_injury",
    name="Single Mother with Burn Injury",
    description="Age 32, has a child at home, limited transportation",
    risk_profile="cost_conscious",
    severity_vocabulary={
        Severity.MILD: "Minor burn (redness, small area)",
        Severity.MODERATE: "Blistering burn",
        Severity.SEVERE: "Deep or large-area burn",
    },
    weights=(0.5, 0.3),
    category_bonus={ER: 5.0},
    care_notes={
        Severity.MILD: "Minor burns can be treated at Urgent Care",
        Severity.MODERATE: "Moderate burns need ER assessment",
        Severity.SEVERE: "Severe burns require immediate emergency care",
    },
    safety_note="Cool the burn with running water and arrange care for your child before leaving",
)

PREGNANCY_COMPLICATION = Persona(
    id="pregnancy_complication",
    name="Pregnant Patient with Complications",
    description="Age 28, third trimester, no obstetric unit at Urgent Care",
    risk_profile="er_only",
    severity_vocabulary={
        Severity.MILD: "Mild cramping or spotting",
        Severity.MODERATE: "Persistent pain or bleeding",
        Severity.SEVERE: "Heavy bleeding or loss of consciousness",
    },
    weights=(0.4, 0.4),
    category_bonus={ER: 10.0},
    mild_policy=MildPolicy.ER_ONLY,
    care_notes={
        Severity.MILD: "Pregnancy complications should always be evaluated in an ER",
        Severity.MODERATE: "Persistent pregnancy symptoms need ER assessment",
        Severity.SEVERE: "Severe pregnancy complications require immediate emergency care",
    },
    safety_note="Bring your prenatal records and do not drive yourself",
)

SPORTS_INJURY = Persona(
    id="sports_injury",
    name="College Athlete with Sports Injury",
    description="Age 20, on campus, student health insurance",
    risk_profile="time_sensitive",
    severity_vocabulary={
        Severity.MILD: "Sprain or bruise",
        Severity.MODERATE: "Suspected fracture",
        Severity.SEVERE: "Head injury or open fracture",
    },
    weights=(0.3, 0.5),
    category_bonus={URGENT_CARE: 10.0},
    moderate_categories=frozenset({ER, URGENT_CARE}),
    care_notes={
        Severity.MILD: "Sprains and bruises can be treated at Urgent Care",
        Severity.MODERATE: "Suspected fractures need an X-ray at Urgent Care or an ER",
        Severity.SEVERE: "Head injuries and open fractures require immediate emergency care",
    },
    safety_note="Keep the injured limb immobilized while travelling",
)

CARETAKER_ESCORT = Persona(
    id="caretaker_escort",
    name="Adult with Disability and Live-in Caretaker",
    description="Age 45, asthma, caretaker with a car at home",
    risk_profile="companion_transport",
    severity_vocabulary={
        Severity.MILD: "Mild wheezing",
        Severity.MODERATE: "Persistent shortness of breath",
        Severity.SEVERE: "Severe asthma attack",
    },
    weights=(0.4, 0.3),
    category_bonus={ER: 5.0},
    severe_policy=SeverePolicy.COMPANION,
    care_notes={
        Severity.MILD: "Mild wheezing can be treated at Urgent Care",
        Severity.MODERATE: "Persistent shortness of breath needs ER assessment",
        Severity.SEVERE: "Severe asthma attacks require immediate emergency care",
    },
    safety_note="Use the rescue inhaler on the way; call 911 if breathing worsens",
)

PERSONAS = {
    persona.id: persona
    for persona in (BURN_INJURY, PREGNANCY_COMPLICATION, SPORTS_INJURY, CARETAKER_ESCORT)
}


def list_personas():
    return list(PERSONAS.values())


def get_persona(persona_or_id):
    if isinstance(persona_or_id, Persona):
        return persona_or_id
    persona = PERSONAS.get(str(persona_or_id or "").strip().lower())
    if persona is None:
        raise InvalidInput(f"Unknown persona: {persona_or_id!r}")
    return persona
