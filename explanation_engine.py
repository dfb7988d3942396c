"""Human-readable reasoning for a recommendation.

Every line quotes the numbers the decision actually used, so the reasoning
always matches the selected facility.
"""

from financial_engine import cost_comparison_text, format_cost_range, insurance_note
from models import FacilityCategory, traffic_label


def _travel_line(travel, mode="by car"):
    return f"Travel: {travel.distance_miles:.1f} miles, ~{travel.minutes} min {mode}"


def _traffic_line(traffic, total_minutes):
    return (
        f"Current traffic: {traffic_label(traffic).upper()} - total time to see doctor: "
        f"~{total_minutes} min"
    )


def _with_notes(lines, persona, facility, insurance):
    if insurance:
        lines.append(insurance_note(facility, insurance))
    if persona.safety_note:
        lines.append(persona.safety_note)
    return tuple(line for line in lines if line)


def explain_ambulance(persona, severity, entry, traffic, trauma_center, insurance=None):
    view, travel = entry["view"], entry["travel"]
    lines = [
        persona.care_note(severity),
        "Ambulance ensures safe transport and medical attention en route",
    ]
    if trauma_center:
        lines.append(f"{view.name} has specialized trauma care")
    else:
        lines.append(
            f"{view.name} has the shortest current ER wait ({view.current_wait_minutes} min)"
        )
    lines.append(
        f"Facility is {travel.distance_miles:.1f} miles away ({travel.minutes} min by ambulance)"
    )
    lines.append(f"Current traffic: {traffic_label(traffic).upper()}")
    return _with_notes(lines, persona, view.facility, insurance)


def explain_companion(persona, severity, entry, traffic, insurance=None):
    view, travel = entry["view"], entry["travel"]
    lines = [
        persona.care_note(severity),
        "Your companion should drive you directly to the ER - do not drive yourself",
        (
            f"{view.name} has the best balance of wait ({view.current_wait_minutes} min) "
            f"and travel ({travel.minutes} min), score {entry['score']:g}"
        ),
        _travel_line(travel, "with your companion"),
        _traffic_line(traffic, travel.minutes + view.current_wait_minutes),
    ]
    return _with_notes(lines, persona, view.facility, insurance)


def explain_moderate(persona, severity, entry, traffic, runner_up=None, insurance=None):
    view, travel = entry["view"], entry["travel"]
    lines = [
        persona.care_note(severity),
        (
            f"{view.name} scored highest ({entry['score']:g}) with a "
            f"{view.current_wait_minutes} min wait and {travel.minutes} min travel"
        ),
    ]
    if runner_up is not None:
        lines.append(
            f"Next best: {runner_up['view'].name} (score {runner_up['score']:g}, "
            f"{runner_up['view'].current_wait_minutes} min wait)"
        )
    lines.append(_travel_line(travel))
    lines.append(_traffic_line(traffic, travel.minutes + view.current_wait_minutes))
    if not view.facility.is_emergency_room:
        lines.append(cost_comparison_text())
    return _with_notes(lines, persona, view.facility, insurance)


def explain_mild_urgent_care(persona, severity, entry, traffic, insurance=None):
    view, travel = entry["view"], entry["travel"]
    lines = [
        persona.care_note(severity),
        f"Much shorter wait time ({view.current_wait_minutes} min)",
        _travel_line(travel),
        cost_comparison_text(),
        f"Total time to treatment: ~{travel.minutes + view.current_wait_minutes} min",
        f"Current traffic: {traffic_label(traffic).upper()}",
    ]
    return _with_notes(lines, persona, view.facility, insurance)


def explain_mild_er(persona, severity, entry, traffic, urgent_care_closed, insurance=None):
    view, travel = entry["view"], entry["travel"]
    if urgent_care_closed:
        lines = [
            "Urgent Care centers are currently closed",
            f"Go to {view.name} instead",
        ]
    else:
        lines = [
            persona.care_note(severity),
            f"{view.name} has the shortest total time to treatment",
        ]
    lines.append(f"Current wait: {view.current_wait_minutes} min")
    lines.append(_travel_line(travel))
    lines.append(_traffic_line(traffic, travel.minutes + view.current_wait_minutes))
    if urgent_care_closed:
        lines.append(
            f"ER visits cost more ({format_cost_range(FacilityCategory.EMERGENCY_ROOM)}) "
            "but are still appropriate when Urgent Care is closed"
        )
    return _with_notes(lines, persona, view.facility, insurance)
