from models import FacilityCategory

# Typical self-pay visit cost ranges (USD).
COST_RANGES = {
    FacilityCategory.URGENT_CARE: (80, 150),
    FacilityCategory.EMERGENCY_ROOM: (300, 500),
}

ALL_PLANS = "all"
MOST_MAJOR = "most major"
MAJOR_PLANS = {
    "aetna",
    "anthem",
    "blue cross blue shield",
    "bcbs",
    "cigna",
    "humana",
    "kaiser",
    "medicare",
    "unitedhealthcare",
}


def cost_range(category):
    return COST_RANGES[category]


def format_cost_range(category):
    low, high = cost_range(category)
    return f"${low}-{high}"


def cost_estimate(category):
    low, high = cost_range(category)
    return {"low": low, "high": high, "display": format_cost_range(category)}


def cost_comparison_text():
    return (
        f"Lower cost than ER visit ({format_cost_range(FacilityCategory.URGENT_CARE)} "
        f"vs {format_cost_range(FacilityCategory.EMERGENCY_ROOM)})"
    )


def accepts_insurance(facility, plan):
    """
    Returns True if the facility takes the plan.

    "All" accepts every plan, "Most major" accepts the major carriers,
    anything else must match the plan name (case-insensitive).
    """
    normalized_plan = str(plan or "").strip().lower()
    if not normalized_plan:
        return False

    accepted = {str(value).strip().lower() for value in facility.accepted_insurance}
    if ALL_PLANS in accepted:
        return True
    if MOST_MAJOR in accepted and normalized_plan in MAJOR_PLANS:
        return True
    return normalized_plan in accepted


def insurance_note(facility, plan):
    if accepts_insurance(facility, plan):
        return f"{facility.name} accepts {plan}"
    return f"{facility.name} may not accept {plan} - confirm coverage before your visit"
