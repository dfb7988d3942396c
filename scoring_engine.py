from geolocation_service import estimate_travel


def _score_entry(view, travel, score, components):
    return {
        "view": view,
        "travel": travel,
        "score": round(score, 4) if score is not None else None,
        "components": components,
    }


def _tie_break(entry):
    # Lower wait, then lower travel time, then catalog id.
    return (entry["view"].current_wait_minutes, entry["travel"].minutes, entry["view"].id)


def build_candidates(views, origin, traffic):
    return [(view, estimate_travel(origin, view.location, traffic)) for view in views]


def calculate_moderate_score(view, travel, persona):
    """
    Weighted score for Moderate severity (higher is better):
    score =
    (100 - wait_minutes) * w_wait +
    (50 - travel_minutes) * w_travel +
    category_bonus
    """
    wait_component = (100 - view.current_wait_minutes) * persona.wait_weight
    travel_component = (50 - travel.minutes) * persona.travel_weight
    bonus = persona.bonus_for(view.category)
    score = wait_component + travel_component + bonus
    return _score_entry(
        view,
        travel,
        score,
        {
            "wait": round(wait_component, 4),
            "travel": round(travel_component, 4),
            "category_bonus": round(bonus, 4),
        },
    )


def calculate_companion_score(view, travel):
    """
    Companion transport score (higher is better):
    score = (100 - wait_minutes) + (50 - 2 * travel_minutes)
    """
    wait_component = 100 - view.current_wait_minutes
    travel_component = 50 - 2 * travel.minutes
    return _score_entry(
        view,
        travel,
        wait_component + travel_component,
        {"wait": wait_component, "travel": travel_component},
    )


def rank_by_score(scored):
    return sorted(scored, key=lambda entry: (-entry["score"],) + _tie_break(entry))


def rank_moderate(candidates, persona):
    return rank_by_score(
        [calculate_moderate_score(view, travel, persona) for view, travel in candidates]
    )


def rank_companion(candidates):
    return rank_by_score(
        [calculate_companion_score(view, travel) for view, travel in candidates]
    )


def rank_by_total_time(candidates):
    """Shortest travel + wait first; ties as for scored ranking."""
    entries = [
        _score_entry(
            view,
            travel,
            None,
            {"total_minutes": travel.minutes + view.current_wait_minutes},
        )
        for view, travel in candidates
    ]
    entries.sort(key=lambda entry: (entry["components"]["total_minutes"],) + _tie_break(entry))
    return entries


def rank_by_wait(candidates):
    entries = [_score_entry(view, travel, None, {}) for view, travel in candidates]
    entries.sort(key=_tie_break)
    return entries
