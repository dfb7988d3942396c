import logging
import os

from google import genai

import config

logger = logging.getLogger(__name__)


def _get_client():
    api_key = os.environ.get("GEMINI_API_KEY")
    if not api_key:
        return None
    return genai.Client(api_key=api_key)


def fallback_summary(recommendation):
    facility = recommendation["facility"]
    travel = recommendation["travelTime"]
    first_reason = recommendation["reasoning"][0] if recommendation["reasoning"] else ""
    summary = (
        f"{recommendation['decision']}: {facility['name']} "
        f"({facility['waitTimeDisplay']} wait, ~{travel['time']} min away)."
    )
    if first_reason:
        summary += f" {first_reason}."
    return summary


def generate_recommendation_summary(recommendation):
    """Plain-language summary of a serialized recommendation.

    Falls back to a summary built from the recommendation itself when Gemini
    is not configured or does not answer.
    """
    reasons = "\n".join(f"- {reason}" for reason in recommendation["reasoning"])
    prompt = f"""
You are an emergency care navigation assistant.

Decision: {recommendation['decision']}
Facility: {recommendation['facility']['name']} ({recommendation['facility']['type']})
Current wait: {recommendation['facility']['waitTimeDisplay']}
Travel: {recommendation['travelTime']['distance']} miles, ~{recommendation['travelTime']['time']} min
Traffic: {recommendation['trafficLevel']}

Reasoning:
{reasons}

Explain this recommendation to the patient in plain, calm language.
Do not change the decision or the facility.

Limit to 3 sentences.
"""

    client = _get_client()
    if not client:
        return fallback_summary(recommendation)

    try:
        response = client.models.generate_content(
            model=config.GEMINI_MODEL,
            contents=prompt,
        )
    except Exception:
        logger.exception("Gemini summary request failed")
        return fallback_summary(recommendation)

    text = (response.text or "").strip()
    if not text:
        return fallback_summary(recommendation)
    return text
