import logging
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

import config
from dispatch_engine import quick_dispatch_decision, suggest_facility
from emergency_engine import run_recommendation
from errors import InvalidInput, NoAvailableFacility
from facility_service import facility_snapshot, find_view
from geolocation_service import estimate_travel, parse_origin
from narrative_service import generate_recommendation_summary
from personas import list_personas
from temporal_model import parse_hour, resolve_hour

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, origins=config.FRONTEND_URL)


def _timestamp():
    return datetime.now(timezone.utc).isoformat()


def _to_bool(value):
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def _json_body():
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InvalidInput("Request body must be a JSON object")
    return body


def _origin_from_args(args):
    lat = args.get("lat")
    lng = args.get("lng", args.get("lon"))
    if lat is None and lng is None:
        return parse_origin(None, default=config.DEFAULT_ORIGIN)
    return parse_origin({"lat": lat, "lng": lng})


def _resolve_request_hour(raw_hour):
    return resolve_hour(parse_hour(raw_hour), timezone=config.TIMEZONE)


def _error_response(status, error, message):
    return jsonify({"success": False, "error": error, "message": message}), status


@app.errorhandler(InvalidInput)
def handle_invalid_input(exc):
    logger.info("Rejected request to %s: %s", request.path, exc)
    return _error_response(400, "invalid_input", str(exc))


@app.errorhandler(NoAvailableFacility)
def handle_no_available_facility(exc):
    logger.warning("No available facility for %s: %s", request.path, exc)
    return _error_response(409, "no_available_facility", str(exc))


@app.errorhandler(404)
def handle_not_found(exc):
    return _error_response(404, "not_found", "Route not found")


@app.errorhandler(Exception)
def handle_unexpected_error(exc):
    if isinstance(exc, HTTPException):
        return _error_response(exc.code, exc.name.lower().replace(" ", "_"), exc.description)
    logger.exception("Unhandled error on %s", request.path)
    return _error_response(500, "server_error", "Something went wrong!")


@app.route("/api/health")
def health():
    return jsonify(
        {
            "status": "OK",
            "message": "EVAC+ Backend API is running",
            "timestamp": _timestamp(),
            "baseUrl": config.get_base_url(),
        }
    )


@app.route("/api/personas")
def personas():
    return jsonify({"success": True, "data": [persona.to_dict() for persona in list_personas()]})


@app.route("/api/facilities")
def facilities():
    hour, simulated = _resolve_request_hour(request.args.get("simulatedHour"))
    snapshot = facility_snapshot(hour, simulated)
    return jsonify(
        {
            "success": True,
            "data": [view.to_dict() for view in snapshot["facilities"]],
            "trafficLevel": snapshot["traffic_level"].label,
            "lastUpdated": _timestamp(),
            "simulatedHour": hour if simulated else None,
            "simulationNote": snapshot["simulation_note"],
        }
    )


@app.route("/api/recommendation", methods=["POST"])
def recommendation():
    body = _json_body()
    result = run_recommendation(
        body.get("persona"),
        body.get("severity"),
        simulated_hour=parse_hour(body.get("simulatedHour")),
        origin=body.get("origin"),
        insurance=str(body.get("insurance") or "").strip() or None,
    )
    payload = result["recommendation"].to_dict()
    if _to_bool(body.get("narrate")):
        payload["summary"] = generate_recommendation_summary(payload)

    return jsonify(
        {
            "success": True,
            "recommendation": payload,
            "facilities": [view.to_dict() for view in result["facilities"]],
            "trafficLevel": result["traffic_level"].label,
            "simulatedHour": result["hour"] if result["simulated"] else None,
            "simulationNote": result["simulation_note"],
        }
    )


@app.route("/api/decision", methods=["POST"])
def decision():
    body = _json_body()
    result = quick_dispatch_decision(
        body.get("age"),
        body.get("healthStatus"),
        body.get("mobility"),
    )
    # "location" is the older name for the origin field.
    origin = parse_origin(body.get("origin", body.get("location")), default=config.DEFAULT_ORIGIN)
    hour, simulated = _resolve_request_hour(body.get("simulatedHour"))
    snapshot = facility_snapshot(hour, simulated)

    suggestion = suggest_facility(
        result["action"], snapshot["facilities"], origin, snapshot["traffic_level"]
    )
    suggested_facility = None
    if suggestion is not None:
        view, travel = suggestion
        suggested_facility = dict(view.to_dict(), travelTime=travel.to_dict())

    return jsonify(
        {
            "success": True,
            "recommendation": result["action"].value.upper(),
            "reasoning": result["reasoning"],
            "suggestedFacility": suggested_facility,
            "trafficLevel": snapshot["traffic_level"].label,
        }
    )


@app.route("/api/route")
def route():
    facility_id = request.args.get("facilityId", "").strip()
    if not (facility_id.isascii() and facility_id.isdigit()):
        raise InvalidInput("facilityId must be a catalog facility id")

    hour, simulated = _resolve_request_hour(request.args.get("simulatedHour"))
    snapshot = facility_snapshot(hour, simulated)
    view = find_view(snapshot["facilities"], int(facility_id))
    if view is None:
        return _error_response(404, "not_found", f"Facility {facility_id} not found")

    origin = _origin_from_args(request.args)
    travel = estimate_travel(origin, view.location, snapshot["traffic_level"])
    return jsonify(
        {
            "success": True,
            "data": {
                "facility": view.to_dict(),
                "distance": f"{travel.distance_miles:.1f} miles",
                "duration": f"{travel.minutes} minutes",
                "travelTime": travel.to_dict(),
                "trafficLevel": snapshot["traffic_level"].label,
            },
        }
    )


if __name__ == "__main__":
    logger.info("EVAC+ Backend API running on http://localhost:%s", config.PORT)
    app.run(host="0.0.0.0", port=config.PORT)
