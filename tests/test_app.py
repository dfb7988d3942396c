"""Tests for the Flask API."""

import pytest

import app as app_module
import config


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(config, "get_ngrok_url", lambda: None)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as test_client:
        yield test_client


class TestHealthAndPersonas:
    """Test informational endpoints."""

    def test_health(self, client):
        """Health check reports OK."""
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.get_json()
        assert body["status"] == "OK"
        assert body["baseUrl"] == config.BASE_URL

    def test_personas(self, client):
        """All personas are listed."""
        body = client.get("/api/personas").get_json()
        assert {p["id"] for p in body["data"]} == {
            "burn_injury",
            "pregnancy_complication",
            "sports_injury",
            "caretaker_escort",
        }

    def test_unknown_route(self, client):
        """Unknown routes give JSON 404."""
        response = client.get("/api/nowhere")
        assert response.status_code == 404
        assert response.get_json()["error"] == "not_found"


class TestFacilities:
    """Test the facility snapshot endpoint."""

    def test_simulated_hour(self, client):
        """Simulated 5pm: severe traffic and note."""
        body = client.get("/api/facilities?simulatedHour=17").get_json()
        assert body["success"] is True
        assert body["trafficLevel"] == "severe"
        assert body["simulatedHour"] == 17
        assert body["simulationNote"] == "Simulating 17:00 (5PM)"
        grady = next(f for f in body["data"] if f["id"] == 1)
        assert grady["currentWaitTime"] == 68
        assert grady["position"] == {"lat": 33.7557, "lng": -84.3816}

    def test_closed_urgent_care(self, client):
        """Urgent Care shows Closed at night."""
        body = client.get("/api/facilities?simulatedHour=22").get_json()
        clinics = [f for f in body["data"] if f["type"] == "Urgent Care"]
        assert {f["waitTimeDisplay"] for f in clinics} == {"Closed"}
        assert {f["status"] for f in clinics} == {"Closed"}

    def test_invalid_hour(self, client):
        """Out-of-range hour gives 400."""
        response = client.get("/api/facilities?simulatedHour=30")
        assert response.status_code == 400
        assert response.get_json()["error"] == "invalid_input"


class TestRecommendation:
    """Test the recommendation endpoint."""

    def test_burn_mild_morning(self, client):
        """Burn/Mild/10am recommends WellStreet."""
        response = client.post(
            "/api/recommendation",
            json={"persona": "burn_injury", "severity": "Mild", "simulatedHour": 10},
        )
        assert response.status_code == 200
        body = response.get_json()
        rec = body["recommendation"]
        assert rec["decision"] == "Move to Urgent Care"
        assert rec["facility"]["name"] == "WellStreet Urgent Care - Midtown"
        assert "Much shorter wait time (24 min)" in rec["reasoning"]
        assert body["trafficLevel"] == "heavy"
        assert len(body["facilities"]) == 5

    def test_narrated(self, client):
        """narrate adds a summary (fallback without a Gemini key)."""
        body = client.post(
            "/api/recommendation",
            json={"persona": "burn_injury", "severity": "Severe", "simulatedHour": 3, "narrate": True},
        ).get_json()
        assert body["recommendation"]["summary"].startswith("Stay - Call 911: Grady Memorial Hospital")

    def test_custom_origin(self, client):
        """Origin in the body is used for travel estimates."""
        body = client.post(
            "/api/recommendation",
            json={
                "persona": "burn_injury",
                "severity": "Severe",
                "simulatedHour": 3,
                "origin": {"lat": 33.7557, "lng": -84.3816},
            },
        ).get_json()
        assert body["recommendation"]["travelTime"]["time"] == 1

    @pytest.mark.parametrize(
        "payload",
        [
            {"persona": "astronaut", "severity": "Mild"},
            {"persona": "burn_injury", "severity": "Critical"},
            {"persona": "burn_injury", "severity": "Mild", "origin": {"lat": "x"}},
            {"persona": "burn_injury", "severity": "Mild", "simulatedHour": "late"},
        ],
    )
    def test_invalid_input(self, client, payload):
        """Bad persona, severity, origin or hour gives 400."""
        response = client.post("/api/recommendation", json=payload)
        assert response.status_code == 400
        assert response.get_json()["success"] is False

    def test_no_available_facility(self, client, monkeypatch, catalog_without_ers):
        """No open ER for Severe gives 409."""
        monkeypatch.setattr("facility_service.list_facilities", lambda: catalog_without_ers)
        response = client.post(
            "/api/recommendation",
            json={"persona": "burn_injury", "severity": "Severe", "simulatedHour": 3},
        )
        assert response.status_code == 409
        assert response.get_json()["error"] == "no_available_facility"


class TestDecisionAndRoute:
    """Test quick dispatch and route endpoints."""

    def test_elderly_stay(self, client):
        """Age over 65 recommends STAY with a suggested ER."""
        body = client.post(
            "/api/decision",
            json={"age": 72, "healthStatus": "mild", "mobility": "full", "simulatedHour": 10},
        ).get_json()
        assert body["recommendation"] == "STAY"
        assert body["suggestedFacility"]["type"] == "ER"

    def test_moderate_hybrid(self, client):
        """Moderate health recommends HYBRID."""
        body = client.post(
            "/api/decision", json={"age": 30, "healthStatus": "moderate", "simulatedHour": 10}
        ).get_json()
        assert body["recommendation"] == "HYBRID"

    def test_decision_uses_posted_origin(self, client):
        """The origin field moves the suggested ER."""
        payload = {"age": 72, "healthStatus": "mild", "simulatedHour": 10}
        default = client.post("/api/decision", json=payload).get_json()
        at_grady = client.post(
            "/api/decision", json=dict(payload, origin={"lat": 33.7557, "lng": -84.3816})
        ).get_json()
        assert default["suggestedFacility"]["id"] == 2
        assert at_grady["suggestedFacility"]["id"] == 1
        assert at_grady["suggestedFacility"]["travelTime"]["time"] == 1

    def test_decision_accepts_location_alias(self, client):
        """The older location field is still read."""
        body = client.post(
            "/api/decision",
            json={
                "age": 72,
                "healthStatus": "mild",
                "simulatedHour": 10,
                "location": {"lat": 33.7557, "lng": -84.3816},
            },
        ).get_json()
        assert body["suggestedFacility"]["id"] == 1

    def test_decision_malformed_origin(self, client):
        """Malformed origin gives 400."""
        response = client.post(
            "/api/decision", json={"age": 30, "healthStatus": "mild", "origin": {"lat": "x"}}
        )
        assert response.status_code == 400

    def test_decision_bad_status(self, client):
        """Unknown health status gives 400."""
        response = client.post("/api/decision", json={"age": 30, "healthStatus": "great"})
        assert response.status_code == 400

    def test_route(self, client):
        """Route to Grady at 3am."""
        body = client.get("/api/route?facilityId=1&simulatedHour=3").get_json()
        assert body["data"]["distance"] == "1.7 miles"
        assert body["data"]["duration"] == "3 minutes"
        assert body["data"]["trafficLevel"] == "low"

    def test_route_unknown_facility(self, client):
        """Unknown facility id gives 404."""
        assert client.get("/api/route?facilityId=99").status_code == 404

    def test_route_missing_facility(self, client):
        """Missing facility id gives 400."""
        assert client.get("/api/route").status_code == 400

    @pytest.mark.parametrize("facility_id", ["²", "١", "1.5", "-1"])
    def test_route_non_ascii_or_non_integer_id(self, client, facility_id):
        """Non-ASCII digits and non-integers give 400, not 500."""
        response = client.get("/api/route", query_string={"facilityId": facility_id})
        assert response.status_code == 400
        assert response.get_json()["error"] == "invalid_input"
