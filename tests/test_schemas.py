import pytest
from pydantic import ValidationError

from hubroute.models.domain import Point
from hubroute.schemas.routing import IncidentModel, RouteCalculationRequest


def test_incident_accepts_camel_case_payload():
    payload = {
        "type": "ROAD_CLOSURE",
        "lineStart": {"latitude": 4.04, "longitude": 9.705},
        "lineEnd": {"latitude": 4.06, "longitude": 9.705},
        "bufferDistance": 50,
        "description": "Flooded bridge",
    }
    incident = IncidentModel.model_validate(payload).to_domain()

    assert incident.line_start == Point(9.705, 4.04)
    assert incident.line_end == Point(9.705, 4.06)
    assert incident.buffer_distance_meters == 50.0
    assert incident.has_line


def test_incident_null_buffer_means_zero():
    incident = IncidentModel.model_validate({"bufferDistance": None}).to_domain()
    assert incident.buffer_distance_meters == 0.0
    assert not incident.has_line


def test_incident_rejects_negative_buffer():
    with pytest.raises(ValidationError):
        IncidentModel.model_validate({"bufferDistance": -1})


def test_calculation_request_reads_constraints():
    request = RouteCalculationRequest.model_validate(
        {
            "parcelId": "P1",
            "startHubId": "A",
            "endHubId": "B",
            "driverId": "D1",
            "constraints": {"algorithm": "dijkstra", "avoidTolls": True},
        }
    )
    assert request.start_hub_id == "A"
    assert request.constraints.algorithm == "dijkstra"
    assert request.constraints.avoid_tolls is True
