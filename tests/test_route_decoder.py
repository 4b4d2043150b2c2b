from unittest.mock import MagicMock

import pytest

from src.juanmap.errors import UpstreamError, ValidationError
from src.juanmap.geo import polyline
from src.juanmap.models import Coordinate, TravelMode
from src.juanmap.routing import RouteDecoder, parse_coordinate, parse_mode

ORIGIN = {"lat": 14.6, "lng": 121.03}
DESTINATION = {"lat": 14.55, "lng": 121.05}


def directions_response(**overrides):
    data = {
        "status": "OK",
        "routes": [
            {
                "overview_polyline": {"points": "_p~iF~ps|U_ulLnnqC_mqNvxq`@"},
                "legs": [
                    {
                        "distance": {"value": 1200, "text": "1.2 km"},
                        "duration": {"value": 300, "text": "5 mins"},
                        "steps": [
                            {
                                "polyline": {"points": "_p~iF~ps|U_ulLnnqC"},
                                "distance": {"value": 800, "text": "0.8 km"},
                                "html_instructions": "Turn <b>left</b> onto Main&nbsp;St",
                            },
                            {
                                "polyline": {"points": ""},
                                "distance": {"value": 400, "text": "0.4 km"},
                                "html_instructions": "Arrive",
                            },
                        ],
                    }
                ],
            }
        ],
    }
    data.update(overrides)
    return data


@pytest.fixture
def provider():
    stub = MagicMock()
    stub.directions.return_value = directions_response()
    return stub


def test_route_decodes_overview_and_steps(provider):
    result = RouteDecoder(provider).route(ORIGIN, DESTINATION, "driving")
    assert len(result.overview_path) == 3
    assert result.overview_path[0].lat == pytest.approx(38.5, abs=1e-5)
    assert len(result.steps) == 2
    first = result.steps[0]
    assert len(first.polyline) == 2
    assert first.distance_meters == 800
    assert first.distance_text == "0.8 km"
    assert first.instruction_plain_text == "Turn left onto Main St"
    assert result.steps[1].polyline == []
    assert result.total_distance_text == "1.2 km"
    assert result.duration_text == "5 mins"


def test_route_missing_leg_fields_default_to_empty_string(provider):
    response = directions_response()
    leg = response["routes"][0]["legs"][0]
    del leg["distance"], leg["duration"]
    provider.directions.return_value = response
    result = RouteDecoder(provider).route(ORIGIN, DESTINATION)
    assert result.total_distance_text == ""
    assert result.duration_text == ""
    assert result.arrival_time_text == ""


def test_route_arrival_time_for_transit(provider):
    response = directions_response()
    response["routes"][0]["legs"][0]["arrival_time"] = {"text": "6:42pm"}
    provider.directions.return_value = response
    result = RouteDecoder(provider).route(ORIGIN, DESTINATION, "transit")
    assert result.arrival_time_text == "6:42pm"
    assert provider.directions.call_args.args[2] is TravelMode.TRANSIT


def test_route_passes_parsed_coordinates(provider):
    RouteDecoder(provider).route(ORIGIN, DESTINATION, "WALKING")
    origin, destination, mode = provider.directions.call_args.args
    assert origin == Coordinate(lat=14.6, lng=121.03)
    assert destination == Coordinate(lat=14.55, lng=121.05)
    assert mode is TravelMode.WALKING


@pytest.mark.parametrize(
    "origin",
    [
        None,
        {},
        {"lng": 121.03},
        {"lat": "14.6", "lng": 121.03},
        {"lat": None, "lng": 121.03},
        {"lat": True, "lng": 121.03},
        {"lat": float("nan"), "lng": 121.03},
        {"lat": 91, "lng": 121.03},
        "14.6,121.03",
    ],
)
def test_invalid_origin_rejected_before_network(provider, origin):
    with pytest.raises(ValidationError):
        RouteDecoder(provider).route(origin, DESTINATION, "driving")
    provider.directions.assert_not_called()


def test_invalid_destination_rejected_before_network(provider):
    with pytest.raises(ValidationError):
        RouteDecoder(provider).route(ORIGIN, {"lat": 14.5}, "driving")
    provider.directions.assert_not_called()


def test_unknown_mode_rejected_before_network(provider):
    with pytest.raises(ValidationError):
        RouteDecoder(provider).route(ORIGIN, DESTINATION, "teleport")
    provider.directions.assert_not_called()


def test_provider_status_not_ok_raises_upstream(provider):
    provider.directions.return_value = {
        "status": "REQUEST_DENIED",
        "error_message": "The provided API key is invalid.",
        "routes": [],
    }
    with pytest.raises(UpstreamError) as exc_info:
        RouteDecoder(provider).route(ORIGIN, DESTINATION)
    assert exc_info.value.status == "REQUEST_DENIED"
    assert exc_info.value.message == "The provided API key is invalid."
    assert exc_info.value.reachable


def test_zero_routes_raises_upstream(provider):
    provider.directions.return_value = {"status": "ZERO_RESULTS", "routes": []}
    with pytest.raises(UpstreamError) as exc_info:
        RouteDecoder(provider).route(ORIGIN, DESTINATION)
    assert exc_info.value.status == "ZERO_RESULTS"


def test_ok_status_with_empty_routes_raises_upstream(provider):
    provider.directions.return_value = {"status": "OK", "routes": []}
    with pytest.raises(UpstreamError) as exc_info:
        RouteDecoder(provider).route(ORIGIN, DESTINATION)
    assert exc_info.value.status == "OK"


def test_truncated_polyline_fails_whole_route(provider):
    response = directions_response()
    response["routes"][0]["legs"][0]["steps"][1]["polyline"]["points"] = "_p~iF~"
    provider.directions.return_value = response
    with pytest.raises(UpstreamError) as exc_info:
        RouteDecoder(provider).route(ORIGIN, DESTINATION)
    assert exc_info.value.status == "INVALID_POLYLINE"


def test_parse_helpers():
    point = Coordinate(lat=1, lng=2)
    assert parse_coordinate(point, "origin") is point
    assert parse_coordinate({"lat": 0, "lng": 0}, "origin") == Coordinate(lat=0, lng=0)
    assert parse_mode(None) is TravelMode.DRIVING
    assert parse_mode("") is TravelMode.DRIVING
    assert parse_mode(TravelMode.BICYCLING) is TravelMode.BICYCLING


@pytest.mark.parametrize(
    "response",
    [
        "not a json object",
        {"status": "OK", "routes": ["bogus"]},
        {"status": "OK", "routes": {"legs": []}},
        {"status": "OK", "routes": [{"legs": [None]}]},
        {"status": "OK", "routes": [{"legs": "leg"}]},
        {"status": "OK", "routes": [{"legs": [{"steps": [None]}]}]},
        {"status": "OK", "routes": [{"legs": [{"steps": 3}]}]},
    ],
)
def test_malformed_directions_body_raises_invalid_response(provider, response):
    provider.directions.return_value = response
    with pytest.raises(UpstreamError) as exc_info:
        RouteDecoder(provider).route(ORIGIN, DESTINATION)
    assert exc_info.value.status == "INVALID_RESPONSE"


def test_non_string_leg_text_defaults_to_empty(provider):
    response = directions_response()
    response["routes"][0]["legs"][0]["distance"] = {"value": 1200, "text": 1200}
    provider.directions.return_value = response
    result = RouteDecoder(provider).route(ORIGIN, DESTINATION)
    assert result.total_distance_text == ""


def test_out_of_range_overview_point_fails_whole_route(provider):
    response = directions_response()
    # 緯度 95 度
    response["routes"][0]["overview_polyline"]["points"] = (
        polyline._encode_value(9_500_000) + "?"
    )
    provider.directions.return_value = response
    with pytest.raises(UpstreamError) as exc_info:
        RouteDecoder(provider).route(ORIGIN, DESTINATION)
    assert exc_info.value.status == "INVALID_POLYLINE"
