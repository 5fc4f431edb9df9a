"""Testes de classificação do request descriptografado de Flow."""

from __future__ import annotations

import pytest

from app.coordinators.whatsapp.flows import (
    classify_flow_request,
    create_error_ack_response,
    create_ping_response,
    is_data_exchange_request,
    is_error_request,
    normalize_handler_result,
)
from app.domain.flow_request import FlowEndpointRequest, FlowType


def _exchange(**overrides):
    payload = {
        "version": "3.0",
        "action": "data_exchange",
        "screen": "APPOINTMENT",
        "data": {"department": "beauty"},
        "flow_token": "flow-token-1",
    }
    payload.update(overrides)
    return payload


def test_ping_is_classified_first() -> None:
    assert classify_flow_request({"version": "3.0", "action": "ping"}) is FlowType.PING


def test_error_notification() -> None:
    payload = _exchange(
        data={
            "error_key": "invalid_screen",
            "error": "invalid_screen",
            "error_message": "Screen not found",
        }
    )

    assert is_error_request(payload) is True
    assert classify_flow_request(payload) is FlowType.ERROR


def test_form_fields_named_error_stay_data_exchange() -> None:
    payload = _exchange(data={"error": "none", "error_message": "campo do formulário"})

    assert is_error_request(payload) is False
    assert classify_flow_request(payload) is FlowType.CHANGE


@pytest.mark.parametrize(
    "data",
    [
        {"error_key": "timeout", "error_message": "Endpoint timed out"},
        {"error_key": "timeout", "error": 1, "error_message": "Endpoint timed out"},
        {"error_key": "timeout", "error": "timeout"},
    ],
)
def test_error_notification_needs_string_error_fields(data: dict) -> None:
    assert is_error_request(_exchange(action="INIT", data=data)) is False


def test_error_notification_requires_screen() -> None:
    payload = _exchange(data={"error_key": "x", "error": "x", "error_message": "y"})
    del payload["screen"]

    assert is_error_request(payload) is False
    assert classify_flow_request(payload) is FlowType.CHANGE


@pytest.mark.parametrize("action", ["data_exchange", "INIT", "BACK"])
def test_data_exchange_actions(action: str) -> None:
    assert classify_flow_request(_exchange(action=action)) is FlowType.CHANGE


def test_data_is_optional_only_for_data_exchange() -> None:
    without_data = _exchange()
    del without_data["data"]

    assert is_data_exchange_request(without_data) is True
    assert is_data_exchange_request({**without_data, "action": "INIT"}) is False


def test_screen_may_be_absent() -> None:
    payload = _exchange(action="INIT")
    del payload["screen"]

    assert is_data_exchange_request(payload) is True


@pytest.mark.parametrize(
    "payload",
    [
        _exchange(screen="SUCCESS"),
        _exchange(screen=None),
        _exchange(version="2.1"),
        _exchange(flow_token=None),
        _exchange(action="navigate"),
        _exchange(action=["data_exchange"]),
        _exchange(action="INIT", data="not-an-object"),
        {},
    ],
)
def test_unknown_shapes_are_not_classified(payload) -> None:
    assert classify_flow_request(payload) is None


def test_standard_responses() -> None:
    assert create_ping_response() == {"version": "3.0", "data": {"status": "active"}}
    assert create_error_ack_response() == {}
    assert normalize_handler_result(None) == {}
    assert normalize_handler_result({"screen": "DONE"}) == {"screen": "DONE"}


def test_flow_endpoint_request_from_payload() -> None:
    request = FlowEndpointRequest.from_payload(_exchange(screen=7))

    assert request.version == "3.0"
    assert request.action == "data_exchange"
    assert request.screen is None
    assert request.data == {"department": "beauty"}
    assert request.flow_token == "flow-token-1"
    assert request.raw["screen"] == 7
