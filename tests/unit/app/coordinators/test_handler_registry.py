"""Testes do registry de handlers do webhook."""

from __future__ import annotations

import pytest

from app.coordinators.whatsapp.inbound import HandlerRegistry
from app.domain.flow_request import FlowType
from app.domain.webhook_events import MessageType


def _noop(client, event) -> None:
    return None


def _other(client, event) -> None:
    return None


def test_exact_type_wins_over_wildcard() -> None:
    registry = HandlerRegistry()
    registry.on_message(MessageType.ALL, _other)
    registry.on_message(MessageType.TEXT, _noop)

    assert registry.get_message_handler("text") is _noop
    assert registry.get_message_handler("image") is _other


def test_missing_type_without_wildcard_returns_none() -> None:
    registry = HandlerRegistry()
    registry.on_message("text", _noop)

    assert registry.get_message_handler("image") is None


def test_registration_is_last_write_wins() -> None:
    registry = HandlerRegistry()
    registry.on_message("text", _noop)
    registry.on_message("text", _other)

    assert registry.get_message_handler("text") is _other


def test_statuses_cannot_be_registered_as_message_type() -> None:
    registry = HandlerRegistry()

    with pytest.raises(ValueError, match="on_status"):
        registry.on_message("statuses", _noop)


def test_lifecycle_and_status_handlers() -> None:
    registry = HandlerRegistry()
    registry.on_status(_noop)
    registry.on_message_pre_process(_other)
    registry.on_message_post_process(_noop)

    assert registry.status_handler is _noop
    assert registry.pre_process_handler is _other
    assert registry.post_process_handler is _noop


def test_event_handler_falls_back_to_wildcard() -> None:
    registry = HandlerRegistry()
    registry.on_event("*", _other)
    registry.on_event("account_update", _noop)

    assert registry.get_event_handler("account_update") is _noop
    assert registry.get_event_handler("flows") is _other


def test_flow_handler_lookup_respects_key_order() -> None:
    registry = HandlerRegistry()
    registry.on_flow(FlowType.ALL, _other)

    assert registry.get_flow_handler(FlowType.CHANGE, FlowType.ALL) is _other

    registry.on_flow("data_exchange", _noop)
    assert registry.get_flow_handler(FlowType.CHANGE, FlowType.ALL) is _noop
    assert registry.get_flow_handler(FlowType.PING) is None
