"""Unit tests for response decoding."""

import json
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from freshdesk_sdk import Conversation, DeserializationError, Ticket, decode_list, decode_single

from conftest import conversation_payload, ticket_payload


class TestDecodeList:

    def test_preserves_length_and_order(self):
        connection = MagicMock()
        payload = [ticket_payload(id=i, subject=f"Ticket {i}") for i in (5, 3, 8, 1)]
        tickets = decode_list(json.dumps(payload), Ticket.from_dict, connection)

        assert isinstance(tickets, tuple)
        assert [t.id for t in tickets] == [5, 3, 8, 1]
        assert all(t.connection is connection for t in tickets)

    def test_empty_array(self):
        assert decode_list("[]", Ticket.from_dict) == ()

    def test_conversations(self):
        payload = [conversation_payload(id=1), conversation_payload(id=2)]
        conversations = decode_list(json.dumps(payload), Conversation.from_dict)
        assert [c.id for c in conversations] == [1, 2]

    def test_failing_element_carries_its_id(self):
        payload = [ticket_payload(id=1), ticket_payload(id=77, priority="bogus"), ticket_payload(id=3)]
        with pytest.raises(DeserializationError) as exc_info:
            decode_list(json.dumps(payload), Ticket.from_dict)

        error = exc_info.value
        assert error.freshdesk_id == "77"
        assert error.index == 1
        assert error.data["Freshdesk_ID"] == "77"
        assert isinstance(error.__cause__, ValidationError)
        assert "id=77" in str(error)

    def test_failing_element_without_id(self):
        payload = [{"priority": "bogus"}]
        with pytest.raises(DeserializationError) as exc_info:
            decode_list(json.dumps(payload), Ticket.from_dict)
        assert exc_info.value.freshdesk_id is None
        assert "Freshdesk_ID" not in exc_info.value.data
        assert exc_info.value.index == 0

    def test_decoding_stops_at_first_failure(self):
        calls = []

        def factory(obj, connection):
            calls.append(obj["id"])
            if obj["id"] == 2:
                raise ValueError("boom")
            return obj

        payload = [{"id": 1}, {"id": 2}, {"id": 3}]
        with pytest.raises(DeserializationError):
            decode_list(json.dumps(payload), factory)
        assert calls == [1, 2]

    def test_non_object_element_rejected(self):
        with pytest.raises(DeserializationError) as exc_info:
            decode_list('[{"id": 1}, 5]', Ticket.from_dict)
        assert exc_info.value.index == 1

    def test_object_payload_rejected(self):
        with pytest.raises(DeserializationError, match="array"):
            decode_list(json.dumps(ticket_payload()), Ticket.from_dict)

    def test_malformed_json(self):
        with pytest.raises(DeserializationError) as exc_info:
            decode_list("[{", Ticket.from_dict)
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            decode_list("nope", Ticket.from_dict)


class TestDecodeSingle:

    def test_builds_entity_with_connection(self):
        connection = MagicMock()
        ticket = decode_single(json.dumps(ticket_payload()), Ticket.from_dict, connection)
        assert ticket.id == 42
        assert ticket.connection is connection

    def test_matches_from_json(self):
        text = json.dumps(ticket_payload())
        assert decode_single(text, Ticket.from_dict) == Ticket.from_json(text)

    def test_failure_carries_id(self):
        with pytest.raises(DeserializationError) as exc_info:
            decode_single(json.dumps(ticket_payload(id=12, status="open")), Ticket.from_dict)
        assert exc_info.value.freshdesk_id == "12"
        assert exc_info.value.index is None

    def test_array_payload_rejected(self):
        with pytest.raises(DeserializationError, match="object"):
            decode_single("[]", Ticket.from_dict)
