"""Shared fixtures for Freshdesk SDK unit tests."""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from freshdesk_sdk import FreshdeskClient


BASE_URL = "https://acme.freshdesk.com"
API_KEY = "abcdefghij1234567890"


def ticket_payload(**overrides: Any) -> Dict[str, Any]:
    """A ticket object shaped like the Freshdesk v2 API returns it."""
    payload = {
        "id": 42,
        "subject": "Printer on fire",
        "description": "<div>It is on fire</div>",
        "description_text": "It is on fire",
        "email": "requester@example.com",
        "requester_id": 1001,
        "responder_id": 2002,
        "group_id": 3003,
        "company_id": 4004,
        "priority": 3,
        "status": 2,
        "source": 2,
        "type": "Incident",
        "tags": ["hardware", "urgent"],
        "cc_emails": ["boss@example.com"],
        "reply_cc_emails": ["boss@example.com"],
        "fwd_emails": [],
        "to_emails": None,
        "custom_fields": {"cf_floor": "3"},
        "fr_escalated": False,
        "is_escalated": True,
        "spam": False,
        "deleted": False,
        "due_by": "2024-03-02T10:00:00Z",
        "fr_due_by": "2024-03-01T12:00:00Z",
        "created_at": "2024-03-01T09:00:00Z",
        "updated_at": "2024-03-01T09:30:00Z",
        "attachments": [],
    }
    payload.update(overrides)
    return payload


def conversation_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "id": 9001,
        "ticket_id": 42,
        "user_id": 2002,
        "body": "<div>Extinguisher deployed</div>",
        "body_text": "Extinguisher deployed",
        "incoming": False,
        "private": True,
        "source": 2,
        "from_email": "agent@acme.com",
        "to_emails": ["requester@example.com"],
        "attachments": [
            {
                "id": 77,
                "name": "photo.jpg",
                "content_type": "image/jpeg",
                "size": 2048,
                "attachment_url": "https://s3.example.com/photo.jpg",
                "created_at": "2024-03-01T09:20:00Z",
                "updated_at": "2024-03-01T09:20:00Z",
            }
        ],
        "created_at": "2024-03-01T09:20:00Z",
        "updated_at": "2024-03-01T09:20:00Z",
    }
    payload.update(overrides)
    return payload


class FakeFreshdesk:
    """Records outgoing requests and replies with queued responses."""
    
    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._responses: List[httpx.Response] = []
    
    def respond(self, status_code: int = 200, json_body: Any = None, text: Optional[str] = None) -> None:
        if text is None:
            text = json.dumps(json_body)
        self._responses.append(httpx.Response(status_code, content=text.encode("utf-8")))
    
    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self._responses.pop(0)
    
    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)
    
    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_freshdesk():
    return FakeFreshdesk()


@pytest.fixture
def client(fake_freshdesk):
    return FreshdeskClient(BASE_URL, api_key=API_KEY, transport=fake_freshdesk.transport)
