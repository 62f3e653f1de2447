"""Freshdesk connection: ticket operations over the v2 REST API."""

import logging
from typing import Any, Optional, Sequence, Tuple

import httpx

from .auth import APIKeyAuth, Authenticator
from .decoding import decode_list, decode_single
from .http_client import HTTPClient, uri_for_path
from .models import Conversation, Ticket
from .multipart import FileAttachment

logger = logging.getLogger(__name__)

API_PREFIX = "api/v2"
ATTACHMENTS_KEY = "attachments[]"


class FreshdeskClient:
    """Connection to one Freshdesk helpdesk.

    Entities returned by this client keep a reference to it so that related
    resources, such as a ticket's conversations, can be fetched later.
    """
    
    def __init__(
        self,
        connection_uri: str,
        api_key: Optional[str] = None,
        auth: Optional[Authenticator] = None,
        timeout: float = 30.0,
        debug: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.connection_uri = connection_uri.rstrip("/")
        if auth is None:
            auth = APIKeyAuth(api_key)
        self.http = HTTPClient(
            self.connection_uri,
            auth=auth,
            timeout=timeout,
            debug=debug,
            transport=transport,
        )
    
    @classmethod
    def with_api_key(cls, connection_uri: str, api_key: str, **kwargs: Any) -> "FreshdeskClient":
        """Create a client for a helpdesk URL authenticated with an API key."""
        return cls(connection_uri, api_key=api_key, **kwargs)
    
    @classmethod
    def for_domain(cls, domain: str, api_key: str, **kwargs: Any) -> "FreshdeskClient":
        """Create a client for ``<domain>.freshdesk.com``."""
        return cls(f"https://{domain}.freshdesk.com", api_key=api_key, **kwargs)
    
    async def __aenter__(self) -> "FreshdeskClient":
        return self
    
    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
    
    async def close(self) -> None:
        await self.http.close()
    
    def __repr__(self) -> str:
        return f"FreshdeskClient({self.connection_uri!r})"
    
    # Tickets
    
    async def create_ticket(
        self,
        ticket: Ticket,
        attachments: Optional[Sequence[FileAttachment]] = None,
    ) -> Ticket:
        """Create a ticket, uploading ``attachments`` with it when given."""
        if attachments:
            logger.debug("Creating ticket with %d attachment(s)", len(attachments))
            text = await self.http.post_multipart(
                f"{API_PREFIX}/tickets", ticket, attachments, ATTACHMENTS_KEY
            )
        else:
            text = await self.http.post(f"{API_PREFIX}/tickets", ticket.to_request_json())
        return decode_single(text, Ticket.from_dict, self)
    
    async def get_ticket(self, ticket_id: int, include_conversations: bool = False) -> Ticket:
        """Fetch a single ticket, optionally with its conversations embedded."""
        params = {"include": "conversations"} if include_conversations else None
        text = await self.http.get(f"{API_PREFIX}/tickets/{ticket_id}", params=params)
        return decode_single(text, Ticket.from_dict, self)
    
    async def list_tickets(self) -> Tuple[Ticket, ...]:
        """List the tickets the server returns for the default view."""
        text = await self.http.get(f"{API_PREFIX}/tickets")
        return decode_list(text, Ticket.from_dict, self)
    
    async def update_ticket(self, ticket_id: int, ticket: Ticket) -> Ticket:
        """Send the settable fields of ``ticket`` as an update."""
        text = await self.http.put(f"{API_PREFIX}/tickets/{ticket_id}", ticket.to_request_json())
        return decode_single(text, Ticket.from_dict, self)
    
    async def get_ticket_conversations(self, ticket_id: int) -> Tuple[Conversation, ...]:
        """Fetch the replies and notes of a ticket."""
        text = await self.http.get(f"{API_PREFIX}/tickets/{ticket_id}/conversations")
        return decode_list(text, Conversation.from_dict, self)
    
    def get_view_link(self, ticket_id: int) -> str:
        """Link to a ticket in the helpdesk web UI."""
        return uri_for_path(self.connection_uri, f"helpdesk/tickets/{ticket_id}")


FreshdeskConnection = FreshdeskClient
