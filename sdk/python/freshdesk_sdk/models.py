"""Data models for the Freshdesk API.

Fields are named after their wire names. Fields the server owns are declared
with ``frozen=True``: they cannot be assigned, cannot be passed to the
constructor and are never serialized into create/update payloads. Only
``from_dict``/``from_json``, which handle server responses, populate them.
"""

import json
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Protocol, Sequence, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationInfo, field_validator

from .exceptions import InvalidStateError
from .http_client import uri_for_path

M = TypeVar("M", bound="BaseFreshdeskModel")

SERVER_ORIGIN = "server"


class TicketConnection(Protocol):
    """What an entity needs from the connection that fetched it."""
    
    connection_uri: str
    
    async def get_ticket_conversations(self, ticket_id: int) -> Sequence["Conversation"]:
        ...


class TicketPriority(IntEnum):
    """Priority rating of a ticket."""
    
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    URGENT = 4


class TicketStatus(IntEnum):
    """Built-in ticket statuses. Accounts may define custom ones."""
    
    OPEN = 2
    PENDING = 3
    RESOLVED = 4
    CLOSED = 5


class TicketSource(IntEnum):
    """Channel through which a ticket was created."""
    
    EMAIL = 1
    PORTAL = 2
    PHONE = 3
    FORUM = 4
    TWITTER = 5
    FACEBOOK = 6
    CHAT = 7
    MOBIHELP = 8
    FEEDBACK_WIDGET = 9
    OUTBOUND_EMAIL = 10


class BaseFreshdeskModel(BaseModel):
    """Base model for all Freshdesk API models."""
    
    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )
    
    _connection: Optional[TicketConnection] = PrivateAttr(default=None)
    
    @field_validator("*", mode="before")
    @classmethod
    def reject_client_read_only(cls, value: Any, info: ValidationInfo) -> Any:
        # Read-only fields are only accepted while validating a server payload
        field = cls.model_fields.get(info.field_name or "")
        if field is not None and field.frozen:
            if not info.context or info.context.get("origin") != SERVER_ORIGIN:
                raise ValueError(f"{cls.__name__}.{info.field_name} is read-only")
        return value
    
    @classmethod
    def read_only_fields(cls) -> FrozenSet[str]:
        """Names of the fields only the server may populate."""
        return frozenset(name for name, field in cls.model_fields.items() if field.frozen)
    
    @classmethod
    def from_dict(cls: "type[M]", obj: Dict[str, Any], connection: Optional[TicketConnection] = None) -> M:
        """Build an entity from a parsed server JSON object."""
        entity = cls.model_validate(obj, context={"origin": SERVER_ORIGIN})
        entity._connection = connection
        return entity
    
    @classmethod
    def from_json(cls: "type[M]", text: str, connection: Optional[TicketConnection] = None) -> M:
        """Build an entity from server JSON text."""
        return cls.from_dict(json.loads(text), connection)
    
    def model_copy(self: M, *, update: Optional[Mapping[str, Any]] = None, deep: bool = False) -> M:
        """Copy the entity; ``update`` may only name settable fields."""
        if update:
            supplied = sorted(set(update) & self.read_only_fields())
            if supplied:
                raise ValueError(
                    f"{type(self).__name__}: read-only field(s) cannot be set: {', '.join(supplied)}"
                )
        return super().model_copy(update=update, deep=deep)
    
    @property
    def connection(self) -> Optional[TicketConnection]:
        """The connection this entity was retrieved through, if any."""
        return self._connection
    
    def to_request_dict(self) -> Dict[str, Any]:
        """Settable fields as a JSON-ready dict, nulls omitted."""
        return self.model_dump(mode="json", exclude=set(self.read_only_fields()), exclude_none=True)
    
    def to_request_json(self) -> str:
        return json.dumps(self.to_request_dict())


class Attachment(BaseFreshdeskModel):
    """Metadata of a file attached to a ticket or conversation."""
    
    id: Optional[int] = Field(default=None, frozen=True)
    name: Optional[str] = Field(default=None, frozen=True)
    content_type: Optional[str] = Field(default=None, frozen=True)
    size: int = Field(default=0, frozen=True)
    attachment_url: Optional[str] = Field(default=None, frozen=True)
    created_at: Optional[datetime] = Field(default=None, frozen=True)
    updated_at: Optional[datetime] = Field(default=None, frozen=True)


class Conversation(BaseFreshdeskModel):
    """A reply or note on a ticket."""
    
    id: Optional[int] = Field(default=None, frozen=True)
    ticket_id: Optional[int] = Field(default=None, frozen=True)
    user_id: Optional[int] = Field(default=None, frozen=True)
    body: Optional[str] = Field(default=None, frozen=True)
    body_text: Optional[str] = Field(default=None, frozen=True)
    incoming: bool = Field(default=False, frozen=True)
    private: bool = Field(default=False, frozen=True)
    source: Optional[int] = Field(default=None, frozen=True)
    category: Optional[int] = Field(default=None, frozen=True)
    support_email: Optional[str] = Field(default=None, frozen=True)
    from_email: Optional[str] = Field(default=None, frozen=True)
    to_emails: Optional[List[str]] = Field(default=None, frozen=True)
    cc_emails: Optional[List[str]] = Field(default=None, frozen=True)
    bcc_emails: Optional[List[str]] = Field(default=None, frozen=True)
    attachments: Optional[List[Attachment]] = Field(default=None, frozen=True)
    created_at: Optional[datetime] = Field(default=None, frozen=True)
    updated_at: Optional[datetime] = Field(default=None, frozen=True)


class Ticket(BaseFreshdeskModel):
    """Represents a Freshdesk ticket."""
    
    # Settable
    responder_id: Optional[int] = None
    cc_emails: Optional[List[str]] = None
    description: Optional[str] = None
    due_by: Optional[datetime] = None
    email: Optional[str] = None
    email_config_id: Optional[int] = None
    facebook_id: Optional[str] = None
    fr_due_by: Optional[datetime] = None
    group_id: Optional[int] = None
    phone: Optional[str] = None
    priority: TicketPriority = TicketPriority.LOW
    product_id: Optional[int] = None
    requester_id: Optional[int] = None
    name: Optional[str] = None
    source: Optional[int] = None
    status: int = TicketStatus.OPEN.value
    subject: Optional[str] = None
    tags: Optional[List[str]] = None
    twitter_id: Optional[str] = None
    type: Optional[str] = None
    
    # Server-owned
    id: Optional[int] = Field(default=None, frozen=True)
    company_id: Optional[int] = Field(default=None, frozen=True)
    reply_cc_emails: Optional[List[str]] = Field(default=None, frozen=True)
    fwd_emails: Optional[List[str]] = Field(default=None, frozen=True)
    to_emails: Optional[List[str]] = Field(default=None, frozen=True)
    custom_fields: Optional[Dict[str, Any]] = Field(default=None, frozen=True)
    description_text: Optional[str] = Field(default=None, frozen=True)
    fr_escalated: bool = Field(default=False, frozen=True)
    is_escalated: bool = Field(default=False, frozen=True)
    deleted: bool = Field(default=False, frozen=True)
    spam: bool = Field(default=False, frozen=True)
    created_at: Optional[datetime] = Field(default=None, frozen=True)
    updated_at: Optional[datetime] = Field(default=None, frozen=True)
    conversations: Optional[List[Conversation]] = Field(default=None, frozen=True)
    
    def get_view_link(self, connection: Optional[TicketConnection] = None) -> str:
        """Link to this ticket in the helpdesk web UI."""
        connection = connection or self._connection
        if connection is None:
            raise InvalidStateError("No Freshdesk connection has been provided for this ticket")
        return uri_for_path(connection.connection_uri, f"helpdesk/tickets/{self.id}")
    
    async def get_conversations(self) -> Tuple[Conversation, ...]:
        """Conversations of this ticket.

        Uses the conversations embedded in the server response when present,
        otherwise fetches them through the originating connection.
        """
        if self.conversations is not None:
            return tuple(self.conversations)
        
        if self._connection is None:
            raise InvalidStateError("No Freshdesk connection has been provided for this ticket")
        if self.id is None:
            raise InvalidStateError("Ticket has no id; it has not been retrieved from Freshdesk")
        
        return tuple(await self._connection.get_ticket_conversations(self.id))
