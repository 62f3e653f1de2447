"""
Freshdesk Python SDK

Async Python client for the Freshdesk helpdesk API.

Basic usage:
    >>> from freshdesk_sdk import FreshdeskClient
    >>> client = FreshdeskClient.for_domain("yourcompany", "your-api-key")
    >>> tickets = await client.list_tickets()
    >>> print(f"Found {len(tickets)} tickets")

Creating a ticket with an attachment:
    ticket = Ticket(subject="Printer on fire", email="user@example.com",
                    description="<p>Help</p>", priority=TicketPriority.URGENT)
    with open("photo.jpg", "rb") as fh:
        created = await client.create_ticket(
            ticket, [FileAttachment("photo.jpg", fh, "image/jpeg")]
        )

Following up on a retrieved ticket:
    ticket = await client.get_ticket(42)
    conversations = await ticket.get_conversations()
"""

from .client import FreshdeskClient, FreshdeskConnection
from .exceptions import (
    FreshdeskError,
    ConfigurationError,
    DeserializationError,
    InvalidStateError,
)
from .models import (
    Ticket,
    TicketPriority,
    TicketStatus,
    TicketSource,
    Conversation,
    Attachment,
    TicketConnection,
)
from .multipart import FileAttachment
from .auth import Authenticator, APIKeyAuth
from .decoding import decode_single, decode_list

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Main client
    "FreshdeskClient",
    "FreshdeskConnection",
    # Exceptions
    "FreshdeskError",
    "ConfigurationError",
    "DeserializationError",
    "InvalidStateError",
    # Models
    "Ticket",
    "TicketPriority",
    "TicketStatus",
    "TicketSource",
    "Conversation",
    "Attachment",
    "TicketConnection",
    "FileAttachment",
    # Decoding
    "decode_single",
    "decode_list",
    # Auth
    "Authenticator",
    "APIKeyAuth",
]

# Convenience functions for error checking
def is_freshdesk_error(error: Exception) -> bool:
    """Check if an exception was raised by the SDK."""
    return isinstance(error, FreshdeskError)

def is_configuration_error(error: Exception) -> bool:
    """Check if an exception is a configuration error."""
    return isinstance(error, ConfigurationError)

def is_deserialization_error(error: Exception) -> bool:
    """Check if an exception is a deserialization error."""
    return isinstance(error, DeserializationError)
