"""Exception classes for the Freshdesk SDK."""

from typing import Any, Dict, Optional


class FreshdeskError(Exception):
    """Base exception for all Freshdesk SDK errors."""
    
    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
    
    def __str__(self) -> str:
        base_msg = self.message
        if self.details:
            base_msg = f"{base_msg} - {self.details}"
        return base_msg
    
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r})"
        )


class ConfigurationError(FreshdeskError):
    """Raised when the SDK is used before it has been configured."""
    
    def __init__(self, message: str, field: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, code="CONFIG_ERROR", **kwargs)
        self.field = field


class DeserializationError(FreshdeskError, ValueError):
    """Raised when a response body cannot be turned into entities.

    When the failing payload carries an ``id`` it is exposed as
    ``freshdesk_id`` (and under ``data["Freshdesk_ID"]``) so the offending
    record can be identified. ``index`` is the element position for list
    payloads.
    """
    
    def __init__(
        self,
        message: str,
        freshdesk_id: Optional[str] = None,
        index: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code="DESERIALIZATION_ERROR", **kwargs)
        self.freshdesk_id = freshdesk_id
        self.index = index
        self.data: Dict[str, Any] = {}
        if freshdesk_id is not None:
            self.data["Freshdesk_ID"] = freshdesk_id
        if index is not None:
            self.data["index"] = index
    
    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.freshdesk_id is not None:
            base_msg = f"{base_msg} (id={self.freshdesk_id})"
        return base_msg


class InvalidStateError(FreshdeskError):
    """Raised when an operation needs a collaborator that is not available."""
    
    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, code="INVALID_STATE", **kwargs)
