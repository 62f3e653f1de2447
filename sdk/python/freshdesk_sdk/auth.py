"""Authentication classes for the Freshdesk SDK."""

import base64
from abc import ABC, abstractmethod
from typing import Dict, Optional

from .exceptions import ConfigurationError


class Authenticator(ABC):
    """Base class for authentication methods."""
    
    @abstractmethod
    def get_auth_headers(self) -> Dict[str, str]:
        """Get authentication headers for requests."""
        pass
    
    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Get the authentication type."""
        pass


class APIKeyAuth(Authenticator):
    """API key authentication using HTTP Basic with the ``X`` password.

    The key is write-only: it can be assigned once, through the constructor
    or the ``api_key`` attribute, and is never readable afterwards.
    """
    
    PASSWORD = "X"
    
    def __init__(self, api_key: Optional[str] = None) -> None:
        self._api_key: Optional[str] = None
        if api_key is not None:
            self.api_key = api_key
    
    def _set_api_key(self, value: str) -> None:
        if self._api_key is not None:
            raise ConfigurationError("The API key has already been set", field="api_key")
        if not value:
            raise ConfigurationError("The API key must be a non-empty string", field="api_key")
        self._api_key = value
    
    api_key = property(fset=_set_api_key, doc="Write-only API key.")
    
    @property
    def is_configured(self) -> bool:
        return self._api_key is not None
    
    def get_auth_headers(self) -> Dict[str, str]:
        """Get the Basic authorization header."""
        if self._api_key is None:
            raise ConfigurationError("No API key has been set", field="api_key")
        
        token = base64.b64encode(f"{self._api_key}:{self.PASSWORD}".encode("utf-8"))
        return {"Authorization": f"Basic {token.decode('ascii')}"}
    
    @property
    def auth_type(self) -> str:
        return "api-key"
    
    def __repr__(self) -> str:
        return f"APIKeyAuth(configured={self.is_configured})"
