"""HTTP client for the Freshdesk SDK."""

import logging
from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlencode, urljoin, urlsplit, urlunsplit

import httpx

from .auth import APIKeyAuth, Authenticator
from .multipart import FileAttachment, content_type_for, encode_multipart, flatten_form_fields, new_boundary

logger = logging.getLogger(__name__)

USER_AGENT = "freshdesk-python-sdk/1.0.0"
ENCODING = "utf-8"


def uri_for_path(base_uri: str, path: str, query: Optional[str] = None) -> str:
    """Replace the path (and optionally the query) of ``base_uri``."""
    parts = urlsplit(base_uri)
    return urlunsplit((parts.scheme, parts.netloc, "/" + path.lstrip("/"), query or "", ""))


class HTTPClient:
    """HTTP client for making requests to the Freshdesk API."""
    
    def __init__(
        self,
        base_url: str,
        auth: Optional[Authenticator] = None,
        timeout: float = 30.0,
        user_agent: str = USER_AGENT,
        debug: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth = auth or APIKeyAuth()
        self.timeout = timeout
        self.user_agent = user_agent
        self.debug = debug
        
        # Request traces are DEBUG records unless this client was created with debug=True
        self._trace_level = logging.INFO if debug else logging.DEBUG
        
        # Create HTTP client
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            transport=transport,
        )
    
    async def __aenter__(self) -> "HTTPClient":
        """Async context manager entry."""
        return self
    
    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
    
    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
    
    def _prepare_headers(self, method: str) -> Dict[str, str]:
        """Prepare headers with authentication for the given method."""
        final_headers = {"User-Agent": self.user_agent}
        
        if method in ("POST", "PUT"):
            final_headers["Content-Type"] = "application/json"
        elif method == "GET":
            final_headers["Accept"] = "*/*"
            final_headers["Accept-Encoding"] = "gzip"
        
        final_headers.update(self.auth.get_auth_headers())
        
        return final_headers
    
    def build_url(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Build the full URL for a request."""
        url = urljoin(self.base_url + "/", path.lstrip("/"))
        
        if params:
            # Filter out None values and convert to strings
            clean_params = {}
            for key, value in params.items():
                if value is not None:
                    if isinstance(value, list):
                        clean_params[key] = ",".join(str(v) for v in value)
                    elif isinstance(value, bool):
                        clean_params[key] = "true" if value else "false"
                    else:
                        clean_params[key] = str(value)
            
            if clean_params:
                url += "?" + urlencode(clean_params)
        
        return url
    
    async def _send(self, method: str, url: str, headers: Dict[str, str], content: Optional[bytes]) -> str:
        logger.log(self._trace_level, "%s %s (%d body bytes)", method, url, len(content or b""))
        
        response = await self._client.request(method, url, headers=headers, content=content)
        logger.log(self._trace_level, "%s %s -> %d", method, url, response.status_code)
        response.raise_for_status()
        
        return response.content.decode(ENCODING)
    
    async def request(
        self,
        method: str,
        path: str,
        body: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Send a request and return the response body as text.

        Transport failures, including non-success statuses, propagate as the
        ``httpx`` exceptions that raised them.
        """
        method = method.upper()
        url = self.build_url(path, params)
        headers = self._prepare_headers(method)
        content = body.encode(ENCODING) if body is not None else None
        
        return await self._send(method, url, headers, content)
    
    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Make a GET request."""
        return await self.request("GET", path, params=params)
    
    async def post(self, path: str, body: Optional[str] = None) -> str:
        """Make a POST request."""
        return await self.request("POST", path, body)
    
    async def put(self, path: str, body: Optional[str] = None) -> str:
        """Make a PUT request."""
        return await self.request("PUT", path, body)
    
    async def delete(self, path: str) -> str:
        """Make a DELETE request."""
        return await self.request("DELETE", path)
    
    async def post_multipart(
        self,
        path: str,
        body: Any,
        attachments: Iterable[FileAttachment],
        attachments_key: str,
    ) -> str:
        """POST ``body`` fields plus file attachments as multipart/form-data."""
        url = self.build_url(path)
        boundary = new_boundary()
        content = encode_multipart(flatten_form_fields(body), attachments, attachments_key, boundary)
        
        headers = {"User-Agent": self.user_agent, "Content-Type": content_type_for(boundary)}
        headers.update(self.auth.get_auth_headers())
        
        return await self._send("POST", url, headers, content)
