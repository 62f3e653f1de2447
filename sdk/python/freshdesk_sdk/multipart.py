"""multipart/form-data encoding for attachment uploads."""

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, BinaryIO, Iterable, List, Mapping, Tuple, Union

from pydantic import BaseModel

CRLF = b"\r\n"
DEFAULT_ATTACHMENT_CONTENT_TYPE = "text/plain"


@dataclass
class FileAttachment:
    """A file to upload.

    ``content`` is read to the end when the request body is encoded; until
    then the stream belongs to the caller.
    """
    
    filename: str
    content: Union[BinaryIO, bytes]
    content_type: str = DEFAULT_ATTACHMENT_CONTENT_TYPE
    
    def read(self) -> bytes:
        if isinstance(self.content, (bytes, bytearray)):
            return bytes(self.content)
        return self.content.read()


def new_boundary() -> str:
    return "-" * 28 + uuid.uuid4().hex


def content_type_for(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"


# Same percent-escapes httpx applies to form-data parameters
_PARAM_ESCAPES = {ord("\""): "%22", ord("\r"): "%0D", ord("\n"): "%0A"}


def quote_param(value: str) -> str:
    """Make ``value`` safe inside a quoted Content-Disposition parameter."""
    return value.translate(_PARAM_ESCAPES)


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def flatten_form_fields(body: Any) -> List[Tuple[str, str]]:
    """Turn ``body`` into ``(name, value)`` form fields.

    Null values are skipped. Lists become repeated ``name[]`` fields and
    mappings become ``name[key]`` fields.
    """
    if body is None:
        return []
    
    if hasattr(body, "to_request_dict"):
        data = body.to_request_dict()
    elif isinstance(body, BaseModel):
        data = body.model_dump(mode="json", exclude_none=True)
    elif isinstance(body, Mapping):
        data = body
    else:
        raise TypeError(f"Cannot encode {type(body).__name__} as form fields")
    
    fields: List[Tuple[str, str]] = []
    for name, value in data.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            fields.extend(
                (f"{name}[{key}]", _form_value(item)) for key, item in value.items() if item is not None
            )
        elif isinstance(value, (list, tuple)):
            fields.extend((f"{name}[]", _form_value(item)) for item in value if item is not None)
        else:
            fields.append((name, _form_value(value)))
    
    return fields


def encode_multipart(
    fields: Iterable[Tuple[str, str]],
    attachments: Iterable[FileAttachment],
    attachments_key: str,
    boundary: str,
) -> bytes:
    """Encode form fields and file parts into a multipart/form-data body."""
    delimiter = f"--{boundary}".encode("utf-8") + CRLF
    parts: List[bytes] = []
    
    for name, value in fields:
        parts.append(delimiter)
        parts.append(f'Content-Disposition: form-data; name="{quote_param(name)}"'.encode("utf-8") + CRLF + CRLF)
        parts.append(value.encode("utf-8") + CRLF)
    
    for attachment in attachments:
        parts.append(delimiter)
        content_type = attachment.content_type.translate({ord("\r"): None, ord("\n"): None})
        header = (
            f'Content-Disposition: form-data; name="{quote_param(attachments_key)}"; '
            f'filename="{quote_param(attachment.filename)}"\r\n'
            f"Content-Type: {content_type}\r\n\r\n"
        )
        parts.append(header.encode("utf-8"))
        parts.append(attachment.read() + CRLF)
    
    # Final boundary carries no trailing CRLF
    parts.append(f"--{boundary}--".encode("utf-8"))
    
    return b"".join(parts)
