"""
Audio payload handling.

Voice messages arrive as base64, either raw or wrapped in a data URI such
as ``data:audio/webm;codecs=opus;base64,AAAA``. Providers reject
parameterized MIME types, so parameters are stripped and the canonical
MIME type and file extension are carried alongside the decoded bytes.
"""

import base64
import binascii
import re
from dataclasses import dataclass

from relay_service.errors import ValidationError

DEFAULT_MIME_TYPE = "audio/wav"

# data:<mime>[;param...];base64,<payload>
_DATA_URI_RE = re.compile(r"^data:([^;,]+)(?:;[^,;]*)*;base64,(.+)$", re.DOTALL)


def mime_to_extension(mime_type: str | None) -> str:
    """Map a MIME type to the file extension used for uploads."""
    if not mime_type:
        return "wav"
    mime = mime_type.lower()
    if "wav" in mime:
        return "wav"
    if "mpeg" in mime or "mp3" in mime:
        return "mp3"
    if "ogg" in mime:
        return "ogg"
    if "webm" in mime:
        return "webm"
    if "mp4" in mime:
        return "mp4"
    return "bin"


def normalize_mime_type(mime_type: str | None) -> str:
    """Drop MIME parameters ("audio/webm;codecs=opus" -> "audio/webm")."""
    return str(mime_type or DEFAULT_MIME_TYPE).split(";")[0].strip().lower()


@dataclass(frozen=True)
class AudioPayload:
    """Decoded audio bytes plus their canonical MIME type."""

    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    @property
    def extension(self) -> str:
        return mime_to_extension(self.mime_type)

    @property
    def size(self) -> int:
        return len(self.data)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


def parse_audio_base64(value: str | None, default_mime_type: str = DEFAULT_MIME_TYPE) -> AudioPayload:
    """Decode a raw base64 string or base64 data URI.

    Args:
        value: Base64 text, optionally a data URI
        default_mime_type: MIME type assumed for raw base64

    Returns:
        AudioPayload with non-empty data

    Raises:
        ValidationError: If the payload is missing, malformed or decodes to nothing
    """
    if value is None or not str(value).strip():
        raise ValidationError("audioBase64 is required")

    raw = str(value).strip()
    mime_type = default_mime_type
    if raw.startswith("data:"):
        match = _DATA_URI_RE.match(raw)
        if not match:
            raise ValidationError("Invalid base64 audio data URI")
        mime_type = match.group(1)
        raw = match.group(2)

    try:
        data = base64.b64decode("".join(raw.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"audioBase64 is not valid base64: {e}") from e

    if not data:
        raise ValidationError("audioBase64 decodes to an empty payload")

    return AudioPayload(data=data, mime_type=normalize_mime_type(mime_type))
