from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_MIME_TYPE = "application/octet-stream"
DEFAULT_FILENAME = "attachment"


@dataclass(frozen=True)
class MessagePart:
    """
    One node of a Gmail message body tree (the `payload` of a format="full" message).
    - `data` is the inline body, still URL-safe base64 encoded.
    - `attachment_id` is set instead when the bytes must be fetched separately.
    - Structural multipart nodes carry only `parts`.
    """
    mime_type: str = ""
    data: Optional[str] = None
    attachment_id: Optional[str] = None
    size: Optional[int] = None
    filename: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    parts: List["MessagePart"] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: Optional[Dict[str, Any]]) -> "MessagePart":
        """Build the tree from the dict google-api-python-client returns."""
        payload = payload or {}
        body = payload.get("body") or {}
        return cls(
            mime_type=payload.get("mimeType", "") or "",
            data=body.get("data") or None,
            attachment_id=body.get("attachmentId") or None,
            size=body.get("size"),
            filename=payload.get("filename", "") or "",
            headers={(h.get("name", "") or ""): h.get("value", "") for h in payload.get("headers") or []},
            parts=[cls.from_api(ch) for ch in payload.get("parts") or []],
        )


@dataclass(frozen=True)
class Attachment:
    """
    Attachment metadata found in a message tree.
    Use `fetch_attachment_bytes(...)` with `attachment_id` to download the bytes.
    """
    attachment_id: str
    filename: str = ""
    mime_type: str = ""
    size: Optional[int] = None                # reported size (may be approximate)


@dataclass
class MessageSummary:
    """
    Compact view of a message, as listed in search results.
    """
    id: str
    thread_id: str
    subject: str = ""
    from_: str = ""
    to: str = ""
    date: str = ""
    snippet: str = ""
    label_ids: List[str] = field(default_factory=list)


@dataclass
class MessageDetail:
    """
    Full view of a message: headers, readable body and attachment metadata.
    """
    id: str
    thread_id: str
    subject: str = ""
    from_: str = ""
    to: str = ""
    cc: str = ""
    date: str = ""
    message_id_header: str = ""               # RFC 2822 Message-ID, for In-Reply-To
    body: str = ""                            # plain text, HTML already converted
    label_ids: List[str] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)


@dataclass
class OutboundMessage:
    """
    Fields of a message to send or save as a draft. Empty strings mean "not set".
    """
    to: str
    subject: str
    body: str
    cc: str = ""
    bcc: str = ""
    thread_id: str = ""                       # Gmail threadId to continue
    in_reply_to: str = ""                     # Message-ID being replied to
    references: str = ""                      # chain of prior Message-IDs

    def to_raw(self) -> str:
        from .builder import build_raw_message

        return build_raw_message(
            self.to, self.subject, self.body,
            cc=self.cc, bcc=self.bcc, thread_id=self.thread_id,
            in_reply_to=self.in_reply_to, references=self.references,
        )
