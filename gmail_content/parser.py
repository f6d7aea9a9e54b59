from __future__ import annotations
from typing import Any, Dict, Optional

from .decoder import decode_header_str
from .types import MessageDetail, MessagePart, MessageSummary
from .walker import extract_attachments, extract_body

# ------------------ Public API ------------------

def get_header(msg: Dict[str, Any], name: str) -> str:
    """
    Case-insensitive lookup of a top-level header in a Gmail API message dict.
    Returns "" when the header or the whole payload is missing.
    """
    payload = msg.get("payload") or {}
    wanted = name.lower()
    for h in payload.get("headers") or []:
        if (h.get("name", "") or "").lower() == wanted:
            return decode_header_str(h.get("value", ""))
    return ""


def message_to_summary(msg: Dict[str, Any]) -> MessageSummary:
    """
    Reduce a message fetched with format="metadata" (or "full") to a search-result row.
    """
    return MessageSummary(
        id=msg.get("id", ""),
        thread_id=msg.get("threadId", ""),
        subject=get_header(msg, "Subject"),
        from_=get_header(msg, "From"),
        to=get_header(msg, "To"),
        date=get_header(msg, "Date"),
        snippet=msg.get("snippet", "") or "",
        label_ids=list(msg.get("labelIds") or []),
    )


def message_to_detail(msg: Dict[str, Any]) -> MessageDetail:
    """
    Parse a Gmail API message dict returned by:
      gmail.users().messages().get(userId="me", id=..., format="full")
    into headers, a readable body and attachment metadata.
    """
    root = _payload_tree(msg)
    return MessageDetail(
        id=msg.get("id", ""),
        thread_id=msg.get("threadId", ""),
        subject=get_header(msg, "Subject"),
        from_=get_header(msg, "From"),
        to=get_header(msg, "To"),
        cc=get_header(msg, "Cc"),
        date=get_header(msg, "Date"),
        message_id_header=get_header(msg, "Message-ID"),
        body=extract_body(root),
        label_ids=list(msg.get("labelIds") or []),
        attachments=extract_attachments(root),
    )

# ------------------ utilities ------------------

def _payload_tree(msg: Dict[str, Any]) -> Optional[MessagePart]:
    payload = msg.get("payload")
    if not payload:
        return None
    return MessagePart.from_api(payload)
