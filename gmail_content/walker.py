"""Walk Gmail message part trees to find bodies and attachments."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from .decoder import b64url_decode
from .htmltext import html_to_text
from .types import Attachment, MessagePart

logger = logging.getLogger(__name__)


def iter_parts(part: MessagePart) -> Iterator[MessagePart]:
    """
    Yield every node of the tree depth-first, parent before children, left to right.
    Stopping the iteration early stops the walk.
    """
    stack = [part]
    while stack:
        p = stack.pop()
        yield p
        stack.extend(reversed(p.parts))


def find_body_part(part: MessagePart, mime_type: str) -> Optional[str]:
    """
    Return the decoded text of the first part with exactly `mime_type` and inline data.
    """
    for p in iter_parts(part):
        if p.mime_type != mime_type or not p.data:
            continue
        raw = b64url_decode(p.data)
        if not raw:
            logger.debug("Skipping %s part with undecodable body", mime_type)
            continue
        return raw.decode("utf-8", "replace")
    return None


def extract_body(part: Optional[MessagePart]) -> str:
    """Prefer plain text, fall back to HTML converted to text."""
    if part is None:
        return ""
    text = find_body_part(part, "text/plain")
    if text:
        return text
    html = find_body_part(part, "text/html")
    if html:
        return html_to_text(html)
    return ""


def extract_attachments(part: Optional[MessagePart]) -> List[Attachment]:
    """
    Collect metadata for every part that carries an attachment id, inline images included.
    """
    if part is None:
        return []
    return [_to_attachment(p) for p in iter_parts(part) if p.attachment_id]


def find_attachment_part(part: Optional[MessagePart], attachment_id: str) -> Optional[Attachment]:
    if part is None or not attachment_id:
        return None
    for p in iter_parts(part):
        if p.attachment_id == attachment_id:
            return _to_attachment(p)
    return None


def _to_attachment(p: MessagePart) -> Attachment:
    return Attachment(
        attachment_id=p.attachment_id or "",
        filename=p.filename,
        mime_type=p.mime_type,
        size=p.size,
    )


__all__ = [
    "extract_attachments",
    "extract_body",
    "find_attachment_part",
    "find_body_part",
    "iter_parts",
]
