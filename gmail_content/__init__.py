"""Extract readable content from Gmail API messages and build outgoing ones."""

from .builder import build_raw_message
from .formatting import format_byte_size, format_message_detail, format_search_results, is_office_type
from .htmltext import html_to_text
from .parser import get_header, message_to_detail, message_to_summary
from .tool import fetch_attachment_bytes, resolve_attachment_meta
from .types import Attachment, MessageDetail, MessagePart, MessageSummary, OutboundMessage
from .walker import extract_attachments, extract_body, find_attachment_part, find_body_part

__all__ = [
    "Attachment",
    "MessageDetail",
    "MessagePart",
    "MessageSummary",
    "OutboundMessage",
    "build_raw_message",
    "extract_attachments",
    "extract_body",
    "fetch_attachment_bytes",
    "find_attachment_part",
    "find_body_part",
    "format_byte_size",
    "format_message_detail",
    "format_search_results",
    "get_header",
    "html_to_text",
    "is_office_type",
    "message_to_detail",
    "message_to_summary",
    "resolve_attachment_meta",
]
